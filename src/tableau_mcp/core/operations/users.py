from __future__ import annotations

from typing import Any, Dict, List, Optional

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.models import User, UserResponse, UsersResponse


def query_user_on_site(client: TableauClient, site_id: str, user_id: str) -> User:
    result: UserResponse = client.get(
        client.api_path("sites", site_id, "users", user_id),
        UserResponse,
        op="query_user_on_site",
    )
    return result.user


def query_users_on_site(
    client: TableauClient, site_id: str, params: Optional[Dict[str, Any]] = None
) -> List[User]:
    result: UsersResponse = client.get(
        client.api_path("sites", site_id, "users"),
        UsersResponse,
        params=params,
        op="query_users_on_site",
    )
    return result.users


__all__ = ["query_user_on_site", "query_users_on_site"]
