from __future__ import annotations

from typing import Any, Dict, Optional

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.operations import users as ops
from tableau_mcp.core.tools._common import dump_models, resolve_site_id


def get_user(
    client: TableauClient,
    user_id: Optional[str] = None,
    site_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Fetch a user on a site; defaults to the signed-in user."""
    resolved = user_id or client.user_id
    if not resolved:
        raise ValueError("user_id is required when the client is not signed in.")
    user = ops.query_user_on_site(client, resolve_site_id(client, site_id), resolved)
    return user.model_dump(exclude_none=True)


def list_users(
    client: TableauClient,
    site_id: Optional[str] = None,
    filter: Optional[str] = None,
) -> Dict[str, Any]:
    """List users on a site. ``filter`` uses the REST syntax, e.g. "siteRole:eq:Viewer"."""
    params = {"filter": filter} if filter else None
    users = ops.query_users_on_site(client, resolve_site_id(client, site_id), params)
    return {"items": dump_models(users), "total": len(users)}
