"""
Shared helpers for the tool modules.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from tableau_mcp.core.client import TableauClient


def resolve_site_id(client: TableauClient, site_id: Optional[str]) -> str:
    """Fall back to the site the client signed in to."""
    resolved = site_id or client.site_id
    if not resolved:
        raise ValueError("site_id is required when the client is not signed in.")
    return resolved


def dump_models(items: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    return [item.model_dump(exclude_none=True) for item in items]
