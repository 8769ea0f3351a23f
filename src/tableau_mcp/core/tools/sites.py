from __future__ import annotations

from typing import Any, Dict, Optional

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.operations import sites as ops
from tableau_mcp.core.tools._common import dump_models


def list_sites(client: TableauClient) -> Dict[str, Any]:
    """List the sites visible to the signed-in user."""
    sites = ops.query_sites(client)
    return {"items": dump_models(sites), "total": len(sites)}


def get_site(
    client: TableauClient,
    site_id: Optional[str] = None,
    name: Optional[str] = None,
    content_url: Optional[str] = None,
    include_storage: bool = False,
) -> Dict[str, Any]:
    """
    Fetch one site by id, name or content URL (first one given wins).
    Defaults to the signed-in site.
    """
    if site_id:
        site = ops.query_site(client, site_id, include_storage)
    elif name:
        site = ops.query_site_by_name(client, name, include_storage)
    elif content_url is not None:
        site = ops.query_site_by_content_url(client, content_url, include_storage)
    elif client.site_id:
        site = ops.query_site(client, client.site_id, include_storage)
    else:
        raise ValueError("Provide site_id, name or content_url.")
    return site.model_dump(exclude_none=True)
