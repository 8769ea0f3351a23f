from __future__ import annotations

from typing import Any, Dict, Optional

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.operations import projects as ops
from tableau_mcp.core.tools._common import dump_models, resolve_site_id


def list_projects(
    client: TableauClient,
    site_id: Optional[str] = None,
    name_contains: Optional[str] = None,
) -> Dict[str, Any]:
    """List projects on a site, optionally filtered by a case-insensitive name fragment."""
    projects = ops.query_projects(client, resolve_site_id(client, site_id))

    if name_contains:
        needle = name_contains.strip().casefold()
        projects = [p for p in projects if needle in (p.name or "").casefold()]

    return {"items": dump_models(projects), "total": len(projects)}


def find_project(
    client: TableauClient,
    name: Optional[str] = None,
    project_id: Optional[str] = None,
    site_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Find a project by exact name or id."""
    site = resolve_site_id(client, site_id)
    if project_id:
        project = ops.get_project_by_id(client, site, project_id)
    elif name:
        project = ops.get_project_by_name(client, site, name)
    else:
        raise ValueError("Provide name or project_id.")
    return project.model_dump(exclude_none=True)
