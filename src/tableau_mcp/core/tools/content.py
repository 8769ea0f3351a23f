from __future__ import annotations

import itertools
from typing import Any, Dict, Optional

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.operations import datasources as datasource_ops
from tableau_mcp.core.operations import views as view_ops
from tableau_mcp.core.operations import workbooks as workbook_ops
from tableau_mcp.core.tools._common import dump_models, resolve_site_id

DEFAULT_MAX_ROWS = 100
MAX_ROWS_LIMIT = 5000


def _filter_params(filter: Optional[str]) -> Optional[Dict[str, Any]]:
    return {"filter": filter} if filter else None


def list_workbooks(
    client: TableauClient,
    site_id: Optional[str] = None,
    filter: Optional[str] = None,
) -> Dict[str, Any]:
    """List workbooks on a site. ``filter`` uses the REST syntax, e.g. "name:eq:Sales"."""
    workbooks = workbook_ops.query_workbooks(
        client, resolve_site_id(client, site_id), _filter_params(filter)
    )
    return {"items": dump_models(workbooks), "total": len(workbooks)}


def list_views(client: TableauClient, site_id: Optional[str] = None) -> Dict[str, Any]:
    """List all views on a site."""
    views = view_ops.query_views(client, resolve_site_id(client, site_id))
    return {"items": dump_models(views), "total": len(views)}


def list_workbook_views(
    client: TableauClient, workbook_id: str, site_id: Optional[str] = None
) -> Dict[str, Any]:
    """List the views that belong to one workbook."""
    views = view_ops.query_workbook_views(
        client, resolve_site_id(client, site_id), workbook_id
    )
    return {"items": dump_models(views), "total": len(views)}


def list_datasources(
    client: TableauClient, site_id: Optional[str] = None
) -> Dict[str, Any]:
    """List published datasources on a site."""
    datasources = datasource_ops.query_datasources(
        client, resolve_site_id(client, site_id)
    )
    return {"items": dump_models(datasources), "total": len(datasources)}


def get_view_data(
    client: TableauClient,
    view_id: str,
    site_id: Optional[str] = None,
    max_rows: int = DEFAULT_MAX_ROWS,
) -> Dict[str, Any]:
    """
    Export a view's underlying data.
    Returns the header row as ``columns`` and at most ``max_rows`` data rows.
    """
    max_rows = max(1, min(max_rows, MAX_ROWS_LIMIT))
    reader = view_ops.query_view_data(client, resolve_site_id(client, site_id), view_id)

    columns = next(reader, [])
    rows = list(itertools.islice(reader, max_rows))
    truncated = next(reader, None) is not None

    return {"columns": columns, "rows": rows, "truncated": truncated}
