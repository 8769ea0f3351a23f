from __future__ import annotations

from typing import Any, Dict, List, Optional

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.models import Workbook, WorkbooksResponse


def query_workbooks(
    client: TableauClient, site_id: str, params: Optional[Dict[str, Any]] = None
) -> List[Workbook]:
    """
    List workbooks on a site. ``params`` is passed through as the query
    string (e.g. {"pageSize": 100, "filter": "name:eq:Sales"}).
    """
    result: WorkbooksResponse = client.get(
        client.api_path("sites", site_id, "workbooks"),
        WorkbooksResponse,
        params=params,
        op="query_workbooks",
    )
    return result.workbooks


__all__ = ["query_workbooks"]
