from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import httpx

from tableau_mcp.core.client import ResponseFormat, TableauClient
from tableau_mcp.core.models import View, ViewsResponse

# CSV exports are rendered server-side and can take a while
VIEW_DATA_TIMEOUT = httpx.Timeout(60.0, connect=60.0)


def query_views(client: TableauClient, site_id: str) -> List[View]:
    result: ViewsResponse = client.get(
        client.api_path("sites", site_id, "views"), ViewsResponse, op="query_views"
    )
    return result.views


def query_workbook_views(
    client: TableauClient,
    site_id: str,
    workbook_id: str,
    params: Optional[Dict[str, Any]] = None,
) -> List[View]:
    result: ViewsResponse = client.get(
        client.api_path("sites", site_id, "workbooks", workbook_id, "views"),
        ViewsResponse,
        params=params,
        op="query_workbook_views",
    )
    return result.views


def query_view_data(
    client: TableauClient, site_id: str, view_id: str
) -> Iterator[List[str]]:
    """Return the view's underlying data as csv rows (header row first)."""
    return client.get(
        client.api_path("sites", site_id, "views", view_id, "data"),
        response_format=ResponseFormat.CSV,
        timeout=VIEW_DATA_TIMEOUT,
        trace_body=False,
        op="query_view_data",
    )


__all__ = [
    "query_views",
    "query_workbook_views",
    "query_view_data",
    "VIEW_DATA_TIMEOUT",
]
