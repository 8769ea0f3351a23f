from __future__ import annotations

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.models import ServerInfo, ServerInfoResponse

# serverinfo only exists from REST API 2.4 onward
SERVER_INFO_API_VERSION = "2.4"


def server_info(client: TableauClient) -> ServerInfo:
    result: ServerInfoResponse = client.get(
        client.api_path("serverinfo", version=SERVER_INFO_API_VERSION),
        ServerInfoResponse,
        op="server_info",
    )
    return result.server_info


__all__ = ["server_info", "SERVER_INFO_API_VERSION"]
