import time

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.operations.server import server_info as _server_info


def server_info(client: TableauClient) -> dict:
    """Product version, build and REST API version of the Tableau server."""
    info = _server_info(client)
    version = info.product_version
    return {
        "product_version": version.value if version else None,
        "build": version.build if version else None,
        "rest_api_version": info.rest_api_version,
    }


def system_ping(client: TableauClient) -> dict:
    """
    Simple connectivity and latency check against the Tableau server.
    Returns status plus the signed-in site and user ids.
    """
    start = time.perf_counter()

    info = _server_info(client)

    latency_ms = (time.perf_counter() - start) * 1000

    return {
        "status": "ok",
        "latency_ms": round(latency_ms, 2),
        "rest_api_version": info.rest_api_version,
        "signed_in": client.signed_in,
        "site_id": client.site_id,
        "user_id": client.user_id,
        "server": client.server,
    }
