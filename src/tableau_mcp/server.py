from __future__ import annotations

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from tableau_mcp.core.client import TableauClient, TableauClientError
from tableau_mcp.core.config import TableauConfig, load_env_config
from tableau_mcp.core.logging import setup_logging
from tableau_mcp.core.operations.auth import sign_in, sign_out
from tableau_mcp.core.registry import register_discovered_tools

log = logging.getLogger("tableau_mcp.server")


def create_signed_in_client(config: TableauConfig) -> TableauClient:
    if not config.server:
        raise ValueError("Missing TABLEAU_SERVER_URL in environment.")
    if not config.username or not config.password:
        raise ValueError("Missing TABLEAU_USERNAME or TABLEAU_PASSWORD in environment.")

    client = TableauClient(**config.client_kwargs())
    try:
        sign_in(
            client,
            config.username,
            config.password,
            config.site,
            config.impersonate_user_id,
        )
    except TableauClientError:
        client.close()
        raise
    return client


def build_app(client: TableauClient) -> FastMCP:
    app = FastMCP("tableau-mcp")
    register_discovered_tools(app, client)
    return app


# --- Entry point ----------------------------------------------------------- #


def main() -> None:
    config = load_env_config()
    setup_logging("DEBUG" if config.debug else "INFO")
    client = create_signed_in_client(config)

    try:
        asyncio.run(build_app(client).run_stdio_async())
    finally:
        try:
            sign_out(client)
        except TableauClientError as exc:
            log.warning("sign-out failed: %s", exc)
        client.close()


if __name__ == "__main__":
    main()
