from __future__ import annotations

from typing import Any, Dict, List

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.models import Site, SiteResponse, SitesResponse

SITE_KEY_NAME = "name"
SITE_KEY_CONTENT_URL = "contentUrl"


def _storage_params(include_storage: bool) -> Dict[str, Any]:
    return {"includeStorage": "true"} if include_storage else {}


def query_sites(client: TableauClient) -> List[Site]:
    result: SitesResponse = client.get(
        client.api_path("sites"), SitesResponse, op="query_sites"
    )
    return result.sites


def query_site(
    client: TableauClient, site_id: str, include_storage: bool = False
) -> Site:
    result: SiteResponse = client.get(
        client.api_path("sites", site_id),
        SiteResponse,
        params=_storage_params(include_storage),
        op="query_site",
    )
    return result.site


def query_site_by_key(
    client: TableauClient, key: str, value: str, include_storage: bool = False
) -> Site:
    """Look a site up by an alternate key ("name" or "contentUrl")."""
    params = {"key": key, **_storage_params(include_storage)}
    result: SiteResponse = client.get(
        client.api_path("sites", value),
        SiteResponse,
        params=params,
        op="query_site_by_key",
    )
    return result.site


def query_site_by_name(
    client: TableauClient, name: str, include_storage: bool = False
) -> Site:
    return query_site_by_key(client, SITE_KEY_NAME, name, include_storage)


def query_site_by_content_url(
    client: TableauClient, content_url: str, include_storage: bool = False
) -> Site:
    return query_site_by_key(
        client, SITE_KEY_CONTENT_URL, content_url, include_storage
    )


def get_site_id(client: TableauClient, site_name: str) -> str:
    return query_site_by_name(client, site_name).id or ""


def delete_site(client: TableauClient, site_id: str) -> None:
    client.delete(client.api_path("sites", site_id), op="delete_site")


def delete_site_by_key(client: TableauClient, key: str, value: str) -> None:
    client.delete(
        client.api_path("sites", value), params={"key": key}, op="delete_site"
    )


def delete_site_by_name(client: TableauClient, name: str) -> None:
    delete_site_by_key(client, SITE_KEY_NAME, name)


def delete_site_by_content_url(client: TableauClient, content_url: str) -> None:
    delete_site_by_key(client, SITE_KEY_CONTENT_URL, content_url)


__all__ = [
    "query_sites",
    "query_site",
    "query_site_by_key",
    "query_site_by_name",
    "query_site_by_content_url",
    "get_site_id",
    "delete_site",
    "delete_site_by_key",
    "delete_site_by_name",
    "delete_site_by_content_url",
]
