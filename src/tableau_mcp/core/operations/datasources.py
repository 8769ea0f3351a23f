from __future__ import annotations

from typing import List, Union

from tableau_mcp.core import multipart
from tableau_mcp.core.client import (
    CONTENT_TYPE_HEADER,
    TableauClient,
    TableauPayloadError,
    build_payload,
)
from tableau_mcp.core.models import Datasource, DatasourceResponse, DatasourcesResponse

DATASOURCE_TYPE_TDS = "tds"
DATASOURCE_TYPE_TDSX = "tdsx"
DATASOURCE_TYPES = (DATASOURCE_TYPE_TDS, DATASOURCE_TYPE_TDSX)

# Characters that would end the quoted filename or the part header line
_UNSAFE_NAME_CHARS = frozenset("\"\r\n")


def query_datasources(client: TableauClient, site_id: str) -> List[Datasource]:
    result: DatasourcesResponse = client.get(
        client.api_path("sites", site_id, "datasources"),
        DatasourcesResponse,
        op="query_datasources",
    )
    return result.datasources


def _check_publish_args(metadata: Datasource, datasource_type: str) -> None:
    if datasource_type not in DATASOURCE_TYPES:
        raise TableauPayloadError(
            f"Unsupported datasource type '{datasource_type}'; expected tds or tdsx."
        )
    if not metadata.name:
        raise TableauPayloadError("Datasource name is required to publish.")
    if _UNSAFE_NAME_CHARS.intersection(metadata.name):
        raise TableauPayloadError(
            "Datasource name must not contain double quotes or line breaks."
        )


def publish_datasource(
    client: TableauClient,
    site_id: str,
    metadata: Datasource,
    content: Union[str, bytes],
    datasource_type: str = DATASOURCE_TYPE_TDS,
    overwrite: bool = False,
) -> Datasource:
    """
    Publish a datasource in a single multipart/mixed request.

    ``metadata`` carries the name, target project and optional connection
    credentials; ``content`` is the .tds XML or the packaged .tdsx bytes.
    Raises TableauPayloadError before any request when the name or type
    cannot be placed in the multipart headers.
    """
    _check_publish_args(metadata, datasource_type)
    payload = build_payload(metadata)
    body = multipart.build_publish_body(
        client.boundary,
        payload,
        content,
        filename=f"{metadata.name}.{datasource_type}",
    )
    result: DatasourceResponse = client.request(
        "POST",
        client.api_path("sites", site_id, "datasources"),
        params={
            "datasourceType": datasource_type,
            "overwrite": "true" if overwrite else "false",
        },
        content=body,
        headers={CONTENT_TYPE_HEADER: multipart.content_type(client.boundary)},
        model=DatasourceResponse,
        trace_body=metadata.connection_credentials is None,
        trace_content=payload,
        op="publish_datasource",
    )
    return result.datasource


def publish_tds(
    client: TableauClient,
    site_id: str,
    metadata: Datasource,
    tds: str,
    overwrite: bool = False,
) -> Datasource:
    return publish_datasource(
        client, site_id, metadata, tds, DATASOURCE_TYPE_TDS, overwrite
    )


def publish_tdsx(
    client: TableauClient,
    site_id: str,
    metadata: Datasource,
    tdsx: bytes,
    overwrite: bool = False,
) -> Datasource:
    """Publish a packaged .tdsx (zip) datasource."""
    return publish_datasource(
        client, site_id, metadata, tdsx, DATASOURCE_TYPE_TDSX, overwrite
    )


def delete_datasource(client: TableauClient, site_id: str, datasource_id: str) -> None:
    client.delete(
        client.api_path("sites", site_id, "datasources", datasource_id),
        op="delete_datasource",
    )


__all__ = [
    "query_datasources",
    "publish_datasource",
    "publish_tds",
    "publish_tdsx",
    "delete_datasource",
    "DATASOURCE_TYPE_TDS",
    "DATASOURCE_TYPE_TDSX",
    "DATASOURCE_TYPES",
]
