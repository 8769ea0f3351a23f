"""
multipart/mixed bodies for publishing datasources.

Tableau expects exactly two parts: the XML request payload and the
datasource file. httpx only builds multipart/form-data, so the body is
assembled by hand around the session's boundary.
"""

from __future__ import annotations

from typing import Union

CRLF = b"\r\n"


def content_type(boundary: str) -> str:
    return f"multipart/mixed; boundary={boundary}"


def _to_bytes(value: Union[str, bytes]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def build_publish_body(
    boundary: str,
    request_payload: Union[str, bytes],
    datasource: Union[str, bytes],
    *,
    filename: str,
) -> bytes:
    """Metadata part, then the raw datasource part, then the closing delimiter."""
    delimiter = b"--" + boundary.encode("ascii")
    parts = [
        delimiter,
        b'Content-Disposition: name="request_payload"',
        b"Content-Type: text/xml",
        b"",
        _to_bytes(request_payload),
        delimiter,
        b'Content-Disposition: name="tableau_datasource"; filename="'
        + filename.encode("utf-8")
        + b'"',
        b"Content-Type: application/octet-stream",
        b"",
        _to_bytes(datasource),
        delimiter + b"--",
    ]
    return CRLF.join(parts)


__all__ = ["build_publish_body", "content_type", "CRLF"]
