import csv
import io
import logging
import time
import uuid
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from dotenv import load_dotenv
from lxml import etree
from pydantic import ValidationError

from . import xmlcodec
from .models import ErrorResponse, XmlModel

T = TypeVar("T", bound=XmlModel)

AUTH_HEADER = "X-Tableau-Auth"
CONTENT_TYPE_HEADER = "Content-Type"
CONTENT_LENGTH_HEADER = "Content-Length"
XML_CONTENT_TYPE = "application/xml"

DEFAULT_API_VERSION = "2.3"
DEFAULT_SITE_NAME = "Default"
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_READ_WRITE_TIMEOUT_SECONDS = 20.0


class ResponseFormat(str, Enum):
    """How a successful response body is decoded."""

    XML = "xml"
    CSV = "csv"


class TableauClientError(Exception):
    """Base error for client failures."""


class TableauNotFoundError(TableauClientError):
    """HTTP 404, or a client-side lookup that found nothing."""

    def __init__(
        self,
        message: str = "Does not exist",
        *,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.method = method
        self.url = url


class TableauServerError(TableauClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        code: Optional[str] = None,
        summary: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        message = ": ".join(p for p in (summary, detail) if p) or "request failed"
        prefix = f"{status_code} {method} {url}"
        if code:
            prefix += f" [{code}]"
        super().__init__(f"{prefix}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.code = code
        self.summary = summary
        self.detail = detail
        self.message = message


class TableauParseError(TableauClientError):
    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        # set when the body of an error response could not be parsed
        self.status_code = status_code


class TableauModelValidationError(TableauClientError):
    pass


class TableauPayloadError(TableauClientError):
    """An outgoing request body could not be built; nothing was sent."""


class TableauTransportError(TableauClientError):
    pass


class TableauTimeoutError(TableauTransportError):
    pass


class TableauClient:
    """
    Session and request dispatcher for the Tableau Server REST API.
    - Holds server URL, API version, site defaults, multipart boundary and
      the auth token set by sign-in
    - One blocking round trip per call; no retries
    - Decodes XML into pydantic models or CSV into a row reader
    - Not thread-safe: one logical owner per instance
    """

    def __init__(
        self,
        *,
        server: str,
        api_version: str = DEFAULT_API_VERSION,
        default_site_name: str = DEFAULT_SITE_NAME,
        omit_default_site_name: bool = True,
        boundary: Optional[str] = None,
        connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS,
        read_write_timeout_seconds: float = DEFAULT_READ_WRITE_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.Client] = None,
    ):
        server = (server or "").strip().rstrip("/")
        if not server:
            raise ValueError("server must be provided.")

        self.server = server
        self.api_version = api_version
        self.default_site_name = default_site_name
        self.omit_default_site_name = omit_default_site_name
        self.boundary = boundary or uuid.uuid4().hex
        self.timeout = httpx.Timeout(
            read_write_timeout_seconds, connect=connect_timeout_seconds
        )
        self.log = logger or logging.getLogger("tableau_mcp.client")

        self.auth_token: Optional[str] = None
        self.site_id: Optional[str] = None
        self.user_id: Optional[str] = None

        self._owns_http = http is None
        self.http = http or httpx.Client(timeout=self.timeout)

    @classmethod
    def from_env(cls, **kwargs) -> "TableauClient":
        from .config import create_client_from_env

        return create_client_from_env(**kwargs)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TableauClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def signed_in(self) -> bool:
        return bool(self.auth_token)

    def clear_session(self) -> None:
        self.auth_token = None
        self.site_id = None
        self.user_id = None

    def api_path(self, *segments: str, version: Optional[str] = None) -> str:
        """Build /api/<version>/<segments...>, quoting each segment."""
        parts = [quote(str(s), safe="") for s in segments]
        return "/".join(["", "api", version or self.api_version, *parts])

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
        model: Optional[Type[T]] = None,
        response_format: ResponseFormat = ResponseFormat.XML,
        timeout: Optional[httpx.Timeout] = None,
        trace_body: bool = True,
        trace_content: Optional[bytes] = None,
        op: Optional[str] = None,
    ) -> Any:
        """
        Core request method.
        - Raises TableauNotFoundError on 404, whatever the body
        - Raises TableauServerError on other statuses >= 300
        - Raises TableauParseError if the error body or response isn't XML
        - Raises TableauTransportError / TableauTimeoutError on network failure
        - Returns csv rows for ResponseFormat.CSV, else a model instance or None
        - Body traces are DEBUG only; ``trace_content`` is logged in place of ``content``
        """
        method = method.upper()
        url = f"{self.server}{path}"

        req_headers: Dict[str, str] = {}
        if content:
            req_headers[CONTENT_LENGTH_HEADER] = str(len(content))
        req_headers.update(headers or {})
        if self.auth_token:
            req_headers[AUTH_HEADER] = self.auth_token

        trace_body = trace_body and self.log.isEnabledFor(logging.DEBUG)
        traced = trace_content if trace_content is not None else content
        if trace_body and traced:
            self.log.debug(
                "tableau.request_body",
                extra={
                    "op": op,
                    "method": method,
                    "url": url,
                    "request_body": traced.decode("utf-8", "replace"),
                },
            )

        start = time.perf_counter()
        try:
            resp = self.http.request(
                method,
                url,
                params=params,
                content=content,
                headers=req_headers,
                timeout=timeout or self.timeout,
            )
        except httpx.TimeoutException as exc:
            raise TableauTimeoutError(
                f"Timed out calling {method} {url}: {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TableauTransportError(
                f"Network error calling {method} {url}: {exc}"
            ) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        extra = {
            "op": op,
            "method": method,
            "url": str(resp.request.url),
            "status": resp.status_code,
            "duration_ms": duration_ms,
        }
        if trace_body:
            extra["response_body"] = resp.text
        self.log.debug("tableau.request", extra=extra)

        if resp.status_code == 404:
            raise TableauNotFoundError(
                f"Does not exist: {method} {resp.request.url}",
                method=method,
                url=str(resp.request.url),
            )
        if resp.status_code >= 300:
            raise self._to_server_error(resp, method=method)

        if response_format is ResponseFormat.CSV:
            return self._csv_rows(resp)
        if model is None:
            return None
        return self._decode(resp, model)

    def _parse(self, resp: httpx.Response, *, status_code: Optional[int] = None):
        try:
            return xmlcodec.parse_xml(resp.content)
        except (etree.XMLSyntaxError, ValueError) as exc:
            snippet = (resp.text or "")[:500]
            raise TableauParseError(
                f"Expected XML from {resp.request.method} {resp.request.url}, "
                f"got body snippet: {snippet!r}",
                status_code=status_code,
            ) from exc

    def _decode(self, resp: httpx.Response, model: Type[T]) -> T:
        root = self._parse(resp)
        try:
            return model.from_element(root)
        except ValidationError as exc:
            raise TableauModelValidationError(
                f"Response did not match model {model.__name__}: {exc}"
            ) from exc

    @staticmethod
    def _csv_rows(resp: httpx.Response) -> Iterator[List[str]]:
        return csv.reader(io.StringIO(resp.text, newline=""))

    def _to_server_error(
        self, resp: httpx.Response, *, method: str
    ) -> TableauClientError:
        root = self._parse(resp, status_code=resp.status_code)
        try:
            parsed = ErrorResponse.from_element(root)
        except ValidationError as exc:
            return TableauParseError(
                f"Unrecognized error body from {method} {resp.request.url} "
                f"(status {resp.status_code}): {exc}",
                status_code=resp.status_code,
            )
        return TableauServerError(
            status_code=resp.status_code,
            method=method,
            url=str(resp.request.url),
            code=parsed.error.code,
            summary=parsed.error.summary,
            detail=parsed.error.detail,
        )

    def get(self, path: str, model: Optional[Type[T]] = None, **kwargs: Any) -> Any:
        return self.request("GET", path, model=model, **kwargs)

    def post(self, path: str, model: Optional[Type[T]] = None, **kwargs: Any) -> Any:
        return self.request("POST", path, model=model, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> None:
        self.request("DELETE", path, **kwargs)

    def post_xml(
        self,
        path: str,
        payload: XmlModel,
        model: Optional[Type[T]] = None,
        **kwargs: Any,
    ) -> Any:
        """Serialize payload into <tsRequest> and POST it as application/xml."""
        content = build_payload(payload)
        headers = {CONTENT_TYPE_HEADER: XML_CONTENT_TYPE}
        return self.request(
            "POST", path, content=content, headers=headers, model=model, **kwargs
        )


def build_payload(*payloads: XmlModel) -> bytes:
    try:
        return xmlcodec.build_request(*payloads)
    except (TypeError, ValueError) as exc:
        raise TableauPayloadError(f"Could not serialize request payload: {exc}") from exc


__all__ = [
    "TableauClient",
    "ResponseFormat",
    "TableauClientError",
    "TableauNotFoundError",
    "TableauServerError",
    "TableauParseError",
    "TableauModelValidationError",
    "TableauPayloadError",
    "TableauTransportError",
    "TableauTimeoutError",
    "build_payload",
    "AUTH_HEADER",
    "CONTENT_TYPE_HEADER",
    "CONTENT_LENGTH_HEADER",
    "XML_CONTENT_TYPE",
    "DEFAULT_API_VERSION",
    "DEFAULT_SITE_NAME",
]
