import logging
import sys

import httpx
import pytest
import respx
from tableau_mcp.core.client import TableauClient, TableauTimeoutError
from tableau_mcp.core.logging import LogfmtFormatter, setup_logging
from tableau_mcp.core.observability import log_event, tool_call

SERVER = "https://tableau.example.com"


def test_log_event_drops_reserved_keys(caplog):
    caplog.set_level(logging.INFO, logger="tableau_mcp.observability")

    log_event("tool_registered", tool="list_sites", name="clobber", msg="x")

    record = next(r for r in caplog.records if r.getMessage() == "tool_registered")
    assert record.tool == "list_sites"
    assert record.event == "tool_registered"
    assert record.name == "tableau_mcp.observability"


def test_logfmt_formatter_includes_extras():
    record = logging.LogRecord(
        "tableau_mcp.client", logging.DEBUG, __file__, 1, "tableau.request", None, None
    )
    record.method = "GET"
    record.url = "https://tableau.example.com/api/2.3/sites"
    record.status = 200
    record.duration_ms = 12
    record.request_body = 'a "quoted" value'

    line = LogfmtFormatter().format(record)

    assert line.startswith("level=debug logger=tableau_mcp.client event=tableau.request")
    assert "method=GET" in line
    assert "status=200" in line
    assert "duration_ms=12" in line
    assert 'request_body="a \\"quoted\\" value"' in line
    assert "op=" not in line


@respx.mock
def test_request_trace_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="tableau_mcp.client")
    respx.get(f"{SERVER}/api/2.3/sites").mock(
        return_value=httpx.Response(200, content=b"<tsResponse/>")
    )

    with TableauClient(server=SERVER) as client:
        client.get("/api/2.3/sites", op="query_sites")

    record = next(r for r in caplog.records if r.getMessage() == "tableau.request")
    assert record.op == "query_sites"
    assert record.method == "GET"
    assert record.status == 200
    assert record.duration_ms >= 0
    assert record.response_body == "<tsResponse/>"


@respx.mock
def test_injected_logger_receives_traces(caplog):
    logger = logging.getLogger("tests.tableau")
    caplog.set_level(logging.DEBUG, logger="tests.tableau")
    respx.post(f"{SERVER}/api/2.3/sites/s1/projects").mock(
        return_value=httpx.Response(201, content=b"<tsResponse/>")
    )

    with TableauClient(server=SERVER, logger=logger) as client:
        client.post("/api/2.3/sites/s1/projects", content=b"<tsRequest/>")

    messages = [r.getMessage() for r in caplog.records if r.name == "tests.tableau"]
    assert messages == ["tableau.request_body", "tableau.request"]


@respx.mock
def test_untraced_request_omits_bodies(caplog):
    caplog.set_level(logging.DEBUG, logger="tableau_mcp.client")
    respx.post(f"{SERVER}/api/2.3/auth/signin").mock(
        return_value=httpx.Response(200, content=b"<tsResponse/>")
    )

    with TableauClient(server=SERVER) as client:
        client.post("/api/2.3/auth/signin", content=b"secret", trace_body=False)

    records = [r for r in caplog.records if r.name == "tableau_mcp.client"]
    assert [r.getMessage() for r in records] == ["tableau.request"]
    assert not hasattr(records[0], "response_body")


@respx.mock
def test_timeout_is_not_traced_as_response(caplog):
    caplog.set_level(logging.DEBUG, logger="tableau_mcp.client")
    respx.get(f"{SERVER}/api/2.3/sites").mock(side_effect=httpx.ConnectTimeout("boom"))

    with TableauClient(server=SERVER) as client:
        with pytest.raises(TableauTimeoutError):
            client.get("/api/2.3/sites")

    assert not any(r.getMessage() == "tableau.request" for r in caplog.records)


def test_tool_call_logs_success(caplog):
    caplog.set_level(logging.INFO, logger="tableau_mcp.observability")

    with tool_call("list_sites"):
        pass

    record = next(r for r in caplog.records if r.getMessage() == "tool_call")
    assert record.tool == "list_sites"
    assert record.status == "ok"
    assert record.error_type is None
    assert record.duration_ms >= 0


def test_tool_call_logs_and_reraises(caplog):
    caplog.set_level(logging.INFO, logger="tableau_mcp.observability")

    with pytest.raises(TableauTimeoutError):
        with tool_call("get_view_data"):
            raise TableauTimeoutError("slow")

    record = next(r for r in caplog.records if r.getMessage() == "tool_call")
    assert record.status == "exception"
    assert record.error_type == "TableauTimeoutError"


def test_setup_logging_uses_stderr_and_quiets_httpx(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    httpx_logger = logging.getLogger("httpx")
    monkeypatch.setattr(httpx_logger, "level", httpx_logger.level)
    httpcore_logger = logging.getLogger("httpcore")
    monkeypatch.setattr(httpcore_logger, "level", httpcore_logger.level)

    setup_logging("debug")

    (handler,) = root.handlers
    assert handler.stream is sys.stderr
    assert isinstance(handler.formatter, LogfmtFormatter)
    assert root.level == logging.DEBUG
    assert httpx_logger.level == logging.WARNING


@respx.mock
def test_bodies_not_decoded_when_debug_disabled(monkeypatch):
    logger = logging.getLogger("tests.tableau.quiet")
    monkeypatch.setattr(logger, "level", logging.INFO)
    calls = []
    monkeypatch.setattr(
        logger, "debug", lambda msg, *a, **k: calls.append((msg, k.get("extra", {})))
    )
    respx.post(f"{SERVER}/api/2.3/sites/s1/projects").mock(
        return_value=httpx.Response(201, content=b"<tsResponse/>")
    )

    with TableauClient(server=SERVER, logger=logger) as client:
        client.post("/api/2.3/sites/s1/projects", content=b"<tsRequest/>")

    assert [msg for msg, _ in calls] == ["tableau.request"]
    assert "response_body" not in calls[0][1]
