from pathlib import Path

import pytest
import respx
from httpx import Response
from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.tools.system import server_info, system_ping

SERVER = "https://tableau.example.com"


def load_fixture(name: str) -> bytes:
    return (Path(__file__).parent / "fixtures" / name).read_bytes()


@pytest.fixture
def client():
    cl = TableauClient(server=SERVER)
    cl.auth_token = "tok"
    cl.site_id = "s1"
    cl.user_id = "u1"
    return cl


@respx.mock
def test_server_info_tool(client):
    respx.get(f"{SERVER}/api/2.4/serverinfo").mock(
        return_value=Response(200, content=load_fixture("serverinfo.xml"))
    )

    with client:
        result = server_info(client)

    assert result == {
        "product_version": "10.3",
        "build": "10300.18.0305.1200",
        "rest_api_version": "2.8",
    }


@respx.mock
def test_system_ping_success(client):
    respx.get(f"{SERVER}/api/2.4/serverinfo").mock(
        return_value=Response(200, content=load_fixture("serverinfo.xml"))
    )

    with client:
        result = system_ping(client)

    assert result["status"] == "ok"
    assert result["signed_in"] is True
    assert result["site_id"] == "s1"
    assert result["user_id"] == "u1"
    assert isinstance(result["latency_ms"], (int, float))
    assert result["server"] == SERVER
