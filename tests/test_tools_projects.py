from pathlib import Path

import pytest
import respx
from httpx import Response
from tableau_mcp.core.client import TableauClient, TableauNotFoundError
from tableau_mcp.core.tools.projects import find_project, list_projects

SERVER = "https://tableau.example.com"
PROJECTS_URL = f"{SERVER}/api/2.3/sites/s1/projects"


def load_fixture(name: str) -> bytes:
    return (Path(__file__).parent / "fixtures" / name).read_bytes()


@pytest.fixture
def client():
    cl = TableauClient(server=SERVER)
    cl.auth_token = "tok"
    cl.site_id = "s1"
    return cl


@respx.mock
def test_list_projects_returns_items(client):
    respx.get(PROJECTS_URL).mock(
        return_value=Response(200, content=load_fixture("projects.xml"))
    )

    with client:
        result = list_projects(client)

    assert result["total"] == 3
    assert result["items"][0] == {
        "id": "p0",
        "name": "Default",
        "description": "The default project",
    }


@respx.mock
def test_list_projects_name_filter(client):
    respx.get(PROJECTS_URL).mock(
        return_value=Response(200, content=load_fixture("projects.xml"))
    )

    with client:
        result = list_projects(client, name_contains="  fin ")

    assert [p["id"] for p in result["items"]] == ["p1"]


@respx.mock
def test_list_projects_explicit_site(client):
    route = respx.get(f"{SERVER}/api/2.3/sites/other/projects").mock(
        return_value=Response(200, content=load_fixture("projects.xml"))
    )

    with client:
        list_projects(client, site_id="other")

    assert route.called


def test_list_projects_requires_site():
    cl = TableauClient(server=SERVER)
    with pytest.raises(ValueError):
        list_projects(cl)


@respx.mock
def test_find_project(client):
    respx.get(PROJECTS_URL).mock(
        return_value=Response(200, content=load_fixture("projects.xml"))
    )

    with client:
        assert find_project(client, name="Finance")["id"] == "p1"
        assert find_project(client, project_id="p2")["name"] == "Marketing"
        with pytest.raises(TableauNotFoundError):
            find_project(client, name="Nope")


def test_find_project_requires_selector(client):
    with pytest.raises(ValueError):
        find_project(client)
