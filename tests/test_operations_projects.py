from pathlib import Path

import pytest
import respx
from httpx import Response
from lxml import etree
from tableau_mcp.core.client import TableauClient, TableauNotFoundError
from tableau_mcp.core.models import Project
from tableau_mcp.core.operations.projects import (
    create_project,
    delete_project,
    get_project_by_id,
    get_project_by_name,
    query_projects,
)

SERVER = "https://tableau.example.com"
PROJECTS_URL = f"{SERVER}/api/2.3/sites/siteX/projects"


def load_fixture(name: str) -> bytes:
    return (Path(__file__).parent / "fixtures" / name).read_bytes()


@pytest.fixture
def client():
    cl = TableauClient(server=SERVER)
    cl.auth_token = "tok"
    return cl


@respx.mock
def test_query_projects(client):
    respx.get(PROJECTS_URL).mock(
        return_value=Response(200, content=load_fixture("projects.xml"))
    )

    with client:
        projects = query_projects(client, "siteX")

    assert [p.id for p in projects] == ["p0", "p1", "p2"]
    assert projects[1].content_permissions == "ManagedByOwner"
    assert projects[2].description is None


@respx.mock
def test_get_project_by_name(client):
    respx.get(PROJECTS_URL).mock(
        return_value=Response(200, content=load_fixture("projects.xml"))
    )

    with client:
        project = get_project_by_name(client, "siteX", "Finance")

    assert project.id == "p1"
    assert project.name == "Finance"


@respx.mock
def test_get_project_by_name_missing(client):
    respx.get(PROJECTS_URL).mock(
        return_value=Response(200, content=load_fixture("projects.xml"))
    )

    with client:
        with pytest.raises(TableauNotFoundError) as exc:
            get_project_by_name(client, "siteX", "Payroll")

    assert "Payroll" in str(exc.value)


@respx.mock
def test_get_project_by_name_on_empty_site(client):
    respx.get(PROJECTS_URL).mock(
        return_value=Response(
            200,
            content=b'<tsResponse xmlns="http://tableau.com/api"><projects/></tsResponse>',
        )
    )

    with client:
        with pytest.raises(TableauNotFoundError) as exc:
            get_project_by_name(client, "siteX", "Finance")

    assert "Finance" in str(exc.value)


@respx.mock
def test_get_project_by_id(client):
    respx.get(PROJECTS_URL).mock(
        return_value=Response(200, content=load_fixture("projects.xml"))
    )

    with client:
        assert get_project_by_id(client, "siteX", "p2").name == "Marketing"
        with pytest.raises(TableauNotFoundError) as exc:
            get_project_by_id(client, "siteX", "p404")

    assert "p404" in str(exc.value)


@respx.mock
def test_get_project_propagates_server_errors(client):
    respx.get(PROJECTS_URL).mock(return_value=Response(404))

    with client:
        with pytest.raises(TableauNotFoundError) as exc:
            get_project_by_name(client, "siteX", "Finance")

    assert exc.value.url is not None


@respx.mock
def test_create_project(client):
    route = respx.post(PROJECTS_URL).mock(
        return_value=Response(201, content=load_fixture("project.xml"))
    )

    with client:
        created = create_project(
            client,
            "siteX",
            Project(name="Forecasts", description="Rolling forecasts"),
        )

    assert created.id == "p9"
    assert created.content_permissions == "LockedToProject"

    req = route.calls[0].request
    assert req.headers["Content-Type"] == "application/xml"
    assert req.headers["Content-Length"] == str(len(req.content))
    root = etree.fromstring(req.content)
    assert root.tag == "tsRequest"
    sent = root.find("project")
    assert sent.get("name") == "Forecasts"
    assert sent.get("description") == "Rolling forecasts"
    assert sent.get("id") is None


@respx.mock
def test_delete_project(client):
    route = respx.delete(f"{PROJECTS_URL}/p1").mock(return_value=Response(204))

    with client:
        assert delete_project(client, "siteX", "p1") is None

    assert route.called
