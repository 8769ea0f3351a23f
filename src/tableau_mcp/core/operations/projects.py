from __future__ import annotations

from typing import Callable, List

from tableau_mcp.core.client import TableauClient, TableauNotFoundError
from tableau_mcp.core.models import Project, ProjectResponse, ProjectsResponse


def query_projects(client: TableauClient, site_id: str) -> List[Project]:
    result: ProjectsResponse = client.get(
        client.api_path("sites", site_id, "projects"),
        ProjectsResponse,
        op="query_projects",
    )
    return result.projects


def _find_project(
    client: TableauClient, site_id: str, match: Callable[[Project], bool]
) -> Project | None:
    # The API has no server-side filter for these fields; scan the full list.
    for project in query_projects(client, site_id):
        if match(project):
            return project
    return None


def get_project_by_name(client: TableauClient, site_id: str, name: str) -> Project:
    project = _find_project(client, site_id, lambda p: p.name == name)
    if project is None:
        raise TableauNotFoundError(f"Project named '{name}' not found")
    return project


def get_project_by_id(
    client: TableauClient, site_id: str, project_id: str
) -> Project:
    project = _find_project(client, site_id, lambda p: p.id == project_id)
    if project is None:
        raise TableauNotFoundError(f"Project with ID '{project_id}' not found")
    return project


def create_project(client: TableauClient, site_id: str, project: Project) -> Project:
    result: ProjectResponse = client.post_xml(
        client.api_path("sites", site_id, "projects"),
        project,
        model=ProjectResponse,
        op="create_project",
    )
    return result.project


def delete_project(client: TableauClient, site_id: str, project_id: str) -> None:
    client.delete(
        client.api_path("sites", site_id, "projects", project_id),
        op="delete_project",
    )


__all__ = [
    "query_projects",
    "get_project_by_name",
    "get_project_by_id",
    "create_project",
    "delete_project",
]
