"""Tableau REST API operations; every function takes the client first."""

from .auth import sign_in, sign_out
from .datasources import (
    delete_datasource,
    publish_datasource,
    publish_tds,
    publish_tdsx,
    query_datasources,
)
from .projects import (
    create_project,
    delete_project,
    get_project_by_id,
    get_project_by_name,
    query_projects,
)
from .server import server_info
from .sites import (
    delete_site,
    delete_site_by_content_url,
    delete_site_by_key,
    delete_site_by_name,
    get_site_id,
    query_site,
    query_site_by_content_url,
    query_site_by_key,
    query_site_by_name,
    query_sites,
)
from .users import query_user_on_site, query_users_on_site
from .views import query_view_data, query_views, query_workbook_views
from .workbooks import query_workbooks

__all__ = [
    "sign_in",
    "sign_out",
    "server_info",
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
    "query_user_on_site",
    "query_users_on_site",
    "query_projects",
    "get_project_by_name",
    "get_project_by_id",
    "create_project",
    "delete_project",
    "query_views",
    "query_workbook_views",
    "query_view_data",
    "query_workbooks",
    "query_datasources",
    "publish_datasource",
    "publish_tds",
    "publish_tdsx",
    "delete_datasource",
]
