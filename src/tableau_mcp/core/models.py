from __future__ import annotations

from typing import Annotated, Any, ClassVar, List, Optional

from lxml import etree
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from . import xmlcodec


def _collection(item_tag: str) -> BeforeValidator:
    return BeforeValidator(lambda v: xmlcodec.collection_items(v, item_tag))


class XmlModel(BaseModel):
    """
    Base model for Tableau REST XML elements.
    Attributes map to fields through their camelCase aliases; nested elements
    map to model-typed fields. Unknown attributes are ignored so newer server
    versions don't break decoding.
    """

    xml_tag: ClassVar[str] = ""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _empty_element(cls, data: Any) -> Any:
        # <owner/> flattens to ""
        return {} if data == "" else data

    @classmethod
    def from_element(cls, el: etree._Element):
        return cls.model_validate(xmlcodec.element_to_dict(el))

    def to_element(self) -> etree._Element:
        return xmlcodec.model_to_element(self)


# --- Entities --- #


class Tag(XmlModel):
    xml_tag: ClassVar[str] = "tag"

    label: str


Tags = Annotated[List[Tag], _collection("tag")]


class SiteUsage(XmlModel):
    xml_tag: ClassVar[str] = "usage"

    num_users: Optional[int] = Field(default=None, alias="numUsers")
    storage: Optional[int] = None


class Site(XmlModel):
    xml_tag: ClassVar[str] = "site"

    id: Optional[str] = None
    name: Optional[str] = None
    content_url: Optional[str] = Field(default=None, alias="contentUrl")
    admin_mode: Optional[str] = Field(default=None, alias="adminMode")
    user_quota: Optional[int] = Field(default=None, alias="userQuota")
    storage_quota: Optional[int] = Field(default=None, alias="storageQuota")
    state: Optional[str] = None
    status_reason: Optional[str] = Field(default=None, alias="statusReason")
    usage: Optional[SiteUsage] = None


class Project(XmlModel):
    xml_tag: ClassVar[str] = "project"

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    content_permissions: Optional[str] = Field(
        default=None, alias="contentPermissions"
    )


class User(XmlModel):
    xml_tag: ClassVar[str] = "user"

    id: Optional[str] = None
    name: Optional[str] = None
    site_role: Optional[str] = Field(default=None, alias="siteRole")
    last_login: Optional[str] = Field(default=None, alias="lastLogin")
    full_name: Optional[str] = Field(default=None, alias="fullName")
    external_auth_user_id: Optional[str] = Field(
        default=None, alias="externalAuthUserId"
    )


class WorkbookRef(XmlModel):
    xml_tag: ClassVar[str] = "workbook"

    id: Optional[str] = None
    name: Optional[str] = None


class View(XmlModel):
    xml_tag: ClassVar[str] = "view"

    id: Optional[str] = None
    name: Optional[str] = None
    content_url: Optional[str] = Field(default=None, alias="contentUrl")
    workbook: Optional[WorkbookRef] = None
    owner: Optional[User] = None


class Workbook(XmlModel):
    xml_tag: ClassVar[str] = "workbook"

    id: Optional[str] = None
    name: Optional[str] = None
    content_url: Optional[str] = Field(default=None, alias="contentUrl")
    show_tabs: Optional[bool] = Field(default=None, alias="showTabs")
    size: Optional[int] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    project: Optional[Project] = None
    owner: Optional[User] = None
    tags: Tags = Field(default_factory=list)


class ConnectionCredentials(XmlModel):
    xml_tag: ClassVar[str] = "connectionCredentials"

    name: Optional[str] = None
    password: Optional[str] = None
    embed: Optional[bool] = None


class Datasource(XmlModel):
    xml_tag: ClassVar[str] = "datasource"

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    content_url: Optional[str] = Field(default=None, alias="contentUrl")
    connection_credentials: Optional[ConnectionCredentials] = Field(
        default=None, alias="connectionCredentials"
    )
    project: Optional[Project] = None
    owner: Optional[User] = None
    tags: Tags = Field(default_factory=list)


class ProductVersion(XmlModel):
    xml_tag: ClassVar[str] = "productVersion"

    value: Optional[str] = None
    build: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _text_only(cls, data: Any) -> Any:
        # <productVersion>10.3</productVersion> without a build attribute
        if isinstance(data, str) and data:
            return {"value": data}
        return data


class ServerInfo(XmlModel):
    xml_tag: ClassVar[str] = "serverInfo"

    product_version: Optional[ProductVersion] = Field(
        default=None, alias="productVersion"
    )
    rest_api_version: Optional[str] = Field(default=None, alias="restApiVersion")


class Credentials(XmlModel):
    """Sign-in payload; ``user`` is the impersonation target."""

    xml_tag: ClassVar[str] = "credentials"

    name: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    site: Optional[Site] = None
    user: Optional[User] = None


class TableauErrorDetail(XmlModel):
    xml_tag: ClassVar[str] = "error"

    code: Optional[str] = None
    summary: Optional[str] = None
    detail: Optional[str] = None


# --- Response envelopes (<tsResponse>) --- #


class SignInResponse(XmlModel):
    credentials: Credentials


class ServerInfoResponse(XmlModel):
    server_info: ServerInfo = Field(alias="serverInfo")


class SitesResponse(XmlModel):
    sites: Annotated[List[Site], _collection("site")] = Field(default_factory=list)


class SiteResponse(XmlModel):
    site: Site


class UsersResponse(XmlModel):
    users: Annotated[List[User], _collection("user")] = Field(default_factory=list)


class UserResponse(XmlModel):
    user: User


class ProjectsResponse(XmlModel):
    projects: Annotated[List[Project], _collection("project")] = Field(
        default_factory=list
    )


class ProjectResponse(XmlModel):
    project: Project


class ViewsResponse(XmlModel):
    views: Annotated[List[View], _collection("view")] = Field(default_factory=list)


class WorkbooksResponse(XmlModel):
    workbooks: Annotated[List[Workbook], _collection("workbook")] = Field(
        default_factory=list
    )


class DatasourcesResponse(XmlModel):
    datasources: Annotated[List[Datasource], _collection("datasource")] = Field(
        default_factory=list
    )


class DatasourceResponse(XmlModel):
    datasource: Datasource


class ErrorResponse(XmlModel):
    error: TableauErrorDetail


__all__ = [
    "XmlModel",
    "Tag",
    "SiteUsage",
    "Site",
    "Project",
    "User",
    "WorkbookRef",
    "View",
    "Workbook",
    "ConnectionCredentials",
    "Datasource",
    "ProductVersion",
    "ServerInfo",
    "Credentials",
    "TableauErrorDetail",
    "SignInResponse",
    "ServerInfoResponse",
    "SitesResponse",
    "SiteResponse",
    "UsersResponse",
    "UserResponse",
    "ProjectsResponse",
    "ProjectResponse",
    "ViewsResponse",
    "WorkbooksResponse",
    "DatasourcesResponse",
    "DatasourceResponse",
    "ErrorResponse",
]
