"""Core library surface for tableau-mcp (transport-agnostic)."""

from .client import ResponseFormat, TableauClient
from .errors import (
    TableauClientError,
    TableauModelValidationError,
    TableauNotFoundError,
    TableauParseError,
    TableauPayloadError,
    TableauServerError,
    TableauTimeoutError,
    TableauTransportError,
)
from .config import TableauConfig, create_client_from_env, load_env_config
from .models import (
    ConnectionCredentials,
    Credentials,
    Datasource,
    ProductVersion,
    Project,
    ServerInfo,
    Site,
    SiteUsage,
    Tag,
    TableauErrorDetail,
    User,
    View,
    Workbook,
)
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

__all__ = [
    # Client
    "TableauClient",
    "ResponseFormat",
    # Exceptions
    "TableauClientError",
    "TableauNotFoundError",
    "TableauServerError",
    "TableauParseError",
    "TableauModelValidationError",
    "TableauPayloadError",
    "TableauTransportError",
    "TableauTimeoutError",
    # Models
    "Site",
    "SiteUsage",
    "Project",
    "User",
    "Tag",
    "View",
    "Workbook",
    "Datasource",
    "ConnectionCredentials",
    "ServerInfo",
    "ProductVersion",
    "Credentials",
    "TableauErrorDetail",
    # Config helpers
    "TableauConfig",
    "create_client_from_env",
    "load_env_config",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
