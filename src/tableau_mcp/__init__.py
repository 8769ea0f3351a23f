"""tableau_mcp package exports."""

from .core import (
    Credentials,
    Datasource,
    Project,
    ResponseFormat,
    ServerInfo,
    Site,
    TableauClient,
    TableauClientError,
    TableauConfig,
    TableauModelValidationError,
    TableauNotFoundError,
    TableauParseError,
    TableauPayloadError,
    TableauServerError,
    TableauTimeoutError,
    TableauTransportError,
    User,
    View,
    Workbook,
    create_client_from_env,
    load_env_config,
)
from .core import operations

__all__ = [
    # Client
    "TableauClient",
    "ResponseFormat",
    "operations",
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
    "Project",
    "User",
    "View",
    "Workbook",
    "Datasource",
    "ServerInfo",
    "Credentials",
    # Config
    "TableauConfig",
    "create_client_from_env",
    "load_env_config",
]
