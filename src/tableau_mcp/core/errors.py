from .client import (
    TableauClientError,
    TableauModelValidationError,
    TableauNotFoundError,
    TableauParseError,
    TableauPayloadError,
    TableauServerError,
    TableauTimeoutError,
    TableauTransportError,
)

__all__ = [
    "TableauClientError",
    "TableauNotFoundError",
    "TableauServerError",
    "TableauParseError",
    "TableauModelValidationError",
    "TableauPayloadError",
    "TableauTransportError",
    "TableauTimeoutError",
]
