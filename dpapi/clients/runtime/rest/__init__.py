"""REST runtime abstractions."""

from .http_client import HTTPClient, RESTResponse

__all__ = [
    "HTTPClient",
    "RESTResponse",
]
