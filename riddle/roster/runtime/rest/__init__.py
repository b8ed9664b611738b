"""REST runtime abstractions."""

from .adapters import EntityAdapter, PageAdapter, ResponseAdapter
from .http_client import HTTPClient
from .transport import RESTTransport, validate_limit

__all__ = [
    "HTTPClient",
    "RESTTransport",
    "ResponseAdapter",
    "PageAdapter",
    "EntityAdapter",
    "validate_limit",
]
