"""Runtime components: REST transport, pagination and telemetry."""

from .pagination import OffsetPaginator, PageSource
from .rest import EntityAdapter, HTTPClient, PageAdapter, RESTTransport

__all__ = [
    "OffsetPaginator",
    "PageSource",
    "HTTPClient",
    "RESTTransport",
    "PageAdapter",
    "EntityAdapter",
]
