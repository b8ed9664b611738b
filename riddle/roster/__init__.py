"""Riddle Roster - paginated user-directory client and explorer."""

from .analytics import StatisticsAggregator, StatsSnapshot
from .clients import RosterClient
from .config import RosterSettings
from .core import (
    ConfigError,
    DecodeError,
    ExportError,
    LedgerError,
    PaginationError,
    PreconditionError,
    RateLimitError,
    RosterError,
    SessionClosedError,
    TransportError,
    ValidationError,
)
from .export import ExportFormat, export_records
from .models import Page, Record
from .runtime import OffsetPaginator, RESTTransport
from .session import ExplorerSession, SessionPhase, SessionState
from .storage import InMemoryRecordStore

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Models
    "Record",
    "Page",
    # Transport and traversal
    "RESTTransport",
    "OffsetPaginator",
    "RosterClient",
    "RosterSettings",
    # Session
    "ExplorerSession",
    "SessionState",
    "SessionPhase",
    "StatisticsAggregator",
    "StatsSnapshot",
    "InMemoryRecordStore",
    "ExportFormat",
    "export_records",
    # Exceptions
    "RosterError",
    "ConfigError",
    "ValidationError",
    "DecodeError",
    "LedgerError",
    "PreconditionError",
    "SessionClosedError",
    "TransportError",
    "RateLimitError",
    "PaginationError",
    "ExportError",
]
