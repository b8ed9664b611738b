"""Closed set of session commands and their results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..analytics import StatsSnapshot
from ..export import ExportFormat
from ..models import Page, Record


@dataclass(frozen=True)
class ViewPage:
    """Show the current page, loading it first if needed."""


@dataclass(frozen=True)
class NextPage:
    """Advance one page."""


@dataclass(frozen=True)
class PreviousPage:
    """Go back one page."""


@dataclass(frozen=True)
class JumpToPage:
    """Go to a 1-based page number."""

    page: int


@dataclass(frozen=True)
class ChangePageSize:
    """Change page size and restart from the first page."""

    size: int


@dataclass(frozen=True)
class Search:
    """Search loaded records by name or email."""

    term: str


@dataclass(frozen=True)
class LoadAll:
    """Load every record of the collection."""


@dataclass(frozen=True)
class ShowStats:
    """Report call and category statistics."""

    top_n: int | None = None


@dataclass(frozen=True)
class Export:
    """Export loaded records."""

    format: ExportFormat


@dataclass(frozen=True)
class Quit:
    """End the session."""


Command = (
    ViewPage
    | NextPage
    | PreviousPage
    | JumpToPage
    | ChangePageSize
    | Search
    | LoadAll
    | ShowStats
    | Export
    | Quit
)


class ResultStatus(Enum):
    """Outcome of a command that did not raise."""

    OK = "ok"
    WARNING = "warning"


@dataclass(frozen=True)
class LoadSummary:
    """Outcome of a bulk load."""

    records: int
    pages: int
    cancelled: bool


@dataclass(frozen=True)
class CommandResult:
    """Result returned by ``ExplorerSession.dispatch``.

    Only the payload relevant to the command is set.
    """

    command: Command
    status: ResultStatus
    message: str
    page: Page | None = None
    matches: tuple[Record, ...] = ()
    notice: str | None = None
    stats: StatsSnapshot | None = None
    load: LoadSummary | None = None
    export_path: Path | None = None

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK
