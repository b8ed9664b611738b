"""Interactive exploration session over a paginated collection.

Architecture:
    ExplorerSession is a small state machine. Callers send commands from the
    closed set in ``commands``; each command runs to completion before the
    next one is accepted. Navigation commands fetch through a metered source
    that records call latency and applies the rate-limit policy.

Design Decisions:
    - Tagged commands dispatched through a type-keyed handler table
    - Invalid arguments raise PreconditionError before any fetch and
      leave the state untouched
    - Navigation commits offset and page only after a successful fetch
    - HTTP 429 (any TransportError with that status): wait a fixed backoff
      once, then re-raise; never re-issue the request
    - Bulk loads are cancelled cooperatively, between pages only
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import aclosing
from pathlib import Path
from time import perf_counter

from ..analytics import StatisticsAggregator
from ..config import (
    BULK_PACING_DELAY,
    BULK_PAGE_SIZE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_LIMIT,
    MIN_PAGE_LIMIT,
    RATE_LIMIT_BACKOFF,
)
from ..core.exceptions import (
    ExportError,
    PaginationError,
    PreconditionError,
    SessionClosedError,
    TransportError,
)
from ..export import export_records
from ..models import Page, Record
from ..runtime.pagination import OffsetPaginator, PageSource
from ..runtime.rest.transport import validate_limit
from ..runtime.telemetry import log_bulk_load_cancelled, log_rate_limited
from ..storage import RecordStore
from .commands import (
    ChangePageSize,
    Command,
    CommandResult,
    Export,
    JumpToPage,
    LoadAll,
    LoadSummary,
    NextPage,
    PreviousPage,
    Quit,
    ResultStatus,
    Search,
    ShowStats,
    ViewPage,
)
from .state import SessionPhase, SessionState

Sleep = Callable[[float], Awaitable[None]]

PARTIAL_SEARCH_NOTICE = "Results are partial: load all records for a full search"


class _MeteredSource:
    """PageSource that times calls and applies the rate-limit backoff."""

    def __init__(self, session: ExplorerSession) -> None:
        self._session = session

    async def fetch_page(self, offset: int, limit: int) -> Page:
        s = self._session
        start = s._clock()
        try:
            page = await s._source.fetch_page(offset, limit)
        except TransportError as e:
            if e.status_code == 429:
                log_rate_limited(
                    backoff_seconds=s.backoff_seconds,
                    retry_after=getattr(e, "retry_after", None),
                )
                await s._sleep(s.backoff_seconds)
            raise
        s.stats.record_call((s._clock() - start) * 1000.0)
        return page


class ExplorerSession:
    """Single-owner exploration session.

    Not safe for concurrent callers; ``dispatch`` must be awaited one
    command at a time.
    """

    def __init__(
        self,
        source: PageSource,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        backoff_seconds: float = RATE_LIMIT_BACKOFF,
        bulk_page_size: int = BULK_PAGE_SIZE,
        bulk_pacing: float = BULK_PACING_DELAY,
        export_dir: Path = Path("."),
        store: RecordStore[Record] | None = None,
        stats: StatisticsAggregator | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = perf_counter,
    ) -> None:
        """Initialize session.

        Args:
            source: Where pages come from (client or test double)
            page_size: Initial page size (1..100)
            backoff_seconds: Fixed wait after a 429
            bulk_page_size: Page size used by LoadAll
            bulk_pacing: Delay between pages during LoadAll
            export_dir: Directory for exports
            store: Store for accumulated records (in-memory by default)
            stats: Statistics aggregator (fresh by default)
            sleep: Awaitable sleep used for backoff and pacing
            clock: Monotonic clock in seconds, used for latency
        """
        validate_limit(page_size)
        validate_limit(bulk_page_size)
        if backoff_seconds < 0:
            raise PreconditionError("Backoff cannot be negative")

        self.state = SessionState(page_size=page_size)
        if store is not None:
            self.state.records = store
        self.stats = stats or StatisticsAggregator()
        self.backoff_seconds = backoff_seconds
        self.export_dir = export_dir

        self._source = source
        self._bulk_page_size = bulk_page_size
        self._bulk_pacing = bulk_pacing
        self._sleep = sleep
        self._clock = clock
        self._metered = _MeteredSource(self)
        self._cancel = asyncio.Event()

        self._handlers: dict[type, Callable[..., Awaitable[CommandResult]]] = {
            ViewPage: self._view_page,
            NextPage: self._next_page,
            PreviousPage: self._previous_page,
            JumpToPage: self._jump_to_page,
            ChangePageSize: self._change_page_size,
            Search: self._search,
            LoadAll: self._load_all,
            ShowStats: self._show_stats,
            Export: self._export,
            Quit: self._quit,
        }

    # ----------------------
    # Public API
    # ----------------------
    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def terminated(self) -> bool:
        return self.state.phase is SessionPhase.TERMINATED

    @property
    def accumulated_records(self) -> list[Record]:
        return list(self.state.records)

    async def dispatch(self, command: Command) -> CommandResult:
        """Run one command to completion.

        Raises:
            SessionClosedError: If the session was terminated
            PreconditionError: If the command arguments are invalid
            TransportError: If a fetch failed (after backoff for 429)
            ValidationError: If a response could not be decoded
        """
        if self.terminated:
            raise SessionClosedError("Session is terminated; no further commands accepted")
        handler = self._handlers.get(type(command))
        if handler is None:
            raise PreconditionError(f"Unsupported command: {command!r}")
        return await handler(command)

    def request_cancel(self) -> None:
        """Ask a running LoadAll to stop after the page in flight."""
        self._cancel.set()

    # ----------------------
    # Navigation
    # ----------------------
    async def _view_page(self, command: ViewPage) -> CommandResult:
        if self.state.current_page is None:
            await self._load(self.state.current_offset)
        page = self.state.current_page
        if page is None or page.is_empty:
            return self._warn(command, "No records on current page", page=page)
        return self._ok(
            command, f"Page {self.state.current_page_number}", page=page
        )

    async def _next_page(self, command: NextPage) -> CommandResult:
        page = self.state.current_page
        if page is None or not page.has_more:
            return self._warn(command, "Already on last page", page=page)
        if page.next_offset <= self.state.current_offset:
            raise PaginationError(
                f"Page at offset {page.offset} reports more data but cannot advance "
                f"(limit={page.limit})"
            )
        await self._load(page.next_offset)
        return self._moved(command, f"Moved to page {self.state.current_page_number}")

    async def _previous_page(self, command: PreviousPage) -> CommandResult:
        if self.state.current_offset <= 0:
            return self._warn(command, "Already on first page", page=self.state.current_page)
        await self._load(max(0, self.state.current_offset - self.state.page_size))
        return self._moved(command, f"Moved to page {self.state.current_page_number}")

    async def _jump_to_page(self, command: JumpToPage) -> CommandResult:
        if command.page < 1:
            raise PreconditionError(f"Page number must be positive, got {command.page}")
        await self._load((command.page - 1) * self.state.page_size)
        return self._moved(command, f"Jumped to page {command.page}")

    async def _change_page_size(self, command: ChangePageSize) -> CommandResult:
        if not MIN_PAGE_LIMIT <= command.size <= MAX_PAGE_LIMIT:
            raise PreconditionError(
                f"Page size must be between {MIN_PAGE_LIMIT} and {MAX_PAGE_LIMIT}, "
                f"got {command.size}"
            )
        # Offsets are not comparable across page sizes; always restart at zero
        self.state.page_size = command.size
        self.state.current_offset = 0
        self.state.current_page = None
        self._settle()
        await self._load(0)
        return self._moved(command, f"Page size changed to {command.size}")

    async def _load(self, offset: int) -> Page:
        page = await self._metered.fetch_page(offset, self.state.page_size)
        self.state.current_offset = offset
        self.state.current_page = page
        self.state.phase = SessionPhase.PAGE_LOADED
        return page

    # ----------------------
    # Bulk load / search / stats / export
    # ----------------------
    async def _load_all(self, command: LoadAll) -> CommandResult:
        self._cancel.clear()
        self.state.records.clear()
        self.stats.reset_categories()
        self.state.corpus_complete = False
        self.state.phase = SessionPhase.BULK_LOADING

        pages = 0
        last: Page | None = None
        paginator = OffsetPaginator(self._metered, pacing=self._bulk_pacing, sleep=self._sleep)
        walk = paginator.traverse(0, self._bulk_page_size, should_stop=self._cancel.is_set)
        try:
            async with aclosing(walk):
                async for page in walk:
                    pages += 1
                    last = page
                    for record in page.items:
                        self.state.records.append(record)
                    self.stats.observe(page.items)
        finally:
            self._cancel.clear()
            self._settle()

        # The walk only ends on a page with more data when it was stopped
        cancelled = last is not None and last.has_more
        loaded = len(self.state.records)
        summary = LoadSummary(records=loaded, pages=pages, cancelled=cancelled)
        if cancelled:
            log_bulk_load_cancelled(pages=pages, records=loaded)
            return self._warn(
                command, f"Load cancelled after {pages} pages ({loaded} records)", load=summary
            )
        self.state.corpus_complete = True
        return self._ok(command, f"Loaded {loaded} records in {pages} pages", load=summary)

    async def _search(self, command: Search) -> CommandResult:
        term = command.term.strip().lower()
        if not term:
            raise PreconditionError("Search term cannot be empty")

        self.state.phase = SessionPhase.SEARCHING
        try:
            matches = tuple(r for r in self.state.records if _matches(r, term))
        finally:
            self._settle()

        notice = None if self.state.corpus_complete else PARTIAL_SEARCH_NOTICE
        return CommandResult(
            command=command,
            status=ResultStatus.OK,
            message=f"Found {len(matches)} matching records",
            page=self.state.current_page,
            matches=matches,
            notice=notice,
        )

    async def _show_stats(self, command: ShowStats) -> CommandResult:
        snapshot = self.stats.snapshot(top_n=command.top_n)
        return self._ok(
            command,
            f"{snapshot.total_calls} calls, {len(self.state.records)} records loaded",
            stats=snapshot,
        )

    async def _export(self, command: Export) -> CommandResult:
        if len(self.state.records) == 0:
            return self._warn(command, "No data to export. Load all records first")

        self.state.phase = SessionPhase.EXPORTING
        try:
            path, count = export_records(self.state.records, command.format, self.export_dir)
        except OSError as e:
            raise ExportError(f"Export failed: {e}") from e
        finally:
            self._settle()
        return self._ok(command, f"Exported {count} records to {path}", export_path=path)

    async def _quit(self, command: Quit) -> CommandResult:
        self.state.phase = SessionPhase.TERMINATED
        snapshot = self.stats.snapshot()
        return self._ok(command, "Session terminated", stats=snapshot)

    # ----------------------
    # Helpers
    # ----------------------
    def _settle(self) -> None:
        if self.state.phase is SessionPhase.TERMINATED:
            return
        self.state.phase = (
            SessionPhase.PAGE_LOADED if self.state.current_page is not None else SessionPhase.IDLE
        )

    def _moved(self, command: Command, message: str) -> CommandResult:
        return self._ok(command, message, page=self.state.current_page)

    def _ok(self, command: Command, message: str, **payload) -> CommandResult:
        return CommandResult(command=command, status=ResultStatus.OK, message=message, **payload)

    def _warn(self, command: Command, message: str, **payload) -> CommandResult:
        return CommandResult(
            command=command, status=ResultStatus.WARNING, message=message, **payload
        )


def _matches(record: Record, term: str) -> bool:
    return (record.name is not None and term in record.name.lower()) or (
        record.email is not None and term in record.email.lower()
    )
