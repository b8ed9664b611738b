"""Terminal rendering for the explorer REPL."""

from __future__ import annotations

import sys
from typing import TextIO

from ..analytics import StatsSnapshot
from ..models import Page, Record
from ..session import (
    CommandResult,
    Quit,
    Search,
    SessionState,
    ShowStats,
    ViewPage,
)

ANSI_RESET = "\033[0m"
ANSI_BOLD = "\033[1m"
ANSI_RED = "\033[31m"
ANSI_GREEN = "\033[32m"
ANSI_YELLOW = "\033[33m"
ANSI_BLUE = "\033[34m"
ANSI_CYAN = "\033[36m"

MENU = (
    "  1. View current page (detailed)",
    "  2. Next page →",
    "  3. Previous page ←",
    "  4. Jump to page",
    "  5. Change page size (current: {page_size})",
    "  6. Search for user",
    "  7. Load all users",
    "  8. Show statistics",
    "  9. Export data",
    "  Q. Quit",
)

PREVIEW_ROWS = 3
TIMEZONE_ROWS = 10


class Renderer:
    """Writes session state and command results to a text stream."""

    def __init__(self, out: TextIO | None = None, *, color: bool = True) -> None:
        self._out = out or sys.stdout
        self._color = color

    def _paint(self, text: str, *codes: str) -> str:
        if not self._color or not codes:
            return text
        return "".join(codes) + text + ANSI_RESET

    def line(self, text: str = "") -> None:
        print(text, file=self._out)

    def success(self, message: str) -> None:
        self.line(self._paint(f"✓ {message}", ANSI_GREEN))

    def warning(self, message: str) -> None:
        self.line(self._paint(f"⚠ {message}", ANSI_YELLOW))

    def error(self, message: str) -> None:
        self.line(self._paint(f"✗ {message}", ANSI_RED))

    def welcome(self) -> None:
        self.line(self._paint("═══ Roster Explorer - Interactive ═══", ANSI_BOLD, ANSI_BLUE))
        self.line("Loading initial data...")

    def menu(self, state: SessionState) -> None:
        page = state.current_page
        self.line()
        self.line(self._paint("═══ Roster Explorer ═══", ANSI_BOLD, ANSI_CYAN))
        if page is not None:
            total = str(page.total) if page.total is not None else "?"
            self.line(
                f"Page {state.current_page_number} | Showing "
                f"{state.current_offset + 1}-{state.current_offset + page.item_count} of {total} users"
            )
            self.line("─" * 50)
            if not page.is_empty:
                self.line(self._paint("Current page preview:", ANSI_YELLOW))
                for record in page.items[:PREVIEW_ROWS]:
                    self.line(f"  • {record.name or 'Unknown'} ({record.email or 'No email'})")
                if page.item_count > PREVIEW_ROWS:
                    self.line(f"  ... and {page.item_count - PREVIEW_ROWS} more")
        self.line()
        self.line(self._paint("Options:", ANSI_BOLD))
        for entry in MENU:
            self.line(entry.format(page_size=state.page_size))

    def page_detail(self, page: Page, page_number: int) -> None:
        self.line(self._paint(f"═══ Page {page_number} - Detailed View ═══", ANSI_BOLD, ANSI_GREEN))
        for index, record in enumerate(page.items, start=1):
            self.record_detail(index, record)
            self.line("─" * 70)
        nav = []
        if not page.is_first_page:
            nav.append("[← Previous]")
        nav.append(f"Page {page_number}")
        if page.has_more:
            nav.append("[Next →]")
        self.line(self._paint(" ".join(nav), ANSI_CYAN))

    def record_detail(self, index: int, record: Record) -> None:
        self.line(
            self._paint(f"{index}. {record.name or 'Unknown User'}", ANSI_BOLD) + f" (ID: {record.id})"
        )
        self.line(f"   Email: {record.email or 'N/A'}")
        self.line(f"   Role: {record.role or 'N/A'} | Type: {record.kind}")
        if record.job_title is not None:
            self.line(f"   Job Title: {record.job_title}")
        if record.timezone is not None:
            self.line(f"   Time Zone: {record.timezone}")
        if record.status is not None:
            self.line(f"   Status: {record.status}")
        if record.has_unknown_fields:
            names = ", ".join(record.unknown_fields)
            self.line(self._paint(f"   Unknown fields: {names}", ANSI_YELLOW))

    def stats(self, snapshot: StatsSnapshot, loaded: int) -> None:
        self.line(self._paint("═══ Statistics ═══", ANSI_BOLD, ANSI_CYAN))
        self.line(f"API Calls: {snapshot.total_calls}")
        if snapshot.average_latency_ms is not None:
            self.line(f"Average Response Time: {snapshot.average_latency_ms:.0f} ms")
        self.line(f"Total Users Loaded: {loaded}")
        if snapshot.by_timezone:
            self.line(self._paint("Users by Time Zone:", ANSI_YELLOW))
            for value, count in snapshot.by_timezone[:TIMEZONE_ROWS]:
                self.line(f"  {value:<30}: {count}")
        if snapshot.by_role:
            self.line(self._paint("Users by Role:", ANSI_YELLOW))
            for value, count in snapshot.by_role:
                self.line(f"  {value:<20}: {count}")

    def goodbye(self, snapshot: StatsSnapshot, examined: int) -> None:
        self.line(self._paint("Thank you for using Roster Explorer!", ANSI_BOLD, ANSI_BLUE))
        self.line("Statistics for this session:")
        self.line(f"  • API calls made: {snapshot.total_calls}")
        self.line(f"  • Users examined: {examined}")
        if snapshot.average_latency_ms is not None:
            self.line(f"  • Avg response time: {snapshot.average_latency_ms:.0f} ms")

    def result(self, result: CommandResult, state: SessionState) -> None:
        """Render the outcome of one command."""
        command = result.command
        if not result.ok:
            self.warning(result.message)
            return

        if isinstance(command, ViewPage) and result.page is not None:
            self.page_detail(result.page, state.current_page_number)
        elif isinstance(command, Search):
            for record in result.matches:
                self.line(f"  • {record.name} ({record.email}) - ID: {record.id}")
            self.success(result.message)
            if result.notice:
                self.warning(result.notice)
        elif isinstance(command, ShowStats) and result.stats is not None:
            self.stats(result.stats, len(state.records))
        elif isinstance(command, Quit) and result.stats is not None:
            self.goodbye(result.stats, len(state.records))
        else:
            self.success(result.message)
