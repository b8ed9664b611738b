"""Unit tests for the explorer REPL and command-line entry point."""

from __future__ import annotations

import io
from unittest.mock import AsyncMock

import pytest

from riddle.roster.cli import ExplorerRepl, Renderer, main, parse_choice
from riddle.roster.cli.main import parse_args
from riddle.roster.core import PreconditionError, RateLimitError, TransportError
from riddle.roster.export import ExportFormat
from riddle.roster.session import (
    ChangePageSize,
    ExplorerSession,
    Export,
    JumpToPage,
    LoadAll,
    NextPage,
    Quit,
    Search,
    ShowStats,
    ViewPage,
)


def _prompt(*answers: str):
    queue = list(answers)

    def prompt(_message: str) -> str:
        if not queue:
            raise EOFError
        return queue.pop(0)

    return prompt


class TestParseChoice:
    """Test menu choice mapping."""

    @pytest.mark.parametrize(
        ("choice", "expected"),
        [
            ("1", ViewPage()),
            ("2", NextPage()),
            (" 7 ", LoadAll()),
            ("8", ShowStats()),
            ("Q", Quit()),
            ("exit", Quit()),
        ],
    )
    def test_simple_choices(self, choice, expected):
        """Test choices without follow-up questions."""
        assert parse_choice(choice, _prompt()) == expected

    def test_follow_up_questions(self):
        """Test choices that ask for an argument."""
        assert parse_choice("4", _prompt("3")) == JumpToPage(3)
        assert parse_choice("5", _prompt(" 25 ")) == ChangePageSize(25)
        assert parse_choice("6", _prompt("alice")) == Search("alice")
        assert parse_choice("9", _prompt("j")) == Export(ExportFormat.JSON)
        assert parse_choice("9", _prompt("CSV")) == Export(ExportFormat.CSV)

    def test_invalid_number(self):
        """Test non-numeric answers raise PreconditionError."""
        with pytest.raises(PreconditionError):
            parse_choice("4", _prompt("three"))

    def test_invalid_format(self):
        """Test unknown export format raises PreconditionError."""
        with pytest.raises(PreconditionError):
            parse_choice("9", _prompt("xml"))

    def test_unknown_choice(self):
        """Test unrecognized input maps to no command."""
        assert parse_choice("42", _prompt()) is None


class TestExplorerRepl:
    """Test the interactive loop end to end against a fake source."""

    @pytest.mark.asyncio
    async def test_navigation_session(self, source):
        """Test a scripted session renders each command outcome."""
        out = io.StringIO()
        session = ExplorerSession(source, page_size=10, sleep=AsyncMock())
        repl = ExplorerRepl(
            session,
            prompt=_prompt("2", "4", "3", "bogus", "q"),
            renderer=Renderer(out, color=False),
        )

        await repl.run()

        text = out.getvalue()
        assert "Page 1 - Detailed View" in text
        assert "Moved to page 2" in text
        assert "Jumped to page 3" in text
        assert "Invalid choice" in text
        assert "Thank you for using Roster Explorer!" in text
        assert session.terminated

    @pytest.mark.asyncio
    async def test_server_error_has_no_rate_limit_hint(self, source_factory, records):
        """Test only a 429 gets the re-issue hint."""
        out = io.StringIO()
        src = source_factory(records, errors={0: TransportError("Server error", status_code=500)})
        session = ExplorerSession(src, sleep=AsyncMock())
        repl = ExplorerRepl(session, prompt=_prompt("q"), renderer=Renderer(out, color=False))

        await repl.run()

        text = out.getvalue()
        assert "Error: Server error" in text
        assert "Re-issue the command" not in text

    @pytest.mark.asyncio
    async def test_load_all_and_stats(self, source):
        """Test bulk load and statistics rendering."""
        out = io.StringIO()
        session = ExplorerSession(source, bulk_page_size=10, sleep=AsyncMock())
        repl = ExplorerRepl(session, prompt=_prompt("7", "8", "q"), renderer=Renderer(out, color=False))

        await repl.run()

        text = out.getvalue()
        assert "Loaded 25 records in 3 pages" in text
        assert "Total Users Loaded: 25" in text

    @pytest.mark.asyncio
    async def test_end_of_input_quits(self, source):
        """Test EOF on the prompt ends the session cleanly."""
        session = ExplorerSession(source, sleep=AsyncMock())
        await ExplorerRepl(session, prompt=_prompt(), renderer=Renderer(io.StringIO())).run()
        assert session.terminated

    @pytest.mark.asyncio
    async def test_errors_are_displayed(self, source_factory, records):
        """Test a failed command is shown and the loop continues."""
        out = io.StringIO()
        src = source_factory(records, errors={0: RateLimitError("Rate limited")})
        session = ExplorerSession(src, backoff_seconds=30.0, sleep=AsyncMock())
        repl = ExplorerRepl(session, prompt=_prompt("1", "q"), renderer=Renderer(out, color=False))

        await repl.run()

        text = out.getvalue()
        assert "Error: Rate limited" in text
        assert "Re-issue the command" in text
        assert "Page 1 - Detailed View" in text


class TestMain:
    """Test the command-line entry point."""

    def test_parse_args(self):
        """Test flags are parsed."""
        args = parse_args(["-i", "--page-size", "25", "--log-level", "DEBUG"])
        assert args.interactive
        assert args.page_size == 25
        assert args.log_level == "DEBUG"
        assert args.user is None

    def test_missing_token(self, monkeypatch, capsys):
        """Test a missing token exits with status 1."""
        monkeypatch.delenv("PAGERDUTY_API_TOKEN", raising=False)
        assert main([]) == 1
        assert "PAGERDUTY_API_TOKEN" in capsys.readouterr().err

    def test_invalid_page_size(self, monkeypatch, capsys):
        """Test an out-of-range page size exits with status 1."""
        monkeypatch.setenv("PAGERDUTY_API_TOKEN", "tok")
        assert main(["--page-size", "500"]) == 1
        assert "Page size" in capsys.readouterr().err
