"""Menu-driven REPL over an ExplorerSession.

The REPL is the only place free-text input exists: menu choices are mapped
to typed commands by ``parse_choice`` before reaching the session.
"""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable

from ..core.exceptions import PreconditionError, RosterError, TransportError
from ..export import ExportFormat
from ..session import (
    ChangePageSize,
    Command,
    ExplorerSession,
    Export,
    JumpToPage,
    LoadAll,
    NextPage,
    PreviousPage,
    Quit,
    Search,
    ShowStats,
    ViewPage,
)
from .render import Renderer

Prompt = Callable[[str], str]

_SIMPLE_CHOICES: dict[str, Callable[[], Command]] = {
    "1": ViewPage,
    "2": NextPage,
    "3": PreviousPage,
    "7": LoadAll,
    "8": ShowStats,
    "q": Quit,
    "quit": Quit,
    "exit": Quit,
}

_EXPORT_FORMATS = {
    "c": ExportFormat.CSV,
    "csv": ExportFormat.CSV,
    "j": ExportFormat.JSON,
    "json": ExportFormat.JSON,
}


def parse_choice(choice: str, prompt: Prompt) -> Command | None:
    """Map a menu choice (and any follow-up answers) to a command.

    Args:
        choice: Raw menu input
        prompt: Callable used to ask for command arguments

    Returns:
        Command, or None for an unrecognized choice

    Raises:
        PreconditionError: If a follow-up answer is malformed
    """
    key = choice.strip().lower()
    factory = _SIMPLE_CHOICES.get(key)
    if factory is not None:
        return factory()
    if key == "4":
        return JumpToPage(_read_int(prompt("Enter page number: "), "page number"))
    if key == "5":
        return ChangePageSize(_read_int(prompt("Enter new page size (1-100): "), "page size"))
    if key == "6":
        return Search(prompt("Enter search term (name or email): "))
    if key == "9":
        answer = prompt("Export format ((c)sv/(j)son): ").strip().lower()
        fmt = _EXPORT_FORMATS.get(answer)
        if fmt is None:
            raise PreconditionError("Invalid format. Choose 'csv' or 'json'")
        return Export(fmt)
    return None


def _read_int(raw: str, what: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise PreconditionError(f"Invalid {what}: {raw.strip()!r}") from e


class ExplorerRepl:
    """Reads menu choices, dispatches commands and renders results."""

    def __init__(
        self,
        session: ExplorerSession,
        *,
        prompt: Prompt = input,
        renderer: Renderer | None = None,
    ) -> None:
        self._session = session
        self._prompt = prompt
        self._render = renderer or Renderer()

    async def run(self) -> None:
        """Loop until the user quits or input ends."""
        self._render.welcome()
        await self.execute(ViewPage())

        while not self._session.terminated:
            self._render.menu(self._session.state)
            try:
                choice = self._prompt("\nChoice: ")
            except EOFError:
                await self.execute(Quit())
                break

            try:
                command = parse_choice(choice, self._prompt)
            except PreconditionError as e:
                self._render.error(str(e))
                continue
            except EOFError:
                await self.execute(Quit())
                break

            if command is None:
                self._render.error("Invalid choice. Please try again.")
                continue
            await self.execute(command)

    async def execute(self, command: Command) -> None:
        """Dispatch one command and render its outcome or error."""
        try:
            if isinstance(command, LoadAll):
                self._render.warning("Loading all users... Press Ctrl+C to cancel")
                result = await self._dispatch_cancellable(command)
            else:
                result = await self._session.dispatch(command)
        except TransportError as e:
            self._render.error(f"Error: {e}")
            if e.status_code == 429:
                self._render.warning(
                    f"Rate limit hit; waited {self._session.backoff_seconds:.0f}s. "
                    "Re-issue the command."
                )
        except RosterError as e:
            self._render.error(f"Error: {e}")
        else:
            self._render.result(result, self._session.state)

    async def _dispatch_cancellable(self, command: LoadAll):
        loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(signal.SIGINT, self._session.request_cancel)
            installed = True
        except (NotImplementedError, RuntimeError):
            # No signal support on this platform/thread; load runs uncancellable
            installed = False
        try:
            return await self._session.dispatch(command)
        finally:
            if installed:
                loop.remove_signal_handler(signal.SIGINT)
