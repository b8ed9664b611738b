"""Interactive exploration session."""

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
from .machine import PARTIAL_SEARCH_NOTICE, ExplorerSession
from .state import SessionPhase, SessionState

__all__ = [
    "ExplorerSession",
    "SessionState",
    "SessionPhase",
    "Command",
    "CommandResult",
    "ResultStatus",
    "LoadSummary",
    "ViewPage",
    "NextPage",
    "PreviousPage",
    "JumpToPage",
    "ChangePageSize",
    "Search",
    "LoadAll",
    "ShowStats",
    "Export",
    "Quit",
    "PARTIAL_SEARCH_NOTICE",
]
