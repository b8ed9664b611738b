"""Command-line interface for the roster explorer."""

from .main import main, run
from .render import Renderer
from .repl import ExplorerRepl, parse_choice

__all__ = ["main", "run", "Renderer", "ExplorerRepl", "parse_choice"]
