"""Shared console instance for jumpedit."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape

from jumpedit.shell import quote_command_words

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


JUMPEDIT_LOG_FILE = "JUMPEDIT_LOG_FILE"


_console = Console(soft_wrap=True, stderr=True)
_verbose = False
_log_to_file = False


def set_verbose() -> None:
    """Turn on verbose mode.

    Note: Tests reset _verbose in the console_out fixture.
    """
    global _verbose  # noqa: PLW0603
    _verbose = True


def is_verbose() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose


def print_verbose(*args: Any) -> None:  # noqa: ANN401
    """Print general verbose messages."""
    if _verbose:
        _console.print(*args, style="dim")
        _console.file.flush()


def print_log(*args: Any) -> None:  # noqa: ANN401
    """Print diagnostics, in verbose mode or when logging to a file."""
    if _verbose or _log_to_file:
        _console.print(*args, style="dim")
        _console.file.flush()


def print_command(command: list[str]) -> None:
    """Print a command to be executed, verbose mode."""
    if not _verbose:
        return
    words = _style_command(command)
    _console.print("  [bold]$", *words, style="dim")
    _console.file.flush()


def _style_command(command: list[str]) -> Iterable[str]:
    escaped = (escape(x) for x in quote_command_words(command))
    return (
        f"[bold]{word}" if i == 0 and word else word
        for i, word in enumerate(escaped)
    )


def print_warning(*args: Any) -> None:  # noqa: ANN401
    """Print a warning message, verbose mode."""
    if _verbose:
        _console.print(*args, style="yellow")
        _console.file.flush()


def print_notice(*args: Any) -> None:  # noqa: ANN401
    """Print a message the user must see."""
    _console.print(*args, style="yellow")
    _console.file.flush()


def print_error(title: str | None, *args: Any) -> None:  # noqa: ANN401
    """Print an error message."""
    title = title or "Error:"
    _console.print(f"[bold]{title}", *args, style="red")
    _console.file.flush()


@contextmanager
def setup_log_file() -> Iterator[None]:
    """Send console output to the file named by JUMPEDIT_LOG_FILE.

    Hosts that launch jumpedit without a terminal set JUMPEDIT_LOG_FILE to
    keep the log. Without it the console stays on stderr.
    """
    global _log_to_file  # noqa: PLW0603
    env_path = os.environ.get(JUMPEDIT_LOG_FILE)
    if not env_path:
        yield
        return
    try:
        log_file = Path(env_path).open("a", encoding="utf-8")  # noqa: SIM115
    except OSError as error:
        print_error("Error opening log file:", error)
        raise SystemExit(1) from error
    saved_file = _console.file
    _console.file = log_file
    _log_to_file = True
    try:
        yield
    finally:
        _console.file = saved_file
        _log_to_file = False
        log_file.close()
