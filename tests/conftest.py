"""Common test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from rich.console import Console

import jumpedit.console
from jumpedit.launcher import Notice

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass
class ConsoleFixture:
    """Console output fixture that tracks whether output was checked.

    Usage patterns:
    1. Verify specific output: assert console_out.getvalue() == "expected"
    2. No output expected: don't call getvalue(), fixture verifies empty
    3. Ignore output: call console_out.ignore_output()
    """

    _output: StringIO
    _checked: bool = field(default=False, init=False)

    def getvalue(self) -> str:
        """Get console output, marking it as checked."""
        self._checked = True
        return self._output.getvalue()

    def ignore_output(self) -> None:
        """Mark output as intentionally ignored."""
        self._checked = True

    def assert_no_unexpected_output(self) -> None:
        """Assert no unexpected output if not already checked."""
        if not self._checked:
            output = self._output.getvalue()
            assert output == "", "Unexpected console output"


@pytest.fixture
def console_out() -> Iterator[ConsoleFixture]:
    """Patch console with test console using StringIO (no colors)."""
    jumpedit.console._verbose = False
    output = StringIO()
    test_console = Console(file=output, force_terminal=False, soft_wrap=True)
    fixture = ConsoleFixture(output)

    with patch("jumpedit.console._console", test_console):
        yield fixture

    jumpedit.console._verbose = False
    fixture.assert_no_unexpected_output()


@dataclass
class RecordingNotifier:
    """Notifier keeping the notices it receives."""

    notices: list[Notice] = field(default_factory=list)

    def notify(self, notice: Notice) -> None:
        """Record the notice."""
        self.notices.append(notice)


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Return a notifier recording notices."""
    return RecordingNotifier()
