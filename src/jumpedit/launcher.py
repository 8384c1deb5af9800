"""Open files in the configured editor or the OS default application."""

from __future__ import annotations

import os
import platform
import subprocess
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Protocol

from rich.markup import escape

from jumpedit.command import (
    MissingFilePlaceholderError,
    adjust_column,
    build_arguments,
)
from jumpedit.console import (
    print_command,
    print_error,
    print_notice,
    print_log,
    print_verbose,
)
from jumpedit.resolver import resolve
from jumpedit.shell import command_words, join_command_line, split_arguments

if TYPE_CHECKING:
    from collections.abc import Callable

    from jumpedit.profiles import EditorProfile
    from jumpedit.registry import EditorRegistry


@dataclass(frozen=True)
class EditRequest:
    """File location to open, with the text of the target line."""

    path: str
    line: int = 1
    column: int = 1
    line_text: str = ""

    def has_value(self) -> bool:
        """Check whether the request names a file."""
        return bool(self.path)


class NoticeKind(StrEnum):
    """Kind of user-facing notice."""

    LAUNCH_FAILED = auto()
    MISSING_FILE_PLACEHOLDER = auto()


@dataclass(frozen=True)
class Notice:
    """Structured message for the user about a failed edit request."""

    kind: NoticeKind
    path: str
    error: str = ""
    profile: EditorProfile | None = None

    def message(self) -> str:
        """Render the notice as text."""
        match self.kind:
            case NoticeKind.LAUNCH_FAILED:
                return f"Unable to open {self.path}: {self.error}"
            case NoticeKind.MISSING_FILE_PLACEHOLDER:
                return (
                    "No file placeholder (%1) configured in the editor"
                    " arguments, cannot open the file."
                )


class Notifier(Protocol):
    """Receiver of user-facing notices."""

    def notify(self, notice: Notice) -> None:
        """Show notice to the user."""
        ...


class ConsoleNotifier:
    """Notifier printing notices on the console."""

    def notify(self, notice: Notice) -> None:
        """Print notice as an error or a warning."""
        match notice.kind:
            case NoticeKind.LAUNCH_FAILED:
                print_error(None, escape(notice.message()))
            case NoticeKind.MISSING_FILE_PLACEHOLDER:
                print_notice(escape(notice.message()))


class LaunchOutcome(StrEnum):
    """Final state of an edit request."""

    EDITOR = auto()
    DEFAULT_APP = auto()
    CONFIGURATION_ERROR = auto()
    FAILED = auto()
    IGNORED = auto()


class BaseDefaultApp:
    """Open a path with the application the OS associates with it."""

    def __init__(self, path: str) -> None:
        """Initialize with the path to open."""
        self.path = path

    def command_words(self) -> list[str]:
        """Return the command as a list of words."""
        raise NotImplementedError

    def run(self) -> None:
        """Start the opener without waiting for it."""
        words = self.command_words()
        print_command(words)
        subprocess.Popen(words)  # noqa: S603


class DarwinDefaultApp(BaseDefaultApp):
    """Default application via 'open' on Darwin."""

    def command_words(self) -> list[str]:
        """Return the command as a list of words."""
        return ["open", self.path]


class WindowsDefaultApp(BaseDefaultApp):
    """Default application via os.startfile on Windows."""

    def command_words(self) -> list[str]:
        """Return the command as a list of words."""
        return ["start", self.path]

    def run(self) -> None:
        """Execute the os.startfile command."""
        print_command(self.command_words())
        os.startfile(self.path)  # type: ignore[attr-defined]  # noqa: S606


class LinuxDefaultApp(BaseDefaultApp):
    """Default application via 'xdg-open' on Linux and other systems."""

    def command_words(self) -> list[str]:
        """Return the command as a list of words."""
        return ["xdg-open", self.path]


def _setup_default_app() -> type[BaseDefaultApp]:
    if platform.system() == "Darwin":
        return DarwinDefaultApp
    if platform.system() == "Windows":
        return WindowsDefaultApp
    return LinuxDefaultApp


DefaultApp = _setup_default_app()


def open_with_default_app(path: str) -> None:
    """Open path with the OS default application."""
    DefaultApp(path).run()


def start_process(executable: str, arguments: str) -> subprocess.Popen[bytes]:
    """Start executable with an argument string, without waiting.

    On Windows the argument string is passed to the program verbatim,
    elsewhere it is split into words like a shell would.

    Raises:
        OSError: The executable cannot be started.
        ValueError: The arguments have unbalanced quotes.
    """
    print_command(command_words(executable, arguments))
    if os.name == "nt":
        command_line = join_command_line(executable, arguments)
        return subprocess.Popen(command_line)  # noqa: S603
    words = [executable, *split_arguments(arguments)]
    return subprocess.Popen(words)  # noqa: S603


class Launcher:
    """Resolve the editor for an edit request and launch it.

    Every failure ends as a notice, nothing is raised to the caller.
    """

    def __init__(
        self,
        registry: EditorRegistry,
        notifier: Notifier,
        *,
        start: Callable[[str, str], subprocess.Popen[bytes]] = start_process,
        open_default: Callable[[str], None] = open_with_default_app,
        wait: bool = False,
    ) -> None:
        """Initialize with the registry, notifier and OS primitives."""
        self.registry = registry
        self.notifier = notifier
        self.start = start
        self.open_default = open_default
        self.wait = wait

    def edit_file(self, request: EditRequest) -> LaunchOutcome:
        """Open the file of request in the editor resolved for it."""
        if not request.has_value():
            print_verbose("Empty edit request, nothing to open")
            return LaunchOutcome.IGNORED

        profile = resolve(self.registry.get_all(), request.path)
        if profile is None or not profile.editor:
            print_verbose("Using default application for", request.path)
            return self._open_default(request, profile)

        print_verbose(
            "Using editor profile", profile.file_type, "for", request.path
        )
        return self._open_editor(request, profile)

    def _open_default(
        self, request: EditRequest, profile: EditorProfile | None
    ) -> LaunchOutcome:
        try:
            self.open_default(request.path)
        except (OSError, ValueError, subprocess.SubprocessError) as error:
            self._report_failure(request, profile, request.column, error)
            return LaunchOutcome.FAILED
        return LaunchOutcome.DEFAULT_APP

    def _open_editor(
        self, request: EditRequest, profile: EditorProfile
    ) -> LaunchOutcome:
        column = adjust_column(
            request.column, request.line_text, profile.tab_size
        )
        try:
            arguments = build_arguments(
                profile.arguments,
                request.path,
                request.line,
                column,
                use_quotes=profile.use_quotes,
            )
        except MissingFilePlaceholderError as error:
            print_verbose("Editor profile not usable:", error)
            self.notifier.notify(
                Notice(
                    NoticeKind.MISSING_FILE_PLACEHOLDER,
                    request.path,
                    profile=profile,
                )
            )
            return LaunchOutcome.CONFIGURATION_ERROR

        try:
            process = self.start(profile.editor, arguments)
            if self.wait:
                process.wait()
        except (OSError, ValueError, subprocess.SubprocessError) as error:
            self._report_failure(request, profile, column, error)
            return LaunchOutcome.FAILED
        return LaunchOutcome.EDITOR

    def _report_failure(
        self,
        request: EditRequest,
        profile: EditorProfile | None,
        column: int,
        error: Exception,
    ) -> None:
        print_log(
            "Unable to open text editor:",
            f"profile={profile!r}",
            f"path={request.path!r}",
            f"line={request.line}",
            f"column={column}",
            f"line_text={request.line_text!r}",
            f"error={error!r}",
        )
        self.notifier.notify(
            Notice(
                NoticeKind.LAUNCH_FAILED,
                request.path,
                error=str(error),
                profile=profile,
            )
        )
