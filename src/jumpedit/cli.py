"""Jumpedit command line interface.

Jumpedit opens a file location in the editor configured for the file's
type, falling back to the application the OS associates with the file.
"""

import re
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

import jumpedit.console
from jumpedit.console import (
    print_error,
    print_verbose,
    set_verbose,
)
from jumpedit.launcher import (
    ConsoleNotifier,
    EditRequest,
    Launcher,
    LaunchOutcome,
)
from jumpedit.profiles import EditorProfile
from jumpedit.registry import EditorRegistry
from jumpedit.resolver import resolve
from jumpedit.settings import (
    SettingsFileError,
    TomlSettingsStore,
    get_settings_file,
)
from jumpedit.shell import quote_command

app = typer.Typer(no_args_is_help=True)


# ruff: noqa: FBT001 FBT003 Typer API uses boolean arguments for flags
# ruff: noqa: B008 function-call-in-default-argument

LOCATION_REGEX = re.compile(
    r"^(?P<path>.+?)(?::(?P<line>\d+)(?::(?P<column>\d+))?)?$"
)


class FileLocationNotFoundError(ValueError):
    """Error when a location argument has no file path."""

    def __init__(self, location: str) -> None:
        """Initialize with the location text."""
        self.location = location
        super().__init__(f"Location pattern not found in: {location!r}")

    def __rich__(self) -> str:
        """Rich formatted error message."""
        return (
            f"[bold red]Error:[/] Location pattern not found\n"
            f"[bold]Input:[/] {self.location!r}"
        )


@dataclass
class AppState:
    """Objects shared by the commands of one invocation."""

    registry: EditorRegistry


def parse_location(location: str) -> tuple[str, int, int]:
    """Split 'path[:line[:column]]' into path, line and column.

    Missing line and column default to 1.
    """
    match = LOCATION_REGEX.match(location)
    if match is None:
        raise FileLocationNotFoundError(location)
    line = int(match["line"]) if match["line"] else 1
    column = int(match["column"]) if match["column"] else 1
    return match["path"], max(line, 1), max(column, 1)


def read_line_text(path: str, line: int) -> str:
    """Return the text of a line of the file, empty when unavailable."""
    try:
        with Path(path).open(encoding="utf-8", errors="replace") as f:
            for number, text in enumerate(f, start=1):
                if number == line:
                    return text.rstrip("\r\n")
    except OSError as error:
        print_verbose("Cannot read line text:", error)
    return ""


def _get_registry(ctx: typer.Context) -> EditorRegistry:
    state: AppState = ctx.obj
    return state.registry


def _profiles(registry: EditorRegistry) -> list[EditorProfile]:
    return list(registry.get_all() or [])


def _save_profiles(
    registry: EditorRegistry, profiles: list[EditorProfile] | None
) -> None:
    try:
        registry.save(profiles)
    except SettingsFileError as error:
        print_error(None, escape(str(error)))
        raise typer.Exit(1) from error


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show verbose output"
    ),
    config: Path | None = typer.Option(
        None, "-c", "--config", help="Settings file to use"
    ),
) -> None:
    """Jumpedit: open file locations in the editor for each file type."""
    ctx.with_resource(jumpedit.console.setup_log_file())
    if verbose:
        set_verbose()
    settings_file = config or get_settings_file()
    print_verbose("Settings file:", str(settings_file))
    try:
        registry = EditorRegistry(TomlSettingsStore(settings_file))
        registry.load()
    except SettingsFileError as error:
        print_error(None, escape(str(error)))
        raise typer.Exit(1) from error
    ctx.obj = AppState(registry)


@app.command("open")
def open_command(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="File as path[:line[:column]]"),
    line_text: str | None = typer.Option(
        None, "--line-text", help="Text of the target line"
    ),
    wait: bool = typer.Option(
        False, "--wait", help="Wait for the editor to exit"
    ),
) -> None:
    """Open a file location in its editor."""
    try:
        path, line, column = parse_location(location)
    except FileLocationNotFoundError as error:
        print_error(None, error)
        raise typer.Exit(1) from error

    if line_text is None:
        line_text = read_line_text(path, line)

    launcher = Launcher(_get_registry(ctx), ConsoleNotifier(), wait=wait)
    outcome = launcher.edit_file(EditRequest(path, line, column, line_text))
    print_verbose("Outcome:", outcome.value)
    if outcome in (LaunchOutcome.FAILED, LaunchOutcome.CONFIGURATION_ERROR):
        raise typer.Exit(1)


@app.command("which")
def which_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File path to resolve"),
) -> None:
    """Show the editor profile used for a file."""
    profile = resolve(_get_registry(ctx).get_all(), path)
    if profile is None or not profile.editor:
        typer.echo("default application")
        return
    editor = quote_command([profile.editor])
    typer.echo(f"{profile.file_type}: {editor} {profile.arguments}")


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List editor profiles in priority order."""
    profiles = _profiles(_get_registry(ctx))
    if not profiles:
        typer.echo("No editor profiles configured.")
        return

    table = Table("#", "Types", "Editor", "Arguments", "Quotes", "Tab size")
    for index, profile in enumerate(profiles):
        table.add_row(
            str(index),
            profile.file_type,
            profile.editor or "(default application)",
            profile.arguments,
            "yes" if profile.use_quotes else "no",
            str(profile.tab_size),
        )
    Console().print(table)


@app.command("add")
def add_command(  # noqa: PLR0913
    ctx: typer.Context,
    file_types: str = typer.Argument(
        ..., help="Comma separated extensions, or * for all files"
    ),
    editor: str = typer.Argument(
        "", help="Editor executable, empty for the default application"
    ),
    arguments: str = typer.Option(
        "%1", "--args", help="Arguments: %1 file, %2 line, %3 column"
    ),
    quotes: bool = typer.Option(
        True, "--quotes/--no-quotes", help="Quote the file path"
    ),
    tab_size: int = typer.Option(
        0, "--tab-size", min=0, help="Editor tab width for columns, 0 for none"
    ),
    position: int | None = typer.Option(
        None, "--position", min=0, help="Insert at index instead of appending"
    ),
) -> None:
    """Add an editor profile."""
    try:
        profile = EditorProfile(
            file_types, editor, arguments, quotes, tab_size
        )
    except ValueError as error:
        print_error(None, error)
        raise typer.Exit(1) from error

    registry = _get_registry(ctx)
    profiles = _profiles(registry)
    if position is None:
        profiles.append(profile)
    else:
        profiles.insert(position, profile)
    _save_profiles(registry, profiles)
    typer.echo(f"Added editor profile for {profile.file_type}.")


@app.command("remove")
def remove_command(
    ctx: typer.Context,
    index: int = typer.Argument(..., help="Index shown by 'jumpedit list'"),
) -> None:
    """Remove an editor profile."""
    registry = _get_registry(ctx)
    profiles = _profiles(registry)
    if not 0 <= index < len(profiles):
        print_error(None, f"No editor profile at index {index}")
        raise typer.Exit(1)
    removed = profiles.pop(index)
    _save_profiles(registry, profiles)
    typer.echo(f"Removed editor profile for {removed.file_type}.")


@app.command("clear")
def clear_command(ctx: typer.Context) -> None:
    """Remove all editor profiles."""
    _save_profiles(_get_registry(ctx), None)
    typer.echo("Cleared editor profiles.")


if __name__ == "__main__":
    app()
