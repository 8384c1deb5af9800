"""Import an initial editor profile from the environment.

Before profiles were stored in the settings file, the editor came from
JUMPEDIT_EDITOR, EDITOR or VISUAL. The first load migrates that choice to a
wildcard profile using the line and column syntax of the named editor.
"""

import os
from pathlib import Path

from jumpedit.console import print_warning
from jumpedit.profiles import ALL_FILE_TYPES, EditorProfile

# Argument templates by editor command name
EDITOR_TEMPLATES: dict[str, str] = {
    **dict.fromkeys(("vim", "nvim", "vi"), "+%2 %1"),
    **dict.fromkeys(("emacs", "emacsclient", "gedit", "kak"), "+%2:%3 %1"),
    "nano": "+%2,%3 %1",
    **dict.fromkeys(("joe", "ee"), "+%2 %1"),
    **dict.fromkeys(("code", "code-oss", "surf", "cursor"), "--goto %1:%2:%3"),
    **dict.fromkeys(("subl", "helix", "hx", "zed"), "%1:%2:%3"),
    "micro": "%1 +%2:%3",
    "o": "%1 +%2 +%3",
    **dict.fromkeys(("idea", "charm", "pycharm"), "--line %2 --column %3 %1"),
}


def get_editor_from_env() -> str | None:
    """Get editor command from environment variables.

    Checks JUMPEDIT_EDITOR first, then EDITOR, then VISUAL.
    """
    return (
        os.environ.get("JUMPEDIT_EDITOR")
        or os.environ.get("EDITOR")
        or os.environ.get("VISUAL")
    )


def get_arguments_template(editor_name: str) -> str:
    """Return the argument template for an editor command name."""
    return EDITOR_TEMPLATES.get(editor_name, "%1")


def profile_from_command(editor: str) -> EditorProfile:
    """Build a wildcard profile from an editor command like 'vim -p'.

    Splits the command BEFORE looking at words to handle directories with
    spaces in the editor path.
    """
    path_head, command_and_args = os.path.split(editor)
    parts = command_and_args.split()
    if not parts:
        msg = f"No editor command in: {editor!r}"
        raise ValueError(msg)
    editor_name = parts[0]
    if path_head:
        editor_path = str(Path(path_head) / editor_name)
    else:
        editor_path = editor_name
    arguments = " ".join([*parts[1:], get_arguments_template(editor_name)])
    return EditorProfile(
        file_type=ALL_FILE_TYPES,
        editor=editor_path,
        arguments=arguments,
        use_quotes=True,
    )


def import_from_environment() -> list[EditorProfile]:
    """Return the profiles migrated from the environment, maybe none."""
    editor = get_editor_from_env()
    if not editor or not editor.strip():
        return []
    try:
        profile = profile_from_command(editor.strip())
    except ValueError as error:
        print_warning("Cannot import editor from environment:", error)
        return []
    return [profile]
