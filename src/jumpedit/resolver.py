"""Select the editor profile for a file from its extension."""

from __future__ import annotations

from pathlib import PurePath
from typing import TYPE_CHECKING

from jumpedit.profiles import ALL_FILE_TYPES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from jumpedit.profiles import EditorProfile


def get_extension(path: str) -> str:
    """Return the extension of path, including its leading dot."""
    return PurePath(path).suffix


def matches_file_type(file_type: str, extension: str) -> bool:
    """Check whether one file type token matches an extension.

    Tokens are dot-optional and compared case-insensitively. The extension
    only has to contain the token, it does not have to equal it.
    """
    token = file_type
    if (
        token != ALL_FILE_TYPES
        and not token.startswith(".")
        and extension.startswith(".")
    ):
        token = f".{token}"
    return token.casefold() in extension.casefold()


def resolve(
    profiles: Sequence[EditorProfile] | None, path: str
) -> EditorProfile | None:
    """Return the profile to use for path, or None for the default app.

    The first profile with a token matching the extension wins. When none
    matches, the first profile for all file types is used.
    """
    if not profiles:
        return None

    extension = get_extension(path)
    for profile in profiles:
        if any(matches_file_type(t, extension) for t in profile.file_types):
            return profile

    return next((p for p in profiles if p.is_wildcard), None)
