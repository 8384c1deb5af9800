"""Shell word splitting and quoting for editor command lines."""

from __future__ import annotations

import os
import re
import shlex
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

# Basic "a-zA-Z0-9_", additional "~-./=" (not * and ?), and ":,@%+" which are
# only special next to "{}$".
_SAFE_WORD = re.compile(r"^[a-zA-Z0-9_~\-./=:,@%+]+$")


def split_arguments(arguments: str) -> list[str]:
    """Split an argument string into words the way a POSIX shell would.

    Raises:
        ValueError: The string has unbalanced quotes.
    """
    return shlex.split(arguments)


def join_command_line(executable: str, arguments: str) -> str:
    """Build a Windows command line from an executable and argument string.

    The argument string is kept verbatim, the program decides how to parse
    it.
    """
    head = subprocess.list2cmdline([executable])
    return f"{head} {arguments}" if arguments else head


def command_words(executable: str, arguments: str) -> list[str]:
    """Return the words used to display an editor invocation."""
    if os.name == "nt":
        return [executable, arguments] if arguments else [executable]
    return [executable, *split_arguments(arguments)]


def quote_command(words: Iterable[str]) -> str:
    """Shell quote words and join in a single command string."""
    return " ".join(quote_command_words(words))


def quote_command_words(words: Iterable[str]) -> Iterator[str]:
    """Shell quote words and yield each quoted word."""
    for word in words:
        if not word:
            yield "''"
        elif _SAFE_WORD.match(word) and word[0] != "~":
            yield word
        elif "'" not in word:
            yield f"'{word}'"
        else:
            for char in '\\"$`':
                word = word.replace(char, "\\" + char)
            yield f'"{word}"'
