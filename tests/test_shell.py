"""Tests for shell word utilities."""

import os
from unittest.mock import patch

import pytest

from jumpedit.shell import (
    command_words,
    join_command_line,
    quote_command,
    split_arguments,
)


@pytest.mark.parametrize(
    ("words", "expected"),
    [
        (["vim", "+10", "a.py"], "vim +10 a.py"),
        (["code", "--goto", "src/a.py:1:2"], "code --goto src/a.py:1:2"),
        (["ed", "my file"], "ed 'my file'"),
        (["ed", ""], "ed ''"),
        (["ed", "it's"], 'ed "it\'s"'),
        (["ed", "~/a"], "ed '~/a'"),
        (["ed", "$HOME it's"], 'ed "\\$HOME it\'s"'),
    ],
)
def test_quote_command(words: list[str], expected: str) -> None:
    """Words are quoted only when the shell would need it."""
    assert quote_command(words) == expected


def test_split_arguments() -> None:
    """Argument strings are split like a POSIX shell would."""
    assert split_arguments('+2:3 "my file.c"') == ["+2:3", "my file.c"]
    with pytest.raises(ValueError, match="quotation"):
        split_arguments('"open')


def test_join_command_line() -> None:
    """The executable is quoted, the arguments are kept verbatim."""
    assert join_command_line(
        r"C:\Program Files\Ed\ed.exe", '"C:\\a b.txt" -n5'
    ) == '"C:\\Program Files\\Ed\\ed.exe" "C:\\a b.txt" -n5'
    assert join_command_line("ed.exe", "") == "ed.exe"


def test_command_words_windows() -> None:
    """On Windows the argument string is shown as one word."""
    with patch.object(os, "name", "nt"):
        assert command_words("ed.exe", "-n5 a") == ["ed.exe", "-n5 a"]
        assert command_words("ed.exe", "") == ["ed.exe"]


def test_command_words_posix() -> None:
    """Elsewhere the argument string is split into words."""
    with patch.object(os, "name", "posix"):
        assert command_words("ed", "-n5 'a b'") == ["ed", "-n5", "a b"]
