"""Editor profiles and their configuration string codec."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote

if TYPE_CHECKING:
    from collections.abc import Iterable

ALL_FILE_TYPES = "*"
TYPE_SEPARATOR = ","
PROFILE_SEPARATOR = "|;;|"
FIELD_SEPARATOR = "|"

# Everything printable except the separator characters and the escape char
_SAFE_CHARS = " !\"#$&'()*+,/:<=>?@[\\]^`{}"

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})


@dataclass(frozen=True)
class EditorProfile:
    """One configured rule mapping file types to an editor command."""

    file_type: str
    editor: str = ""
    arguments: str = "%1"
    use_quotes: bool = False
    tab_size: int = 0

    def __post_init__(self) -> None:
        """Check the profile invariants."""
        if not self.file_types:
            msg = "Editor profile file type must not be empty"
            raise ValueError(msg)
        if self.tab_size < 0:
            msg = f"Editor profile tab size is negative: {self.tab_size}"
            raise ValueError(msg)

    @property
    def file_types(self) -> list[str]:
        """Return the individual file type tokens of this profile."""
        tokens = self.file_type.split(TYPE_SEPARATOR)
        return [token.strip() for token in tokens if token.strip()]

    @property
    def is_wildcard(self) -> bool:
        """Check whether this profile applies to all file types."""
        return self.file_type == ALL_FILE_TYPES


class ProfileFormatError(ValueError):
    """Error when a stored profile record cannot be decoded."""

    def __init__(self, record: str, reason: str) -> None:
        """Initialize with the offending record and the reason."""
        self.record = record
        self.reason = reason
        super().__init__(f"Invalid editor profile {record!r}: {reason}")

    def __rich__(self) -> str:
        """Rich formatted error message."""
        return (
            f"[bold red]Error:[/] Invalid editor profile: {self.reason}\n"
            f"[bold]Record:[/] {self.record!r}"
        )


def _encode_field(value: str) -> str:
    return quote(value, safe=_SAFE_CHARS)


def _decode_bool(record: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ProfileFormatError(record, f"invalid quote flag {value!r}")


def _decode_tab_size(record: str, value: str) -> int:
    try:
        tab_size = int(value)
    except ValueError as error:
        msg = f"invalid tab size {value!r}"
        raise ProfileFormatError(record, msg) from error
    if tab_size < 0:
        raise ProfileFormatError(record, f"negative tab size {tab_size}")
    return tab_size


def encode_profile(profile: EditorProfile) -> str:
    """Encode a profile as a single record.

    Text fields are percent-encoded so that they never contain the field or
    profile separators.
    """
    fields = [
        _encode_field(profile.file_type),
        _encode_field(profile.editor),
        _encode_field(profile.arguments),
        "true" if profile.use_quotes else "false",
        str(profile.tab_size),
    ]
    return FIELD_SEPARATOR.join(fields)


def decode_profile(record: str) -> EditorProfile:
    """Decode a single record into a profile.

    Accepts the current five field layout as well as older records that
    lack the tab size (four fields) or both the quote flag and the tab size
    (three fields).

    Raises:
        ProfileFormatError: The record is malformed.
    """
    fields = record.split(FIELD_SEPARATOR)
    count = len(fields)
    if not 3 <= count <= 5:  # noqa: PLR2004
        msg = f"expected 3 to 5 fields, got {count}"
        raise ProfileFormatError(record, msg)

    file_type, editor, arguments = (unquote(field) for field in fields[:3])
    use_quotes = False
    tab_size = 0
    if count > 3:  # noqa: PLR2004
        use_quotes = _decode_bool(record, fields[3])
    if count > 4:  # noqa: PLR2004
        tab_size = _decode_tab_size(record, fields[4])

    try:
        return EditorProfile(
            file_type, editor, arguments, use_quotes, tab_size
        )
    except ValueError as error:
        raise ProfileFormatError(record, str(error)) from error


def encode_profiles(profiles: Iterable[EditorProfile]) -> str:
    """Encode profiles as one configuration string."""
    return PROFILE_SEPARATOR.join(encode_profile(p) for p in profiles)


def split_records(text: str) -> list[str]:
    """Split a configuration string into profile records."""
    if not text:
        return []
    return text.split(PROFILE_SEPARATOR)


def decode_profiles(text: str) -> list[EditorProfile]:
    """Decode a configuration string, failing on the first bad record."""
    return [decode_profile(record) for record in split_records(text)]
