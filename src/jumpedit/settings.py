"""Settings storage backends for the serialized editor profiles."""

import os
from pathlib import Path
from typing import Protocol

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import ParseError

JUMPEDIT_CONFIG = "JUMPEDIT_CONFIG"
TEXT_EDITORS_KEY = "TextEditors"


class SettingsFileError(Exception):
    """Error when the settings file cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize with the settings file path and the reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot use settings file {path}: {reason}")


class SettingsStore(Protocol):
    """Opaque key/value string storage."""

    def get(self, key: str) -> str:
        """Return the value stored for key, or an empty string."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, in memory until save() is called."""
        ...

    def save(self) -> None:
        """Flush pending changes to the backing storage."""
        ...


def get_settings_file() -> Path:
    """Return path to the settings file.

    Uses JUMPEDIT_CONFIG when set, otherwise a platform aware location that
    falls back to ~/.config/jumpedit.
    """
    if override := os.environ.get(JUMPEDIT_CONFIG):
        return Path(override)
    config_dir = Path(
        os.environ.get(
            "LOCALAPPDATA" if os.name == "nt" else "XDG_CONFIG_HOME",
            Path.home() / ".config",
        )
    )
    return config_dir / "jumpedit" / "settings.toml"


class TomlSettingsStore:
    """Settings stored as string values in a TOML file."""

    def __init__(self, path: Path) -> None:
        """Load the settings file, a missing file is an empty document.

        Raise SettingsFileError when the file exists but cannot be read or
        is not valid TOML. The file is left untouched in that case.
        """
        self.path = path
        self._document = self._read()

    def _read(self) -> TOMLDocument:
        try:
            with self.path.open(encoding="utf-8") as f:
                return tomlkit.load(f)
        except FileNotFoundError:
            return tomlkit.document()
        except (OSError, UnicodeDecodeError, ParseError) as error:
            raise SettingsFileError(self.path, str(error)) from error

    def get(self, key: str) -> str:
        """Return the value stored for key, or an empty string."""
        value = self._document.get(key, "")
        return str(value)

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        self._document[key] = value

    def save(self) -> None:
        """Write the document, creating parent directories as needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                tomlkit.dump(self._document, f)
        except OSError as error:
            raise SettingsFileError(self.path, str(error)) from error


class MemorySettingsStore:
    """Settings held in a dict, for embedding applications and tests."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        """Initialize with optional initial values."""
        self.values: dict[str, str] = dict(values or {})
        self.save_count = 0

    def get(self, key: str) -> str:
        """Return the value stored for key, or an empty string."""
        return self.values.get(key, "")

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        self.values[key] = value

    def save(self) -> None:
        """Count the flush, there is nothing to write."""
        self.save_count += 1
