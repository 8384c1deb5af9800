"""Tests for the editor registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jumpedit.console import set_verbose
from jumpedit.profiles import EditorProfile, encode_profiles
from jumpedit.registry import EditorRegistry
from jumpedit.settings import MemorySettingsStore, TomlSettingsStore

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import ConsoleFixture

PROFILES = [
    EditorProfile(".cs,.vb", "devenv", "/edit %1", True, 4),
    EditorProfile("txt", "notepad", "%1", False, 0),
    EditorProfile("*", "", "%1", False, 0),
]


def _no_migration() -> list[EditorProfile]:
    raise AssertionError("migration must not run")


def test_get_all_before_load() -> None:
    """Nothing is available before load()."""
    registry = EditorRegistry(MemorySettingsStore())
    assert registry.get_all() is None


def test_save_then_load_in_new_registry(tmp_path: Path) -> None:
    """A fresh registry reading the saved file gets the same profiles."""
    path = tmp_path / "settings.toml"
    EditorRegistry(TomlSettingsStore(path)).save(PROFILES)

    registry = EditorRegistry(TomlSettingsStore(path), _no_migration)
    registry.load()
    assert registry.get_all() == PROFILES


def test_save_persists_and_flushes() -> None:
    """save() writes the encoded list under TextEditors and flushes."""
    store = MemorySettingsStore()
    registry = EditorRegistry(store, _no_migration)
    registry.save(PROFILES)

    assert store.values["TextEditors"] == encode_profiles(PROFILES)
    assert store.save_count == 1
    assert registry.get_all() == PROFILES


def test_save_copies_list() -> None:
    """Later changes to the saved list do not leak into the registry."""
    registry = EditorRegistry(MemorySettingsStore(), _no_migration)
    profiles = list(PROFILES)
    registry.save(profiles)
    profiles.clear()
    assert registry.get_all() == PROFILES


def test_save_none_clears() -> None:
    """save(None) clears the profiles and stores an empty string."""
    store = MemorySettingsStore()
    registry = EditorRegistry(store, _no_migration)
    registry.save(PROFILES)
    registry.save(None)

    assert registry.get_all() is None
    assert store.values["TextEditors"] == ""
    assert store.save_count == 2


def test_load_migrates_once() -> None:
    """With nothing stored, migrated profiles are loaded and saved."""
    store = MemorySettingsStore()
    calls: list[str] = []

    def migrate() -> list[EditorProfile]:
        calls.append("migrate")
        return PROFILES[:1]

    registry = EditorRegistry(store, migrate)
    registry.load()
    assert registry.get_all() == PROFILES[:1]
    assert store.values["TextEditors"] == encode_profiles(PROFILES[:1])
    assert store.save_count == 1

    EditorRegistry(store, migrate).load()
    assert calls == ["migrate"]


def test_load_migration_without_profiles() -> None:
    """A migration that finds nothing leaves an empty list."""
    store = MemorySettingsStore()
    registry = EditorRegistry(store, list)
    registry.load()
    assert registry.get_all() == []
    assert store.values["TextEditors"] == ""


def test_load_skips_malformed_records(console_out: ConsoleFixture) -> None:
    """Records that cannot be decoded are skipped with a warning."""
    set_verbose()
    text = encode_profiles(PROFILES[:1]) + "|;;|broken|;;|.c|vim|%1"
    registry = EditorRegistry(
        MemorySettingsStore({"TextEditors": text}), _no_migration
    )
    registry.load()

    assert registry.get_all() == [
        PROFILES[0],
        EditorProfile(".c", "vim", "%1"),
    ]
    output = console_out.getvalue()
    assert "Skipping editor profile" in output
    assert "'broken'" in output
