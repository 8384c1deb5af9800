"""Ordered list of editor profiles backed by a settings store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jumpedit.console import print_verbose, print_warning
from jumpedit.legacy import import_from_environment
from jumpedit.profiles import (
    ProfileFormatError,
    decode_profile,
    encode_profiles,
    split_records,
)
from jumpedit.settings import TEXT_EDITORS_KEY

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from jumpedit.profiles import EditorProfile
    from jumpedit.settings import SettingsStore


class EditorRegistry:
    """Editor profiles in priority order, first match wins.

    The list is only ever replaced as a whole by save().
    """

    def __init__(
        self,
        store: SettingsStore,
        migrate: Callable[[], list[EditorProfile]] = import_from_environment,
    ) -> None:
        """Initialize with a settings store and a legacy migration hook."""
        self.store = store
        self.migrate = migrate
        self._profiles: list[EditorProfile] | None = None

    def load(self) -> None:
        """Load profiles from the store, migrating when nothing is stored."""
        text = self.store.get(TEXT_EDITORS_KEY)
        if not text:
            print_verbose("No stored editor profiles, migrating")
            self.save(self.migrate())
            return

        profiles: list[EditorProfile] = []
        for record in split_records(text):
            try:
                profiles.append(decode_profile(record))
            except ProfileFormatError as error:
                print_warning("Skipping editor profile:", error)
        self._profiles = profiles
        print_verbose("Loaded", len(profiles), "editor profile(s)")

    def save(self, profiles: Sequence[EditorProfile] | None) -> None:
        """Replace the profiles and persist them.

        None clears the profiles and stores an empty string.
        """
        if profiles is None:
            self._profiles = None
            self.store.set(TEXT_EDITORS_KEY, "")
        else:
            self._profiles = list(profiles)
            self.store.set(TEXT_EDITORS_KEY, encode_profiles(profiles))
        self.store.save()

    def get_all(self) -> list[EditorProfile] | None:
        """Return the current profiles, None if never loaded or cleared."""
        return self._profiles
