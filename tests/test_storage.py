"""Tests for preference storage."""

import pytest
from sitelang.resolver import PREFERENCE_KEY
from sitelang.storage import MemoryPreferences, PreferenceStorage


@pytest.fixture
def storage(tmp_path):
    return PreferenceStorage(str(tmp_path / "data" / "prefs.db"))


class TestPreferenceStorage:
    def test_missing_key(self, storage):
        assert storage.get(PREFERENCE_KEY) is None
        assert storage.get(PREFERENCE_KEY, "en") == "en"

    def test_set_and_get(self, storage):
        storage.set(PREFERENCE_KEY, "es")
        assert storage.get(PREFERENCE_KEY) == "es"

    def test_overwrite(self, storage):
        storage.set(PREFERENCE_KEY, "es")
        storage.set(PREFERENCE_KEY, "en")
        assert storage.get(PREFERENCE_KEY) == "en"

    def test_survives_reopen(self, tmp_path):
        path = str(tmp_path / "prefs.db")
        PreferenceStorage(path).set(PREFERENCE_KEY, "es")
        assert PreferenceStorage(path).get(PREFERENCE_KEY) == "es"


class TestMemoryPreferences:
    def test_initial_values(self):
        prefs = MemoryPreferences({PREFERENCE_KEY: "es"})
        assert prefs.get(PREFERENCE_KEY) == "es"
        assert prefs.writes == 0

    def test_writes_counted(self):
        prefs = MemoryPreferences()
        prefs.set(PREFERENCE_KEY, "es")
        prefs.set(PREFERENCE_KEY, "en")
        assert prefs.get(PREFERENCE_KEY) == "en"
        assert prefs.writes == 2
