"""Pytest configuration and shared fixtures."""

import os
from datetime import datetime, timezone

import pytest

# No log file while testing
os.environ.setdefault("LOG_FILE", "")

from app.db.database import JsonFileStorage
from app.db.entry_store import EntryStore
from app.models.journal import Entry, Emotion
from app.services.journal_service import EntryRepository


class FakeClock:
    """Returns a fixed time, advanced manually by tests."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now


class MemoryStorage:
    def __init__(self):
        self.items = {}

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.items[key] = value


def make_entry(entry_id, created_at, emotion=Emotion.HAPPY.value, note="note"):
    return Entry(
        id=entry_id,
        emotion=emotion,
        note=note,
        date="label",
        created_at=created_at,
        formatted_date="label",
    )


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def file_storage(tmp_path):
    return JsonFileStorage(tmp_path / "data")


@pytest.fixture
def store(memory_storage):
    return EntryStore(memory_storage)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def repository(store, clock):
    return EntryRepository(store, clock=clock, tz=timezone.utc)
