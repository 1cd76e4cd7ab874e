"""Tests for EntryRepository CRUD operations."""

from datetime import date, datetime, timedelta, timezone

import pytest

from app.models.journal import Emotion
from app.services.exceptions import NotFoundError, PersistenceError, ValidationError
from app.services.journal_service import EntryRepository
from conftest import FakeClock


class TestCreate:

    def test_returns_entry_with_fields(self, repository, clock):
        entry = repository.create(Emotion.HAPPY.value, "Walked by the sea", "Monday, 1 January")
        assert entry.emotion == "😊"
        assert entry.note == "Walked by the sea"
        assert entry.created_at == clock.now
        assert entry.date == "Monday, 1 January"
        assert entry.formatted_date == "Monday, 1 January"
        assert entry.id == str(int(clock.now.timestamp() * 1000))

    def test_entry_is_listed(self, repository):
        entry = repository.create("😊", "hello")
        assert repository.list() == [entry]

    def test_note_is_trimmed(self, repository):
        entry = repository.create("😊", "  padded note \n")
        assert entry.note == "padded note"

    def test_accepts_display_name(self, repository):
        assert repository.create("sad", "rainy").emotion == Emotion.SAD.value
        assert repository.create("Excited", "trip").emotion == Emotion.EXCITED.value

    def test_default_display_date(self, repository):
        entry = repository.create("😊", "note")
        assert entry.formatted_date == "Monday, 1 January"

    @pytest.mark.parametrize("emotion", [None, "", "   "])
    def test_missing_emotion_rejected(self, repository, store, emotion):
        with pytest.raises(ValidationError):
            repository.create(emotion, "note")
        assert store.load() == []

    def test_unknown_emotion_rejected(self, repository):
        with pytest.raises(ValidationError):
            repository.create("🦄", "note")

    @pytest.mark.parametrize("emotion", ["unhappy", "not sad", "app"])
    def test_near_miss_names_rejected(self, repository, store, emotion):
        with pytest.raises(ValidationError):
            repository.create(emotion, "bad day")
        assert store.load() == []

    @pytest.mark.parametrize("note", [None, "", "   \n\t"])
    def test_empty_note_rejected(self, repository, store, note):
        with pytest.raises(ValidationError):
            repository.create("😊", note)
        assert store.load() == []

    def test_ids_unique_within_same_millisecond(self, repository):
        first = repository.create("😊", "one")
        second = repository.create("😐", "two")
        assert first.id != second.id

    def test_new_entry_is_prepended(self, repository, store, clock):
        first = repository.create("😊", "one")
        clock.now += timedelta(hours=1)
        second = repository.create("😐", "two")
        assert [e.id for e in store.load()] == [second.id, first.id]


class TestUpdate:

    def test_changes_only_note(self, repository, clock):
        original = repository.create("😔", "before")
        clock.now += timedelta(days=2)
        updated = repository.update(original.id, "after")
        assert updated.note == "after"
        assert updated.id == original.id
        assert updated.emotion == original.emotion
        assert updated.created_at == original.created_at
        assert updated.formatted_date == original.formatted_date
        assert repository.get(original.id) == updated

    def test_unknown_id(self, repository):
        with pytest.raises(NotFoundError):
            repository.update("missing", "text")

    def test_empty_note_rejected(self, repository):
        entry = repository.create("😊", "keep me")
        with pytest.raises(ValidationError):
            repository.update(entry.id, "   ")
        assert repository.get(entry.id).note == "keep me"

    def test_other_entries_untouched(self, repository, clock):
        a = repository.create("😊", "a")
        clock.now += timedelta(minutes=1)
        b = repository.create("😐", "b")
        repository.update(a.id, "a2")
        assert repository.get(b.id) == b


class TestDelete:

    def test_removes_exactly_one(self, repository, store, clock):
        created = []
        for note in ["a", "b", "c"]:
            created.append(repository.create("😊", note))
            clock.now += timedelta(hours=1)
        repository.delete(created[1].id)
        assert [e.id for e in store.load()] == [created[2].id, created[0].id]

    def test_unknown_id_is_noop(self, repository, store):
        entry = repository.create("😊", "a")
        repository.delete("missing")
        assert store.load() == [entry]

    def test_unknown_id_does_not_write(self, store):
        writes = []

        class CountingStorage:
            def get_item(self, key):
                return None

            def set_item(self, key, value):
                writes.append(value)

        store.storage = CountingStorage()
        EntryRepository(store).delete("missing")
        assert writes == []


class TestList:

    def test_sorted_newest_first(self, repository, clock):
        clock.now = datetime(2024, 1, 5, tzinfo=timezone.utc)
        middle = repository.create("😊", "middle")
        clock.now = datetime(2024, 1, 9, tzinfo=timezone.utc)
        newest = repository.create("😊", "newest")
        clock.now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        oldest = repository.create("😊", "oldest")
        assert repository.list() == [newest, middle, oldest]

    def test_filter_by_month(self, repository, clock):
        clock.now = datetime(2024, 1, 31, 12, tzinfo=timezone.utc)
        january = repository.create("😊", "jan")
        clock.now = datetime(2024, 2, 1, 12, tzinfo=timezone.utc)
        repository.create("😊", "feb")
        assert repository.list(year=2024, month=1) == [january]
        assert len(repository.list(year=2024)) == 2
        assert repository.list(year=2023) == []

    def test_month_uses_journal_timezone(self, store):
        clock = FakeClock(datetime(2024, 1, 31, 23, 30, tzinfo=timezone.utc))
        tokyo = timezone(timedelta(hours=9))
        repository = EntryRepository(store, clock=clock, tz=tokyo)
        repository.create("😊", "late")
        assert repository.list(year=2024, month=2) != []
        assert repository.list(year=2024, month=1) == []

    def test_storage_failure_propagates(self, store):
        class BrokenStorage:
            def get_item(self, key):
                raise PersistenceError("boom")

        store.storage = BrokenStorage()
        with pytest.raises(PersistenceError):
            EntryRepository(store).list()


class TestGetAndFirstDate:

    def test_get_unknown(self, repository):
        with pytest.raises(NotFoundError):
            repository.get("nope")

    def test_first_date_empty(self, repository):
        assert repository.first_date() is None

    def test_first_date(self, repository, clock):
        clock.now = datetime(2024, 4, 2, 8, tzinfo=timezone.utc)
        repository.create("😊", "b")
        clock.now = datetime(2024, 3, 15, 8, tzinfo=timezone.utc)
        repository.create("😊", "a")
        assert repository.first_date() == date(2024, 3, 15)
