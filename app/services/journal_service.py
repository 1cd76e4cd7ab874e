import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from app.db.entry_store import EntryStore
from app.models.journal import Entry, resolve_emotion
from app.services.exceptions import NotFoundError, ValidationError
from app.utils.dates import format_display_date, get_timezone, local_day

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntryRepository:
    """CRUD over the journal entries held by an EntryStore.

    Every mutating call is a separate load followed by a save of the whole
    collection. Nothing locks between the two steps: if two operations
    interleave, the later save overwrites the earlier one with a stale base
    collection. That is accepted for a single-user local journal, callers
    should not assume anything stronger than "one overwrite per call".

    Notes are stored trimmed. Deleting an unknown id is a no-op.
    """

    def __init__(self, store: EntryStore, clock: Callable[[], datetime] = _utcnow, tz=None):
        self.store = store
        self.clock = clock
        self.tz = tz if tz is not None else get_timezone()

    def _new_id(self, now: datetime, entries: List[Entry]) -> str:
        taken = {entry.id for entry in entries}
        candidate = int(now.timestamp() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def create(self, emotion, note: str, display_date: Optional[str] = None) -> Entry:
        resolved = resolve_emotion(emotion)
        if resolved is None:
            if not emotion:
                raise ValidationError("Emotion is required")
            raise ValidationError(f"Unknown emotion: {emotion}")

        text = (note or "").strip()
        if not text:
            raise ValidationError("Note must not be empty")

        entries = self.store.load()
        now = self.clock()
        label = display_date or format_display_date(now, self.tz)

        entry = Entry(
            id=self._new_id(now, entries),
            emotion=resolved.value,
            note=text,
            date=label,
            created_at=now,
            formatted_date=label,
        )
        self.store.save([entry] + entries)
        logger.info("Created entry %s (%s)", entry.id, resolved.display_name)
        return entry

    def get(self, entry_id: str) -> Entry:
        for entry in self.store.load():
            if entry.id == entry_id:
                return entry
        raise NotFoundError(entry_id)

    def update(self, entry_id: str, new_note: str) -> Entry:
        text = (new_note or "").strip()
        if not text:
            raise ValidationError("Note must not be empty")

        entries = self.store.load()
        for index, entry in enumerate(entries):
            if entry.id == entry_id:
                updated = entry.model_copy(update={"note": text})
                entries[index] = updated
                self.store.save(entries)
                logger.info("Updated entry %s", entry_id)
                return updated
        raise NotFoundError(entry_id)

    def delete(self, entry_id: str) -> None:
        entries = self.store.load()
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            logger.debug("Delete of unknown entry %s ignored", entry_id)
            return
        self.store.save(remaining)
        logger.info("Deleted entry %s", entry_id)

    def list(self, year: Optional[int] = None, month: Optional[int] = None) -> List[Entry]:
        """All entries newest first, optionally limited to one calendar month."""
        entries = self.store.load()
        if year is not None or month is not None:
            entries = [
                entry for entry in entries
                if self._in_month(local_day(entry.created_at, self.tz), year, month)
            ]
        return sorted(entries, key=lambda entry: entry.created_at, reverse=True)

    def first_date(self) -> Optional[date]:
        entries = self.store.load()
        if not entries:
            return None
        oldest = min(entries, key=lambda entry: entry.created_at)
        return local_day(oldest.created_at, self.tz)

    @staticmethod
    def _in_month(day: date, year: Optional[int], month: Optional[int]) -> bool:
        if year is not None and day.year != year:
            return False
        if month is not None and day.month != month:
            return False
        return True
