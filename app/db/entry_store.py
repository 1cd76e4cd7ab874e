import json
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from app.db.database import STORAGE_KEY
from app.models.journal import Entry

logger = logging.getLogger(__name__)

_entries_adapter = TypeAdapter(List[Entry])


class EntryStore:
    """Persists the whole entry collection as one serialized record.

    Reads are lenient: a missing record, a payload that is not a JSON list,
    or entries that fail validation never raise. Storage failures surface
    as PersistenceError from the backend.
    """

    def __init__(self, storage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> List[Entry]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []

        # ValueError covers bad UTF-8 too, TypeError a non-text value
        try:
            items = json.loads(raw)
        except (ValueError, TypeError) as e:
            logger.warning("Record '%s' is not valid JSON, treating as empty: %s", self.key, e)
            return []

        if not isinstance(items, list):
            logger.warning("Record '%s' is not a list, treating as empty", self.key)
            return []

        entries = []
        for item in items:
            try:
                entries.append(Entry.model_validate(item))
            except PydanticValidationError as e:
                logger.warning("Skipping malformed entry in '%s': %s", self.key, e.errors()[0]["msg"])
        return entries

    def save(self, entries: List[Entry]) -> None:
        payload = _entries_adapter.dump_json(list(entries), by_alias=True).decode("utf-8")
        self.storage.set_item(self.key, payload)
        logger.debug("Saved %d entries to '%s'", len(entries), self.key)
