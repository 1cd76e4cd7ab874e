from fastapi import HTTPException, status

from app.db.database import get_storage
from app.db.entry_store import EntryStore
from app.services.exceptions import PersistenceError
from app.services.journal_service import EntryRepository
from app.utils.dates import get_timezone


def get_entry_repository() -> EntryRepository:
    try:
        storage = get_storage()
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return EntryRepository(EntryStore(storage))


def get_journal_timezone():
    return get_timezone()
