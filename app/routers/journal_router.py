from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional

from app.models.journal import Entry, NewEntryRequest, UpdateEntryRequest
from app.routers.dependencies import get_entry_repository
from app.services.exceptions import NotFoundError, PersistenceError, ValidationError
from app.services.journal_service import EntryRepository

STORAGE_UNAVAILABLE_MESSAGE = "Journal storage is unavailable"

router = APIRouter(
    prefix="/journal",
    tags=["Journal"],
)


@router.post("/new", response_model=Entry, status_code=status.HTTP_201_CREATED)
async def create_new_entry(
    request: NewEntryRequest,
    repository: EntryRepository = Depends(get_entry_repository)
):
    try:
        return repository.create(request.emotion, request.note, request.display_date)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=503, detail=STORAGE_UNAVAILABLE_MESSAGE)


@router.get("/history", response_model=List[Entry])
async def get_journal_history(
    year: Optional[int] = Query(None, description="Year, e.g. 2025"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month, 1-12"),
    repository: EntryRepository = Depends(get_entry_repository)
):
    try:
        return repository.list(year=year, month=month)
    except PersistenceError:
        raise HTTPException(status_code=503, detail=STORAGE_UNAVAILABLE_MESSAGE)


@router.get("/first-date", response_model=dict)
async def get_first_journal_date(repository: EntryRepository = Depends(get_entry_repository)):
    try:
        return {"date": repository.first_date()}
    except PersistenceError:
        raise HTTPException(status_code=503, detail=STORAGE_UNAVAILABLE_MESSAGE)


@router.get("/{entry_id}", response_model=Entry)
async def get_single_entry(
    entry_id: str,
    repository: EntryRepository = Depends(get_entry_repository)
):
    try:
        return repository.get(entry_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=503, detail=STORAGE_UNAVAILABLE_MESSAGE)


@router.put("/{entry_id}", response_model=Entry)
async def update_entry(
    entry_id: str,
    request: UpdateEntryRequest,
    repository: EntryRepository = Depends(get_entry_repository)
):
    try:
        return repository.update(entry_id, request.note)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=503, detail=STORAGE_UNAVAILABLE_MESSAGE)


# Unknown ids succeed as well, deleting is idempotent
@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    repository: EntryRepository = Depends(get_entry_repository)
):
    try:
        repository.delete(entry_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail=STORAGE_UNAVAILABLE_MESSAGE)
    return None
