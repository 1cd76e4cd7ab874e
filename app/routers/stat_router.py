from fastapi import APIRouter, Depends, HTTPException

from app.models.stat import StatsResponse
from app.routers.dependencies import get_entry_repository, get_journal_timezone
from app.services.exceptions import PersistenceError
from app.services.journal_service import EntryRepository
from app.services.stats_service import compute

router = APIRouter(
    prefix="/stats",
    tags=["Statistics"],
)


@router.get("", response_model=StatsResponse)
async def get_stats(
    repository: EntryRepository = Depends(get_entry_repository),
    tz=Depends(get_journal_timezone)
):
    # Recomputed from the full collection on every request
    try:
        entries = repository.list()
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Journal storage is unavailable")
    return compute(entries, tz)
