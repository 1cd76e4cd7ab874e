from fastapi import FastAPI
from app.routers import journal_router
from app.routers import stat_router
from app.utils.logger import setup_logger

setup_logger()

app = FastAPI(
    title="Wellbeing Journal Backend", description="Backend for a daily mood journal."
)

app.include_router(journal_router.router)
app.include_router(stat_router.router)
