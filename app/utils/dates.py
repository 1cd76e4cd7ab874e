import os
from datetime import date, datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

JOURNAL_TIMEZONE = os.getenv("JOURNAL_TIMEZONE")


def get_timezone(name: Optional[str] = JOURNAL_TIMEZONE) -> Optional[tzinfo]:
    # None means the system local zone
    if not name:
        return None
    return ZoneInfo(name)


def local_day(moment: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of ``moment`` in ``tz`` (system local zone if None)."""
    return moment.astimezone(tz).date()


def format_display_date(moment: datetime, tz: Optional[tzinfo] = None) -> str:
    # e.g. "Monday, 1 January"
    local = moment.astimezone(tz)
    return f"{local:%A}, {local.day} {local:%B}"
