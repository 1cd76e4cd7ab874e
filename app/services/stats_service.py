from datetime import timedelta, tzinfo
from typing import Dict, List, Optional, Sequence

from app.models.journal import Entry, emotion_name
from app.models.stat import EmotionCount, StatsResponse
from app.utils.dates import local_day


def sort_newest_first(entries: Sequence[Entry]) -> List[Entry]:
    return sorted(entries, key=lambda entry: entry.created_at, reverse=True)


def calculate_streak(entries: Sequence[Entry], tz: Optional[tzinfo] = None) -> int:
    """Longest run of consecutive calendar days that have at least one entry.

    ``entries`` must already be ordered newest first. Several entries on the
    same day count once, and a gap restarts the run at 1.
    """
    current_streak = 0
    max_streak = 0
    last_day = None

    for entry in entries:
        day = local_day(entry.created_at, tz)
        if last_day is None:
            current_streak = 1
        elif day == last_day - timedelta(days=1):
            current_streak += 1
        elif day == last_day:
            pass
        else:
            current_streak = 1

        max_streak = max(max_streak, current_streak)
        last_day = day

    return max_streak


def compute(entries: Sequence[Entry], tz: Optional[tzinfo] = None) -> StatsResponse:
    """Aggregate statistics over the full entry collection.

    Pure: the input is not modified. Day boundaries and weekdays are taken
    in ``tz``, the system local zone when None.
    """
    sorted_entries = sort_newest_first(entries)

    # Insertion order = first seen in the newest-first scan, used for ties
    mood_counter: Dict[str, int] = {}
    weekly_count = [0] * 7

    for entry in sorted_entries:
        mood_counter[entry.emotion] = mood_counter.get(entry.emotion, 0) + 1
        # date.weekday() is Monday=0, shift to Sunday=0
        weekday = local_day(entry.created_at, tz).weekday()
        weekly_count[(weekday + 1) % 7] += 1

    total = len(sorted_entries)
    mood_stats = [
        EmotionCount(
            emotion=emotion,
            name=emotion_name(emotion),
            count=count,
            percentage=round((count / total) * 100, 1),
        )
        for emotion, count in mood_counter.items()
    ]
    mood_stats.sort(key=lambda x: x.count, reverse=True)

    return StatsResponse(
        emotion_frequency=mood_stats,
        weekly_activity=weekly_count,
        streak=calculate_streak(sorted_entries, tz),
        total_entries=total,
        most_recent=sorted_entries[0] if sorted_entries else None,
    )
