from pydantic import BaseModel, Field, computed_field
from typing import List, Optional, Tuple

from app.models.journal import Entry

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class EmotionCount(BaseModel):
    emotion: str
    name: str
    count: int
    percentage: float


class DayActivity(BaseModel):
    day: str
    count: int


class StatsResponse(BaseModel):
    # Most frequent first
    emotion_frequency: List[EmotionCount] = Field(default_factory=list)

    # Index 0 = Sunday .. 6 = Saturday, summed over all history
    weekly_activity: List[int] = Field(default_factory=lambda: [0] * 7)

    streak: int = 0
    total_entries: int = 0
    most_recent: Optional[Entry] = None

    def top_emotions(self, n: int = 3) -> List[EmotionCount]:
        return self.emotion_frequency[:n]

    def weekly_activity_labeled(self) -> List[Tuple[str, int]]:
        return list(zip(WEEKDAY_LABELS, self.weekly_activity))

    # Derived values below are included in the serialized response

    @computed_field
    @property
    def dominant_emotion(self) -> Optional[EmotionCount]:
        if not self.emotion_frequency:
            return None
        return self.emotion_frequency[0]

    @computed_field
    @property
    def top_three(self) -> List[EmotionCount]:
        return self.top_emotions(3)

    @computed_field
    @property
    def weekly_activity_by_day(self) -> List[DayActivity]:
        return [DayActivity(day=day, count=count) for day, count in self.weekly_activity_labeled()]
