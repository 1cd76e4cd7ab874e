from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict, field_validator


class Emotion(str, Enum):
    HAPPY = "😊"
    NEUTRAL = "😐"
    SAD = "😔"
    ANGRY = "😡"
    TIRED = "😴"
    EXCITED = "🥳"

    @property
    def display_name(self) -> str:
        return EMOTION_NAMES[self.value]


# Glyph -> display name
EMOTION_NAMES = {
    Emotion.HAPPY.value: "Happy",
    Emotion.NEUTRAL.value: "Neutral",
    Emotion.SAD.value: "Sad",
    Emotion.ANGRY.value: "Angry",
    Emotion.TIRED.value: "Tired",
    Emotion.EXCITED.value: "Excited",
}


def emotion_name(glyph: str) -> str:
    # Unknown glyphs are their own name
    return EMOTION_NAMES.get(glyph, glyph)


def resolve_emotion(value) -> Optional[Emotion]:
    """Map a glyph or a display name (case-insensitive) onto an Emotion.

    Only exact matches count, anything else returns None.
    """
    if isinstance(value, Emotion):
        return value
    text = (value or "").strip()
    if not text:
        return None

    for emotion in Emotion:
        if text == emotion.value:
            return emotion

    lowered = text.lower()
    for emotion in Emotion:
        if lowered == emotion.display_name.lower():
            return emotion

    return None


# Persisted record, field names follow the stored payload
class Entry(BaseModel):
    id: str
    emotion: str
    note: str
    date: str = ""
    created_at: datetime = Field(alias="createdAt")
    formatted_date: str = Field("", alias="formattedDate")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at")
    @classmethod
    def ensure_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def emotion_name(self) -> str:
        return emotion_name(self.emotion)


# Input for creating an entry
class NewEntryRequest(BaseModel):
    emotion: str
    note: str
    display_date: Optional[str] = Field(None, alias="displayDate")

    model_config = ConfigDict(populate_by_name=True)


# Input for editing an entry, only the note is editable
class UpdateEntryRequest(BaseModel):
    note: str
