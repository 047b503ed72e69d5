from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def format_utc(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    utc = dt.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SuggestionSource(str, Enum):
    MODEL = "model"
    FALLBACK = "fallback"


class SuggestionSlot(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    time: datetime
    reason: str = Field(..., min_length=1)
    score: int = Field(..., ge=0, le=100)
    role_match: bool = False

    @field_validator("time", mode="before")
    @classmethod
    def time_is_iso(cls, v: Any) -> Any:
        # numbers and bare digits would otherwise be read as unix timestamps
        if isinstance(v, datetime):
            return v
        if isinstance(v, str) and _ISO_DATE_PREFIX.match(v.strip()):
            return v.strip()
        raise ValueError("time must be an ISO-8601 timestamp")

    @field_validator("time")
    @classmethod
    def time_in_utc(cls, v: datetime) -> datetime:
        # naive timestamps from the model are read as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_serializer("time")
    def serialize_time(self, v: datetime) -> str:
        return format_utc(v)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ReportNarrative(BaseModel):
    summary: str
    insights: List[str] = Field(default_factory=list)
    recommendation: str
