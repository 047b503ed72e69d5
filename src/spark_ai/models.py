from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Role(BaseModel):
    name: str
    emoji: Optional[str] = None


class Task(BaseModel):
    """A completed task as sent by the client for the monthly report.

    Durations stay raw here; the aggregators parse them leniently.
    """

    description: str = Field("", validation_alias=AliasChoices("task", "description"))
    duration: Any = Field(None, validation_alias=AliasChoices("duration", "durationHours"))
    priority: Any = None

    roles: Optional[List[Role]] = None
    # older clients send a single role per task
    role: Optional[Role] = None

    @field_validator("description", mode="before")
    @classmethod
    def description_not_null(cls, v: Any) -> Any:
        return "" if v is None else v

    def role_list(self) -> List[Role]:
        if self.roles is not None:
            return list(self.roles)
        if self.role is not None:
            return [self.role]
        return []


class AnalyzeTaskIn(BaseModel):
    task: Optional[str] = None
    duration: Optional[float] = None
    priority: Any = None
    roles: Optional[List[Role]] = None
    timezone: Optional[str] = None

    def missing_fields(self) -> List[str]:
        missing = []
        if not (self.task and self.task.strip()):
            missing.append("task")
        if self.duration is None or self.duration <= 0:
            missing.append("duration")
        if not self.roles:
            missing.append("roles")
        return missing


class MonthlyReportIn(BaseModel):
    tasks: Optional[List[Task]] = None
    month: Optional[Union[int, str]] = None
    year: Optional[Union[int, str]] = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoleStat(_CamelModel):
    count: int = Field(1, ge=1)
    total_duration: float = Field(0.0, ge=0, allow_inf_nan=False)
    emoji: Optional[str] = None


class KeywordCount(BaseModel):
    word: str
    count: int = Field(..., ge=1)


class MonthlyReport(_CamelModel):
    role_stats: Dict[str, RoleStat] = Field(default_factory=dict)
    top_keywords: List[KeywordCount] = Field(default_factory=list)
    summary: str
    insights: List[str] = Field(default_factory=list)
    recommendation: str
    total_tasks: int = Field(..., ge=0)
    total_hours: float = Field(..., ge=0, allow_inf_nan=False)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
