from __future__ import annotations

from pydantic import BaseModel, Field

from timetable_engine.schemas.conflict import ConflictInfo
from timetable_engine.schemas.timetable import EntitySnapshot, SessionPayload


class GenerationSettings(BaseModel):
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)
    replicate_weeks: bool = False
    week_count: int = Field(default=4, ge=1, le=12)
    inclusion_probability: float = Field(default=0.9, ge=0.0, le=1.0)


class GenerationResult(BaseModel):
    sessions: list[SessionPayload] = Field(default_factory=list)
    conflicts: list[ConflictInfo] = Field(default_factory=list)
    score: int = Field(ge=0, le=100)


class AnalyticsData(BaseModel):
    facultyUtilization: dict[str, int] = Field(default_factory=dict)
    roomUtilization: dict[str, int] = Field(default_factory=dict)
    overallFacultyUtilization: int = 0
    overallRoomUtilization: int = 0
    conflictCount: int = 0
    optimizationScore: int = 0


class ReadinessReport(BaseModel):
    ready: bool
    counts: dict[str, int]
    missing: list[str] = Field(default_factory=list)


class GenerateTimetableRequest(BaseModel):
    snapshot: EntitySnapshot
    settings_override: GenerationSettings | None = None


class GenerateTimetableResponse(BaseModel):
    result: GenerationResult
    analytics: AnalyticsData
    settings_used: GenerationSettings
    runtime_ms: int


class GenerateAlternativesRequest(BaseModel):
    snapshot: EntitySnapshot
    alternative_count: int | None = Field(default=None, ge=1, le=10)
    settings_override: GenerationSettings | None = None


class GeneratedAlternative(BaseModel):
    rank: int
    option_number: int
    name: str
    seed: int
    result: GenerationResult
    analytics: AnalyticsData


class GenerateAlternativesResponse(BaseModel):
    alternatives: list[GeneratedAlternative]
    settings_used: GenerationSettings
    runtime_ms: int
