from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

WEEKDAYS = (0, 1, 2, 3, 4)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
AVAILABILITY_DAYS = 7
AVAILABILITY_HOURS = 10

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

SubjectType = Literal["theory", "lab", "elective"]
RoomType = Literal["classroom", "lab", "auditorium"]
Shift = Literal["morning", "afternoon", "evening"]


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def full_availability() -> tuple[tuple[bool, ...], ...]:
    return tuple((True,) * AVAILABILITY_HOURS for _ in range(AVAILABILITY_DAYS))


class SubjectPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(default="", max_length=200)
    code: str = Field(default="", max_length=50)
    type: SubjectType = "theory"
    sessionsPerWeek: int = Field(default=0, ge=0, le=40)
    sessionDuration: int = Field(default=60, ge=1, le=600)
    courseId: str | None = Field(default=None, max_length=36)
    semester: int = Field(default=1, ge=1, le=20)
    credits: int = Field(default=0, ge=0, le=40)

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return self.name or self.code or self.id


class BatchPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(default="", max_length=200)
    courseId: str | None = Field(default=None, max_length=36)
    semester: int = Field(default=1, ge=1, le=20)
    studentCount: int = Field(default=0, ge=0, le=5000)
    subjects: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @field_validator("subjects", mode="before")
    @classmethod
    def dedupe_subjects(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            raise ValueError("subjects must be a list of subject ids")
        unique: list[str] = []
        seen: set[str] = set()
        for item in value:
            if item in seen:
                continue
            seen.add(item)
            unique.append(item)
        return tuple(unique)

    @property
    def label(self) -> str:
        return self.name or self.id


class FacultyPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(default="", max_length=200)
    departmentId: str | None = Field(default=None, max_length=36)
    subjects: tuple[str, ...] = ()
    maxClassesPerDay: int = Field(default=6, ge=0, le=24)
    maxClassesPerWeek: int = Field(default=24, ge=0, le=120)
    availability: tuple[tuple[bool, ...], ...] = Field(default_factory=full_availability)
    averageLeaves: float = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @field_validator("availability", mode="after")
    @classmethod
    def validate_availability_shape(cls, value: tuple[tuple[bool, ...], ...]) -> tuple[tuple[bool, ...], ...]:
        if len(value) != AVAILABILITY_DAYS:
            raise ValueError(f"availability must have {AVAILABILITY_DAYS} day rows")
        if any(len(row) != AVAILABILITY_HOURS for row in value):
            raise ValueError(f"each availability row must have {AVAILABILITY_HOURS} hour entries")
        return value

    @property
    def label(self) -> str:
        return self.name or self.id


class RoomPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(default="", max_length=100)
    type: RoomType = "classroom"
    capacity: int = Field(default=0, ge=0, le=5000)
    equipment: tuple[str, ...] = ()
    departmentId: str | None = Field(default=None, max_length=36)

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return self.name or self.id


class TimeSlotPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    day: int = Field(ge=0, le=6)
    startTime: str
    endTime: str
    shift: Shift = "morning"

    model_config = {"frozen": True}

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @model_validator(mode="after")
    def validate_time_order(self) -> "TimeSlotPayload":
        start = parse_time_to_minutes(self.startTime)
        end = parse_time_to_minutes(self.endTime)
        if end <= start:
            raise ValueError("End time must be after start time")
        return self

    @property
    def start_minutes(self) -> int:
        return parse_time_to_minutes(self.startTime)

    @property
    def start_hour(self) -> int:
        return self.start_minutes // 60


class SessionPayload(BaseModel):
    id: str = Field(min_length=1)
    subjectId: str
    batchId: str
    facultyId: str
    roomId: str
    timeSlotId: str
    type: SubjectType
    week: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class EntitySnapshot(BaseModel):
    subjects: list[SubjectPayload] = Field(default_factory=list)
    batches: list[BatchPayload] = Field(default_factory=list)
    faculty: list[FacultyPayload] = Field(default_factory=list)
    rooms: list[RoomPayload] = Field(default_factory=list)
    time_slots: list[TimeSlotPayload] = Field(default_factory=list, alias="timeSlots")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "EntitySnapshot":
        def ensure_unique(label: str, items: list[BaseModel]) -> None:
            seen: set[str] = set()
            duplicates: set[str] = set()
            for item in items:
                if item.id in seen:
                    duplicates.add(item.id)
                else:
                    seen.add(item.id)
            if duplicates:
                raise ValueError(f"Duplicate {label} id(s): {', '.join(sorted(duplicates))}")

        ensure_unique("subject", self.subjects)
        ensure_unique("batch", self.batches)
        ensure_unique("faculty", self.faculty)
        ensure_unique("room", self.rooms)
        ensure_unique("timeslot", self.time_slots)
        return self
