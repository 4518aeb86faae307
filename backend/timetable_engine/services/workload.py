from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Sequence

from timetable_engine.schemas.generator import AnalyticsData, GenerationResult
from timetable_engine.schemas.timetable import WEEKDAYS, EntitySnapshot, SessionPayload
from timetable_engine.services.scoring import round_half_up

DEFAULT_SESSION_MINUTES = 60


def _base_week(sessions: Sequence[SessionPayload]) -> list[SessionPayload]:
    return [session for session in sessions if session.week == 0]


def faculty_weekly_hours(snapshot: EntitySnapshot, sessions: Sequence[SessionPayload]) -> dict[str, float]:
    durations = {subject.id: subject.sessionDuration for subject in snapshot.subjects}
    hours: dict[str, float] = defaultdict(float)
    for session in _base_week(sessions):
        hours[session.facultyId] += durations.get(session.subjectId, DEFAULT_SESSION_MINUTES) / 60
    return dict(hours)


def faculty_utilization(snapshot: EntitySnapshot, sessions: Sequence[SessionPayload]) -> dict[str, int]:
    hours = faculty_weekly_hours(snapshot, sessions)
    utilization: dict[str, int] = {}
    for member in snapshot.faculty:
        if member.maxClassesPerWeek <= 0:
            utilization[member.id] = 0
            continue
        percent = min(100.0, hours.get(member.id, 0.0) / member.maxClassesPerWeek * 100)
        utilization[member.id] = round_half_up(percent)
    return utilization


def weekly_room_slots(snapshot: EntitySnapshot, fallback: int) -> int:
    weekday_slots = sum(1 for slot in snapshot.time_slots if slot.day in WEEKDAYS)
    return weekday_slots or fallback


def room_utilization(
    snapshot: EntitySnapshot,
    sessions: Sequence[SessionPayload],
    *,
    slots_per_week: int,
) -> dict[str, int]:
    usage = Counter(session.roomId for session in _base_week(sessions))
    return {
        room.id: round_half_up(min(100.0, usage[room.id] / slots_per_week * 100))
        for room in snapshot.rooms
    }


def _mean(values: Sequence[int]) -> int:
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def build_analytics(
    snapshot: EntitySnapshot,
    result: GenerationResult,
    *,
    fallback_room_slots: int = 40,
) -> AnalyticsData:
    """Weekly utilization per faculty member and per room for one option.

    Only week 0 counts so that replicated schedules report a weekly figure.
    """
    per_faculty = faculty_utilization(snapshot, result.sessions)
    per_room = room_utilization(
        snapshot,
        result.sessions,
        slots_per_week=weekly_room_slots(snapshot, fallback_room_slots),
    )
    return AnalyticsData(
        facultyUtilization=per_faculty,
        roomUtilization=per_room,
        overallFacultyUtilization=_mean(list(per_faculty.values())),
        overallRoomUtilization=_mean(list(per_room.values())),
        conflictCount=len(result.conflicts),
        optimizationScore=result.score,
    )
