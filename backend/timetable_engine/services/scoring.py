from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from timetable_engine.schemas.conflict import ConflictInfo
from timetable_engine.schemas.timetable import (
    WEEKDAYS,
    FacultyPayload,
    RoomPayload,
    SessionPayload,
    TimeSlotPayload,
)

BASE_SCORE = 100
CONFLICT_PENALTY = 15
OVERLOAD_PENALTY = 5
DISTRIBUTION_WEIGHT = 10
ROOM_EFFICIENCY_WEIGHT = 10


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def daily_counts(sessions: Sequence[SessionPayload], slots_by_id: dict[str, TimeSlotPayload]) -> list[int]:
    per_day = Counter()
    for session in sessions:
        slot = slots_by_id.get(session.timeSlotId)
        if slot is not None:
            per_day[slot.day] += 1
    return [per_day[day] for day in WEEKDAYS]


def distribution_score(counts: Sequence[int]) -> float:
    if not counts:
        return float(DISTRIBUTION_WEIGHT)
    mean = sum(counts) / len(counts)
    variance = sum((count - mean) ** 2 for count in counts) / len(counts)
    return max(0.0, DISTRIBUTION_WEIGHT - variance)


def faculty_overload(
    sessions: Sequence[SessionPayload],
    faculty_by_id: dict[str, FacultyPayload],
    slots_by_id: dict[str, TimeSlotPayload],
) -> int:
    load = Counter()
    for session in sessions:
        slot = slots_by_id.get(session.timeSlotId)
        if slot is None or session.facultyId not in faculty_by_id:
            continue
        load[(session.facultyId, slot.day)] += 1
    return sum(
        max(0, count - faculty_by_id[faculty_id].maxClassesPerDay)
        for (faculty_id, _day), count in load.items()
    )


def room_efficiency(sessions: Sequence[SessionPayload], total_rooms: int) -> int:
    if total_rooms <= 0:
        return 0
    used = {session.roomId for session in sessions}
    return round_half_up(ROOM_EFFICIENCY_WEIGHT * len(used) / total_rooms)


def calculate_score(
    sessions: Sequence[SessionPayload],
    conflicts: Sequence[ConflictInfo],
    *,
    faculty: Sequence[FacultyPayload],
    rooms: Sequence[RoomPayload],
    time_slots: Sequence[TimeSlotPayload],
) -> int:
    """Relative quality of one generated option, clamped to 0..100.

    Conflicts and per-day faculty overload cost points; an even spread over
    Monday to Friday and touching more of the room pool earn up to 10 each.
    Only meaningful for ranking options against each other.
    """
    slots_by_id = {slot.id: slot for slot in time_slots}
    faculty_by_id = {member.id: member for member in faculty}

    score = float(BASE_SCORE)
    score -= CONFLICT_PENALTY * len(conflicts)
    score += distribution_score(daily_counts(sessions, slots_by_id))
    score -= OVERLOAD_PENALTY * faculty_overload(sessions, faculty_by_id, slots_by_id)
    score += room_efficiency(sessions, len(rooms))
    return round_half_up(min(max(score, 0.0), float(BASE_SCORE)))
