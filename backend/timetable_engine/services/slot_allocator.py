from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence

from timetable_engine.schemas.timetable import (
    AVAILABILITY_HOURS,
    BatchPayload,
    FacultyPayload,
    RoomPayload,
    SessionPayload,
    SubjectPayload,
    TimeSlotPayload,
)

AVAILABILITY_BASE_HOUR = 9


def group_time_slots_by_day(time_slots: Iterable[TimeSlotPayload]) -> dict[int, list[TimeSlotPayload]]:
    by_day: dict[int, list[TimeSlotPayload]] = defaultdict(list)
    for slot in time_slots:
        by_day[slot.day].append(slot)
    for day in by_day:
        # stable: slots starting together keep their input order
        by_day[day].sort(key=lambda slot: slot.start_minutes)
    return dict(by_day)


def availability_bucket(slot: TimeSlotPayload) -> int:
    # Coarse hour bucket from 09:00; slots inside the same hour share one bit.
    return min(max(slot.start_hour - AVAILABILITY_BASE_HOUR, 0), AVAILABILITY_HOURS - 1)


def faculty_is_available(faculty: FacultyPayload, slot: TimeSlotPayload) -> bool:
    return bool(faculty.availability[slot.day][availability_bucket(slot)])


def _occupancy(placed: Sequence[SessionPayload]) -> dict[str, list[SessionPayload]]:
    by_slot: dict[str, list[SessionPayload]] = defaultdict(list)
    for session in placed:
        by_slot[session.timeSlotId].append(session)
    return by_slot


def allocate_slot(
    *,
    days: Sequence[int],
    faculty: FacultyPayload,
    room: RoomPayload,
    batch: BatchPayload,
    subject: SubjectPayload,
    slots_by_day: dict[int, list[TimeSlotPayload]],
    placed: Sequence[SessionPayload],
    session_id: str,
) -> SessionPayload | None:
    """First-fit placement over ``days`` in the given order.

    Returns ``None`` when no slot on the listed days is both inside the
    faculty member's availability and free of the faculty, the batch and the
    room. Earlier placements are never revisited.
    """
    occupancy = _occupancy(placed)
    for day in days:
        for slot in slots_by_day.get(day, []):
            if not faculty_is_available(faculty, slot):
                continue
            clash = any(
                existing.facultyId == faculty.id
                or existing.batchId == batch.id
                or existing.roomId == room.id
                for existing in occupancy.get(slot.id, [])
            )
            if clash:
                continue
            return SessionPayload(
                id=session_id,
                subjectId=subject.id,
                batchId=batch.id,
                facultyId=faculty.id,
                roomId=room.id,
                timeSlotId=slot.id,
                type=subject.type,
            )
    return None
