from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from timetable_engine.schemas.timetable import (
    BatchPayload,
    FacultyPayload,
    RoomPayload,
    SessionPayload,
    SubjectPayload,
)


def faculty_teaching(subject: SubjectPayload, faculty: Sequence[FacultyPayload]) -> list[FacultyPayload]:
    return [member for member in faculty if subject.id in member.subjects]


def select_faculty(candidates: Sequence[FacultyPayload], placed: Sequence[SessionPayload]) -> FacultyPayload:
    """Least-loaded faculty member in this run. `min` keeps the first of equal loads."""
    load = Counter(session.facultyId for session in placed)
    return min(candidates, key=lambda member: load[member.id])


def room_fits(subject: SubjectPayload, batch: BatchPayload, room: RoomPayload) -> bool:
    if subject.type == "lab" and room.type != "lab":
        return False
    return room.capacity >= batch.studentCount


def eligible_rooms(
    subject: SubjectPayload,
    batch: BatchPayload,
    rooms: Sequence[RoomPayload],
) -> list[RoomPayload]:
    return [room for room in rooms if room_fits(subject, batch, room)]


def select_room(candidates: Sequence[RoomPayload], placed: Sequence[SessionPayload]) -> RoomPayload:
    usage = Counter(session.roomId for session in placed)
    return min(candidates, key=lambda room: usage[room.id])
