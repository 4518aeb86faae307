"""Generate ranked timetable options for the reference CSE department.

Run:
  PYTHONPATH=backend python scripts/generate_sample_timetable.py [seed]
"""

from __future__ import annotations

import sys

from timetable_engine.schemas.generator import GenerationSettings
from timetable_engine.schemas.timetable import (
    DAY_NAMES,
    BatchPayload,
    EntitySnapshot,
    FacultyPayload,
    RoomPayload,
    SubjectPayload,
    TimeSlotPayload,
)
from timetable_engine.services.timetable_generator import generate_alternatives

DAILY_PERIODS = [
    ("09:00", "10:00", "morning"),
    ("10:00", "11:00", "morning"),
    ("11:15", "12:15", "morning"),
    ("12:15", "13:15", "morning"),
    ("14:00", "15:00", "afternoon"),
    ("15:00", "16:00", "afternoon"),
    ("16:15", "17:15", "afternoon"),
    ("17:15", "18:15", "afternoon"),
]


def build_snapshot() -> EntitySnapshot:
    subjects = [
        SubjectPayload(id="1", name="Data Structures and Algorithms", code="CS301", type="theory",
                       sessionsPerWeek=3, sessionDuration=60, courseId="1", semester=3, credits=4),
        SubjectPayload(id="2", name="Database Management Systems", code="CS302", type="theory",
                       sessionsPerWeek=3, sessionDuration=60, courseId="1", semester=3, credits=3),
        SubjectPayload(id="3", name="Data Structures Lab", code="CS303", type="lab",
                       sessionsPerWeek=1, sessionDuration=120, courseId="1", semester=3, credits=2),
        SubjectPayload(id="4", name="Machine Learning", code="CS401", type="elective",
                       sessionsPerWeek=2, sessionDuration=60, courseId="1", semester=4, credits=3),
    ]
    batches = [
        BatchPayload(id="1", name="CSE 3rd Sem A", courseId="1", semester=3, studentCount=60, subjects=["1", "2", "3"]),
        BatchPayload(id="2", name="CSE 3rd Sem B", courseId="1", semester=3, studentCount=58, subjects=["1", "2", "3"]),
    ]
    faculty = [
        FacultyPayload(id="1", name="Dr. John Smith", departmentId="1", subjects=["1", "3"],
                       maxClassesPerDay=6, maxClassesPerWeek=24, averageLeaves=2),
        FacultyPayload(id="2", name="Dr. Sarah Johnson", departmentId="1", subjects=["2", "4"],
                       maxClassesPerDay=5, maxClassesPerWeek=20, averageLeaves=1),
    ]
    rooms = [
        RoomPayload(id="1", name="Room 101", type="classroom", capacity=60,
                    equipment=["projector", "whiteboard", "speakers"], departmentId="1"),
        RoomPayload(id="2", name="Room 102", type="classroom", capacity=50,
                    equipment=["projector", "whiteboard"], departmentId="1"),
        RoomPayload(id="3", name="Computer Lab 1", type="lab", capacity=30,
                    equipment=["computers", "projector", "software"], departmentId="1"),
    ]
    time_slots = [
        TimeSlotPayload(id=str(day * len(DAILY_PERIODS) + period + 1), day=day,
                        startTime=start, endTime=end, shift=shift)
        for day in range(5)
        for period, (start, end, shift) in enumerate(DAILY_PERIODS)
    ]
    return EntitySnapshot(subjects=subjects, batches=batches, faculty=faculty, rooms=rooms, time_slots=time_slots)


def main() -> None:
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 7
    snapshot = build_snapshot()
    slots = {slot.id: slot for slot in snapshot.time_slots}
    subjects = {subject.id: subject for subject in snapshot.subjects}

    alternatives = generate_alternatives(snapshot, count=3, settings=GenerationSettings(random_seed=seed))
    for option in alternatives:
        result = option.result
        print(
            f"#{option.rank} {option.name}: score={result.score} sessions={len(result.sessions)} "
            f"conflicts={len(result.conflicts)} faculty={option.analytics.overallFacultyUtilization}% "
            f"rooms={option.analytics.overallRoomUtilization}%"
        )
        for conflict in result.conflicts:
            print(f"  ! [{conflict.type}] {conflict.message}")

    best = alternatives[0].result
    print("\nBest option:")
    for session in sorted(best.sessions, key=lambda s: (slots[s.timeSlotId].day, slots[s.timeSlotId].start_minutes)):
        slot = slots[session.timeSlotId]
        print(
            f"  {DAY_NAMES[slot.day]:<9} {slot.startTime}-{slot.endTime} "
            f"{subjects[session.subjectId].code} batch={session.batchId} "
            f"faculty={session.facultyId} room={session.roomId}"
        )


if __name__ == "__main__":
    main()
