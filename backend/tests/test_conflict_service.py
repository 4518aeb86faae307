import pytest

from timetable_engine.schemas.conflict import ConflictInfo
from timetable_engine.schemas.timetable import SessionPayload
from timetable_engine.services.conflict_service import ConflictService

from factories import make_batch, make_faculty, make_room


def session(id, slot="t1", faculty="f1", room="r1", batch="b1"):
    return SessionPayload(
        id=id,
        subjectId="s1",
        batchId=batch,
        facultyId=faculty,
        roomId=room,
        timeSlotId=slot,
        type="theory",
    )


@pytest.fixture
def resources():
    return {
        "faculty": [make_faculty("f1", name="Prof A"), make_faculty("f2", name="Prof B")],
        "rooms": [make_room("r1", name="Room 1"), make_room("r2", name="Room 2")],
        "batches": [make_batch("b1", name="CSE A"), make_batch("b2", name="CSE B")],
    }


def test_detect_room_conflict(resources):
    service = ConflictService(
        [session("x1", faculty="f1", batch="b1"), session("x2", faculty="f2", batch="b2")],
        **resources,
    )
    conflicts = service.detect_conflicts()

    assert len(conflicts) == 1
    conflict = conflicts[0]
    assert conflict.type == "room"
    assert conflict.message == "Room Room 1 is double-booked"
    assert conflict.sessionIds == ["x1", "x2"]


def test_detect_faculty_conflict(resources):
    service = ConflictService(
        [session("x1", room="r1", batch="b1"), session("x2", room="r2", batch="b2")],
        **resources,
    )
    conflicts = service.detect_conflicts()

    assert [c.type for c in conflicts] == ["faculty"]
    assert conflicts[0].message == "Faculty Prof A has multiple classes at the same time"


def test_detect_batch_conflict(resources):
    service = ConflictService(
        [session("x1", faculty="f1", room="r1"), session("x2", faculty="f2", room="r2")],
        **resources,
    )
    conflicts = service.detect_conflicts()

    assert [c.type for c in conflicts] == ["batch"]
    assert conflicts[0].message == "Batch CSE A has overlapping sessions"


def test_full_overlap_reports_each_kind_in_order(resources):
    service = ConflictService([session("x1"), session("x2"), session("x3")], **resources)
    conflicts = service.detect_conflicts()

    assert [c.type for c in conflicts] == ["faculty", "room", "batch"]
    assert all(c.sessionIds == ["x1", "x2", "x3"] for c in conflicts)


def test_distinct_slots_never_conflict(resources):
    service = ConflictService([session("x1", slot="t1"), session("x2", slot="t2")], **resources)
    assert service.detect_conflicts() == []


def test_unknown_ids_fall_back_to_raw_labels():
    conflicts = ConflictService([session("x1", room="r9"), session("x2", room="r9", faculty="f2", batch="b2")]).detect_conflicts()
    assert conflicts[0].message == "Room r9 is double-booked"


def test_slot_groups_keep_first_seen_order(resources):
    sessions = [
        session("x1", slot="t2", faculty="f2", batch="b2"),
        session("x2", slot="t1"),
        session("x3", slot="t2", faculty="f2", room="r2"),
        session("x4", slot="t1", faculty="f2", batch="b2"),
    ]
    conflicts = ConflictService(sessions, **resources).detect_conflicts()
    assert [(c.type, c.sessionIds) for c in conflicts] == [
        ("faculty", ["x1", "x3"]),
        ("room", ["x2", "x4"]),
    ]


def test_room_conflict_resolution_suggests_room_change():
    service = ConflictService([])
    conflict = ConflictInfo(type="room", message="Room 1 is double-booked", sessionIds=["x1", "x2", "x3"])
    actions = service.generate_resolutions(conflict)

    assert [a.action_type for a in actions] == ["change_room", "change_room"]
    assert [a.target_session_id for a in actions] == ["x2", "x3"]


def test_faculty_conflict_resolution_suggests_slot_move():
    service = ConflictService([])
    conflict = ConflictInfo(type="faculty", message="clash", sessionIds=["x1", "x2"])
    actions = service.generate_resolutions(conflict)

    assert len(actions) == 1
    assert actions[0].action_type == "move_slot"
    assert actions[0].target_session_id == "x2"


def test_generation_conflicts_have_no_resolutions():
    service = ConflictService([])
    assert service.generate_resolutions(ConflictInfo(type="batch", message="Unable to schedule")) == []


def test_build_report_collects_resolutions(resources):
    report = ConflictService([session("x1"), session("x2")], **resources).build_report()
    assert len(report.conflicts) == 3
    assert [a.action_type for a in report.suggested_resolutions] == ["move_slot", "change_room", "move_slot"]
