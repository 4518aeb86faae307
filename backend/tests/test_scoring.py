import pytest

from timetable_engine.schemas.conflict import ConflictInfo
from timetable_engine.schemas.timetable import SessionPayload
from timetable_engine.services.scoring import (
    calculate_score,
    distribution_score,
    faculty_overload,
    room_efficiency,
    round_half_up,
)

from factories import make_faculty, make_room, make_slot


def session(id, slot, faculty="f1", room="r1"):
    return SessionPayload(
        id=id,
        subjectId="s1",
        batchId="b1",
        facultyId=faculty,
        roomId=room,
        timeSlotId=slot,
        type="theory",
    )


def conflict():
    return ConflictInfo(type="batch", message="Unable to schedule s1 for b1")


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, 3), (3.3333, 3), (9.76, 10), (0.49, 0), (64.5, 65)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_distribution_score_uses_population_variance():
    assert distribution_score([1, 1, 1, 1, 1]) == 10
    assert distribution_score([1, 1, 1, 0, 0]) == pytest.approx(9.76)
    assert distribution_score([20, 0, 0, 0, 0]) == 0
    assert distribution_score([]) == 10


def test_room_efficiency():
    sessions = [session("a", "t1", room="r1"), session("b", "t2", room="r1")]
    assert room_efficiency(sessions, 3) == 3
    assert room_efficiency(sessions, 2) == 5
    assert room_efficiency(sessions, 4) == 3
    assert room_efficiency(sessions, 0) == 0


def test_faculty_overload_counts_sessions_above_daily_cap():
    slots = {f"t{h}": make_slot(0, h, id=f"t{h}") for h in range(9, 13)}
    faculty = {"f1": make_faculty("f1", maxClassesPerDay=2)}
    sessions = [session(f"x{h}", f"t{h}") for h in range(9, 13)]
    assert faculty_overload(sessions, faculty, slots) == 2


def test_perfectly_spread_schedule_scores_full_marks():
    slots = [make_slot(day, 9) for day in range(5)]
    sessions = [session(f"x{day}", slot.id) for day, slot in enumerate(slots)]
    score = calculate_score(sessions, [], faculty=[make_faculty()], rooms=[make_room()], time_slots=slots)
    assert score == 100


def test_conflicts_cost_fifteen_points_each():
    slots = [make_slot(day, 9) for day in range(5)]
    score = calculate_score([], [conflict(), conflict(), conflict()], faculty=[], rooms=[make_room()], time_slots=slots)
    # 100 - 45 + 10 (empty week is evenly spread) + 0 rooms used
    assert score == 65


def test_score_is_clamped_at_zero():
    score = calculate_score([], [conflict()] * 10, faculty=[], rooms=[], time_slots=[])
    assert score == 0


def test_overload_reduces_score():
    slots = [make_slot(0, h) for h in range(9, 12)]
    sessions = [session(f"x{i}", slot.id) for i, slot in enumerate(slots)]
    conflicts = [conflict(), conflict()]
    relaxed = calculate_score(sessions, conflicts, faculty=[make_faculty(maxClassesPerDay=6)], rooms=[make_room()], time_slots=slots)
    strict = calculate_score(sessions, conflicts, faculty=[make_faculty(maxClassesPerDay=1)], rooms=[make_room()], time_slots=slots)
    assert relaxed == 89
    assert strict == 79
