import random

from timetable_engine.schemas.timetable import SessionPayload
from timetable_engine.services.replication import replicate_weeks


def base_week():
    return [
        SessionPayload(
            id=f"session-{index}",
            subjectId="s1",
            batchId="b1",
            facultyId="f1",
            roomId="r1",
            timeSlotId=f"t{index}",
            type="theory",
        )
        for index in range(1, 4)
    ]


def test_full_inclusion_copies_every_session_into_each_week():
    schedule = replicate_weeks(base_week(), week_count=4, inclusion_probability=1.0, rng=random.Random(1))
    assert len(schedule) == 12
    assert [s.id for s in schedule[3:6]] == ["session-1-w1", "session-2-w1", "session-3-w1"]
    assert {s.week for s in schedule} == {0, 1, 2, 3}
    copy = schedule[-1]
    assert (copy.timeSlotId, copy.facultyId, copy.roomId, copy.batchId) == ("t3", "f1", "r1", "b1")


def test_zero_inclusion_keeps_only_the_base_week():
    schedule = replicate_weeks(base_week(), week_count=4, inclusion_probability=0.0, rng=random.Random(1))
    assert [s.id for s in schedule] == ["session-1", "session-2", "session-3"]


def test_single_week_is_a_no_op():
    base = base_week()
    assert replicate_weeks(base, week_count=1, inclusion_probability=1.0, rng=random.Random(1)) == base


def test_partial_inclusion_is_seeded():
    first = replicate_weeks(base_week(), week_count=6, inclusion_probability=0.5, rng=random.Random(8))
    second = replicate_weeks(base_week(), week_count=6, inclusion_probability=0.5, rng=random.Random(8))
    assert [s.id for s in first] == [s.id for s in second]
    assert 3 <= len(first) <= 18


def test_base_sessions_are_not_mutated():
    base = base_week()
    replicate_weeks(base, week_count=3, inclusion_probability=1.0, rng=random.Random(1))
    assert [s.week for s in base] == [0, 0, 0]
