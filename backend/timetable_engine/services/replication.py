from __future__ import annotations

import random
from collections.abc import Sequence

from timetable_engine.schemas.timetable import SessionPayload


def week_session_id(session_id: str, week: int) -> str:
    return f"{session_id}-w{week}"


def replicate_weeks(
    base_sessions: Sequence[SessionPayload],
    *,
    week_count: int,
    inclusion_probability: float,
    rng: random.Random,
) -> list[SessionPayload]:
    """Fill ``week_count`` weeks from the validated base week.

    Every later week keeps each base session independently with probability
    ``inclusion_probability``. Copies reuse the exact slot, faculty, room and
    batch of week 0 and are not re-validated.
    """
    schedule = list(base_sessions)
    for week in range(1, week_count):
        for session in base_sessions:
            if rng.random() < inclusion_probability:
                schedule.append(
                    session.model_copy(update={"id": week_session_id(session.id, week), "week": week})
                )
    return schedule
