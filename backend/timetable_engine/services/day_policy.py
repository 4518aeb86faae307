from __future__ import annotations

import random

from timetable_engine.schemas.timetable import WEEKDAYS, SubjectPayload

# Tuesday, Wednesday, Thursday
LAB_DAYS = (1, 2, 3)
SHUFFLE_THRESHOLD = 3


def day_preference(subject: SubjectPayload, rng: random.Random) -> list[int]:
    """Ordered weekdays to try for one occurrence of ``subject``.

    Labs never land on Monday or Friday. Subjects meeting three or more times
    a week get a fresh shuffle on every call so their occurrences spread
    across the week; everything else is searched Monday to Friday.
    The order only steers the search, callers must not fall back to other days.
    """
    if subject.type == "lab":
        return list(LAB_DAYS)
    days = list(WEEKDAYS)
    if subject.sessionsPerWeek >= SHUFFLE_THRESHOLD:
        rng.shuffle(days)
    return days
