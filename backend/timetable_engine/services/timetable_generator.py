from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from timetable_engine.schemas.conflict import ConflictInfo
from timetable_engine.schemas.generator import (
    GeneratedAlternative,
    GenerationResult,
    GenerationSettings,
    ReadinessReport,
)
from timetable_engine.schemas.timetable import (
    BatchPayload,
    EntitySnapshot,
    FacultyPayload,
    RoomPayload,
    SessionPayload,
    SubjectPayload,
    TimeSlotPayload,
)
from timetable_engine.services.conflict_service import ConflictService
from timetable_engine.services.day_policy import day_preference
from timetable_engine.services.replication import replicate_weeks
from timetable_engine.services.scoring import calculate_score
from timetable_engine.services.selectors import eligible_rooms, faculty_teaching, select_faculty, select_room
from timetable_engine.services.slot_allocator import allocate_slot, group_time_slots_by_day
from timetable_engine.services.workload import build_analytics

logger = logging.getLogger(__name__)

STRATEGY_NAMES = ("Balanced", "Faculty Optimized", "Room Optimized")
MAX_SEED = 2_000_000_000


def session_id_for(sequence: int) -> str:
    return f"session-{sequence}"


def unschedulable(subject_label: str, batch_label: str) -> ConflictInfo:
    return ConflictInfo(type="batch", message=f"Unable to schedule {subject_label} for {batch_label}")


class TimetableGenerator:
    """Single-pass constructive generator over one immutable snapshot.

    Each instance owns one seeded random source and keeps no state between
    calls to :meth:`generate`, so instances can run side by side.
    """

    def __init__(self, snapshot: EntitySnapshot, settings: GenerationSettings | None = None) -> None:
        self.snapshot = snapshot
        self.settings = settings or GenerationSettings()
        self.subjects = {subject.id: subject for subject in snapshot.subjects}
        self.slots_by_day = group_time_slots_by_day(snapshot.time_slots)

    def _weekly_pass(self, rng: random.Random) -> tuple[list[SessionPayload], list[ConflictInfo]]:
        placed: list[SessionPayload] = []
        conflicts: list[ConflictInfo] = []

        for batch in self.snapshot.batches:
            for subject_id in batch.subjects:
                subject = self.subjects.get(subject_id)
                if subject is None:
                    logger.warning("Batch %s references unknown subject %s", batch.id, subject_id)
                    conflicts.append(unschedulable(subject_id, batch.label))
                    continue

                if subject.sessionsPerWeek == 0:
                    continue

                candidates = faculty_teaching(subject, self.snapshot.faculty)
                if not candidates:
                    logger.warning("No faculty teaches subject %s", subject.id)
                    conflicts.append(
                        ConflictInfo(type="faculty", message=f"No faculty available for subject {subject.label}")
                    )
                    continue

                rooms = eligible_rooms(subject, batch, self.snapshot.rooms)
                for occurrence in range(subject.sessionsPerWeek):
                    days = day_preference(subject, rng)
                    member = select_faculty(candidates, placed)
                    if not rooms:
                        conflicts.append(unschedulable(subject.label, batch.label))
                        continue
                    room = select_room(rooms, placed)
                    session = allocate_slot(
                        days=days,
                        faculty=member,
                        room=room,
                        batch=batch,
                        subject=subject,
                        slots_by_day=self.slots_by_day,
                        placed=placed,
                        session_id=session_id_for(len(placed) + 1),
                    )
                    if session is None:
                        logger.warning(
                            "No free slot for subject=%s batch=%s occurrence=%s",
                            subject.id,
                            batch.id,
                            occurrence + 1,
                        )
                        conflicts.append(unschedulable(subject.label, batch.label))
                        continue
                    placed.append(session)

        return placed, conflicts

    def generate(self) -> GenerationResult:
        rng = random.Random(self.settings.random_seed)
        logger.info(
            "Timetable generation batches=%s subjects=%s seed=%s replicate=%s",
            len(self.snapshot.batches),
            len(self.snapshot.subjects),
            self.settings.random_seed,
            self.settings.replicate_weeks,
        )

        sessions, conflicts = self._weekly_pass(rng)
        if self.settings.replicate_weeks:
            sessions = replicate_weeks(
                sessions,
                week_count=self.settings.week_count,
                inclusion_probability=self.settings.inclusion_probability,
                rng=rng,
            )

        detector = ConflictService(
            sessions,
            faculty=self.snapshot.faculty,
            rooms=self.snapshot.rooms,
            batches=self.snapshot.batches,
        )
        conflicts.extend(detector.detect_conflicts())

        score = calculate_score(
            sessions,
            conflicts,
            faculty=self.snapshot.faculty,
            rooms=self.snapshot.rooms,
            time_slots=self.snapshot.time_slots,
        )
        logger.info(
            "Timetable generation finished sessions=%s conflicts=%s score=%s",
            len(sessions),
            len(conflicts),
            score,
        )
        return GenerationResult(sessions=sessions, conflicts=conflicts, score=score)


def generate(
    subjects: Sequence[SubjectPayload],
    batches: Sequence[BatchPayload],
    faculty: Sequence[FacultyPayload],
    rooms: Sequence[RoomPayload],
    time_slots: Sequence[TimeSlotPayload],
    seed: int | None = None,
    *,
    settings: GenerationSettings | None = None,
) -> GenerationResult:
    snapshot = EntitySnapshot(
        subjects=list(subjects),
        batches=list(batches),
        faculty=list(faculty),
        rooms=list(rooms),
        time_slots=list(time_slots),
    )
    settings = settings or GenerationSettings()
    if seed is not None:
        settings = settings.model_copy(update={"random_seed": seed})
    return TimetableGenerator(snapshot, settings).generate()


def validate_system_data(snapshot: EntitySnapshot) -> ReadinessReport:
    counts = {
        "faculty": len(snapshot.faculty),
        "batches": len(snapshot.batches),
        "subjects": len(snapshot.subjects),
        "rooms": len(snapshot.rooms),
        "timeSlots": len(snapshot.time_slots),
    }
    missing = [name for name, count in counts.items() if count < 1]
    return ReadinessReport(ready=not missing, counts=counts, missing=missing)


def strategy_name(index: int) -> str:
    if index < len(STRATEGY_NAMES):
        return STRATEGY_NAMES[index]
    return "Standard"


def alternative_seeds(base_seed: int | None, count: int) -> list[int]:
    if base_seed is None:
        seeder = random.Random()
        return [seeder.randrange(MAX_SEED) for _ in range(count)]
    return [base_seed + offset for offset in range(count)]


def generate_alternatives(
    snapshot: EntitySnapshot,
    *,
    count: int,
    settings: GenerationSettings | None = None,
    max_workers: int = 4,
    fallback_room_slots: int = 40,
) -> list[GeneratedAlternative]:
    """Run ``count`` independent generations concurrently and rank them.

    Each option gets its own seed, so the set is reproducible whenever the
    base seed is fixed. Ranking is by score, best first, and falls back to
    option order.
    """
    settings = settings or GenerationSettings()
    seeds = alternative_seeds(settings.random_seed, count)
    generators = [
        TimetableGenerator(snapshot, settings.model_copy(update={"random_seed": seed}))
        for seed in seeds
    ]

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, count))) as pool:
        futures = [pool.submit(generator.generate) for generator in generators]
        results = [future.result() for future in futures]

    options = [
        GeneratedAlternative(
            rank=0,
            option_number=index + 1,
            name=f"Option {index + 1} - {strategy_name(index)}",
            seed=seed,
            result=result,
            analytics=build_analytics(snapshot, result, fallback_room_slots=fallback_room_slots),
        )
        for index, (seed, result) in enumerate(zip(seeds, results))
    ]
    options.sort(key=lambda option: (-option.result.score, option.option_number))
    return [option.model_copy(update={"rank": rank}) for rank, option in enumerate(options, start=1)]
