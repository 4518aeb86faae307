import logging
from time import perf_counter

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from timetable_engine.api.deps import get_engine_settings
from timetable_engine.core.config import Settings
from timetable_engine.core.exceptions import ConfigurationError, SchedulerError
from timetable_engine.schemas.generator import (
    GenerateAlternativesRequest,
    GenerateAlternativesResponse,
    GenerateTimetableRequest,
    GenerateTimetableResponse,
    GenerationSettings,
    ReadinessReport,
)
from timetable_engine.schemas.timetable import EntitySnapshot
from timetable_engine.services.timetable_generator import (
    TimetableGenerator,
    generate_alternatives,
    validate_system_data,
)
from timetable_engine.services.workload import build_analytics

router = APIRouter()
logger = logging.getLogger(__name__)


def default_generation_settings(settings: Settings) -> GenerationSettings:
    try:
        return GenerationSettings(
            week_count=settings.default_week_count,
            inclusion_probability=settings.default_inclusion_probability,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid generation defaults: {exc.errors()[0]['msg']}") from exc


def _require_ready(snapshot: EntitySnapshot) -> None:
    report = validate_system_data(snapshot)
    if not report.ready:
        raise SchedulerError(
            message="Insufficient data to generate a timetable",
            details={"missing": report.missing, "counts": report.counts},
        )


@router.post("/generator/validate", response_model=ReadinessReport)
def validate_snapshot(snapshot: EntitySnapshot) -> ReadinessReport:
    return validate_system_data(snapshot)


@router.post("/generator/generate", response_model=GenerateTimetableResponse)
def generate_timetable(
    payload: GenerateTimetableRequest,
    settings: Settings = Depends(get_engine_settings),
) -> GenerateTimetableResponse:
    _require_ready(payload.snapshot)
    generation_settings = payload.settings_override or default_generation_settings(settings)

    start = perf_counter()
    result = TimetableGenerator(payload.snapshot, generation_settings).generate()
    analytics = build_analytics(payload.snapshot, result, fallback_room_slots=settings.room_slots_per_week)
    return GenerateTimetableResponse(
        result=result,
        analytics=analytics,
        settings_used=generation_settings,
        runtime_ms=int((perf_counter() - start) * 1000),
    )


@router.post("/generator/alternatives", response_model=GenerateAlternativesResponse)
def generate_timetable_alternatives(
    payload: GenerateAlternativesRequest,
    settings: Settings = Depends(get_engine_settings),
) -> GenerateAlternativesResponse:
    _require_ready(payload.snapshot)
    count = payload.alternative_count or settings.default_alternative_count
    if count > settings.max_alternative_count:
        raise SchedulerError(
            message=f"At most {settings.max_alternative_count} alternatives can be generated per request",
            details={"requested": count},
        )
    generation_settings = payload.settings_override or default_generation_settings(settings)

    start = perf_counter()
    alternatives = generate_alternatives(
        payload.snapshot,
        count=count,
        settings=generation_settings,
        max_workers=settings.generation_workers,
        fallback_room_slots=settings.room_slots_per_week,
    )
    runtime_ms = int((perf_counter() - start) * 1000)
    logger.info("Generated %s alternatives in %sms", len(alternatives), runtime_ms)
    return GenerateAlternativesResponse(
        alternatives=alternatives,
        settings_used=generation_settings,
        runtime_ms=runtime_ms,
    )
