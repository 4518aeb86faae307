from fastapi import APIRouter, Depends

from timetable_engine.api.deps import get_engine_settings
from timetable_engine.core.config import Settings

router = APIRouter()


@router.get("/health")
def health(settings: Settings = Depends(get_engine_settings)) -> dict:
    return {
        "status": "ok",
        "service": settings.project_name,
        "maxAlternatives": settings.max_alternative_count,
    }
