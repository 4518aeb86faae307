from fastapi import APIRouter

from timetable_engine.schemas.conflict import ConflictDetectRequest, ConflictReport
from timetable_engine.services.conflict_service import ConflictService

router = APIRouter()


@router.post("/detect", response_model=ConflictReport)
def detect_conflicts(payload: ConflictDetectRequest) -> ConflictReport:
    service = ConflictService(
        payload.sessions,
        faculty=payload.snapshot.faculty,
        rooms=payload.snapshot.rooms,
        batches=payload.snapshot.batches,
    )
    return service.build_report()
