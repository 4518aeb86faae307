from pydantic import BaseModel, Field
from typing import Literal, List

from timetable_engine.schemas.timetable import EntitySnapshot, SessionPayload

ConflictType = Literal["faculty", "batch", "room"]


class ConflictInfo(BaseModel):
    type: ConflictType
    message: str
    sessionIds: List[str] = Field(default_factory=list)  # empty when nothing could be created

    model_config = {"frozen": True}


class ResolutionAction(BaseModel):
    action_type: Literal["move_slot", "change_room"]
    description: str
    target_session_id: str


class ConflictDetectRequest(BaseModel):
    snapshot: EntitySnapshot
    sessions: List[SessionPayload] = Field(default_factory=list)


class ConflictReport(BaseModel):
    conflicts: List[ConflictInfo]
    suggested_resolutions: List[ResolutionAction]
