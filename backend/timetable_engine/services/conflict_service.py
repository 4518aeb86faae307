from collections import defaultdict
from typing import Callable, Dict, List, Sequence

from timetable_engine.schemas.conflict import ConflictInfo, ConflictReport, ConflictType, ResolutionAction
from timetable_engine.schemas.timetable import BatchPayload, FacultyPayload, RoomPayload, SessionPayload


class ConflictService:
    def __init__(
        self,
        sessions: Sequence[SessionPayload],
        faculty: Sequence[FacultyPayload] = (),
        rooms: Sequence[RoomPayload] = (),
        batches: Sequence[BatchPayload] = (),
    ):
        self.sessions = list(sessions)
        self.faculty_map: Dict[str, FacultyPayload] = {item.id: item for item in faculty}
        self.room_map: Dict[str, RoomPayload] = {item.id: item for item in rooms}
        self.batch_map: Dict[str, BatchPayload] = {item.id: item for item in batches}

    def _faculty_label(self, faculty_id: str) -> str:
        member = self.faculty_map.get(faculty_id)
        return member.label if member else faculty_id

    def _room_label(self, room_id: str) -> str:
        room = self.room_map.get(room_id)
        return room.label if room else room_id

    def _batch_label(self, batch_id: str) -> str:
        batch = self.batch_map.get(batch_id)
        return batch.label if batch else batch_id

    def detect_conflicts(self) -> List[ConflictInfo]:
        conflicts: List[ConflictInfo] = []

        # Calendar slot identity only; copies of a session in later weeks share it.
        slot_map: Dict[str, List[SessionPayload]] = defaultdict(list)
        for session in self.sessions:
            slot_map[session.timeSlotId].append(session)

        checks: List[tuple[ConflictType, Callable[[SessionPayload], str], Callable[[str], str]]] = [
            ("faculty", lambda s: s.facultyId, lambda key: f"Faculty {self._faculty_label(key)} has multiple classes at the same time"),
            ("room", lambda s: s.roomId, lambda key: f"Room {self._room_label(key)} is double-booked"),
            ("batch", lambda s: s.batchId, lambda key: f"Batch {self._batch_label(key)} has overlapping sessions"),
        ]

        for slot_sessions in slot_map.values():
            if len(slot_sessions) < 2:
                continue
            for conflict_type, key_of, describe in checks:
                groups: Dict[str, List[SessionPayload]] = defaultdict(list)
                for session in slot_sessions:
                    groups[key_of(session)].append(session)
                for key, grouped in groups.items():
                    if len(grouped) > 1:
                        conflicts.append(ConflictInfo(
                            type=conflict_type,
                            message=describe(key),
                            sessionIds=[s.id for s in grouped],
                        ))

        return conflicts

    def generate_resolutions(self, conflict: ConflictInfo) -> List[ResolutionAction]:
        if not conflict.sessionIds:
            return []
        # The first session keeps its place; every other one gets a hint.
        movable = conflict.sessionIds[1:]
        if conflict.type == "room":
            return [
                ResolutionAction(
                    action_type="change_room",
                    description="Find a free room of sufficient capacity",
                    target_session_id=session_id,
                )
                for session_id in movable
            ]
        return [
            ResolutionAction(
                action_type="move_slot",
                description="Move to a different time slot",
                target_session_id=session_id,
            )
            for session_id in movable
        ]

    def build_report(self) -> ConflictReport:
        conflicts = self.detect_conflicts()
        resolutions: List[ResolutionAction] = []
        for conflict in conflicts:
            resolutions.extend(self.generate_resolutions(conflict))
        return ConflictReport(conflicts=conflicts, suggested_resolutions=resolutions)
