"""Session state holder mapping each user action to one core operation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from threading import RLock
from typing import Any, Optional

from roomsense.domain.models import (
    AmenityType,
    Floor,
    Landmark,
    MatchResult,
    Preferences,
    RankedRoom,
    Room,
    SignalDraft,
    UserMode,
)
from roomsense.repository.hotel_repository import HotelRepository
from roomsense.services.landmark_service import (
    add_landmark,
    group_landmarks_by_slot,
    hallway_slot_count,
    reposition_landmark,
)
from roomsense.services.matching_service import RoomMatchingService
from roomsense.services.signal_service import apply_signal
from roomsense.utils.config import Settings, get_settings
from roomsense.utils.logger import get_logger


logger = get_logger(__name__)


class SessionValidationError(Exception):
    """Raised when a session command cannot be carried out."""


class FloorNotFoundError(SessionValidationError):
    """Raised when a floor number is not in the catalog."""


class RoomNotFoundError(SessionValidationError):
    """Raised when a room id is not in the catalog."""


class StaffModeRequiredError(SessionValidationError):
    """Raised when a guest session attempts a staff authoring action."""


@dataclass(frozen=True)
class RoomSummary:
    room: Room
    match: MatchResult
    estimated_rate: int


@dataclass(frozen=True)
class FloorOverview:
    floor: Floor
    slot_count: int
    landmarks_by_slot: dict[int, list[Landmark]]

    @property
    def capacity_label(self) -> str:
        if self.floor.rooms:
            return f"{len(self.floor.rooms)} rooms"
        return "amenity"


class SessionService:
    """Coordinates preferences, floor navigation, signals and landmark edits.

    Preferences survive floor changes; the selected room does not.
    """

    def __init__(
        self,
        repository: Optional[HotelRepository] = None,
        matching_service: Optional[RoomMatchingService] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or HotelRepository(self._settings)
        self._matching_service = matching_service or RoomMatchingService(
            repository=self._repository,
            settings=self._settings,
        )
        self._lock = RLock()
        self._preferences = Preferences(
            quiet_vs_access=self._settings.default_quiet_vs_access,
            avoid_elevator=self._settings.default_avoid_elevator,
            premium_tolerance=self._settings.default_premium_tolerance,
        )
        self._mode = UserMode(self._settings.default_mode)
        self._active_floor = self._settings.default_floor_number
        self._selected_room_id: Optional[str] = None

    @property
    def preferences(self) -> Preferences:
        with self._lock:
            return self._preferences

    @property
    def mode(self) -> UserMode:
        with self._lock:
            return self._mode

    @property
    def active_floor_number(self) -> int:
        with self._lock:
            return self._active_floor

    @property
    def selected_room_id(self) -> Optional[str]:
        with self._lock:
            return self._selected_room_id

    def active_floor(self) -> Floor:
        floor = self._repository.get_floor(self.active_floor_number)
        if floor is None:
            raise FloorNotFoundError(f"Floor {self.active_floor_number} does not exist")
        return floor

    def _require_room(self, room_id: str) -> Room:
        room = self._repository.get_room(room_id)
        if room is None:
            raise RoomNotFoundError(f"Room '{room_id}' does not exist")
        return room

    def _require_staff(self, action: str) -> None:
        if self.mode is not UserMode.STAFF:
            raise StaffModeRequiredError(f"{action} requires staff mode")

    def update_preferences(self, **changes: Any) -> Preferences:
        with self._lock:
            self._preferences = replace(self._preferences, **changes)
            preferences = self._preferences
        logger.info(
            "Preferences updated | quiet_vs_access=%s | avoid_elevator=%s | premium_tolerance=%s",
            preferences.quiet_vs_access,
            preferences.avoid_elevator,
            preferences.premium_tolerance,
        )
        return preferences

    def set_mode(self, mode: UserMode | str) -> UserMode:
        resolved = UserMode(mode)
        with self._lock:
            self._mode = resolved
        logger.info("Mode changed | mode=%s", resolved.value)
        return resolved

    def jump_to_floor(self, floor_number: int) -> Floor:
        floor = self._repository.get_floor(floor_number)
        if floor is None:
            raise FloorNotFoundError(f"Floor {floor_number} does not exist")
        with self._lock:
            self._active_floor = floor_number
            self._selected_room_id = None
        return floor

    def select_room(self, room_id: str) -> Optional[str]:
        """Toggle selection: selecting the selected room clears it."""
        self._require_room(room_id)
        with self._lock:
            self._selected_room_id = None if self._selected_room_id == room_id else room_id
            return self._selected_room_id

    def recommendations(self, top_n: Optional[int] = None) -> list[RankedRoom]:
        return self._matching_service.recommend_for_floor(
            self.active_floor().number,
            self.preferences,
            top_n,
        )

    def rate_for(self, match: MatchResult) -> int:
        return self._matching_service.rate_for(match)

    def room_summary(self, room_id: str) -> RoomSummary:
        room = self._require_room(room_id)
        match = self._matching_service.match_room(room, self.preferences)
        return RoomSummary(
            room=room,
            match=match,
            estimated_rate=self.rate_for(match),
        )

    def floor_overview(self) -> FloorOverview:
        floor = self.active_floor()
        return FloorOverview(
            floor=floor,
            slot_count=hallway_slot_count(
                floor.rooms,
                floor.landmarks,
                minimum=self._settings.hallway_min_slots,
            ),
            landmarks_by_slot=group_landmarks_by_slot(floor.landmarks),
        )

    def submit_signal(self, room_id: str, draft: SignalDraft) -> Room:
        updated = self._repository.update_room(room_id, lambda room: apply_signal(room, draft))
        if updated is None:
            raise RoomNotFoundError(f"Room '{room_id}' does not exist")
        logger.info(
            "Signal applied | floor=%s | room_id=%s | reports=%s | love=%s | quiet=%s | access=%s",
            self._repository.find_room_floor(updated.room_id),
            updated.room_id,
            updated.reports,
            updated.love,
            updated.quiet,
            updated.access,
        )
        return updated

    def move_landmark(self, landmark_id: str, new_index: int) -> list[Landmark]:
        self._require_staff("Moving a landmark")
        floor = self.active_floor()
        floor_number = floor.number
        if not any(item.landmark_id == landmark_id for item in floor.landmarks):
            return reposition_landmark(floor.landmarks, landmark_id, new_index)
        updated = self._repository.update_landmarks(
            floor_number,
            lambda landmarks: reposition_landmark(landmarks, landmark_id, new_index),
        )
        if updated is None:
            raise FloorNotFoundError(f"Floor {floor_number} does not exist")
        logger.info(
            "Landmark moved | floor=%s | landmark_id=%s | index=%s",
            floor_number,
            landmark_id,
            new_index,
        )
        return updated

    def add_landmark(self, amenity_type: AmenityType | str) -> list[Landmark]:
        self._require_staff("Adding a landmark")
        resolved = AmenityType(amenity_type)
        floor_number = self.active_floor().number
        updated = self._repository.update_landmarks(
            floor_number,
            lambda landmarks: add_landmark(landmarks, resolved),
        )
        if updated is None:
            raise FloorNotFoundError(f"Floor {floor_number} does not exist")
        logger.info(
            "Landmark added | floor=%s | landmark_id=%s | index=%s",
            floor_number,
            updated[-1].landmark_id,
            updated[-1].index,
        )
        return updated
