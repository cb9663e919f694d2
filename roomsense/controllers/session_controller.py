"""Typed command interface between the presentation layer and the session."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from roomsense.domain.models import (
    AmenityType,
    Confidence,
    Landmark,
    MatchResult,
    Room,
    SignalDraft,
    UserMode,
    Wing,
)
from roomsense.services.session_service import SessionService


class UpdatePreferencesCommand(BaseModel):
    """Partial preference update; omitted fields keep their current value."""

    quiet_vs_access: Optional[int] = Field(default=None, ge=0, le=100)
    avoid_elevator: Optional[bool] = None
    premium_tolerance: Optional[int] = Field(default=None, ge=0, le=10)


class SubmitSignalCommand(BaseModel):
    room_id: str = Field(min_length=1)
    quiet: int = Field(default=4, ge=1, le=5)
    love: int = Field(default=4, ge=1, le=5)
    convenience: int = Field(default=3, ge=1, le=5)
    tag: str = ""
    note: str = ""
    image_url: str = ""

    @field_validator("tag", "image_url")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

    def to_draft(self) -> SignalDraft:
        return SignalDraft(
            quiet=self.quiet,
            love=self.love,
            convenience=self.convenience,
            tag=self.tag,
            note=self.note,
            image_url=self.image_url,
        )


class MoveLandmarkCommand(BaseModel):
    landmark_id: str = Field(min_length=1)
    new_index: int = Field(ge=0)


class AddLandmarkCommand(BaseModel):
    type: AmenityType


class PreferencesResponse(BaseModel):
    quiet_vs_access: int = Field(ge=0, le=100)
    avoid_elevator: bool
    premium_tolerance: int = Field(ge=0, le=10)


class MatchResponse(BaseModel):
    score: int = Field(ge=0, le=100)
    suggested_delta: int = Field(ge=-15, le=18)
    confidence: Confidence

    @classmethod
    def from_result(cls, result: MatchResult) -> "MatchResponse":
        return cls(
            score=result.score,
            suggested_delta=result.suggested_delta,
            confidence=result.confidence,
        )


class RoomResponse(BaseModel):
    room_id: str
    number: str
    wing: Wing
    position: int = Field(ge=0)
    quiet: int = Field(ge=1, le=10)
    view: int = Field(ge=1, le=10)
    access: int = Field(ge=1, le=10)
    base_delta: int
    tags: list[str]
    notes: str = Field(max_length=140)
    reports: int = Field(ge=0)
    love: int = Field(ge=1, le=5)

    @classmethod
    def from_room(cls, room: Room) -> "RoomResponse":
        return cls(
            room_id=room.room_id,
            number=room.number,
            wing=room.wing,
            position=room.position,
            quiet=room.quiet,
            view=room.view,
            access=room.access,
            base_delta=room.base_delta,
            tags=list(room.tags),
            notes=room.notes,
            reports=room.reports,
            love=room.love,
        )


class RoomMatchResponse(BaseModel):
    room: RoomResponse
    match: MatchResponse
    estimated_rate: int


class RecommendationResponse(BaseModel):
    floor_number: int
    recommendations: list[RoomMatchResponse]


class LandmarkResponse(BaseModel):
    landmark_id: str
    type: AmenityType
    label: str
    index: int = Field(ge=0)

    @classmethod
    def from_landmark(cls, landmark: Landmark) -> "LandmarkResponse":
        return cls(
            landmark_id=landmark.landmark_id,
            type=landmark.type,
            label=landmark.label,
            index=landmark.index,
        )


class LandmarksResponse(BaseModel):
    floor_number: int
    landmarks: list[LandmarkResponse]


class FloorOverviewResponse(BaseModel):
    number: int
    name: str
    feature: Optional[str] = None
    is_amenity_level: bool
    capacity_label: str
    slot_count: int = Field(ge=0)
    hallway: dict[int, list[LandmarkResponse]]


class SessionController:
    """Validates commands at the boundary and forwards them to the session."""

    def __init__(self, session: SessionService) -> None:
        self._session = session

    def update_preferences(self, command: UpdatePreferencesCommand) -> PreferencesResponse:
        preferences = self._session.update_preferences(**command.model_dump(exclude_none=True))
        return PreferencesResponse(
            quiet_vs_access=preferences.quiet_vs_access,
            avoid_elevator=preferences.avoid_elevator,
            premium_tolerance=preferences.premium_tolerance,
        )

    def set_mode(self, mode: UserMode) -> UserMode:
        return self._session.set_mode(mode)

    def jump_to_floor(self, floor_number: int) -> FloorOverviewResponse:
        self._session.jump_to_floor(floor_number)
        return self.floor_overview()

    def floor_overview(self) -> FloorOverviewResponse:
        overview = self._session.floor_overview()
        return FloorOverviewResponse(
            number=overview.floor.number,
            name=overview.floor.name,
            feature=overview.floor.feature,
            is_amenity_level=overview.floor.is_amenity_level,
            capacity_label=overview.capacity_label,
            slot_count=overview.slot_count,
            hallway={
                index: [LandmarkResponse.from_landmark(item) for item in landmarks]
                for index, landmarks in sorted(overview.landmarks_by_slot.items())
            },
        )

    def recommendations(self, top_n: Optional[int] = None) -> RecommendationResponse:
        ranked = self._session.recommendations(top_n)
        rows = [
            RoomMatchResponse(
                room=RoomResponse.from_room(item.room),
                match=MatchResponse.from_result(item.match),
                estimated_rate=self._session.rate_for(item.match),
            )
            for item in ranked
        ]
        return RecommendationResponse(
            floor_number=self._session.active_floor_number,
            recommendations=rows,
        )

    def room_summary(self, room_id: str) -> RoomMatchResponse:
        summary = self._session.room_summary(room_id)
        return RoomMatchResponse(
            room=RoomResponse.from_room(summary.room),
            match=MatchResponse.from_result(summary.match),
            estimated_rate=summary.estimated_rate,
        )

    def select_room(self, room_id: str) -> Optional[RoomMatchResponse]:
        """Toggle the selected room; returns its summary, or None once cleared."""
        selected = self._session.select_room(room_id)
        if selected is None:
            return None
        return self.room_summary(selected)

    def submit_signal(self, command: SubmitSignalCommand) -> RoomResponse:
        room = self._session.submit_signal(command.room_id, command.to_draft())
        return RoomResponse.from_room(room)

    def move_landmark(self, command: MoveLandmarkCommand) -> LandmarksResponse:
        landmarks = self._session.move_landmark(command.landmark_id, command.new_index)
        return self._landmarks_response(landmarks)

    def add_landmark(self, command: AddLandmarkCommand) -> LandmarksResponse:
        landmarks = self._session.add_landmark(command.type)
        return self._landmarks_response(landmarks)

    def _landmarks_response(self, landmarks: list[Landmark]) -> LandmarksResponse:
        return LandmarksResponse(
            floor_number=self._session.active_floor_number,
            landmarks=[LandmarkResponse.from_landmark(item) for item in landmarks],
        )
