"""Domain models for the hotel layout catalog and guest preference matching."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Wing(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class AmenityType(str, Enum):
    ELEVATOR = "elevator"
    STAIRS = "stairs"
    ICE = "ice"
    LAUNDRY = "laundry"
    GYM = "gym"
    BAR = "bar"
    STAFF = "staff"
    OTHER = "other"


class Confidence(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class UserMode(str, Enum):
    GUEST = "guest"
    STAFF = "staff"


AMENITY_LABELS: dict[AmenityType, str] = {
    AmenityType.ELEVATOR: "Elevator",
    AmenityType.STAIRS: "Stairs",
    AmenityType.ICE: "Ice Machine",
    AmenityType.LAUNDRY: "Laundry",
    AmenityType.GYM: "Gym",
    AmenityType.BAR: "Bar",
    AmenityType.STAFF: "Staff",
    AmenityType.OTHER: "Amenity",
}


@dataclass(frozen=True)
class Room:
    room_id: str
    number: str
    wing: Wing
    position: int
    quiet: int
    view: int
    access: int
    base_delta: int = 0
    tags: list[str] = field(default_factory=list)
    notes: str = ""
    reports: int = 0
    love: int = 3


@dataclass(frozen=True)
class Landmark:
    landmark_id: str
    type: AmenityType
    index: int

    @property
    def label(self) -> str:
        return AMENITY_LABELS.get(self.type, AMENITY_LABELS[AmenityType.OTHER])


@dataclass(frozen=True)
class Floor:
    number: int
    name: str
    rooms: list[Room] = field(default_factory=list)
    landmarks: list[Landmark] = field(default_factory=list)
    feature: Optional[str] = None
    is_amenity_level: bool = False


@dataclass(frozen=True)
class Hotel:
    hotel_id: str
    name: str
    location: str
    base_rate: int
    floors: list[Floor] = field(default_factory=list)
    image_url: Optional[str] = None


@dataclass(frozen=True)
class Preferences:
    """Guest tradeoff settings for one session.

    ``quiet_vs_access`` is a 0-100 slider where 100 weights quietness fully.
    ``premium_tolerance`` caps positive rate deltas only; discounts pass through.
    """

    quiet_vs_access: int = 65
    avoid_elevator: bool = True
    premium_tolerance: int = 6


@dataclass(frozen=True)
class SignalDraft:
    quiet: int = 4
    love: int = 4
    convenience: int = 3
    tag: str = ""
    note: str = ""
    image_url: str = ""


@dataclass(frozen=True)
class MatchResult:
    score: int
    suggested_delta: int
    confidence: Confidence


@dataclass(frozen=True)
class RankedRoom:
    room: Room
    match: MatchResult
