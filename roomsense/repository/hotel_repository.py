"""In-memory catalog repository for the hotel aggregate."""

from __future__ import annotations

from dataclasses import replace
from threading import RLock
from typing import Any, Callable, Optional, Sequence

from roomsense.domain.constraints import clamp
from roomsense.domain.models import AmenityType, Floor, Hotel, Landmark, Room, Wing
from roomsense.utils.config import Settings, get_settings
from roomsense.utils.logger import get_logger


logger = get_logger(__name__)


class CatalogNotLoadedError(Exception):
    """Raised when the catalog is read before it has been seeded."""


def _seed_landmark(amenity_type: AmenityType, index: int, floor_number: int, ordinal: int) -> Landmark:
    return Landmark(
        landmark_id=f"{amenity_type.value}-f{floor_number}-{ordinal}",
        type=amenity_type,
        index=index,
    )


def create_room_range(
    start: int,
    end: int,
    overrides: Optional[dict[str, dict[str, Any]]] = None,
) -> list[Room]:
    """Generate rooms ``start..end`` inclusive; odd numbers go to the left wing."""
    overrides = overrides or {}
    rooms: list[Room] = []
    for number in range(start, end + 1):
        label = str(number)
        seed = number % 10
        base = Room(
            room_id=f"room-{label}",
            number=label,
            wing=Wing.LEFT if number % 2 == 1 else Wing.RIGHT,
            position=number - start,
            quiet=clamp(4 + (seed % 4), 1, 10),
            view=clamp(3 + ((seed + 1) % 4), 1, 10),
            access=7 if seed < 3 or seed > 7 else 5,
            base_delta=0,
            tags=[],
            notes="",
            reports=2 + seed * 2,
            love=clamp(2 + (seed % 4), 1, 5),
        )
        rooms.append(replace(base, **overrides.get(label, {})))
    return rooms


def _floor_landmarks(floor_number: int, placements: Sequence[tuple[AmenityType, int]]) -> list[Landmark]:
    return [
        _seed_landmark(amenity_type, index, floor_number, ordinal)
        for ordinal, (amenity_type, index) in enumerate(placements)
    ]


def build_demo_hotel() -> Hotel:
    """Deterministic demo catalog: a lobby plus four guest floors."""
    return Hotel(
        hotel_id="roomsense-demo",
        name="Layout Intelligence Copilot",
        location="Demo City",
        base_rate=165,
        image_url=(
            "https://images.unsplash.com/photo-1566073771259-6a8506099945"
            "?q=80&w=1600&auto=format&fit=crop"
        ),
        floors=[
            Floor(
                number=1,
                name="Lobby",
                rooms=[],
                is_amenity_level=True,
                feature="Arrival / Concierge",
                landmarks=_floor_landmarks(
                    1,
                    [(AmenityType.ELEVATOR, 1), (AmenityType.STAIRS, 6), (AmenityType.GYM, 2)],
                ),
            ),
            Floor(
                number=2,
                name="Level 2",
                rooms=create_room_range(
                    201,
                    216,
                    {
                        "201": {
                            "quiet": 3,
                            "access": 7,
                            "base_delta": -8,
                            "tags": ["value"],
                            "notes": "Near service core",
                        },
                        "216": {"quiet": 7, "view": 7, "base_delta": 4, "tags": ["quiet"]},
                    },
                ),
                landmarks=_floor_landmarks(
                    2,
                    [(AmenityType.ELEVATOR, 0), (AmenityType.ICE, 4), (AmenityType.STAIRS, 7)],
                ),
            ),
            Floor(
                number=3,
                name="Level 3",
                rooms=create_room_range(
                    301,
                    320,
                    {
                        "301": {
                            "quiet": 2,
                            "access": 8,
                            "base_delta": -12,
                            "tags": ["noisy", "deal"],
                            "notes": "Next to elevator",
                            "love": 2,
                        },
                        "310": {
                            "quiet": 8,
                            "view": 7,
                            "base_delta": 6,
                            "tags": ["quiet", "popular"],
                            "notes": "Corner feel",
                            "love": 5,
                        },
                        "319": {"quiet": 7, "view": 8, "base_delta": 4, "tags": ["quiet"]},
                    },
                ),
                landmarks=_floor_landmarks(
                    3,
                    [(AmenityType.ELEVATOR, 0), (AmenityType.ICE, 3), (AmenityType.STAIRS, 7)],
                ),
            ),
            Floor(
                number=4,
                name="Level 4",
                rooms=create_room_range(
                    401,
                    412,
                    {
                        "401": {
                            "quiet": 3,
                            "access": 7,
                            "base_delta": -6,
                            "tags": ["value"],
                            "notes": "Dawn corridor hum",
                        },
                        "412": {
                            "quiet": 7,
                            "view": 7,
                            "base_delta": 4,
                            "tags": ["quiet", "view"],
                            "love": 4,
                        },
                    },
                ),
                landmarks=_floor_landmarks(
                    4,
                    [(AmenityType.ELEVATOR, 0), (AmenityType.LAUNDRY, 4), (AmenityType.STAIRS, 5)],
                ),
            ),
            Floor(
                number=5,
                name="Skyline",
                feature="Rooftop Bar",
                rooms=create_room_range(
                    501,
                    508,
                    {
                        "501": {
                            "quiet": 4,
                            "view": 9,
                            "base_delta": 0,
                            "tags": ["view"],
                            "notes": "Below rooftop, evening energy",
                        },
                        "508": {
                            "quiet": 8,
                            "view": 9,
                            "base_delta": 14,
                            "tags": ["quiet", "view", "popular"],
                            "notes": "Corner suite feel",
                            "love": 5,
                        },
                    },
                ),
                landmarks=_floor_landmarks(
                    5,
                    [(AmenityType.ELEVATOR, 0), (AmenityType.BAR, 3)],
                ),
            ),
        ],
    )


class HotelRepository:
    """Owns the single in-memory hotel aggregate for a session.

    Mutations are read-modify-write operations keyed by identifier and run
    under one lock, so concurrent callers cannot lose each other's updates.
    """

    def __init__(self, settings: Optional[Settings] = None, hotel: Optional[Hotel] = None) -> None:
        self._settings = settings or get_settings()
        self._lock = RLock()
        self._hotel: Optional[Hotel] = hotel

    def seed_demo_hotel(self) -> None:
        """Load the demo catalog only when nothing is loaded yet."""
        with self._lock:
            if self._hotel is not None:
                logger.info("Catalog already loaded; skipping seed")
                return
            self._hotel = build_demo_hotel()
            logger.info(
                "Demo catalog loaded | hotel_id=%s | floors=%s | rooms=%s",
                self._hotel.hotel_id,
                len(self._hotel.floors),
                sum(len(floor.rooms) for floor in self._hotel.floors),
            )

    def get_hotel(self) -> Hotel:
        with self._lock:
            if self._hotel is None:
                raise CatalogNotLoadedError("Hotel catalog is not loaded. Call seed_demo_hotel() first.")
            return self._hotel

    def list_floor_numbers(self) -> list[int]:
        return sorted(floor.number for floor in self.get_hotel().floors)

    def get_floor(self, floor_number: int) -> Optional[Floor]:
        for floor in self.get_hotel().floors:
            if floor.number == floor_number:
                return floor
        return None

    def get_room(self, room_id: str) -> Optional[Room]:
        for floor in self.get_hotel().floors:
            for room in floor.rooms:
                if room.room_id == room_id:
                    return room
        return None

    def find_room_floor(self, room_id: str) -> Optional[int]:
        for floor in self.get_hotel().floors:
            if any(room.room_id == room_id for room in floor.rooms):
                return floor.number
        return None

    def update_room(self, room_id: str, transform: Callable[[Room], Room]) -> Optional[Room]:
        """Apply ``transform`` to one room atomically; returns the new room."""
        with self._lock:
            hotel = self.get_hotel()
            updated: Optional[Room] = None
            floors: list[Floor] = []
            for floor in hotel.floors:
                rooms: list[Room] = []
                for room in floor.rooms:
                    if room.room_id == room_id and updated is None:
                        room = transform(room)
                        updated = room
                    rooms.append(room)
                floors.append(replace(floor, rooms=rooms))
            if updated is None:
                return None
            self._hotel = replace(hotel, floors=floors)
            return updated

    def update_landmarks(
        self,
        floor_number: int,
        transform: Callable[[list[Landmark]], list[Landmark]],
    ) -> Optional[list[Landmark]]:
        """Apply ``transform`` to one floor's landmarks atomically."""
        with self._lock:
            hotel = self.get_hotel()
            updated: Optional[list[Landmark]] = None
            floors: list[Floor] = []
            for floor in hotel.floors:
                if floor.number == floor_number:
                    updated = list(transform(list(floor.landmarks)))
                    floor = replace(floor, landmarks=updated)
                floors.append(floor)
            if updated is None:
                return None
            self._hotel = replace(hotel, floors=floors)
            return updated
