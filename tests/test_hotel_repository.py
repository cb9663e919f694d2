from __future__ import annotations

import pytest

from roomsense.domain.models import SignalDraft, Wing
from roomsense.repository.hotel_repository import (
    CatalogNotLoadedError,
    HotelRepository,
    create_room_range,
)
from roomsense.services.signal_service import apply_signal


def _seeded_repository() -> HotelRepository:
    repository = HotelRepository()
    repository.seed_demo_hotel()
    return repository


def test_reading_before_seed_raises() -> None:
    repository = HotelRepository()

    with pytest.raises(CatalogNotLoadedError):
        repository.get_hotel()


def test_seed_loads_demo_catalog_once() -> None:
    repository = _seeded_repository()
    hotel = repository.get_hotel()

    repository.seed_demo_hotel()

    assert repository.get_hotel() is hotel
    assert hotel.base_rate == 165
    assert repository.list_floor_numbers() == [1, 2, 3, 4, 5]
    assert [len(floor.rooms) for floor in hotel.floors] == [0, 16, 20, 12, 8]


def test_create_room_range_assigns_wings_and_seeded_attributes() -> None:
    rooms = create_room_range(301, 304, {"302": {"quiet": 9, "tags": ["quiet"]}})

    assert [room.wing for room in rooms] == [Wing.LEFT, Wing.RIGHT, Wing.LEFT, Wing.RIGHT]
    assert [room.position for room in rooms] == [0, 1, 2, 3]
    first = rooms[0]
    assert (first.quiet, first.view, first.access, first.reports, first.love) == (5, 5, 7, 4, 3)
    assert rooms[1].quiet == 9
    assert rooms[1].tags == ["quiet"]
    assert rooms[2].tags == []


def test_demo_overrides_are_applied() -> None:
    repository = _seeded_repository()

    room = repository.get_room("room-301")

    assert room is not None
    assert room.tags == ["noisy", "deal"]
    assert room.notes == "Next to elevator"
    assert room.base_delta == -12
    assert repository.find_room_floor("room-301") == 3


def test_update_room_replaces_only_target() -> None:
    repository = _seeded_repository()
    neighbour = repository.get_room("room-302")

    updated = repository.update_room("room-301", lambda room: apply_signal(room, SignalDraft()))

    assert updated is not None
    assert repository.get_room("room-301") == updated
    assert repository.get_room("room-302") == neighbour


def test_update_missing_room_or_floor_returns_none() -> None:
    repository = _seeded_repository()
    hotel = repository.get_hotel()

    assert repository.update_room("room-999", lambda room: room) is None
    assert repository.update_landmarks(42, lambda landmarks: landmarks) is None
    assert repository.get_hotel() is hotel
