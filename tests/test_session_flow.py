from __future__ import annotations

import logging
from dataclasses import replace

import pytest
from pydantic import ValidationError

from roomsense.controllers.session_controller import (
    AddLandmarkCommand,
    MoveLandmarkCommand,
    SessionController,
    SubmitSignalCommand,
    UpdatePreferencesCommand,
)
from roomsense.domain.models import AmenityType, Confidence, UserMode
from roomsense.main import create_session
from roomsense.repository.hotel_repository import HotelRepository
from roomsense.services.matching_service import RoomMatchingService
from roomsense.services.session_service import (
    FloorNotFoundError,
    RoomNotFoundError,
    SessionService,
    StaffModeRequiredError,
)
from roomsense.utils.config import get_settings


def _build_test_settings(**overrides):
    get_settings.cache_clear()
    base = get_settings()
    defaults = {
        "default_quiet_vs_access": 65,
        "default_avoid_elevator": True,
        "default_premium_tolerance": 6,
        "default_floor_number": 3,
        "default_mode": "guest",
        "recommendation_top_n": 3,
        "hallway_min_slots": 8,
    }
    defaults.update(overrides)
    return replace(base, **defaults)


def _build_session(**overrides) -> tuple[SessionService, SessionController]:
    settings = _build_test_settings(**overrides)
    repository = HotelRepository(settings)
    repository.seed_demo_hotel()
    matching_service = RoomMatchingService(repository=repository, settings=settings)
    session = SessionService(
        repository=repository,
        matching_service=matching_service,
        settings=settings,
    )
    return session, SessionController(session)


def test_guest_end_to_end_flow() -> None:
    controller = create_session(_build_test_settings())

    recommendations = controller.recommendations()
    assert recommendations.floor_number == 3
    assert [item.room.number for item in recommendations.recommendations[:2]] == ["310", "319"]
    top = recommendations.recommendations[0]
    assert top.match.score == 87
    assert top.match.confidence is Confidence.HIGH
    assert top.estimated_rate == 171

    before = controller.room_summary("room-301")
    assert before.match.confidence is Confidence.LOW

    updated = controller.submit_signal(
        SubmitSignalCommand(
            room_id="room-301",
            quiet=5,
            love=5,
            convenience=5,
            tag=" view ",
            note="Great light",
        )
    )
    assert updated.love == 4
    assert updated.quiet == 3
    assert updated.access == 9
    assert updated.reports == 5
    assert updated.tags == ["noisy", "deal", "view"]
    assert updated.notes == "Next to elevator • Great light"

    after = controller.room_summary("room-301")
    assert after.room == updated
    assert after.match.score >= before.match.score


def test_preferences_survive_floor_changes_and_rescore() -> None:
    session, controller = _build_session()

    prefs = controller.update_preferences(UpdatePreferencesCommand(quiet_vs_access=0))
    assert prefs.quiet_vs_access == 0
    assert prefs.avoid_elevator is True
    assert prefs.premium_tolerance == 6

    overview = controller.jump_to_floor(5)
    assert overview.name == "Skyline"
    assert overview.feature == "Rooftop Bar"
    assert session.preferences.quiet_vs_access == 0
    assert controller.recommendations(top_n=8).floor_number == 5
    assert len(controller.recommendations(top_n=8).recommendations) == 8


def test_jump_clears_selection_and_selection_toggles() -> None:
    session, _ = _build_session()

    assert session.select_room("room-310") == "room-310"
    assert session.select_room("room-310") is None
    session.select_room("room-305")

    session.jump_to_floor(4)

    assert session.selected_room_id is None
    assert session.active_floor_number == 4


def test_controller_select_room_returns_summary_until_cleared() -> None:
    session, controller = _build_session()

    selected = controller.select_room("room-310")

    assert selected is not None
    assert session.selected_room_id == "room-310"
    assert selected.room.number == "310"
    assert selected.match.score == 87
    assert selected.match.confidence is Confidence.HIGH
    assert selected.estimated_rate == 171
    assert controller.select_room("room-310") is None
    assert session.selected_room_id is None
    with pytest.raises(RoomNotFoundError):
        controller.select_room("room-999")


def test_unknown_floor_and_room_raise() -> None:
    session, controller = _build_session()

    with pytest.raises(FloorNotFoundError):
        session.jump_to_floor(99)
    with pytest.raises(RoomNotFoundError):
        controller.room_summary("room-999")
    with pytest.raises(RoomNotFoundError):
        controller.submit_signal(SubmitSignalCommand(room_id="room-999"))


def test_lobby_is_amenity_level_without_recommendations() -> None:
    _, controller = _build_session()

    overview = controller.jump_to_floor(1)

    assert overview.is_amenity_level is True
    assert overview.capacity_label == "amenity"
    assert overview.slot_count == 8
    assert controller.recommendations().recommendations == []


def test_guest_cannot_edit_landmarks() -> None:
    _, controller = _build_session()

    with pytest.raises(StaffModeRequiredError):
        controller.add_landmark(AddLandmarkCommand(type=AmenityType.GYM))
    with pytest.raises(StaffModeRequiredError):
        controller.move_landmark(MoveLandmarkCommand(landmark_id="elevator-f3-0", new_index=2))


def test_staff_adds_and_moves_landmarks() -> None:
    session, controller = _build_session()
    controller.set_mode(UserMode.STAFF)

    added = controller.add_landmark(AddLandmarkCommand(type="laundry"))
    new_landmark = added.landmarks[-1]
    assert added.floor_number == 3
    assert new_landmark.index == 8
    assert new_landmark.label == "Laundry"

    moved = controller.move_landmark(
        MoveLandmarkCommand(landmark_id=new_landmark.landmark_id, new_index=3)
    )
    indices = {item.landmark_id: item.index for item in moved.landmarks}
    assert indices[new_landmark.landmark_id] == 3
    assert indices["elevator-f3-0"] == 0
    assert indices["ice-f3-1"] == 3
    assert indices["stairs-f3-2"] == 7

    overview = controller.floor_overview()
    assert [item.landmark_id for item in overview.hallway[3]] == [
        "ice-f3-1",
        new_landmark.landmark_id,
    ]
    assert overview.slot_count == 10

    controller.move_landmark(MoveLandmarkCommand(landmark_id="stairs-f3-2", new_index=12))
    assert controller.floor_overview().slot_count == 13

    other_floor = session.jump_to_floor(2)
    assert len(other_floor.landmarks) == 3


def test_moving_unknown_landmark_is_noop() -> None:
    session, controller = _build_session(default_mode="staff")
    before = list(session.active_floor().landmarks)

    moved = controller.move_landmark(MoveLandmarkCommand(landmark_id="missing", new_index=4))

    assert [item.index for item in moved.landmarks] == [item.index for item in before]


def test_moving_unknown_landmark_skips_write_and_move_log(caplog) -> None:
    session, controller = _build_session(default_mode="staff")
    floor = session.active_floor()

    with caplog.at_level(logging.INFO, logger="roomsense"):
        controller.move_landmark(MoveLandmarkCommand(landmark_id="missing", new_index=4))

    messages = [record.getMessage() for record in caplog.records]
    assert not any(message.startswith("Landmark moved") for message in messages)
    assert any("landmark_id=missing" in message for message in messages)
    assert session.active_floor() is floor


def test_signal_log_names_the_mutated_floor(caplog) -> None:
    _, controller = _build_session()
    controller.jump_to_floor(4)

    with caplog.at_level(logging.INFO, logger="roomsense"):
        controller.submit_signal(SubmitSignalCommand(room_id="room-301"))

    assert any(
        record.getMessage().startswith("Signal applied | floor=3 | room_id=room-301")
        for record in caplog.records
    )

@pytest.mark.parametrize(
    "payload",
    [
        {"room_id": "room-301", "quiet": 6},
        {"room_id": "room-301", "love": 0},
        {"room_id": "room-301", "convenience": 9},
        {"room_id": ""},
    ],
)
def test_signal_command_rejects_out_of_range_sliders(payload: dict) -> None:
    with pytest.raises(ValidationError):
        SubmitSignalCommand(**payload)


@pytest.mark.parametrize(
    "payload",
    [
        {"quiet_vs_access": 101},
        {"quiet_vs_access": -1},
        {"premium_tolerance": 11},
    ],
)
def test_preferences_command_rejects_out_of_range_values(payload: dict) -> None:
    with pytest.raises(ValidationError):
        UpdatePreferencesCommand(**payload)


def test_move_command_rejects_negative_index() -> None:
    with pytest.raises(ValidationError):
        MoveLandmarkCommand(landmark_id="elevator-f3-0", new_index=-1)
