"""Hallway landmark placement rules."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from typing import Iterable, Sequence
from uuid import uuid4

from roomsense.domain.models import AmenityType, Landmark, Room, Wing
from roomsense.utils.logger import get_logger


logger = get_logger(__name__)


def new_landmark_id(amenity_type: AmenityType) -> str:
    return f"{amenity_type.value}-{uuid4().hex[:7]}"


def next_slot_index(landmarks: Iterable[Landmark]) -> int:
    return max([0, *(landmark.index for landmark in landmarks)]) + 1


def reposition_landmark(
    landmarks: Sequence[Landmark],
    landmark_id: str,
    new_index: int,
) -> list[Landmark]:
    """Move one landmark to ``new_index``; every other landmark is untouched.

    An unknown id returns the collection unchanged. Shared slots are allowed.
    """
    if not any(landmark.landmark_id == landmark_id for landmark in landmarks):
        logger.warning("Landmark not found; move ignored | landmark_id=%s", landmark_id)
        return list(landmarks)

    return [
        replace(landmark, index=new_index) if landmark.landmark_id == landmark_id else landmark
        for landmark in landmarks
    ]


def add_landmark(landmarks: Sequence[Landmark], amenity_type: AmenityType) -> list[Landmark]:
    """Append a landmark one slot past the furthest existing one."""
    created = Landmark(
        landmark_id=new_landmark_id(amenity_type),
        type=amenity_type,
        index=next_slot_index(landmarks),
    )
    return [*landmarks, created]


def group_landmarks_by_slot(landmarks: Iterable[Landmark]) -> dict[int, list[Landmark]]:
    grouped: dict[int, list[Landmark]] = defaultdict(list)
    for landmark in landmarks:
        grouped[landmark.index].append(landmark)
    return dict(grouped)


def hallway_slot_count(
    rooms: Iterable[Room],
    landmarks: Iterable[Landmark],
    minimum: int = 8,
) -> int:
    """Slots needed to show both wings and every landmark position."""
    wing_sizes = defaultdict(int)
    for room in rooms:
        wing_sizes[room.wing] += 1
    furthest = max([-1, *(landmark.index for landmark in landmarks)])
    return max(
        wing_sizes[Wing.LEFT],
        wing_sizes[Wing.RIGHT],
        minimum,
        furthest + 1,
    )
