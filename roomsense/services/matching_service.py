"""Room match scoring, rate suggestion, and ranking."""

from __future__ import annotations

from typing import Iterable, Optional

from roomsense.domain.constraints import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    clamp,
    round_half_away_from_zero,
    validate_scoring_config,
)
from roomsense.domain.models import Confidence, MatchResult, Preferences, RankedRoom, Room
from roomsense.repository.hotel_repository import HotelRepository
from roomsense.utils.config import Settings, get_settings
from roomsense.utils.logger import get_logger


logger = get_logger(__name__)


def has_elevator_exposure(room: Room, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> bool:
    """True when the room is tagged noisy or its notes mention the elevator."""
    if config.noisy_tag in room.tags:
        return True
    return config.elevator_keyword in (room.notes or "").lower()


def confidence_for_score(
    score: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> Confidence:
    if score >= config.high_confidence_score:
        return Confidence.HIGH
    if score >= config.medium_confidence_score:
        return Confidence.MEDIUM
    return Confidence.LOW


def compute_match(
    room: Room,
    prefs: Preferences,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> MatchResult:
    """Score a room against guest preferences.

    The suggested delta is bounded to ``[min_delta, max_delta]`` first and only
    then capped by ``prefs.premium_tolerance``. The tolerance is a ceiling on
    premiums; discounts down to ``min_delta`` always pass through.
    """
    quiet_weight = prefs.quiet_vs_access / 100
    access_weight = 1 - quiet_weight

    elevator_penalty = 0.0
    if prefs.avoid_elevator and has_elevator_exposure(room, config):
        elevator_penalty = config.elevator_penalty

    raw = (
        room.quiet * quiet_weight
        + room.access * access_weight
        + room.view * config.view_weight
        - elevator_penalty
    )
    score = clamp(round_half_away_from_zero(raw * config.score_scale), 0, 100)

    quiet_bias = round_half_away_from_zero(
        (room.quiet - config.quiet_midpoint) * config.quiet_bias_factor * quiet_weight * 2
    )
    suggested = clamp(quiet_bias + room.base_delta, config.min_delta, config.max_delta)
    applied = clamp(suggested, config.min_delta, prefs.premium_tolerance)

    return MatchResult(
        score=score,
        suggested_delta=applied,
        confidence=confidence_for_score(score, config),
    )


def estimated_rate(base_rate: int, match: MatchResult) -> int:
    """Nightly rate after applying the suggested delta."""
    return base_rate + match.suggested_delta


def rank_rooms(
    rooms: Iterable[Room],
    prefs: Preferences,
    top_n: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[RankedRoom]:
    """Return the ``top_n`` best matches, highest score first.

    ``sorted`` is stable, so rooms with equal scores keep catalog order.
    """
    scored = [RankedRoom(room=room, match=compute_match(room, prefs, config)) for room in rooms]
    ranked = sorted(scored, key=lambda item: item.match.score, reverse=True)
    return ranked[: max(0, top_n)]


class RoomMatchingService:
    """Scores and ranks rooms held by the hotel repository."""

    def __init__(
        self,
        repository: Optional[HotelRepository] = None,
        settings: Optional[Settings] = None,
        config: Optional[ScoringConfig] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or HotelRepository(self._settings)
        self._config = config or DEFAULT_SCORING_CONFIG
        validate_scoring_config(self._config)

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def match_room(self, room: Room, prefs: Preferences) -> MatchResult:
        return compute_match(room, prefs, self._config)

    def rate_for(self, match: MatchResult) -> int:
        return estimated_rate(self._repository.get_hotel().base_rate, match)

    def recommend_for_floor(
        self,
        floor_number: int,
        prefs: Preferences,
        top_n: Optional[int] = None,
    ) -> list[RankedRoom]:
        resolved_top_n = top_n if top_n is not None else self._settings.recommendation_top_n
        floor = self._repository.get_floor(floor_number)
        if floor is None or not floor.rooms:
            logger.debug(
                "No rooms to rank | floor=%s",
                floor_number,
            )
            return []

        ranked = rank_rooms(floor.rooms, prefs, resolved_top_n, self._config)
        logger.debug(
            "Ranked floor | floor=%s | candidates=%s | top_n=%s | best_score=%s",
            floor_number,
            len(floor.rooms),
            resolved_top_n,
            ranked[0].match.score if ranked else None,
        )
        return ranked
