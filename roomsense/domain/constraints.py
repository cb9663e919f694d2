"""Numeric rules shared by the match and signal engines."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class ScoringConfig:
    view_weight: float = 0.15
    elevator_penalty: float = 1.2
    noisy_tag: str = "noisy"
    elevator_keyword: str = "elevator"
    score_scale: int = 10
    quiet_midpoint: int = 5
    quiet_bias_factor: float = 1.2
    min_delta: int = -15
    max_delta: int = 18
    high_confidence_score: int = 85
    medium_confidence_score: int = 70


@dataclass(frozen=True)
class SignalMergeConfig:
    note_separator: str = " • "
    note_max_length: int = 140
    boost_high_threshold: int = 4
    boost_low_threshold: int = 2
    attribute_min: int = 1
    attribute_max: int = 10
    love_min: int = 1
    love_max: int = 5


DEFAULT_SCORING_CONFIG = ScoringConfig()
DEFAULT_SIGNAL_MERGE_CONFIG = SignalMergeConfig()


def validate_scoring_config(config: ScoringConfig) -> None:
    if config.view_weight < 0.0:
        raise ValueError("view_weight must be >= 0")
    if config.elevator_penalty < 0.0:
        raise ValueError("elevator_penalty must be >= 0")
    if config.score_scale <= 0:
        raise ValueError("score_scale must be > 0")
    if config.min_delta > config.max_delta:
        raise ValueError("min_delta must be <= max_delta")
    if config.medium_confidence_score > config.high_confidence_score:
        raise ValueError("medium_confidence_score must be <= high_confidence_score")
    if not config.noisy_tag or not config.elevator_keyword:
        raise ValueError("noisy_tag and elevator_keyword must be non-empty")


def validate_signal_merge_config(config: SignalMergeConfig) -> None:
    if config.note_max_length <= 0:
        raise ValueError("note_max_length must be > 0")
    if config.boost_low_threshold >= config.boost_high_threshold:
        raise ValueError("boost_low_threshold must be < boost_high_threshold")
    if config.attribute_min > config.attribute_max:
        raise ValueError("attribute_min must be <= attribute_max")
    if config.love_min > config.love_max:
        raise ValueError("love_min must be <= love_max")


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, sending exact .5 ties away from zero.

    The float is read through its shortest decimal representation, so
    ``3.5`` rounds to 4 and ``-2.5`` rounds to -3.
    """
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
