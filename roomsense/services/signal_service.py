"""Folding guest-submitted signals into room attributes."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from roomsense.domain.constraints import (
    DEFAULT_SIGNAL_MERGE_CONFIG,
    SignalMergeConfig,
    clamp,
    round_half_away_from_zero,
)
from roomsense.domain.models import Room, SignalDraft
from roomsense.utils.logger import get_logger


logger = get_logger(__name__)


def merge_tags(existing: Iterable[str], tag: str | None) -> list[str]:
    """Union of existing tags and the trimmed draft tag, first occurrence wins."""
    candidates = list(existing)
    cleaned = (tag or "").strip()
    if cleaned:
        candidates.append(cleaned)
    return [item for item in dict.fromkeys(candidates) if item]


def merge_notes(
    existing: str | None,
    note: str | None,
    config: SignalMergeConfig = DEFAULT_SIGNAL_MERGE_CONFIG,
) -> str:
    """Append the draft note as entered; a blank note leaves ``existing`` alone."""
    draft_note = note if note and note.strip() else ""
    parts = [part for part in (existing or "", draft_note) if part]
    merged = config.note_separator.join(parts)[: config.note_max_length]
    return merged or (existing or "")


def slider_boost(value: int, config: SignalMergeConfig = DEFAULT_SIGNAL_MERGE_CONFIG) -> int:
    """Map a 1-5 slider to a single step: up for 4+, down for 2-, else none."""
    if value >= config.boost_high_threshold:
        return 1
    if value <= config.boost_low_threshold:
        return -1
    return 0


def apply_signal(
    room: Room,
    draft: SignalDraft,
    config: SignalMergeConfig = DEFAULT_SIGNAL_MERGE_CONFIG,
) -> Room:
    """Return a new room nudged by one guest signal.

    Each submission moves quiet and access by at most one step and averages
    love with the submitted value, so no single signal overwrites the room.
    """
    if draft.image_url:
        # No room attribute holds imagery yet; the URL is only recorded here.
        logger.info(
            "Signal image not attached | room_id=%s | image_url=%s",
            room.room_id,
            draft.image_url,
        )

    return replace(
        room,
        tags=merge_tags(room.tags, draft.tag),
        notes=merge_notes(room.notes, draft.note, config),
        reports=room.reports + 1,
        love=clamp(
            round_half_away_from_zero((room.love + draft.love) / 2),
            config.love_min,
            config.love_max,
        ),
        quiet=clamp(
            room.quiet + slider_boost(draft.quiet, config),
            config.attribute_min,
            config.attribute_max,
        ),
        access=clamp(
            room.access + slider_boost(draft.convenience, config),
            config.attribute_min,
            config.attribute_max,
        ),
    )
