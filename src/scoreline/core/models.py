"""Snapshot and timing models shared by the presenter and the feed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ScoreVisibility(StrEnum):
    """StreamControl checkbox values for the score visibility option."""

    HIDDEN = "0"
    VISIBLE = "1"


class RotationState(StrEnum):
    MAIN_VISIBLE = "main"
    SUB_VISIBLE = "sub"

    @property
    def other(self) -> RotationState:
        if self is RotationState.MAIN_VISIBLE:
            return RotationState.SUB_VISIBLE
        return RotationState.MAIN_VISIBLE


def parse_duration_override(value: str | None) -> int | None:
    """Parse a snapshot duration override.

    Durations are positive integers of milliseconds. Missing, empty,
    non-integer, zero or negative input gives None so the caller keeps its
    current value.
    """
    if value is None:
        return None
    text = value.strip()
    if not text.isdigit():
        return None
    try:
        parsed = int(text)
    except ValueError:
        return None
    return parsed if parsed > 0 else None


@dataclass(slots=True)
class Durations:
    """Effective animation timings in milliseconds."""

    main_language: int
    sub_language: int
    fade: int

    def apply_overrides(self, snapshot: Snapshot) -> list[str]:
        """Replace timings the snapshot overrides; return the names that changed."""
        changed: list[str] = []
        overrides = {
            "main_language": snapshot.options_duration_main_language,
            "sub_language": snapshot.options_duration_sub_language,
            "fade": snapshot.options_duration_fade,
        }
        for name, raw in overrides.items():
            parsed = parse_duration_override(raw)
            if parsed is None:
                if raw:
                    logger.debug("Ignoring malformed %s override: %r", name, raw)
                continue
            if parsed == getattr(self, name):
                continue
            setattr(self, name, parsed)
            changed.append(name)
        return changed


@dataclass(frozen=True, slots=True)
class RotationConfig:
    """Texts and timings for one rotating field."""

    main_text: str
    sub_text: str
    main_duration: float
    sub_duration: float
    fade_duration: float

    def __post_init__(self) -> None:
        for name in ("main_duration", "sub_duration", "fade_duration"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def period(self) -> float:
        """Nominal length of one main + sub cycle."""
        return self.fade_duration * 2 + self.main_duration + self.sub_duration

    def text_for(self, state: RotationState) -> str:
        return self.main_text if state is RotationState.MAIN_VISIBLE else self.sub_text

    def hold_for(self, state: RotationState) -> float:
        return self.main_duration if state is RotationState.MAIN_VISIBLE else self.sub_duration


class Snapshot(BaseModel):
    """One StreamControl JSON document."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
        frozen=True,
    )

    timestamp: str
    match_event: str = Field(default="", alias="matchEvent")
    match_player1_name_main: str = Field(default="", alias="matchPlayer1NameMain")
    match_player1_name_sub: str = Field(default="", alias="matchPlayer1NameSub")
    match_player1_score: str = Field(default="", alias="matchPlayer1Score")
    match_player2_name_main: str = Field(default="", alias="matchPlayer2NameMain")
    match_player2_name_sub: str = Field(default="", alias="matchPlayer2NameSub")
    match_player2_score: str = Field(default="", alias="matchPlayer2Score")
    options_duration_main_language: str | None = Field(
        default=None, alias="optionsDurationMainLanguage"
    )
    options_duration_sub_language: str | None = Field(
        default=None, alias="optionsDurationSubLanguage"
    )
    options_duration_fade: str | None = Field(default=None, alias="optionsDurationFade")
    options_mode_score_visibility: str | None = Field(
        default=None, alias="optionsModeScoreVisibility"
    )

    @property
    def score_visibility(self) -> ScoreVisibility | None:
        """Requested layout mode, or None when the snapshot does not say."""
        value = self.options_mode_score_visibility
        if not value:
            return None
        if value == ScoreVisibility.VISIBLE:
            return ScoreVisibility.VISIBLE
        return ScoreVisibility.HIDDEN
