"""Onboarding reference data and listening-test ratings."""

from dataclasses import dataclass, replace
from typing import Literal

from classica.domain.errors import ValidationError


Tier = Literal["easy", "medium", "hard"]
ExperienceLevel = Literal["new", "casual", "enthusiast"]

# Positional: track index 0 is easy, 1 medium, 2 hard. Ratings are keyed by
# tier name, so this order must not change.
TIERS: tuple[Tier, ...] = ("easy", "medium", "hard")
EXPERIENCE_LEVELS: tuple[ExperienceLevel, ...] = ("new", "casual", "enthusiast")

MIN_RATING = 1
MAX_RATING = 10
DEFAULT_RATING = 5


def tier_for_index(index: int) -> Tier:
    """Map a listening-test track index to its tier."""
    if not 0 <= index < len(TIERS):
        raise ValidationError(
            message=f"Track index {index} is out of range",
            details={"index": index},
        )
    return TIERS[index]


@dataclass(frozen=True)
class MusicTrack:
    """A reference listening-test track."""

    id: int
    file: str
    tier: Tier
    title: str
    composer: str


@dataclass(frozen=True)
class Ratings:
    """Per-tier listening ratings; unset tiers stay at the neutral midpoint."""

    easy: int = DEFAULT_RATING
    medium: int = DEFAULT_RATING
    hard: int = DEFAULT_RATING

    def __post_init__(self) -> None:
        for tier in TIERS:
            _check_rating(getattr(self, tier))

    def with_rating(self, tier: Tier, value: int) -> "Ratings":
        """Return a copy with one tier's rating replaced."""
        if tier not in TIERS:
            raise ValidationError(message=f"Unknown tier: {tier}")
        return replace(self, **{tier: value})

    @property
    def average(self) -> float:
        return (self.easy + self.medium + self.hard) / 3

    def to_dict(self) -> dict[str, int]:
        return {"easy": self.easy, "medium": self.medium, "hard": self.hard}


def _check_rating(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            message="Rating must be an integer",
            details={"value": value},
        )
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(
            message=f"Rating must be between {MIN_RATING} and {MAX_RATING}",
            details={"value": value},
        )


@dataclass(frozen=True)
class TrackRef:
    """The slice of a track the client needs to play it."""

    id: int
    file: str
    tier: Tier

    @classmethod
    def from_track(cls, track: MusicTrack) -> "TrackRef":
        return cls(id=track.id, file=track.file, tier=track.tier)


@dataclass(frozen=True)
class QuestionSet:
    """Interview script for one onboarding run."""

    questions: tuple[str, ...]
    tracks: tuple[TrackRef, ...]
