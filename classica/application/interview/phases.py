"""Interview phases and the pure transition function between them.

The interview runs::

    welcome -> question(0) .. question(N-1) -> transition
            -> music(0) -> music(1) -> music(2) -> done

``skip`` and ``hang_up`` end the run from any phase. Every (phase, action)
pair either yields the next phase or raises InvalidStateError; the caller's
phase is never left half-updated.
"""

from dataclasses import dataclass
from typing import Literal

from classica.domain.errors import InvalidStateError

EndReason = Literal["skipped", "hung_up"]


# --- Phases ---


@dataclass(frozen=True)
class Welcome:
    name = "welcome"


@dataclass(frozen=True)
class Question:
    index: int
    name = "question"


@dataclass(frozen=True)
class Transition:
    name = "transition"


@dataclass(frozen=True)
class Music:
    """Listening test step for one track.

    ``listening`` is true while the track plays; false means the rating step.
    """

    index: int
    listening: bool = False
    name = "music"


@dataclass(frozen=True)
class Done:
    name = "done"


@dataclass(frozen=True)
class Ended:
    reason: EndReason
    name = "ended"


Phase = Welcome | Question | Transition | Music | Done | Ended


# --- Actions ---


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Answered:
    pass


@dataclass(frozen=True)
class BeginListening:
    pass


@dataclass(frozen=True)
class PlaybackStarted:
    pass


@dataclass(frozen=True)
class PlaybackStopped:
    pass


@dataclass(frozen=True)
class NextTrack:
    pass


@dataclass(frozen=True)
class Skip:
    pass


@dataclass(frozen=True)
class HangUp:
    pass


Action = (
    Start
    | Answered
    | BeginListening
    | PlaybackStarted
    | PlaybackStopped
    | NextTrack
    | Skip
    | HangUp
)


def is_active(phase: Phase) -> bool:
    """Whether the phase counts as an ongoing call (timer running)."""
    return not isinstance(phase, (Welcome, Done, Ended))


def advance(phase: Phase, action: Action, *, question_count: int, track_count: int) -> Phase:
    """Return the phase that follows ``phase`` under ``action``."""
    if isinstance(action, (Skip, HangUp)):
        if isinstance(phase, Ended):
            return phase
        return Ended(reason="skipped" if isinstance(action, Skip) else "hung_up")

    match phase, action:
        case Welcome(), Start():
            return Question(0) if question_count > 0 else Transition()

        case Question(index=i), Answered():
            return Question(i + 1) if i + 1 < question_count else Transition()

        case Transition(), BeginListening():
            return Music(0) if track_count > 0 else Done()

        case Music(index=i), PlaybackStarted():
            return Music(i, listening=True)

        case Music(index=i), PlaybackStopped():
            return Music(i, listening=False)

        case Music(index=i), NextTrack():
            return Music(i + 1) if i + 1 < track_count else Done()

    raise InvalidStateError(
        message=f"Cannot {type(action).__name__} during {phase.name}",
        details={"phase": phase.name, "action": type(action).__name__},
    )
