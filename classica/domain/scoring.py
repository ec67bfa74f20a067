"""Experience scoring from onboarding answers and listening ratings.

The result calibrates prompt tone and depth for the concierge chat.
"""

from collections.abc import Sequence

from classica.domain.entities.onboarding import ExperienceLevel, Ratings

# Answer index that carries the classical-interest signal.
SIGNAL_ANSWER_INDEX = 0

CLASSICAL_TERMS: tuple[str, ...] = (
    "classical",
    "orchestra",
    "symphony",
    "opera",
    "chamber",
    "piano concerto",
)

ENTHUSIAST_MIN_AVERAGE = 7
CASUAL_MIN_AVERAGE = 4


def mentions_classical(answers: Sequence[str]) -> bool:
    """Check the designated answer for classical-music terms."""
    if len(answers) <= SIGNAL_ANSWER_INDEX:
        return False
    answer = answers[SIGNAL_ANSWER_INDEX].lower()
    return any(term in answer for term in CLASSICAL_TERMS)


def score(answers: Sequence[str], ratings: Ratings) -> ExperienceLevel:
    """Derive an experience level from interview answers and ratings."""
    avg_rating = ratings.average
    signal = mentions_classical(answers)

    if avg_rating >= ENTHUSIAST_MIN_AVERAGE and signal:
        return "enthusiast"
    if avg_rating >= CASUAL_MIN_AVERAGE or signal:
        return "casual"
    return "new"
