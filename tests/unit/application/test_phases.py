"""Tests for interview phase transitions."""

import pytest

from classica.application.interview.phases import (
    Answered,
    BeginListening,
    Done,
    Ended,
    HangUp,
    Music,
    NextTrack,
    PlaybackStarted,
    PlaybackStopped,
    Question,
    Skip,
    Start,
    Transition,
    Welcome,
    advance,
    is_active,
)
from classica.domain.errors import InvalidStateError


def step(phase, action, questions=1, tracks=3):
    return advance(phase, action, question_count=questions, track_count=tracks)


class TestAdvance:
    """Test the happy path and illegal actions."""

    def test_full_run(self):
        phase = Welcome()
        seen = [phase]
        for action in (
            Start(),
            Answered(),
            BeginListening(),
            PlaybackStarted(),
            NextTrack(),
            NextTrack(),
            NextTrack(),
        ):
            phase = step(phase, action)
            seen.append(phase)

        assert seen == [
            Welcome(),
            Question(0),
            Transition(),
            Music(0),
            Music(0, listening=True),
            Music(1),
            Music(2),
            Done(),
        ]

    def test_multiple_questions(self):
        phase = step(Question(0), Answered(), questions=3)
        assert phase == Question(1)
        assert step(Question(2), Answered(), questions=3) == Transition()

    def test_no_questions_goes_straight_to_transition(self):
        assert step(Welcome(), Start(), questions=0) == Transition()

    def test_playback_toggle(self):
        playing = step(Music(1), PlaybackStarted())
        assert playing == Music(1, listening=True)
        assert step(playing, PlaybackStopped()) == Music(1)

    @pytest.mark.parametrize(
        "phase,action",
        [
            (Welcome(), Answered()),
            (Question(0), Start()),
            (Question(0), NextTrack()),
            (Transition(), Answered()),
            (Music(0), Start()),
            (Done(), NextTrack()),
            (Ended(reason="skipped"), Start()),
        ],
    )
    def test_illegal_actions(self, phase, action):
        with pytest.raises(InvalidStateError) as exc_info:
            step(phase, action)

        assert exc_info.value.details["phase"] == phase.name


class TestExits:
    @pytest.mark.parametrize("phase", [Welcome(), Question(0), Transition(), Music(2, True), Done()])
    def test_skip_from_anywhere(self, phase):
        assert step(phase, Skip()) == Ended(reason="skipped")

    @pytest.mark.parametrize("phase", [Welcome(), Question(0), Music(1)])
    def test_hang_up_from_anywhere(self, phase):
        assert step(phase, HangUp()) == Ended(reason="hung_up")

    def test_ended_is_terminal(self):
        ended = Ended(reason="hung_up")

        assert step(ended, Skip()) is ended


class TestIsActive:
    def test_active_phases(self):
        assert is_active(Question(0))
        assert is_active(Transition())
        assert is_active(Music(0))

    def test_inactive_phases(self):
        assert not is_active(Welcome())
        assert not is_active(Done())
        assert not is_active(Ended(reason="skipped"))
