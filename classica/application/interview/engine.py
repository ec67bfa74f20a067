"""Onboarding interview engine.

Drives one voice interview followed by a three-track listening test. The
engine owns the call timer, the audio channel and any in-flight speech
capture; every exit path (``next_track`` into done, ``skip``, ``hang_up``)
releases them.

Only one action runs at a time. ``skip`` and ``hang_up`` are the exception:
they may interrupt a running action, which then returns without further
side effects.
"""

import asyncio
import functools
from dataclasses import dataclass

from classica.application.interview.phases import (
    Action,
    Answered,
    BeginListening,
    Done,
    Ended,
    HangUp,
    Music,
    NextTrack,
    Phase,
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
from classica.application.interview.resources import AudioChannel, CallTimer, ListeningWindow
from classica.config import Settings, get_settings
from classica.domain.entities import (
    TIERS,
    ExperienceLevel,
    Ratings,
    TrackRef,
    tier_for_index,
)
from classica.domain.errors import AppError, InvalidStateError, UpstreamGenerationError
from classica.domain.protocols import AudioPlayer, OnboardingBackend, SpeechCapture, TextInput
from classica.domain.scoring import score
from classica.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

GREETING_TEMPLATE = (
    "Hi there! Welcome to Classical Music Connect. I'm so excited to help you "
    "discover amazing music. Let me ask you a few quick questions. {question}"
)
TRANSITION_STATUS = "Time to listen to some music!"
TEXT_FALLBACK_PROMPT = "Voice not available. Type your answer:"
UNSURE_ANSWER = "I'm not sure"
FALLBACK_ACKNOWLEDGMENT = "Thanks for sharing! Now let me play you some music."


@dataclass(frozen=True)
class InterviewState:
    """Snapshot of a run."""

    phase: Phase
    question_index: int
    answers: tuple[str, ...]
    ratings: Ratings


@dataclass(frozen=True)
class InterviewResult:
    answers: tuple[str, ...]
    ratings: Ratings
    experience_level: ExperienceLevel


def _single_flight(method):
    @functools.wraps(method)
    async def wrapper(self: "InterviewEngine", *args, **kwargs):
        if self._busy:
            raise InvalidStateError(
                message="Another interview action is in progress",
                details={"action": method.__name__, "phase": self.phase.name},
            )
        self._busy = True
        try:
            return await method(self, *args, **kwargs)
        finally:
            self._busy = False

    return wrapper


class InterviewEngine:
    """Phase state machine for one onboarding run."""

    def __init__(
        self,
        backend: OnboardingBackend,
        capture: SpeechCapture,
        text_input: TextInput,
        player: AudioPlayer,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.backend = backend
        self.capture = capture
        self.text_input = text_input

        self.max_reply_attempts = max(1, settings.onboarding_max_reply_attempts)
        self.capture_timeout = settings.onboarding_capture_timeout_seconds
        self.connect_delay = settings.onboarding_connect_delay_seconds
        self.transition_pause = settings.onboarding_transition_pause_seconds

        self.audio = AudioChannel(player)
        self.timer = CallTimer()
        self.window = ListeningWindow(self.audio, settings.onboarding_listening_window_seconds)

        self.phase: Phase = Welcome()
        self.history: list[Phase] = [self.phase]
        self.status_text = ""
        self.questions: tuple[str, ...] = ()
        self.tracks: tuple[TrackRef, ...] = ()
        self.answers: list[str] = []
        self.ratings = Ratings()
        self.committed_level: ExperienceLevel | None = None

        self._busy = False
        self._capture_task: asyncio.Future | None = None

    # --- State ---

    @property
    def is_ended(self) -> bool:
        return isinstance(self.phase, Ended)

    @property
    def question_index(self) -> int:
        if isinstance(self.phase, Question):
            return self.phase.index
        return len(self.answers)

    @property
    def state(self) -> InterviewState:
        return InterviewState(
            phase=self.phase,
            question_index=self.question_index,
            answers=tuple(self.answers),
            ratings=self.ratings,
        )

    def _dispatch(self, action: Action) -> Phase:
        new_phase = advance(
            self.phase,
            action,
            question_count=len(self.questions),
            track_count=len(self.tracks),
        )
        if new_phase != self.phase:
            logger.debug(
                "Interview phase change",
                extra={"from_phase": self.phase.name, "to_phase": new_phase.name},
            )
            self.phase = new_phase
            self.history.append(new_phase)

        if is_active(new_phase):
            self.timer.start()
        else:
            self.timer.cancel()
        return new_phase

    def _require(self, *phase_types: type) -> None:
        if not isinstance(self.phase, phase_types):
            raise InvalidStateError(
                message=f"Action not allowed during {self.phase.name}",
                details={"phase": self.phase.name},
            )

    # --- Speech I/O ---

    async def _say(self, text: str, wait: bool = False) -> None:
        """Synthesize and play text. Failures only cost the voice."""
        try:
            audio = await self.backend.speak(text)
            if self.is_ended:
                return
            playback = await self.audio.play(audio)
            if self.is_ended or self.audio.current is not playback:
                playback.pause()
                return
            if wait:
                await playback.wait()
        except Exception as e:
            logger.warning("Speech playback unavailable", extra={"error": str(e)})

    async def _capture_answer(self) -> str | None:
        """Capture one answer, falling back to typed input.

        Returns None if the run ended while waiting.
        """
        await self.audio.wait()
        if self.is_ended:
            return None

        text = ""
        if self.capture.is_available:
            task = asyncio.ensure_future(self.capture.capture())
            self._capture_task = task
            try:
                text = await asyncio.wait_for(task, self.capture_timeout)
            except asyncio.TimeoutError:
                self.capture.stop()
                logger.info("Speech capture timed out", extra={"timeout": self.capture_timeout})
            except asyncio.CancelledError:
                if self.is_ended:
                    return None
                raise
            except Exception as e:
                logger.warning("Speech capture failed", extra={"error": str(e)})
            finally:
                self._capture_task = None

            if self.is_ended:
                return None
            text = (text or "").strip()
            if text:
                return text

        try:
            typed = await self.text_input.prompt(TEXT_FALLBACK_PROMPT)
        except Exception as e:
            logger.warning("Text input failed", extra={"error": str(e)})
            typed = None
        if self.is_ended:
            return None
        return (typed or "").strip() or UNSURE_ANSWER

    # --- Interview ---

    @_single_flight
    async def start(self) -> None:
        """Fetch the script, connect, greet and ask the first question.

        Raises:
            UpstreamGenerationError: The script could not be fetched. The run
                stays at welcome.
        """
        self._require(Welcome)

        try:
            question_set = await self.backend.get_questions()
        except UpstreamGenerationError:
            raise
        except Exception as e:
            raise UpstreamGenerationError(
                message="Could not start the interview",
                operation="get_questions",
                details={"error": str(e)},
            ) from e

        if not question_set.questions or len(question_set.tracks) != len(TIERS):
            raise UpstreamGenerationError(
                message="Interview script is incomplete",
                operation="get_questions",
                details={
                    "question_count": len(question_set.questions),
                    "track_count": len(question_set.tracks),
                },
            )

        self.questions = tuple(question_set.questions)
        self.tracks = tuple(question_set.tracks)
        self.answers = []
        self.ratings = Ratings()

        self.status_text = "Connecting..."
        await asyncio.sleep(self.connect_delay)
        if self.is_ended:
            return

        self._dispatch(Start())
        self.status_text = "AI Mentor is speaking..."
        await self._say(GREETING_TEMPLATE.format(question=self.questions[0]))

    @_single_flight
    async def answer_current_question(self) -> str | None:
        """Capture, acknowledge and record the answer to the current question.

        A failed acknowledgment re-prompts for the same question, up to
        ``max_reply_attempts`` captures. After that the last answer is kept
        with a fixed acknowledgment. Returns the acknowledgment, or None if
        the run ended meanwhile.
        """
        self._require(Question)
        index = self.phase.index

        answer: str | None = None
        acknowledgment: str | None = None
        for attempt in range(1, self.max_reply_attempts + 1):
            self.status_text = "Your turn, speak now"
            answer = await self._capture_answer()
            if answer is None:
                return None

            self.status_text = "Thinking..."
            try:
                acknowledgment = await self.backend.reply(index, answer, list(self.answers))
                break
            except AppError as e:
                if self.is_ended:
                    return None
                logger.warning(
                    "Reply generation failed",
                    extra={
                        "question_index": index,
                        "attempt": attempt,
                        "max_attempts": self.max_reply_attempts,
                        "error_code": e.code,
                    },
                )

        if self.is_ended:
            return None
        if acknowledgment is None:
            acknowledgment = FALLBACK_ACKNOWLEDGMENT

        self.answers.append(answer)
        self._dispatch(Answered())

        self.status_text = "AI Mentor is speaking..."
        if isinstance(self.phase, Question):
            await self._say(f"{acknowledgment} {self.questions[self.phase.index]}")
        else:
            await self._say(acknowledgment, wait=True)
            await self._enter_listening_test()
        return acknowledgment

    async def _enter_listening_test(self) -> None:
        self.status_text = TRANSITION_STATUS
        await asyncio.sleep(self.transition_pause)
        if self.is_ended:
            return
        self._dispatch(BeginListening())
        await self._play_current_track()

    # --- Listening test ---

    async def _play_current_track(self) -> None:
        index = self.phase.index
        track = self.tracks[index]
        try:
            playback = await self.audio.play(track.file)
        except Exception as e:
            logger.warning(
                "Track playback failed",
                extra={"track_id": track.id, "error": str(e)},
            )
            self.status_text = "How did that sound?"
            return

        if self.audio.current is not playback or self.phase != Music(index):
            # Stopped, ended or moved on while the player was starting.
            playback.pause()
            return

        self._dispatch(PlaybackStarted())
        self.status_text = "Listen and rate this track"
        self.window.open(playback, self._on_window_elapsed)

    def _on_window_elapsed(self) -> None:
        if isinstance(self.phase, Music) and self.phase.listening:
            self._dispatch(PlaybackStopped())
            self.status_text = "How did that sound?"

    @_single_flight
    async def play_track(self) -> None:
        """(Re)play the current track."""
        self._require(Music)
        self.window.close()
        self.audio.pause()
        if self.phase.listening:
            self._dispatch(PlaybackStopped())
        await self._play_current_track()

    def stop_track(self) -> None:
        """Stop the current track and go to its rating step.

        A replay that is still starting is cancelled as well.
        """
        self._require(Music)
        self.window.close()
        self.audio.pause()
        self._dispatch(PlaybackStopped())
        self.status_text = "How did that sound?"

    def rate(self, value: int) -> Ratings:
        """Rate the current track's tier (1-10)."""
        self._require(Music)
        self.ratings = self.ratings.with_rating(tier_for_index(self.phase.index), value)
        return self.ratings

    @_single_flight
    async def next_track(self) -> None:
        """Advance to the next track, or to done after the last one."""
        self._require(Music)
        self.window.close()
        self.audio.pause()
        self._dispatch(NextTrack())
        if isinstance(self.phase, Music):
            await self._play_current_track()
        else:
            self.status_text = "All done!"

    # --- Completion ---

    def result(self) -> InterviewResult:
        """Answers, ratings and the experience level they score to."""
        self._require(Done)
        answers = tuple(self.answers)
        return InterviewResult(
            answers=answers,
            ratings=self.ratings,
            experience_level=score(answers, self.ratings),
        )

    @_single_flight
    async def commit(self) -> ExperienceLevel:
        """Persist the result through the backend, then discard local state."""
        self._require(Done)
        if self.committed_level is not None:
            raise InvalidStateError(message="Interview result already committed")

        level = await self.backend.complete(list(self.answers), self.ratings)
        self.committed_level = level
        self.answers = []
        self.ratings = Ratings()

        logger.info("Interview committed", extra={"experience_level": level})
        return level

    # --- Exits ---

    def _release(self) -> None:
        self.capture.stop()
        if self._capture_task is not None:
            self._capture_task.cancel()
            self._capture_task = None
        self.window.close()
        self.audio.pause()
        self.timer.cancel()

    def skip(self) -> None:
        """Leave the interview from any phase, discarding all state."""
        self._release()
        self._dispatch(Skip())
        self.answers = []
        self.ratings = Ratings()

    def hang_up(self) -> None:
        """End the call: stop capture, silence audio and stop the timer."""
        self._release()
        self._dispatch(HangUp())
