"""Scoped resources held by an interview run.

Each resource is acquired explicitly and has an idempotent release, so the
engine can release everything on any exit path without tracking which ones
were actually acquired.
"""

import asyncio
from collections.abc import Callable

from classica.domain.protocols import AudioPlayer, Playback
from classica.infrastructure.telemetry import get_logger

logger = get_logger(__name__)


def format_duration(seconds: int) -> str:
    """Format whole seconds as m:ss."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"


class CallTimer:
    """Counts elapsed call seconds while running."""

    def __init__(self, tick_seconds: float = 1.0):
        self.tick_seconds = tick_seconds
        self.elapsed_seconds = 0
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def display(self) -> str:
        return format_duration(self.elapsed_seconds)

    def start(self) -> None:
        """Reset and start counting. Restarting an active timer is a no-op."""
        if self.is_running:
            return
        self.elapsed_seconds = 0
        self._task = asyncio.create_task(self._run())

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.tick_seconds)
            self.elapsed_seconds += 1

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None


class AudioChannel:
    """Exclusive audio output: at most one playback at a time.

    Every ``pause`` bumps a release counter. A playback whose player was still
    starting when the counter moved is paused as soon as it starts and never
    becomes current, so a release also covers audio that is not audible yet.
    """

    def __init__(self, player: AudioPlayer):
        self.player = player
        self._current: Playback | None = None
        self._releases = 0

    @property
    def current(self) -> Playback | None:
        return self._current

    @property
    def is_playing(self) -> bool:
        return self._current is not None and self._current.is_playing

    async def play(self, source: bytes | str) -> Playback:
        """Release any current playback, then start ``source``.

        If the channel is released while the player is starting, the new
        playback is paused and returned without becoming current.
        """
        self.pause()
        releases = self._releases
        playback = await self.player.play(source)
        if self._releases != releases:
            playback.pause()
            logger.debug("Playback released while starting")
            return playback
        self._current = playback
        return playback

    async def wait(self) -> None:
        """Wait for the current playback, if any, to end."""
        if self._current is not None:
            await self._current.wait()

    def pause(self) -> None:
        self._releases += 1
        if self._current is not None:
            self._current.pause()
            self._current = None


class ListeningWindow:
    """Bounded listening window for one track.

    When the window elapses and the same playback is still current on the
    channel, it is paused and ``on_expire`` runs. A playback that was already
    replaced or stopped is left alone.
    """

    def __init__(self, channel: AudioChannel, seconds: float):
        self.channel = channel
        self.seconds = seconds
        self._task: asyncio.Task | None = None

    @property
    def is_open(self) -> bool:
        return self._task is not None and not self._task.done()

    def open(self, playback: Playback, on_expire: Callable[[], None]) -> None:
        self.close()
        self._task = asyncio.create_task(self._expire_after(playback, on_expire))

    async def _expire_after(self, playback: Playback, on_expire: Callable[[], None]) -> None:
        await asyncio.sleep(self.seconds)
        self._task = None
        if self.channel.current is not playback:
            return
        self.channel.pause()
        logger.debug("Listening window elapsed", extra={"seconds": self.seconds})
        on_expire()

    def close(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
