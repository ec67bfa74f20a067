"""Tests for interview resources."""

import asyncio

import pytest

from conftest import SlowPlayer

from classica.application.interview.resources import (
    AudioChannel,
    CallTimer,
    ListeningWindow,
    format_duration,
)


class TestFormatDuration:
    def test_format(self):
        assert format_duration(0) == "0:00"
        assert format_duration(75) == "1:15"
        assert format_duration(600) == "10:00"


class TestCallTimer:
    @pytest.mark.asyncio
    async def test_counts_until_cancelled(self):
        timer = CallTimer(tick_seconds=0.01)

        timer.start()
        await asyncio.sleep(0.05)
        timer.cancel()
        elapsed = timer.elapsed_seconds
        await asyncio.sleep(0.03)

        assert elapsed >= 1
        assert timer.elapsed_seconds == elapsed
        assert not timer.is_running

    @pytest.mark.asyncio
    async def test_start_while_running_keeps_count(self):
        timer = CallTimer(tick_seconds=0.01)
        timer.start()
        await asyncio.sleep(0.03)

        timer.start()

        assert timer.elapsed_seconds >= 1
        timer.cancel()

    def test_cancel_is_idempotent(self):
        timer = CallTimer()
        timer.cancel()
        timer.cancel()
        assert not timer.is_running


class TestAudioChannel:
    @pytest.mark.asyncio
    async def test_single_playback(self, player):
        channel = AudioChannel(player)

        first = await channel.play(b"voice")
        second = await channel.play("/music/Track_01.mp3")

        assert first.is_playing is False
        assert channel.current is second
        assert player.playing == [second]

    @pytest.mark.asyncio
    async def test_pause_releases(self, player):
        channel = AudioChannel(player)
        await channel.play(b"voice")

        channel.pause()
        channel.pause()

        assert channel.current is None
        assert not channel.is_playing
        assert player.playing == []

    @pytest.mark.asyncio
    async def test_pause_while_starting_silences_new_playback(self):
        player = SlowPlayer(0.02)
        channel = AudioChannel(player)

        task = asyncio.create_task(channel.play(b"voice"))
        await asyncio.sleep(0.005)
        channel.pause()
        playback = await task

        assert playback.is_playing is False
        assert channel.current is None
        assert player.playing == []

    @pytest.mark.asyncio
    async def test_overlapping_plays_keep_only_the_latest(self):
        player = SlowPlayer(0.02)
        channel = AudioChannel(player)

        first, second = await asyncio.gather(
            channel.play("/music/Track_01.mp3"),
            channel.play("/music/Track_02.mp3"),
        )

        assert first.is_playing is False
        assert channel.current is second
        assert player.playing == [second]


class TestListeningWindow:
    @pytest.mark.asyncio
    async def test_expiry_pauses_and_notifies(self, player):
        channel = AudioChannel(player)
        playback = await channel.play("/music/Track_01.mp3")
        expired = []
        window = ListeningWindow(channel, 0.01)

        window.open(playback, lambda: expired.append(True))
        await asyncio.sleep(0.05)

        assert expired == [True]
        assert playback.is_playing is False
        assert not window.is_open

    @pytest.mark.asyncio
    async def test_replaced_playback_left_alone(self, player):
        channel = AudioChannel(player)
        playback = await channel.play("/music/Track_01.mp3")
        expired = []
        window = ListeningWindow(channel, 0.01)
        window.open(playback, lambda: expired.append(True))

        replacement = await channel.play("/music/Track_02.mp3")
        await asyncio.sleep(0.05)

        assert expired == []
        assert replacement.is_playing

    @pytest.mark.asyncio
    async def test_close_cancels(self, player):
        channel = AudioChannel(player)
        playback = await channel.play("/music/Track_01.mp3")
        expired = []
        window = ListeningWindow(channel, 0.01)
        window.open(playback, lambda: expired.append(True))

        window.close()
        await asyncio.sleep(0.05)

        assert expired == []
        assert playback.is_playing
