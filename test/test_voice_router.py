"""
Unit tests for channel routing and outbound MIDI event lists.

Run with: python test/test_voice_router.py
     or: pytest test
"""
import os
import random
import sys

# Add the src/lib path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "src", "lib"))

from mock_hal import ScriptedRandom
from runner import run_tests

from tet31.constants import ChannelPool
from tet31.midi_events import (
    PitchBend,
    ControlChange,
    rpn_pitch_bend_range,
    setup_events,
    reset_events,
)
from tet31.voice_router import Voice, VoiceRouter


class TestAllocate:
    """Tests for pool-based channel allocation."""

    def test_low_voices_spill_to_mid(self):
        router = VoiceRouter(ScriptedRandom())
        chord = [10, 20, 30, 40, 50, 60, 70]
        assert router.allocate(chord) == [1, 2, 3, 4, 5, 6, 7]

    def test_high_voices_spill_to_mid(self):
        router = VoiceRouter(ScriptedRandom())
        chord = [150, 160, 170, 180, 190]
        assert router.allocate(chord) == [7, 13, 14, 15, 16]

    def test_mid_voices_prefer_mid(self):
        router = VoiceRouter(ScriptedRandom())
        assert router.allocate([94, 100, 110]) == [7, 8, 9]

    def test_mid_pool_spills_low_first(self):
        router = VoiceRouter(ScriptedRandom())
        chord = list(range(90, 97))
        assert router.allocate(chord) == [1, 7, 8, 9, 10, 11, 12]

    def test_pool_boundaries(self):
        router = VoiceRouter(ScriptedRandom())
        assert router.allocate([ChannelPool.LOW_MAX]) == [1]
        assert router.allocate([ChannelPool.LOW_MAX + 1]) == [7]
        assert router.allocate([ChannelPool.HIGH_MIN - 1]) == [7]
        assert router.allocate([ChannelPool.HIGH_MIN]) == [13]

    def test_random_pick_within_pool(self):
        rng = ScriptedRandom(randranges=[3])
        assert VoiceRouter(rng).allocate([10]) == [4]
        assert rng.calls == [("randrange", 6)]

    def test_channels_distinct_and_sorted(self):
        router = VoiceRouter(random.Random(7))
        for _ in range(30):
            channels = router.allocate(list(range(1, 248, 16)))
            assert len(channels) == 16
            assert channels == sorted(set(channels))

    def test_more_than_sixteen_voices(self):
        router = VoiceRouter(ScriptedRandom())
        assert router.allocate(list(range(1, 21))) == list(range(1, 17))


class TestRoute:
    """Tests for voices with note and bend."""

    def test_octave_chord(self):
        router = VoiceRouter(ScriptedRandom())
        voices = router.route([63, 94, 125], 2)
        assert voices == [
            Voice(63, 1, 48, 8192),
            Voice(94, 7, 60, 8192),
            Voice(125, 8, 72, 8192),
        ]

    def test_lowest_step_on_lowest_channel(self):
        router = VoiceRouter(random.Random(3))
        voices = router.route([200, 10, 94, 150], 2)
        assert [v.step for v in voices] == [10, 94, 150, 200]
        channels = [v.channel for v in voices]
        assert channels == sorted(channels)

    def test_bend_uses_range(self):
        router = VoiceRouter(ScriptedRandom())
        assert router.route([2], 0) == [Voice(2, 1, 24, 11363)]

    def test_drops_voices_past_sixteen(self):
        router = VoiceRouter(ScriptedRandom())
        assert len(router.route(list(range(1, 40, 2)), 2)) == 16


class TestMidiEvents:
    """Tests for setup and reset event lists."""

    def test_rpn_sequence(self):
        assert rpn_pitch_bend_range(3, 2) == [
            ControlChange(3, 101, 0),
            ControlChange(3, 100, 0),
            ControlChange(3, 6, 2),
            ControlChange(3, 38, 0),
            ControlChange(3, 101, 127),
            ControlChange(3, 100, 127),
        ]

    def test_rpn_clamps_range(self):
        assert rpn_pitch_bend_range(1, 40)[2] == ControlChange(1, 6, 24)
        assert rpn_pitch_bend_range(1, -1)[2] == ControlChange(1, 6, 0)

    def test_setup_covers_all_channels(self):
        events = setup_events(12)
        assert len(events) == 96
        assert sorted(set(e.channel for e in events)) == list(range(1, 17))

    def test_reset(self):
        events = reset_events()
        assert len(events) == 48
        assert events[:3] == [
            PitchBend(1, 8192),
            ControlChange(1, 123, 0),
            ControlChange(1, 120, 0),
        ]
        assert events[-3:] == [
            PitchBend(16, 8192),
            ControlChange(16, 123, 0),
            ControlChange(16, 120, 0),
        ]


if __name__ == "__main__":
    success = run_tests([TestAllocate, TestRoute, TestMidiEvents])
    sys.exit(0 if success else 1)
