"""
Voice to MIDI channel routing.

Every voice gets its own channel so each can carry its own pitch bend.
Channels are drawn at random from register pools (low 1-6, mid 7-12,
high 13-16), then sorted: the lowest voice always sits on the lowest
chosen channel.
"""
import random

from .constants import ChannelPool, Midi
from .scale_math import to_midi_and_bend


class Voice:
    """One sounding step routed to a channel."""

    def __init__(self, step, channel, note, bend):
        self.step = step
        self.channel = channel
        self.note = note
        self.bend = bend

    def __eq__(self, other):
        if not isinstance(other, Voice):
            return NotImplemented
        return (self.step, self.channel, self.note, self.bend) == (
            other.step, other.channel, other.note, other.bend)

    def __repr__(self):
        return "Voice(step=%r, channel=%r, note=%r, bend=%r)" % (
            self.step, self.channel, self.note, self.bend)


class VoiceRouter:
    """Assigns MIDI channels to the voices of a chord."""

    def __init__(self, rng=None):
        """
        Args:
            rng: Object with randrange(n), e.g. random.Random
        """
        self.rng = rng if rng is not None else random.Random()

    def _pool_order(self, step, low, mid, high):
        if step <= ChannelPool.LOW_MAX:
            return (low, mid, high)
        if step >= ChannelPool.HIGH_MIN:
            return (high, mid, low)
        return (mid, low, high)

    def _take(self, pool):
        index = self.rng.randrange(len(pool))
        return pool.pop(index)

    def allocate(self, chord):
        """
        Pick one channel per voice.

        Args:
            chord: Ascending list of step indices

        Returns:
            Ascending list of distinct channels, one per voice. Shorter
            than the chord when all 16 channels are used up.
        """
        low = list(ChannelPool.LOW)
        mid = list(ChannelPool.MID)
        high = list(ChannelPool.HIGH)

        chosen = []
        for step in chord:
            channel = None
            for pool in self._pool_order(step, low, mid, high):
                if pool:
                    channel = self._take(pool)
                    break
            if channel is None:
                break
            chosen.append(channel)

        chosen.sort()
        return chosen

    def route(self, chord, pitch_bend_range=Midi.PITCH_BEND_RANGE_DEFAULT):
        """
        Allocate channels and compute note + bend for each voice.

        Returns:
            List of Voice, lowest step on the lowest channel
        """
        steps = sorted(chord)
        channels = self.allocate(steps)
        voices = []
        for step, channel in zip(steps, channels):
            note, bend = to_midi_and_bend(step, pitch_bend_range)
            voices.append(Voice(step, channel, note, bend))
        return voices
