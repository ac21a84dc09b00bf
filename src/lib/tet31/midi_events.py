"""
Outbound MIDI event values.
The engine decides what to send; a MidiOutputHAL decides how.
Channels are 1-based (1-16).
"""
from collections import namedtuple

from .constants import Midi, Rpn

PitchBend = namedtuple("PitchBend", ["channel", "value"])
NoteOn = namedtuple("NoteOn", ["channel", "note", "velocity"])
NoteOff = namedtuple("NoteOff", ["channel", "note"])
ControlChange = namedtuple("ControlChange", ["channel", "control", "value"])


def all_channels():
    return range(Midi.CHANNEL_MIN, Midi.CHANNEL_MAX + 1)


def clamp_bend_range(semitones):
    return max(Midi.PITCH_BEND_RANGE_MIN, min(Midi.PITCH_BEND_RANGE_MAX, int(semitones)))


def rpn_pitch_bend_range(channel, semitones):
    """
    RPN 0,0 (pitch bend sensitivity) for one channel, closed with RPN NULL.

    Returns:
        List of six ControlChange events
    """
    msb, lsb = Rpn.PITCH_BEND_SENSITIVITY
    null_msb, null_lsb = Rpn.NULL
    return [
        ControlChange(channel, Rpn.CC_RPN_MSB, msb),
        ControlChange(channel, Rpn.CC_RPN_LSB, lsb),
        ControlChange(channel, Rpn.CC_DATA_ENTRY_MSB, clamp_bend_range(semitones)),
        ControlChange(channel, Rpn.CC_DATA_ENTRY_LSB, 0),
        ControlChange(channel, Rpn.CC_RPN_MSB, null_msb),
        ControlChange(channel, Rpn.CC_RPN_LSB, null_lsb),
    ]


def setup_events(semitones):
    """Pitch bend sensitivity for every channel, 1 through 16."""
    events = []
    for channel in all_channels():
        events.extend(rpn_pitch_bend_range(channel, semitones))
    return events


def reset_events():
    """
    Hard reset for every channel: center the wheel, all notes off, all sound off.
    Sent regardless of what the engine thinks is sounding.
    """
    events = []
    for channel in all_channels():
        events.append(PitchBend(channel, Midi.PITCH_BEND_CENTER))
        events.append(ControlChange(channel, Midi.CC_ALL_NOTES_OFF, 0))
        events.append(ControlChange(channel, Midi.CC_ALL_SOUND_OFF, 0))
    return events
