"""
tet31 - 31-EDO chord machine with per-voice pitch bend MIDI output.
"""

from .scale_math import (
    DEFAULT_NOTE_NAMES,
    clamp_step,
    clamp_and_dedup,
    cents_deviation,
    to_midi_and_bend,
    format_step,
    format_chord,
)
from .errors import (
    Tet31Error,
    ShortcodeError,
    UnrecognizedShortcode,
    InvalidParameter,
    OddVoiceCount,
    EmptyChordAfterClamp,
    UnassignedHotkey,
)
from .shortcode import ShortcodeEngine, ShortcodeParams, ParseResult, parse_params
from .slot_store import Slot, SlotStore, parse_name_and_code, rows_from_lines
from .voice_router import Voice, VoiceRouter
from .midi_events import PitchBend, NoteOn, NoteOff, ControlChange
from .playback_state import PlaybackState, Event
from .playback_controller import PlaybackController
from .hal_protocol import (
    KeyPress,
    KeyboardHAL,
    DisplayHAL,
    MidiOutputHAL,
    HardwarePort,
)
from .tet31_app import Tet31App

__all__ = [
    # Scale math
    "DEFAULT_NOTE_NAMES",
    "clamp_step",
    "clamp_and_dedup",
    "cents_deviation",
    "to_midi_and_bend",
    "format_step",
    "format_chord",
    # Errors
    "Tet31Error",
    "ShortcodeError",
    "UnrecognizedShortcode",
    "InvalidParameter",
    "OddVoiceCount",
    "EmptyChordAfterClamp",
    "UnassignedHotkey",
    # Engine
    "ShortcodeEngine",
    "ShortcodeParams",
    "ParseResult",
    "parse_params",
    # Slots
    "Slot",
    "SlotStore",
    "parse_name_and_code",
    "rows_from_lines",
    # Routing
    "Voice",
    "VoiceRouter",
    # MIDI events
    "PitchBend",
    "NoteOn",
    "NoteOff",
    "ControlChange",
    # Playback
    "PlaybackState",
    "Event",
    "PlaybackController",
    # HAL Protocol
    "KeyPress",
    "KeyboardHAL",
    "DisplayHAL",
    "MidiOutputHAL",
    "HardwarePort",
    # Application
    "Tet31App",
]
