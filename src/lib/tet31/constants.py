"""
Constants for the tet31 chord machine.
All magic strings and numbers are defined here for easy maintenance.
"""


# ============================================================================
# 31-EDO LATTICE
# ============================================================================
class Edo:
    """31 equal divisions of the octave."""
    STEPS_PER_OCTAVE = 31
    OCTAVES = 8

    # Step index range (1 = C0, 248 = H7)
    PITCH_MIN = 1
    PITCH_MAX = 248

    # Default tonal center (C3)
    CENTER_DEFAULT = 94

    CENTS_PER_OCTAVE = 1200.0
    CENTS_PER_SEMITONE = 100.0
    SEMITONES_PER_OCTAVE = 12


# ============================================================================
# MIDI CONSTANTS
# ============================================================================
class Midi:
    """MIDI-related constants. Channels are 1-based (1-16)."""
    # Channel range
    CHANNEL_MIN = 1
    CHANNEL_MAX = 16
    CHANNEL_COUNT = 16

    # Velocity range
    VELOCITY_MIN = 1
    VELOCITY_MAX = 127
    VELOCITY_DEFAULT = 96

    # Note range
    NOTE_MIN = 0
    NOTE_MAX = 127

    # Step 1 (C0) maps to MIDI 24, so the tonal center lands on MIDI 60
    NOTE_C0 = 24

    # 14-bit pitch wheel
    PITCH_BEND_MIN = 0
    PITCH_BEND_MAX = 16383
    PITCH_BEND_CENTER = 8192

    # Pitch bend sensitivity in semitones
    PITCH_BEND_RANGE_MIN = 0
    PITCH_BEND_RANGE_MAX = 24
    PITCH_BEND_RANGE_DEFAULT = 2

    # Channel mode controllers
    CC_ALL_SOUND_OFF = 120
    CC_ALL_NOTES_OFF = 123


# ============================================================================
# RPN (pitch bend sensitivity)
# ============================================================================
class Rpn:
    """Registered Parameter Number controllers."""
    CC_RPN_MSB = 101
    CC_RPN_LSB = 100
    CC_DATA_ENTRY_MSB = 6
    CC_DATA_ENTRY_LSB = 38

    PITCH_BEND_SENSITIVITY = (0, 0)
    NULL = (127, 127)


# ============================================================================
# VOICE ROUTING POOLS
# ============================================================================
class ChannelPool:
    """Register pools used by the voice router."""
    LOW = (1, 2, 3, 4, 5, 6)
    MID = (7, 8, 9, 10, 11, 12)
    HIGH = (13, 14, 15, 16)

    # Steps at or below LOW_MAX prefer the low pool,
    # steps at or above HIGH_MIN prefer the high pool
    LOW_MAX = 80
    HIGH_MIN = 140


# ============================================================================
# SHORTCODES
# ============================================================================
class Shortcode:
    """Shortcode keywords and defaults."""
    SYM = "sym"
    PAIRS = "pairs"
    RAND = "rand"

    # Kinds in match order (longest first)
    KINDS = [PAIRS, RAND, SYM]

    SPREAD_DEFAULT = 31
    RAND_SPREAD_DEFAULT = 0  # full range

    # Direct step lists accept at most this many values
    MAX_LIST_VALUES = 16

    # Code label stored for slots defined by a direct step list
    PC_LIST = "pc-list"


# ============================================================================
# HOTKEYS
# ============================================================================
class Hotkeys:
    """Slot hotkey alphabet, in assignment order."""
    ALPHABET = "1234567890qwertzuiopasdfghjklyxcvbnmß"
    COUNT = len(ALPHABET)

    TRANSPOSE_UP = "+"
    TRANSPOSE_DOWN = "-"
    TOGGLE_PLAY = " "
    PANIC = "\x1b"


# ============================================================================
# DISPLAY
# ============================================================================
class Display:
    """Display strings."""
    DEFAULT_NOTE_NAMES = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "H")
    INFO_TITLE = "Info"
    NO_CHORDS = "No chords loaded."
    NO_RANDOM = "(no random)"
    REGENERATED = "Chord re-generated"
