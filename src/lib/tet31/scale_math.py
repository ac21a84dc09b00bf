"""
Pure 31-EDO pitch calculations - no hardware dependencies.
Converts scale-step indices into 12-tone MIDI notes plus pitch bend.
"""
from .constants import Edo, Midi, Display

DEFAULT_NOTE_NAMES = list(Display.DEFAULT_NOTE_NAMES)

STEP_CENTS = Edo.CENTS_PER_OCTAVE / Edo.STEPS_PER_OCTAVE


def clamp_step(step):
    """Clamp a step index into the playable range."""
    return max(Edo.PITCH_MIN, min(Edo.PITCH_MAX, int(step)))


def clamp_chord(steps):
    """Clamp every step, keeping order and duplicates."""
    return [clamp_step(s) for s in steps]


def dedup(steps):
    """Drop repeated steps, keeping the first occurrence."""
    seen = set()
    result = []
    for s in steps:
        if s not in seen:
            seen.add(s)
            result.append(s)
    return result


def clamp_and_dedup(steps):
    """Clamp into range, then drop values that collided."""
    return dedup(clamp_chord(steps))


def nearest_semitone(step):
    """Index of the 12-tone semitone closest to a step (0 = C0)."""
    k = clamp_step(step) - 1
    return int(round(k * Edo.SEMITONES_PER_OCTAVE / Edo.STEPS_PER_OCTAVE))


def cents_deviation(step):
    """
    Distance in cents between a step and its nearest 12-tone semitone.

    Args:
        step: Step index 1-248

    Returns:
        Float, roughly -19.4 to +19.4 cents
    """
    k = clamp_step(step) - 1
    cents31 = k * STEP_CENTS
    return cents31 - nearest_semitone(step) * Edo.CENTS_PER_SEMITONE


def to_midi_and_bend(step, pitch_bend_range=Midi.PITCH_BEND_RANGE_DEFAULT):
    """
    Convert a step index to a MIDI note and a 14-bit pitch bend value.

    The receiving synth can only bend within +/- range semitones, so
    deviations outside that window are clamped, not wrapped.

    Args:
        step: Step index 1-248 (clamped)
        pitch_bend_range: Receiver pitch bend sensitivity in semitones.
                          Values below 1 are treated as 1 (100 cents).

    Returns:
        Tuple of (midi_note, bend) with bend in 0-16383, 8192 = center
    """
    note = Midi.NOTE_C0 + nearest_semitone(step)
    scale = max(1, int(pitch_bend_range)) * Edo.CENTS_PER_SEMITONE
    center = Midi.PITCH_BEND_CENTER
    bend = int(round(center + (cents_deviation(step) / scale) * center))
    bend = max(Midi.PITCH_BEND_MIN, min(Midi.PITCH_BEND_MAX, bend))
    return (note, bend)


def format_step(step, note_names=None):
    """
    Format a step as note name + octave + signed cents, e.g. "Eb3-6c".

    Args:
        step: Step index 1-248
        note_names: Optional 12-entry list of pitch class names

    Returns:
        Display string
    """
    if note_names is None:
        note_names = DEFAULT_NOTE_NAMES
    elif len(note_names) != Edo.SEMITONES_PER_OCTAVE:
        raise ValueError("note_names needs exactly 12 entries, got " + str(len(note_names)))

    semis = nearest_semitone(step)
    octave = semis // Edo.SEMITONES_PER_OCTAVE
    name = note_names[semis % Edo.SEMITONES_PER_OCTAVE]

    cents = int(round(cents_deviation(step)))
    sign = "+" if cents >= 0 else ""
    return name + str(octave) + sign + str(cents) + "c"


def format_chord(steps, note_names=None):
    """Format every step of a chord."""
    return [format_step(s, note_names) for s in steps]
