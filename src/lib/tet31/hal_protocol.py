"""
Hardware Abstraction Layer Protocol Definitions.
These are abstract base classes that each platform must implement.

This allows the same application code to run on:
- Desktop Python with a mido MIDI port
- Desktop Python for testing (recording mocks)
"""
from .midi_events import PitchBend, NoteOn, NoteOff, ControlChange


class KeyPress:
    """A key event from the performer."""

    def __init__(self, key, shift=False):
        self.key = key
        self.shift = shift

    def __eq__(self, other):
        if not isinstance(other, KeyPress):
            return NotImplemented
        return (self.key, self.shift) == (other.key, other.shift)

    def __repr__(self):
        return "KeyPress(%r, shift=%r)" % (self.key, self.shift)


class KeyboardHAL:
    """Abstract interface for performer key input."""

    def update(self):
        """Poll key states. Call in main loop."""
        raise NotImplementedError

    def get_keys(self):
        """
        Get keys pressed since the last call.

        Returns:
            List of KeyPress, oldest first
        """
        raise NotImplementedError


class DisplayHAL:
    """Abstract interface for the chord display."""

    def clear(self):
        """Clear the display."""
        raise NotImplementedError

    def show_chord(self, title, code_line, labels):
        """
        Display the currently sounding chord.

        Args:
            title: Slot name or code
            code_line: Code and base steps, e.g. "sym3 -> 63, 94, 125"
            labels: List of formatted steps, e.g. ["C3+0c", "E3-6c"]
        """
        raise NotImplementedError

    def show_message(self, title, message):
        """
        Display an informational notice.

        Args:
            title: Short heading
            message: Message string
        """
        raise NotImplementedError

    def show_status(self, status):
        """
        Display a one-line status (playing, stopped, transpose).

        Args:
            status: Status string
        """
        raise NotImplementedError

    def update(self):
        """Push changes to the display."""
        raise NotImplementedError


class MidiOutputHAL:
    """Abstract interface for MIDI output. Channels are 1-16."""

    def send_pitch_bend(self, channel, value):
        """
        Send a pitch wheel change.

        Args:
            channel: MIDI channel 1-16
            value: 14-bit bend 0-16383, 8192 = center
        """
        raise NotImplementedError

    def send_note_on(self, channel, note, velocity):
        """
        Send MIDI Note On.

        Args:
            channel: MIDI channel 1-16
            note: MIDI note number 0-127
            velocity: Note velocity 1-127
        """
        raise NotImplementedError

    def send_note_off(self, channel, note, velocity=0):
        """
        Send MIDI Note Off.

        Args:
            channel: MIDI channel 1-16
            note: MIDI note number 0-127
            velocity: Release velocity 0-127
        """
        raise NotImplementedError

    def send_control_change(self, channel, control, value):
        """
        Send MIDI Control Change.

        Args:
            channel: MIDI channel 1-16
            control: CC number 0-127
            value: CC value 0-127
        """
        raise NotImplementedError

    def send(self, event):
        """
        Send one event value from tet31.midi_events.

        Args:
            event: PitchBend, NoteOn, NoteOff or ControlChange
        """
        if isinstance(event, PitchBend):
            self.send_pitch_bend(event.channel, event.value)
        elif isinstance(event, NoteOn):
            self.send_note_on(event.channel, event.note, event.velocity)
        elif isinstance(event, NoteOff):
            self.send_note_off(event.channel, event.note)
        elif isinstance(event, ControlChange):
            self.send_control_change(event.channel, event.control, event.value)
        else:
            raise TypeError("not a MIDI event: " + repr(event))

    def send_all(self, events):
        """Send events in order."""
        for event in events:
            self.send(event)


class HardwarePort:
    """
    Complete hardware port interface.
    A platform provides an instance of this with all HAL implementations.
    """

    def __init__(self, keyboard, display, midi_output):
        """
        Args:
            keyboard: KeyboardHAL implementation
            display: DisplayHAL implementation
            midi_output: MidiOutputHAL implementation
        """
        self.keyboard = keyboard
        self.display = display
        self.midi_output = midi_output

    def update_inputs(self):
        """Poll all input devices."""
        self.keyboard.update()

    def update_outputs(self):
        """Push all output changes."""
        self.display.update()
