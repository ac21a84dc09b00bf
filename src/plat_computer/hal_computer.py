"""
Desktop Hardware Implementation.
MIDI goes out through mido; the display prints to a console stream and
keys are fed in by the performance shell.

This file contains all platform-specific code. Device discovery is left
to mido: pass a port name, or None for the backend's default port.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import mido

from tet31.constants import Midi
from tet31.hal_protocol import (
    KeyPress,
    KeyboardHAL,
    DisplayHAL,
    MidiOutputHAL,
    HardwarePort,
)

logger = logging.getLogger(__name__)


def _bold(text: str) -> str:
    return "\x1b[1m" + text + "\x1b[0m"


class MidoMidiOutput(MidiOutputHAL):
    """MIDI output through a mido output port. Channels 1-16 map to 0-15."""

    def __init__(self, port):
        self.port = port

    @classmethod
    def open(cls, port_name: Optional[str] = None) -> "MidoMidiOutput":
        """Open a named output port (None = backend default)."""
        port = mido.open_output(port_name)
        logger.info("opened MIDI output '%s'", port.name)
        return cls(port)

    @property
    def name(self) -> str:
        return self.port.name

    def _channel(self, channel: int) -> int:
        return max(Midi.CHANNEL_MIN, min(Midi.CHANNEL_MAX, int(channel))) - 1

    def send_pitch_bend(self, channel, value):
        pitch = int(value) - Midi.PITCH_BEND_CENTER
        self.port.send(mido.Message("pitchwheel", channel=self._channel(channel), pitch=pitch))

    def send_note_on(self, channel, note, velocity):
        self.port.send(mido.Message(
            "note_on", channel=self._channel(channel), note=int(note), velocity=int(velocity)))

    def send_note_off(self, channel, note, velocity=0):
        self.port.send(mido.Message(
            "note_off", channel=self._channel(channel), note=int(note), velocity=int(velocity)))

    def send_control_change(self, channel, control, value):
        self.port.send(mido.Message(
            "control_change", channel=self._channel(channel), control=int(control), value=int(value)))

    def close(self):
        if not self.port.closed:
            self.port.close()


class ConsoleDisplay(DisplayHAL):
    """Prints chord changes and notices to a text stream."""

    def __init__(self, stream=None, color: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color
        self._pending: list[str] = []

    def _title(self, text: str) -> str:
        return _bold(text) if self.color else text

    def clear(self):
        self._pending = []

    def show_chord(self, title, code_line, labels):
        self._pending.append("")
        self._pending.append(self._title(title))
        self._pending.append(code_line)
        self._pending.append(", ".join(labels))

    def show_message(self, title, message):
        self._pending.append(title + ": " + message)

    def show_status(self, status):
        self._pending.append("(" + status + ")")

    def update(self):
        for line in self._pending:
            print(line, file=self.stream)
        self._pending = []
        self.stream.flush()


class QueuedKeyboard(KeyboardHAL):
    """Keys pushed by the shell, handed to the app on the next update."""

    def __init__(self):
        self._queue: list[KeyPress] = []

    def push(self, key: str, shift: bool = False):
        self._queue.append(KeyPress(key, shift))

    def update(self):
        pass

    def get_keys(self):
        keys = self._queue
        self._queue = []
        return keys


def list_outputs() -> list[str]:
    """Print the MIDI output ports mido can see."""
    outputs = mido.get_output_names()
    if not outputs:
        print("No MIDI output ports found!")
        return []
    print("Available MIDI outputs:")
    for i, name in enumerate(outputs):
        print(f"  [{i}] {name}")
    return outputs


def create_computer_hardware_port(port_name: Optional[str] = None, stream=None,
                                  midi_output: Optional[MidiOutputHAL] = None) -> HardwarePort:
    """
    Build the desktop hardware port.

    Args:
        port_name: mido output port name, None for the default port
        stream: Text stream for the console display
        midi_output: Already opened output (skips opening a port)

    Returns:
        HardwarePort with a QueuedKeyboard, ConsoleDisplay and MIDI output
    """
    if midi_output is None:
        midi_output = MidoMidiOutput.open(port_name)
    color = stream is None and sys.stdout.isatty()
    return HardwarePort(QueuedKeyboard(), ConsoleDisplay(stream, color=color), midi_output)
