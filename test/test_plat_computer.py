"""
Tests for the desktop platform: mido output, console display, shell, config.

Run with: python test/test_plat_computer.py
     or: pytest test
"""
import io
import json
import os
import shutil
import sys
import tempfile

# Add the src/lib and src/plat_computer paths for imports
HERE = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(HERE, "..", "src", "lib"))
sys.path.insert(0, os.path.join(HERE, "..", "src", "plat_computer"))

from mock_hal import MockMidiOutputHAL, ScriptedRandom
from runner import run_tests

from tet31 import Tet31App
from tet31.midi_events import PitchBend, NoteOn, NoteOff, ControlChange

from desktop_config import AppConfig, load_config, load_note_names
import hal_computer
from hal_computer import (
    ConsoleDisplay,
    MidoMidiOutput,
    QueuedKeyboard,
    create_computer_hardware_port,
    list_outputs,
)
from tet31_main import build_parser, main, read_chord_lines, resolve_config
from tet31_shell import PerformanceShell


class FakePort:
    """Stands in for a mido output port."""

    def __init__(self, name="fake"):
        self.name = name
        self.sent = []
        self.closed = False

    def send(self, msg):
        self.sent.append(msg)

    def close(self):
        self.closed = True


class TempDir:
    """Temporary directory helper usable without pytest fixtures."""

    def __enter__(self):
        self.path = tempfile.mkdtemp()
        return self

    def __exit__(self, *exc):
        shutil.rmtree(self.path)

    def write(self, name, text):
        path = os.path.join(self.path, name)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        return path


def make_shell(lines):
    midi = MockMidiOutputHAL()
    stream = io.StringIO()
    hardware = create_computer_hardware_port(stream=stream, midi_output=midi)
    app = Tet31App(hardware, rng=ScriptedRandom())
    app.start(lines)
    out = io.StringIO()
    shell = PerformanceShell(app, hardware.keyboard, stdout=out)
    return shell, app, midi, stream, out


class TestMidoOutput:
    """Tests for event to mido message mapping."""

    def test_pitch_bend_is_signed(self):
        port = FakePort()
        out = MidoMidiOutput(port)
        out.send(PitchBend(1, 8192))
        out.send(PitchBend(16, 16383))
        out.send(PitchBend(2, 0))
        assert [(m.type, m.channel, m.pitch) for m in port.sent] == [
            ("pitchwheel", 0, 0),
            ("pitchwheel", 15, 8191),
            ("pitchwheel", 1, -8192),
        ]

    def test_notes_and_cc(self):
        port = FakePort()
        out = MidoMidiOutput(port)
        out.send_all([NoteOn(7, 60, 96), NoteOff(7, 60), ControlChange(3, 101, 0)])
        on, off, cc = port.sent
        assert (on.type, on.channel, on.note, on.velocity) == ("note_on", 6, 60, 96)
        assert (off.type, off.channel, off.note, off.velocity) == ("note_off", 6, 60, 0)
        assert (cc.type, cc.channel, cc.control, cc.value) == ("control_change", 2, 101, 0)

    def test_rejects_other_values(self):
        out = MidoMidiOutput(FakePort())
        try:
            out.send(("note_on", 1, 60))
        except TypeError:
            return
        assert False, "expected TypeError"

    def test_close_once(self):
        port = FakePort("synth")
        out = MidoMidiOutput(port)
        assert out.name == "synth"
        out.close()
        out.close()
        assert port.closed


class TestConsole:
    """Tests for the console display and queued keyboard."""

    def test_buffers_until_update(self):
        stream = io.StringIO()
        display = ConsoleDisplay(stream, color=False)
        display.show_chord("[1]  sym3", "sym3  ->  63, 94, 125", ["C2+0c", "C3+0c"])
        display.show_status("[STOP]")
        assert stream.getvalue() == ""
        display.update()
        assert stream.getvalue() == "\n[1]  sym3\nsym3  ->  63, 94, 125\nC2+0c, C3+0c\n([STOP])\n"

    def test_clear_drops_pending(self):
        stream = io.StringIO()
        display = ConsoleDisplay(stream, color=False)
        display.show_message("Info", "hello")
        display.clear()
        display.update()
        assert stream.getvalue() == ""

    def test_keyboard_queue(self):
        keyboard = QueuedKeyboard()
        keyboard.push("a")
        keyboard.push("b", shift=True)
        keys = keyboard.get_keys()
        assert [(k.key, k.shift) for k in keys] == [("a", False), ("b", True)]
        assert keyboard.get_keys() == []


class TestShell:
    """Tests for the performance console commands."""

    def test_hotkey_line(self):
        shell, app, midi, stream, out = make_shell(["sym3", "sym5"])
        shell.onecmd("2")
        assert app.controller.current_key == "2"
        assert "[2]  sym5" in stream.getvalue()

    def test_empty_line_toggles(self):
        shell, app, midi, stream, out = make_shell(["sym3"])
        shell.onecmd("")
        assert not app.controller.is_playing
        shell.onecmd("play")
        assert app.controller.is_playing

    def test_transpose_runs(self):
        shell, app, midi, stream, out = make_shell(["sym3"])
        shell.onecmd("+++")
        shell.onecmd("-")
        assert app.controller.slots.get("1").transpose == 2

    def test_bang_regenerates(self):
        shell, app, midi, stream, out = make_shell(["sym3"])
        shell.onecmd("!1")
        assert "(no random)" in stream.getvalue()
        shell.onecmd("!")
        assert "Usage" in out.getvalue()

    def test_unknown(self):
        shell, app, midi, stream, out = make_shell(["sym3"])
        shell.onecmd("xyz")
        assert "Unknown command: xyz" in out.getvalue()

    def test_slots_listing(self):
        shell, app, midi, stream, out = make_shell(["venus  sym3", "10, 90"])
        shell.onecmd("slots")
        text = out.getvalue()
        assert " *[1] venus  (sym3)  C2+0c, C3+0c, C4+0c" in text
        assert "  [2] pc-list  (pc-list)" in text

    def test_stop_and_panic(self):
        shell, app, midi, stream, out = make_shell(["sym3"])
        shell.onecmd("stop")
        assert not app.controller.is_playing
        midi.clear_messages()
        shell.onecmd("panic")
        assert len(midi.messages) == 48

    def test_quit(self):
        shell, app, midi, stream, out = make_shell(["sym3"])
        assert shell.onecmd("quit")
        assert not app.running
        assert not app.controller.is_playing


class TestConfig:
    """Tests for JSON config and note name loading."""

    def test_defaults_when_missing(self):
        with TempDir() as tmp:
            cfg = load_config(os.path.join(tmp.path, "nope.json"))
        assert cfg == AppConfig()
        assert cfg.pitch_bend == 2
        assert cfg.velocity == 96

    def test_values_clamped(self):
        with TempDir() as tmp:
            path = tmp.write("c.json", json.dumps({"port_name": "synth", "pitch_bend": 40, "velocity": 0}))
            cfg = load_config(path)
        assert cfg == AppConfig("synth", 24, 1)

    def test_broken_file(self):
        with TempDir() as tmp:
            cfg = load_config(tmp.write("c.json", "{not json"))
        assert cfg == AppConfig()

    def test_note_names(self):
        names = ["do", "reb", "re", "mib", "mi", "fa", "solb", "sol", "lab", "la", "sib", "si"]
        with TempDir() as tmp:
            assert load_note_names(tmp.write("n.json", json.dumps(names))) == names
            short = load_note_names(tmp.write("s.json", json.dumps(["C"])))
        assert short[11] == "H"

    def test_arguments_override_file(self):
        with TempDir() as tmp:
            path = tmp.write("c.json", json.dumps({"port_name": "a", "pitch_bend": 12}))
            args = build_parser().parse_args(["--config", path, "--port", "b", "--velocity", "80"])
            cfg = resolve_config(args)
        assert cfg == AppConfig("b", 12, 80)


class TestMain:
    """Tests for the entry point helpers."""

    def test_read_until_empty_line(self):
        stream = io.StringIO("sym3\nvenus\tsym5\n\nlater\n")
        assert read_chord_lines(stream=stream) == ["sym3", "venus\tsym5"]

    def test_read_file_skips_blanks(self):
        with TempDir() as tmp:
            path = tmp.write("chords.txt", "sym3\n\n10, 90\n")
            assert read_chord_lines(path) == ["sym3", "10, 90"]

    def test_missing_chord_file(self):
        with TempDir() as tmp:
            code = main(["--config", os.path.join(tmp.path, "none.json"),
                         "--chords", os.path.join(tmp.path, "missing.txt")])
        assert code == 1

    def test_list_ports(self):
        original = hal_computer.mido.get_output_names
        hal_computer.mido.get_output_names = lambda: ["synth A", "synth B"]
        try:
            assert main(["--list-ports"]) == 0
            assert list_outputs() == ["synth A", "synth B"]
        finally:
            hal_computer.mido.get_output_names = original


if __name__ == "__main__":
    success = run_tests([TestMidoOutput, TestConsole, TestShell, TestConfig, TestMain])
    sys.exit(0 if success else 1)
