"""
Main tet31 Application.
Ties together the chord engine, playback controller, and hardware.
Platform-independent - receives hardware through dependency injection.
"""
import random

from .constants import Hotkeys, Midi as MidiConst
from .playback_controller import PlaybackController
from .playback_state import Event
from .shortcode import ShortcodeEngine
from .slot_store import SlotStore, rows_from_lines
from .voice_router import VoiceRouter


class Tet31App:
    """
    Main application class for the 31-EDO chord machine.
    Platform-independent - receives hardware through dependency injection.
    """

    def __init__(self, hardware, pitch_bend_range=MidiConst.PITCH_BEND_RANGE_DEFAULT,
                 velocity=MidiConst.VELOCITY_DEFAULT, note_names=None, rng=None):
        """
        Initialize the chord machine.

        Args:
            hardware: HardwarePort instance with all HAL implementations
            pitch_bend_range: Receiver bend sensitivity in semitones (0-24)
            velocity: Note velocity 1-127
            note_names: Optional 12 pitch class names for the display
            rng: Random source shared by chord generation and channel picks
        """
        if rng is None:
            rng = random.Random()

        # Business logic
        self.engine = ShortcodeEngine(rng)
        self.controller = PlaybackController(
            SlotStore(self.engine),
            midi_output=hardware.midi_output,
            engine=self.engine,
            router=VoiceRouter(rng),
            pitch_bend_range=pitch_bend_range,
            velocity=velocity,
            note_names=note_names,
        )
        self.state = self.controller.state

        # Hardware (injected)
        self.hw = hardware

        self.running = True

        # Subscribe to playback events
        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Connect playback events to the display."""

        def on_chord_changed(data):
            code_line = data["code"] + "  ->  " + ", ".join(str(s) for s in data["base"])
            title = "[" + data["key"] + "]  " + data["name"]
            self.hw.display.show_chord(title, code_line, data["labels"])

        def on_transposed(data):
            self.hw.display.show_status(
                "transpose " + ("+" if data["direction"] > 0 else "-") + "1")

        def on_regenerated(data):
            self.hw.display.show_status(data["message"])

        def on_stopped(data):
            self.hw.display.show_status("[STOP]")

        def on_info(data):
            self.hw.display.show_message(data["title"], data["message"])

        def on_slots_changed(data):
            self.hw.display.show_status(
                str(len(data["keys"])) + " slots: " + "".join(data["keys"]))

        # Register handlers
        self.state.subscribe(Event.CHORD_CHANGED, on_chord_changed)
        self.state.subscribe(Event.TRANSPOSED, on_transposed)
        self.state.subscribe(Event.REGENERATED, on_regenerated)
        self.state.subscribe(Event.STOPPED, on_stopped)
        self.state.subscribe(Event.INFO, on_info)
        self.state.subscribe(Event.SLOTS_CHANGED, on_slots_changed)

    def start(self, lines, autoplay=True):
        """
        Prepare the synth and load chord lines.

        Args:
            lines: Chord lines, e.g. ["merkur I\tsym7spread37", "10, 90"]
            autoplay: Play the first bound slot right away

        Returns:
            List of bound hotkeys
        """
        self.controller.initialize()
        bound = self.controller.apply_table(rows_from_lines(lines))
        if autoplay and bound:
            self.controller.trigger(bound[0])
        self.hw.update_outputs()
        return bound

    def handle_key(self, press):
        """Map one key press to a playback operation."""
        key = press.key
        if key == Hotkeys.PANIC:
            self.controller.panic()
            self.running = False
        elif key == Hotkeys.TOGGLE_PLAY:
            self.controller.toggle_play()
        elif key == Hotkeys.TRANSPOSE_UP:
            self.controller.transpose(1)
        elif key == Hotkeys.TRANSPOSE_DOWN:
            self.controller.transpose(-1)
        else:
            key = key.lower()
            if press.shift:
                self.controller.regenerate_if_random(key)
            else:
                self.controller.trigger(key)

    def update(self):
        """
        Main update loop - call this frequently.
        Polls inputs and processes state changes.
        """
        self.hw.update_inputs()

        for press in self.hw.keyboard.get_keys():
            self.handle_key(press)
            if not self.running:
                break

        if self.state.display_dirty:
            self.hw.update_outputs()
            self.state.clear_display_dirty()

    def cleanup(self):
        """Clean shutdown - panic so no note survives, then clear the display."""
        self.controller.panic()
        self.hw.display.clear()
        self.hw.display.update()
