"""
Playback controller - slot selection, transpose, regeneration, play/stop.

Every operation returns the MIDI events it produced, in send order, and
forwards each one to the attached MidiOutputHAL as it goes. Pitch bend is
always sent right before the note-on of its voice, and the note-offs of
a chord always go out before the first note-on of the next one.
"""
import logging

from .constants import Midi, Display
from .errors import ShortcodeError
from .midi_events import (
    NoteOff,
    NoteOn,
    PitchBend,
    clamp_bend_range,
    reset_events,
    setup_events,
)
from .playback_state import Event, PlaybackState
from .scale_math import format_chord
from .shortcode import ShortcodeEngine, is_random_code
from .slot_store import SlotStore
from .voice_router import VoiceRouter

logger = logging.getLogger(__name__)


class PlaybackController:
    """
    Owns the slot table and playback state and turns performer actions
    into ordered MIDI events.
    """

    def __init__(self, slot_store=None, midi_output=None, engine=None, router=None,
                 state=None, pitch_bend_range=Midi.PITCH_BEND_RANGE_DEFAULT,
                 velocity=Midi.VELOCITY_DEFAULT, note_names=None):
        """
        Args:
            slot_store: SlotStore (a new one sharing `engine` if omitted)
            midi_output: Optional MidiOutputHAL that receives every event
            engine: ShortcodeEngine used for regeneration
            router: VoiceRouter used on every trigger
            state: PlaybackState (a new one if omitted)
            pitch_bend_range: Receiver bend sensitivity, 0-24 semitones
            velocity: Note-on velocity 1-127
            note_names: Optional 12-entry pitch class names for display
        """
        if engine is None:
            engine = slot_store.engine if slot_store is not None else ShortcodeEngine()
        self.engine = engine
        self.slots = slot_store if slot_store is not None else SlotStore(engine)
        self.router = router if router is not None else VoiceRouter()
        self.state = state if state is not None else PlaybackState()
        self.midi_output = midi_output

        self.pitch_bend_range = clamp_bend_range(pitch_bend_range)
        self.velocity = max(Midi.VELOCITY_MIN, min(Midi.VELOCITY_MAX, int(velocity)))
        self.note_names = note_names

    # ---------- helpers ----------
    def _send(self, events, event):
        events.append(event)
        if self.midi_output is not None:
            self.midi_output.send(event)

    def _info(self, message):
        logger.info(message)
        self.state.emit(Event.INFO, {"title": Display.INFO_TITLE, "message": message})

    def _silence(self, events):
        for channel, note in self.state.clear_active():
            self._send(events, NoteOff(channel, note))
        self.state.is_playing = False

    def _start(self, events):
        """Stop whatever sounds, then start the current slot's transposed chord."""
        self._silence(events)

        chord = self.slots.get_transposed(self.state.current_key)
        voices = self.router.route(chord, self.pitch_bend_range)
        for voice in voices:
            self._send(events, PitchBend(voice.channel, voice.bend))
            self._send(events, NoteOn(voice.channel, voice.note, self.velocity))
            self.state.add_active(voice.channel, voice.note)

        self.state.is_playing = len(voices) > 0
        if len(voices) < len(chord):
            logger.warning("Only %d of %d voices have a channel", len(voices), len(chord))
        return chord

    def _notify_chord(self, sounding):
        slot = self.slots.get(self.state.current_key)
        self.state.emit(Event.CHORD_CHANGED, {
            "key": slot.key,
            "name": slot.display_name,
            "code": slot.code,
            "base": list(slot.chord),
            "transpose": slot.transpose,
            "steps": list(sounding),
            "labels": format_chord(sounding, self.note_names),
        })

    def _play_current(self, events):
        sounding = self._start(events)
        self._notify_chord(sounding)

    # ---------- public operations ----------
    @property
    def current_key(self):
        return self.state.current_key

    @property
    def is_playing(self):
        return self.state.is_playing

    def initialize(self):
        """Set pitch bend sensitivity (RPN 0,0) on all 16 channels."""
        events = []
        for event in setup_events(self.pitch_bend_range):
            self._send(events, event)
        return events

    def apply_table(self, rows):
        """
        Load a new slot table. Playback stops and nothing stays selected.

        Returns:
            List of bound hotkeys
        """
        self.stop()
        bound = self.slots.apply_table(rows)
        self.state.current_key = None
        self.state.emit(Event.SLOTS_CHANGED, {"keys": bound})
        return bound

    def trigger(self, key):
        """Select a slot, reset its transpose and play it."""
        events = []
        if not self.slots.is_assigned(key):
            self._info("No chord assigned to '" + str(key) + "'.")
            return events

        self._silence(events)
        self.state.current_key = key
        self.slots.set_transpose(key, 0)
        self._play_current(events)
        return events

    def toggle_play(self):
        """Stop if playing, otherwise (re)start the current or first slot."""
        if self.state.current_key is None:
            first = self.slots.first_key()
            if first is None:
                self._info(Display.NO_CHORDS)
                return []
            return self.trigger(first)

        if self.state.is_playing:
            return self.stop()

        events = []
        self._play_current(events)
        return events

    def transpose(self, delta):
        """Shift the current slot by delta steps and restart it."""
        events = []
        key = self.state.current_key
        if key is None:
            return events

        offset = self.slots.shift_transpose(key, delta)
        logger.debug("transpose %+d -> %d", delta, offset)
        self._play_current(events)
        self.state.emit(Event.TRANSPOSED, {"direction": 1 if delta >= 0 else -1})
        return events

    def regenerate_if_random(self, key=None):
        """
        Re-roll a rand slot from its original shortcode and restart it.

        Args:
            key: Slot to regenerate; defaults to the current slot. A
                 different key becomes the current slot, keeping its
                 transpose offset.
        """
        events = []
        if key is None:
            key = self.state.current_key
            if key is None:
                return events

        if not self.slots.is_assigned(key):
            self._info("No chord assigned to '" + str(key) + "'.")
            return events

        slot = self.slots.get(key)
        if not is_random_code(slot.code):
            self._info(Display.NO_RANDOM)
            return events

        self._silence(events)
        try:
            chord = self.engine.parse(slot.code)
        except ShortcodeError as e:
            logger.warning("Could not regenerate '%s': %s", slot.code, e)
            chord = []
        if chord:
            self.slots.replace_chord(key, chord)

        self.state.current_key = key
        self._play_current(events)
        self.state.emit(Event.REGENERATED, {"key": key, "message": Display.REGENERATED})
        return events

    def stop(self):
        """Note-off for everything sounding. Safe to call repeatedly."""
        events = []
        was_sounding = bool(self.state.active)
        self._silence(events)
        if was_sounding:
            self.state.emit(Event.STOPPED, {"key": self.state.current_key})
        return events

    def panic(self):
        """Stop, then reset every channel no matter what is tracked."""
        events = self.stop()
        for event in reset_events():
            self._send(events, event)
        return events

    def get_display_data(self):
        """
        Get data needed for display rendering.

        Returns:
            Dict with display information, or None when nothing is selected
        """
        key = self.state.current_key
        if key is None:
            return None
        slot = self.slots.get(key)
        sounding = slot.transposed()
        return {
            "key": key,
            "name": slot.display_name,
            "code": slot.code,
            "base": list(slot.chord),
            "transpose": slot.transpose,
            "steps": sounding,
            "labels": format_chord(sounding, self.note_names),
            "playing": self.state.is_playing,
        }
