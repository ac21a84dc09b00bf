"""
Playback state - platform independent.
Holds what is sounding and provides an event-driven notification bus.
"""


class Event:
    """Event type constants for state changes."""

    CHORD_CHANGED = "chord_changed"
    TRANSPOSED = "transposed"
    REGENERATED = "regenerated"
    STOPPED = "stopped"
    SLOTS_CHANGED = "slots_changed"
    INFO = "info"


class PlaybackState:
    """
    Centralized playback state container.
    Mutated only by the PlaybackController that owns it.
    """

    def __init__(self):
        # Current state
        self.current_key = None
        self.is_playing = False

        # (channel, note) pairs that need a note-off
        self.active = []

        self.display_dirty = True

        # Event subscribers
        self._subscribers = {}

    def subscribe(self, event_type, callback):
        """
        Subscribe to an event type.

        Args:
            event_type: Event type constant from Event class
            callback: Function to call when event occurs, receives data dict
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type, callback):
        """Remove a callback from an event type."""
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(callback)
            except ValueError:
                pass

    def emit(self, event_type, data=None):
        """Emit an event to all subscribers."""
        self.display_dirty = True
        if event_type in self._subscribers:
            for callback in list(self._subscribers[event_type]):
                callback(data)

    def add_active(self, channel, note):
        self.active.append((channel, note))

    def clear_active(self):
        """Forget every active voice and return what was there."""
        active = self.active
        self.active = []
        return active

    def clear_display_dirty(self):
        """Mark display as updated."""
        self.display_dirty = False
