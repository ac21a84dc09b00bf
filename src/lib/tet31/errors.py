"""
Error types for the tet31 chord machine.
"""


class Tet31Error(Exception):
    """Base class for all chord machine errors."""


class ShortcodeError(Tet31Error, ValueError):
    """Text could not be turned into a chord."""


class UnrecognizedShortcode(ShortcodeError):
    """Text matches none of the known chord grammars."""


class InvalidParameter(ShortcodeError):
    """A required numeric parameter is missing or out of range."""


class OddVoiceCount(ShortcodeError):
    """Pair-based generators need an even number of voices."""


class EmptyChordAfterClamp(ShortcodeError):
    """Parsing succeeded but left no playable steps."""


class UnassignedHotkey(Tet31Error, KeyError):
    """No slot is bound to the requested hotkey."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return "No chord assigned to '" + str(self.key) + "'."
