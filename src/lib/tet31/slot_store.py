"""
Hotkey slot table - which chord lives on which key.
Pure data plus small derivations, no hardware dependencies.
"""
import logging
import re

from .constants import Hotkeys
from .errors import UnassignedHotkey
from .scale_math import clamp_and_dedup
from .shortcode import is_random_code

logger = logging.getLogger(__name__)

NAME_SPLIT_PATTERN = re.compile(r"^(?P<name>.+?)\s{2,}(?P<code>\S.*)$")
CODE_START_PATTERN = re.compile(r"\s(?:sym|pairs|rand|\d+int\d)", re.IGNORECASE)


class Slot:
    """One chord bound to a hotkey."""

    def __init__(self, key, chord, code, name=None):
        self.key = key
        self.chord = list(chord)
        self.code = code
        self.name = name
        self.transpose = 0

    @property
    def display_name(self):
        """Name if the row had one, otherwise the code."""
        return self.name if self.name else self.code

    @property
    def is_random(self):
        return is_random_code(self.code)

    def transposed(self):
        """Base chord shifted by the transpose offset, clamped and deduplicated."""
        if self.transpose == 0:
            return list(self.chord)
        return clamp_and_dedup([s + self.transpose for s in self.chord])

    def __repr__(self):
        return "Slot(%r, %r, code=%r, name=%r, transpose=%r)" % (
            self.key, self.chord, self.code, self.name, self.transpose)


def parse_name_and_code(line):
    """
    Split a chord line into an optional display name and its code.

    Accepted forms:
        sym7spread37
        10, 90, 125
        merkur I<TAB>sym7spread37
        merkur I  sym7spread37      (two or more spaces)
        merkur I sym7spread37       (name before a generator keyword)

    Returns:
        Tuple of (name or None, code)
    """
    line = line.strip()

    if "\t" in line:
        name, _, code = line.partition("\t")
        if name.strip() and code.strip():
            return (name.strip(), code.strip())

    # A bare step list such as "10  90" has no name
    if not any(ch.isalpha() for ch in line):
        return (None, line)

    m = NAME_SPLIT_PATTERN.match(line)
    if m:
        return (m.group("name").strip(), m.group("code").strip())

    m = CODE_START_PATTERN.search(line)
    if m:
        return (line[:m.start()].strip(), line[m.start():].strip())

    return (None, line)


def rows_from_lines(lines):
    """Turn raw chord lines into (name, code) table rows, skipping blanks."""
    return [parse_name_and_code(line) for line in lines if line and line.strip()]


class SlotStore:
    """
    Chord slots keyed by the fixed hotkey alphabet.
    """

    def __init__(self, engine, alphabet=Hotkeys.ALPHABET):
        """
        Args:
            engine: ShortcodeEngine used to parse table rows
            alphabet: Hotkeys in assignment order
        """
        self.engine = engine
        self.alphabet = alphabet
        self._slots = {}

    def apply_table(self, rows):
        """
        Replace every slot with the chords from a table.

        Each usable row goes to the next unused hotkey. Blank rows, rows
        that fail to parse and rows that produce no steps are skipped.

        Args:
            rows: Iterable of (name or None, code text)

        Returns:
            List of hotkeys that were bound, in order
        """
        slots = {}
        keys = iter(self.alphabet)
        bound = []

        for name, text in rows:
            if text is None or not text.strip():
                continue

            result = self.engine.classify(text)
            if not result.ok:
                logger.warning("Skipping '%s' (parse error): %s", text.strip(), result.error)
                continue
            if not result.chord:
                logger.warning("Skipping '%s': no playable steps", text.strip())
                continue

            key = next(keys, None)
            if key is None:
                logger.warning("No hotkeys left, ignoring '%s' and later rows", text.strip())
                break

            slot_name = name.strip() if name and name.strip() else None
            slots[key] = Slot(key, result.chord, result.code, slot_name)
            bound.append(key)

        self._slots = slots
        logger.info("Loaded %d chord slots", len(bound))
        return bound

    def get(self, key):
        """Return the slot for a key or raise UnassignedHotkey."""
        try:
            return self._slots[key]
        except KeyError:
            raise UnassignedHotkey(key) from None

    def is_assigned(self, key):
        return key in self._slots

    def keys(self):
        """Bound hotkeys in alphabet order."""
        return [k for k in self.alphabet if k in self._slots]

    def first_key(self):
        """First bound hotkey, or None when the table is empty."""
        for k in self.alphabet:
            if k in self._slots:
                return k
        return None

    def __iter__(self):
        for k in self.keys():
            yield self._slots[k]

    def __len__(self):
        return len(self._slots)

    def get_transposed(self, key):
        """Base chord of a slot shifted by its transpose offset."""
        return self.get(key).transposed()

    def set_transpose(self, key, offset):
        self.get(key).transpose = int(offset)

    def shift_transpose(self, key, delta):
        """Add delta to a slot's transpose offset and return the new offset."""
        slot = self.get(key)
        slot.transpose += int(delta)
        return slot.transpose

    def replace_chord(self, key, chord):
        """Overwrite a slot's base chord, keeping its transpose offset."""
        self.get(key).chord = list(chord)
