"""
Shortcode engine - turns compact chord descriptors into step chords.
Pure logic - no hardware dependencies.

Grammars (case-insensitive):
    sym<voices> [spread<n>] [center<n>]           symmetric cluster
    pairs<voices> int<n> [spread<n>] [center<n>]  symmetric dyads
    rand<voices> [spread<n>] [center<n>]          random / jittered cluster
    <voices>int<n> [center<n>]                    pairs with automatic spread
    10, 90, 125                                   direct step list

Tags have short forms: s = spread, c = center, i = int.
"""
import logging
import random
import re

from .constants import Edo, Shortcode
from .errors import (
    ShortcodeError,
    UnrecognizedShortcode,
    InvalidParameter,
    OddVoiceCount,
    EmptyChordAfterClamp,
)
from .scale_math import clamp_and_dedup

logger = logging.getLogger(__name__)

KIND_PATTERN = re.compile(r"(pairs|rand|sym)\s*(\d*)", re.IGNORECASE)
LEGACY_PATTERN = re.compile(r"(\d+)\s*(?:int|i)([+-]?\d+)", re.IGNORECASE)
# Long tag names must come before their one-letter aliases
TAG_PATTERN = re.compile(r"(spread|center|int|s|c|i)([+-]?\d+)", re.IGNORECASE)
SEPARATOR_PATTERN = re.compile(r"[\s,;_]*")
NUMBER_PATTERN = re.compile(r"[+-]?\d+")

TAG_NAMES = {
    "spread": "spread",
    "s": "spread",
    "center": "center",
    "c": "center",
    "int": "interval",
    "i": "interval",
}

LEGACY = "legacy"


class ShortcodeParams:
    """Generator parameters parsed from a shortcode."""

    def __init__(self, kind, voices, spread, center, interval=None):
        self.kind = kind
        self.voices = voices
        self.spread = spread
        self.center = center
        self.interval = interval

    def __eq__(self, other):
        if not isinstance(other, ShortcodeParams):
            return NotImplemented
        return self._as_tuple() == other._as_tuple()

    def __repr__(self):
        return (
            "ShortcodeParams(kind=%r, voices=%r, spread=%r, center=%r, interval=%r)"
            % self._as_tuple()
        )

    def _as_tuple(self):
        return (self.kind, self.voices, self.spread, self.center, self.interval)


class ParseResult:
    """Tagged outcome of classifying a line of chord text."""

    DIRECT_LIST = "direct_list"
    SHORTCODE = "shortcode"
    FAILURE = "failure"

    def __init__(self, kind, chord=None, code="", error=None):
        self.kind = kind
        self.chord = chord if chord is not None else []
        self.code = code
        self.error = error

    @property
    def ok(self):
        return self.kind != ParseResult.FAILURE

    def __repr__(self):
        return "ParseResult(%r, chord=%r, code=%r, error=%r)" % (
            self.kind, self.chord, self.code, self.error)


# ============================================================================
# GENERATORS
# ============================================================================
def split_interval(x):
    """Split an interval into lower/upper halves (floor, remainder)."""
    a = x // 2
    return (a, x - a)


def gen_sym(voices, spread, center):
    """
    Symmetric cluster around center.

    Odd voice counts put one voice on the center; even counts straddle
    it with the spread split into a lower and upper half.
    """
    steps = []
    if voices % 2 == 1:
        half = (voices - 1) // 2
        for k in range(-half, half + 1):
            steps.append(center + k * spread)
    else:
        a, b = split_interval(spread)
        for j in range(voices // 2):
            steps.append(center - (a + j * spread))
            steps.append(center + (b + j * spread))
    steps.sort()
    return clamp_and_dedup(steps)


def _pair_steps(pairs, interval, spread, center):
    a, b = split_interval(interval)
    steps = []
    for i in range(pairs):
        rel = i - (pairs - 1) // 2
        anchor = center + rel * spread
        steps.append(anchor - a)
        steps.append(anchor + b)
    steps.sort()
    return steps


def gen_pairs(voices, spread, interval, center):
    """Dyads of a fixed inner interval, spread apart around center."""
    if voices % 2 != 0:
        raise OddVoiceCount("pairs requires an even number of voices, got " + str(voices))
    return clamp_and_dedup(_pair_steps(voices // 2, interval, spread, center))


def auto_spread(voices, interval, center):
    """
    Largest pair spacing that keeps every step inside the legal range.

    Searches upward from 1 and stops at the first spacing that overflows;
    the previous spacing is kept (1 if even that does not fit).
    """
    best = 1
    for spread in range(1, Edo.PITCH_MAX + 1):
        steps = _pair_steps(voices // 2, interval, spread, center)
        if not steps or steps[0] < Edo.PITCH_MIN or steps[-1] > Edo.PITCH_MAX:
            break
        best = spread
    return best


def gen_pairs_auto_spread(voices, interval, center):
    """Legacy <voices>int<interval> form: pairs with an automatic spread."""
    if voices % 2 != 0:
        raise OddVoiceCount("legacy int form requires an even number of voices, got " + str(voices))
    spread = auto_spread(voices, interval, center)
    logger.debug("auto spread for %sint%s center %s: %s", voices, interval, center, spread)
    return clamp_and_dedup(_pair_steps(voices // 2, interval, spread, center))


def gen_rand(voices, spread, center, rng):
    """
    Random chord.

    spread <= 0: distinct steps drawn uniformly over the whole range.
    spread > 0: the sym cluster with every voice jittered by up to
    half the spread in either direction.
    """
    if spread <= 0:
        if voices > Edo.PITCH_MAX:
            raise InvalidParameter(
                "rand cannot pick " + str(voices) + " distinct steps from " + str(Edo.PITCH_MAX))
        chosen = set()
        while len(chosen) < voices:
            chosen.add(rng.randint(Edo.PITCH_MIN, Edo.PITCH_MAX))
        return sorted(chosen)

    half = spread / 2.0
    steps = [int(round(s + rng.uniform(-half, half))) for s in gen_sym(voices, spread, center)]
    steps.sort()
    return clamp_and_dedup(steps)


# ============================================================================
# PARSING
# ============================================================================
def has_letters(text):
    for ch in text:
        if ch.isalpha():
            return True
    return False


def is_random_code(code):
    """True if a stored slot code regenerates (starts with 'rand')."""
    return code.strip().lower().startswith(Shortcode.RAND)


def parse_step_list(text):
    """
    Parse a direct list of step indices ("10, 90" or "2 7 -3").

    Returns:
        Ascending chord of at most 16 clamped, distinct steps

    Raises:
        UnrecognizedShortcode: text contains letters
        EmptyChordAfterClamp: no numbers found
    """
    if has_letters(text):
        raise UnrecognizedShortcode("step list cannot contain letters: '" + text.strip() + "'")
    values = [int(v) for v in NUMBER_PATTERN.findall(text)]
    steps = clamp_and_dedup(values)[:Shortcode.MAX_LIST_VALUES]
    if not steps:
        raise EmptyChordAfterClamp("no steps in '" + text.strip() + "'")
    return sorted(steps)


def _parse_tags(text, start):
    """Read tag<int> tokens from position start to the end of text."""
    tags = {}
    pos = start
    while True:
        pos = SEPARATOR_PATTERN.match(text, pos).end()
        if pos >= len(text):
            return tags
        m = TAG_PATTERN.match(text, pos)
        if not m:
            raise UnrecognizedShortcode(
                "unexpected '" + text[pos:] + "' in shortcode '" + text + "'")
        tags[TAG_NAMES[m.group(1).lower()]] = int(m.group(2))
        pos = m.end()


def parse_params(text):
    """
    Parse shortcode text into generator parameters.

    Raises:
        UnrecognizedShortcode: no known grammar matches
        InvalidParameter: a required number is missing
    """
    text = text.strip()

    m = KIND_PATTERN.match(text)
    if m:
        kind = m.group(1).lower()
        if not m.group(2):
            raise InvalidParameter("missing voice count after '" + kind + "'")
        voices = int(m.group(2))
        tags = _parse_tags(text, m.end())

        if kind == Shortcode.RAND:
            default_spread = Shortcode.RAND_SPREAD_DEFAULT
        else:
            default_spread = Shortcode.SPREAD_DEFAULT

        interval = tags.get("interval")
        if kind == Shortcode.PAIRS and interval is None:
            raise InvalidParameter("pairs requires an interval (int<n>)")

        return ShortcodeParams(
            kind,
            voices,
            tags.get("spread", default_spread),
            tags.get("center", Edo.CENTER_DEFAULT),
            interval,
        )

    m = LEGACY_PATTERN.match(text)
    if m:
        tags = _parse_tags(text, m.end())
        if "spread" in tags or "interval" in tags:
            raise UnrecognizedShortcode("legacy form only accepts a center: '" + text + "'")
        return ShortcodeParams(
            LEGACY,
            int(m.group(1)),
            None,
            tags.get("center", Edo.CENTER_DEFAULT),
            int(m.group(2)),
        )

    raise UnrecognizedShortcode("Unrecognized shortcode: '" + text + "'")


class ShortcodeEngine:
    """
    Builds chords from shortcode text.
    The random source is injected so tests can make rand deterministic.
    """

    def __init__(self, rng=None):
        """
        Args:
            rng: Object with randint(a, b) and uniform(a, b), e.g. random.Random
        """
        self.rng = rng if rng is not None else random.Random()

    def generate(self, params):
        """Produce a chord from parsed parameters."""
        if params.kind == Shortcode.SYM:
            return gen_sym(params.voices, params.spread, params.center)
        if params.kind == Shortcode.PAIRS:
            return gen_pairs(params.voices, params.spread, params.interval, params.center)
        if params.kind == Shortcode.RAND:
            return gen_rand(params.voices, params.spread, params.center, self.rng)
        if params.kind == LEGACY:
            return gen_pairs_auto_spread(params.voices, params.interval, params.center)
        raise UnrecognizedShortcode("unknown generator kind '" + str(params.kind) + "'")

    def parse(self, text):
        """
        Parse shortcode or step-list text into a chord.

        Returns:
            Ascending list of distinct step indices (may be empty for
            generators asked for zero voices)
        """
        if not has_letters(text):
            return parse_step_list(text)
        return self.generate(parse_params(text))

    def classify(self, text):
        """
        Two-stage classification: letter check, then a structured parse.

        Returns:
            ParseResult tagged DIRECT_LIST, SHORTCODE or FAILURE
        """
        if text is None or not text.strip():
            return ParseResult(ParseResult.FAILURE, error=EmptyChordAfterClamp("blank chord text"))

        text = text.strip()
        try:
            if not has_letters(text):
                return ParseResult(
                    ParseResult.DIRECT_LIST, parse_step_list(text), Shortcode.PC_LIST)
            chord = self.generate(parse_params(text))
            return ParseResult(ParseResult.SHORTCODE, chord, text)
        except ShortcodeError as e:
            return ParseResult(ParseResult.FAILURE, error=e)
