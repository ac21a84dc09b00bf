"""Desktop configuration: MIDI port, pitch bend range, velocity, note names.

Both files are optional, human-editable JSON::

    tet31.config.json   {"port_name": "loopMIDI Port", "pitch_bend": 2, "velocity": 96}
    note_names.json     ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "H"]
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tet31.constants import Midi
from tet31.scale_math import DEFAULT_NOTE_NAMES

DEFAULT_CONFIG_PATH = Path("tet31.config.json")
DEFAULT_NOTE_NAMES_PATH = Path("note_names.json")


logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Settings for one performance session."""

    port_name: Optional[str] = None
    pitch_bend: int = Midi.PITCH_BEND_RANGE_DEFAULT
    velocity: int = Midi.VELOCITY_DEFAULT

    def __post_init__(self):
        self.pitch_bend = max(Midi.PITCH_BEND_RANGE_MIN,
                              min(Midi.PITCH_BEND_RANGE_MAX, int(self.pitch_bend)))
        self.velocity = max(Midi.VELOCITY_MIN, min(Midi.VELOCITY_MAX, int(self.velocity)))

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """Build a config from parsed JSON, ignoring unknown keys."""
        defaults = cls()
        return cls(
            port_name=data.get("port_name", defaults.port_name),
            pitch_bend=data.get("pitch_bend", defaults.pitch_bend),
            velocity=data.get("velocity", defaults.velocity),
        )


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Read the JSON config file; a missing or broken file gives the defaults."""
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        logger.debug("no config at %s; using defaults", path)
        return AppConfig()
    try:
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError("top level must be an object")
        return AppConfig.from_dict(data)
    except (OSError, ValueError, TypeError) as e:
        logger.warning("could not read config %s (%s); using defaults", path, e)
        return AppConfig()


def load_note_names(path: Optional[Path] = None) -> list[str]:
    """Read the 12 pitch class names used for display."""
    path = Path(path) if path is not None else DEFAULT_NOTE_NAMES_PATH
    if not path.exists():
        return list(DEFAULT_NOTE_NAMES)
    try:
        with path.open(encoding="utf-8") as fh:
            names = json.load(fh)
    except (OSError, ValueError) as e:
        logger.warning("could not read note names %s (%s); using defaults", path, e)
        return list(DEFAULT_NOTE_NAMES)
    if not isinstance(names, list) or len(names) != 12:
        logger.warning("note names %s need 12 entries; using defaults", path)
        return list(DEFAULT_NOTE_NAMES)
    return [str(n) for n in names]
