"""Desktop entry point for the tet31 chord machine.

Reads chord lines (from --chords or stdin, finished with an empty line),
opens a MIDI output through mido, sets pitch bend sensitivity on all 16
channels and starts the performance console.

Chord line forms::

    sym7spread37
    merkur I<TAB>sym7spread37
    merkur I  rand5 s12 c100
    10, 90, 125
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tet31 import Tet31App
from tet31.constants import Hotkeys

from desktop_config import AppConfig, load_config, load_note_names
from hal_computer import create_computer_hardware_port, list_outputs
from logging_setup import configure_logging
from tet31_shell import PerformanceShell

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="tet31 - 31-EDO chord machine with per-voice pitch bend")
    ap.add_argument("--config", type=Path, default=None,
                    help="JSON config file (default: ./tet31.config.json)")
    ap.add_argument("--port", default=None,
                    help="MIDI output port name (default: from config, else the backend default)")
    ap.add_argument("--pitch-bend", type=int, default=None,
                    help="Synth pitch bend range in semitones, 0-24")
    ap.add_argument("--velocity", type=int, default=None, help="Note velocity, 1-127")
    ap.add_argument("--note-names", type=Path, default=None,
                    help="JSON list of 12 note names (default: ./note_names.json)")
    ap.add_argument("--chords", type=Path, default=None,
                    help="Text file with one chord per line (default: read stdin)")
    ap.add_argument("--list-ports", action="store_true",
                    help="List MIDI output ports and exit")
    ap.add_argument("--no-autoplay", action="store_true",
                    help="Do not play the first chord on start")
    return ap


def resolve_config(args) -> AppConfig:
    """Config file values, overridden by command line arguments."""
    cfg = load_config(args.config)
    return AppConfig(
        port_name=args.port if args.port is not None else cfg.port_name,
        pitch_bend=args.pitch_bend if args.pitch_bend is not None else cfg.pitch_bend,
        velocity=args.velocity if args.velocity is not None else cfg.velocity,
    )


def read_chord_lines(path=None, stream=None) -> list[str]:
    """Chord lines from a file, or from a stream until the first empty line."""
    if path is not None:
        with Path(path).open(encoding="utf-8") as fh:
            return [line.rstrip("\n") for line in fh if line.strip()]

    stream = stream if stream is not None else sys.stdin
    print("Paste your chord lines (one per line), finish with an empty line.")
    print(f"Available slots ({Hotkeys.COUNT}): {Hotkeys.ALPHABET}")
    lines = []
    for line in stream:
        if not line.strip():
            break
        lines.append(line.rstrip("\n"))
    return lines


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.list_ports:
        list_outputs()
        return 0

    cfg = resolve_config(args)
    note_names = load_note_names(args.note_names)

    try:
        lines = read_chord_lines(args.chords)
    except OSError as e:
        logger.error("could not read chords: %s", e)
        return 1

    try:
        hardware = create_computer_hardware_port(cfg.port_name)
    except OSError as e:
        logger.error("could not open MIDI output %r: %s", cfg.port_name, e)
        return 1

    print(f"[config] Port={hardware.midi_output.name}, PB=±{cfg.pitch_bend}, Vel={cfg.velocity}")

    app = Tet31App(hardware, pitch_bend_range=cfg.pitch_bend,
                   velocity=cfg.velocity, note_names=note_names)
    try:
        bound = app.start(lines, autoplay=not args.no_autoplay)
        if not bound:
            logger.warning("no playable chords loaded")
        PerformanceShell(app, hardware.keyboard).cmdloop()
    except KeyboardInterrupt:
        print()
    finally:
        app.cleanup()
        hardware.midi_output.close()

    print("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
