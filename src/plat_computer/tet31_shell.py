"""Interactive performance console for tet31.

One line per action; every line is turned into key presses for the app:

    a        select and play the chord on hotkey 'a'
    !a       re-generate 'a' if it is a rand… chord
    + / -    transpose the current chord by one step (repeatable: +++)
    <enter>  stop / start
"""

from __future__ import annotations

import cmd

from tet31.constants import Hotkeys
from tet31.scale_math import format_chord


class PerformanceShell(cmd.Cmd):
    intro = (
        "\nControls:\n"
        "  [" + " ".join(Hotkeys.ALPHABET) + "] : select & play chord\n"
        "  !<hotkey> : re-generate if chord is a rand…\n"
        "  + / - : transpose current chord by ±1 step\n"
        "  <enter> or 'play' : stop / start   |   'panic'   |   'quit'\n"
    )
    prompt = "tet31> "

    def __init__(self, app, keyboard, stdout=None):
        super().__init__(stdout=stdout)
        self.app = app
        self.keyboard = keyboard

    def _print(self, *args, **kwargs):
        kwargs.setdefault("file", self.stdout)
        print(*args, **kwargs)

    def _press(self, key: str, shift: bool = False):
        self.keyboard.push(key, shift)
        self.app.update()

    # -- keys ----------------------------------------------------------------

    def emptyline(self):
        self._press(Hotkeys.TOGGLE_PLAY)

    def default(self, line):
        line = line.strip()
        if line.startswith("!"):
            key = line[1:].strip()
            if len(key) != 1:
                self._print("Usage: !<hotkey>")
                return
            self._press(key, shift=True)
        elif line and all(ch in (Hotkeys.TRANSPOSE_UP, Hotkeys.TRANSPOSE_DOWN) for ch in line):
            for ch in line:
                self._press(ch)
        elif len(line) == 1:
            self._press(line)
        else:
            self._print("Unknown command: " + line)

    # -- commands ------------------------------------------------------------

    def do_play(self, arg):
        """Stop / start the current chord: play"""
        self._press(Hotkeys.TOGGLE_PLAY)

    def do_stop(self, arg):
        """Stop the current chord: stop"""
        self.app.controller.stop()
        self.app.update()

    def do_panic(self, arg):
        """All notes off on every channel: panic"""
        self.app.controller.panic()
        self.app.update()

    def do_slots(self, arg):
        """List loaded chords: slots"""
        controller = self.app.controller
        for slot in controller.slots:
            marker = "*" if slot.key == controller.current_key else " "
            labels = ", ".join(format_chord(slot.transposed(), controller.note_names))
            self._print(f" {marker}[{slot.key}] {slot.display_name}  ({slot.code})  {labels}")

    def do_quit(self, arg):
        """Panic and exit: quit"""
        self._press(Hotkeys.PANIC)
        return True

    do_exit = do_quit
    do_EOF = do_quit
