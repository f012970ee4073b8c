"""
Terminal main loop and key bindings.

Waits up to the poll interval for a key, applies at most one controller
transition, then redraws.
"""

from __future__ import annotations

import curses
import logging
from typing import Optional

from ..domain.enums import Action
from ..navigation import NavigationController
from . import render

logger = logging.getLogger(__name__)

KEY_ESCAPE = 27

KEY_BINDINGS = {
    curses.KEY_UP: Action.MOVE_UP,
    ord("k"): Action.MOVE_UP,
    curses.KEY_DOWN: Action.MOVE_DOWN,
    ord("j"): Action.MOVE_DOWN,
    curses.KEY_ENTER: Action.CONFIRM,
    10: Action.CONFIRM,
    13: Action.CONFIRM,
    curses.KEY_BACKSPACE: Action.BACK,
    127: Action.BACK,
    8: Action.BACK,
    KEY_ESCAPE: Action.BACK,
    ord("\t"): Action.TOGGLE_CHART,
    ord("q"): Action.QUIT,
}


def action_for_key(ch: int) -> Optional[Action]:
    """Controller action bound to a curses key code, if any."""
    return KEY_BINDINGS.get(ch)


def main(stdscr, controller: NavigationController, poll_interval_ms: int) -> None:
    curses.curs_set(0)
    curses.set_escdelay(25)
    render.init_colors()
    stdscr.keypad(True)
    stdscr.timeout(poll_interval_ms)

    while True:
        render.draw(stdscr, controller)
        ch = stdscr.getch()
        if ch == -1:
            continue   # timeout tick
        if ch == curses.KEY_RESIZE:
            continue

        action = action_for_key(ch)
        if action is None:
            continue
        logger.debug(f"Key {ch} -> {action.value}")
        if controller.handle(action):
            break


def run(controller: NavigationController, poll_interval_ms: int = 100) -> None:
    """Take over the terminal until the user quits."""
    curses.wrapper(main, controller, poll_interval_ms)
