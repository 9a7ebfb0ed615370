"""
Curses front-end for the interactive session.

Translates key presses and terminal resizes into session events, feeds them to
the session one at a time and redraws after each. Returns the selected path,
or None when the user cancels.
"""

import curses
from typing import Optional, Sequence
import logging

from ..models.config import LocatorConfig
from ..models.session import SessionEvent
from ..session import Session


logger = logging.getLogger(__name__)

KEY_ESCAPE = 27
KEY_CTRL_C = 3
ENTER_KEYS = (10, 13, curses.KEY_ENTER)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, curses.KEY_DC, 127, 8)


def key_to_event(key) -> Optional[SessionEvent]:
    """
    Map a key from get_wch() to a session event.

    Args:
        key: An int for function keys or a one-character str

    Returns:
        The matching event, or None for keys the session ignores
    """
    if isinstance(key, str):
        code = ord(key)
        if code in (KEY_ESCAPE, KEY_CTRL_C):
            return SessionEvent.cancel()
        if code in (10, 13):
            return SessionEvent.confirm()
        if code in (127, 8):
            return SessionEvent.delete_last()
        if key == ' ':
            return SessionEvent.space()
        if key.isprintable():
            return SessionEvent.append(key)
        return None

    if key in (KEY_ESCAPE, KEY_CTRL_C):
        return SessionEvent.cancel()
    if key in ENTER_KEYS:
        return SessionEvent.confirm()
    if key == curses.KEY_UP:
        return SessionEvent.move_up()
    if key == curses.KEY_DOWN:
        return SessionEvent.move_down()
    if key in BACKSPACE_KEYS:
        return SessionEvent.delete_last()
    return None


class TerminalUI:
    """Runs a Session inside a curses screen."""

    def __init__(self, stdscr, session: Session):
        self.stdscr = stdscr
        self.session = session

    def setup(self) -> None:
        curses.raw()
        curses.set_escdelay(25)
        self.stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        if curses.has_colors():
            curses.use_default_colors()
            curses.init_pair(1, curses.COLOR_CYAN, -1)

    def highlight_attr(self) -> int:
        attr = curses.A_BOLD
        if curses.has_colors():
            attr |= curses.color_pair(1)
        return attr

    def send_size(self) -> None:
        height, width = self.stdscr.getmaxyx()
        self.session.dispatch(SessionEvent.resize(height=height, width=width))

    def draw(self) -> None:
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        for row, line in enumerate(self.session.render()):
            if row >= height:
                break
            attr = self.highlight_attr() if line.highlighted else curses.A_NORMAL
            try:
                self.stdscr.addnstr(row, 0, line.text, max(width - 1, 0), attr)
            except curses.error:
                # writing into the bottom-right cell raises after the write
                pass
        self.stdscr.refresh()

    def run(self) -> Optional[str]:
        self.setup()
        self.send_size()

        while not self.session.finished:
            self.draw()
            key = self.stdscr.get_wch()

            if key == curses.KEY_RESIZE:
                curses.update_lines_cols()
                self.send_size()
                continue

            event = key_to_event(key)
            if event is not None:
                self.session.dispatch(event)

        return self.session.selected_path


def run_terminal_session(paths: Sequence[str], config: Optional[LocatorConfig] = None) -> Optional[str]:
    """
    Browse a file index interactively.

    Args:
        paths: Indexed paths
        config: Configuration object (optional)

    Returns:
        The selected path, or None if the user cancelled
    """
    config = config or LocatorConfig()
    session = Session(
        paths,
        max_results=config.search.max_results,
        window_size=config.ui.initial_window_size,
        reserved_rows=config.ui.reserved_rows,
    )

    def _main(stdscr) -> Optional[str]:
        return TerminalUI(stdscr, session).run()

    selected = curses.wrapper(_main)
    logger.debug(f"Session ended with selection: {selected!r}")
    return selected
