"""Interactive session: keys and resizes in, frames out.

``GridApp`` is the single loop that touches the view.  Each pass it draws
the grid if the view is dirty, waits briefly for input, then applies any
resize and the keys that arrived.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pi.grid.errors import DrawError
from pi.grid.terminal import InteractiveTerminal
from pi.grid.view import GridView

logger = logging.getLogger(__name__)

KEY_CTRL_C = "\x03"
KEY_CTRL_L = "\x0c"
KEY_CTRL_Q = "\x11"
KEY_CTRL_R = "\x12"

QUIT_KEYS = frozenset({"q", KEY_CTRL_C, KEY_CTRL_Q})

DEFAULT_POLL_INTERVAL = 0.1


class GridApp:
    """Runs a :class:`GridView` against an interactive terminal."""

    def __init__(
        self,
        terminal: InteractiveTerminal,
        view: GridView,
        path: str | Path | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.terminal = terminal
        self.view = view
        self.path = path
        self.poll_interval = poll_interval
        self._should_quit = False

    @property
    def should_quit(self) -> bool:
        return self._should_quit

    def quit(self) -> None:
        self._should_quit = True

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Take over the terminal until a quit key is pressed."""
        self.terminal.start()
        try:
            self.view.resize(self.terminal.size())
            if self.path is not None:
                self.view.load(self.path)

            while not self._should_quit:
                self.refresh()
                keys = self.terminal.read_key(self.poll_interval)
                if self.terminal.take_resize():
                    self.view.resize(self.terminal.size())
                if keys:
                    self.handle_keys(keys)
        finally:
            self.terminal.stop()

    def refresh(self) -> None:
        """Draw the view if needed and push the frame to the screen.

        A failed frame is logged and left dirty so the next pass redraws
        it.
        """
        try:
            self.view.render()
        except DrawError as exc:
            logger.warning("frame aborted at row %d: %s", exc.row, exc)

        try:
            self.terminal.flush()
        except OSError:
            logger.warning("flush failed, redrawing next pass", exc_info=True)
            self.view.invalidate()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_keys(self, keys: str) -> None:
        for key in keys:
            self.handle_key(key)
            if self._should_quit:
                return

    def handle_key(self, key: str) -> None:
        if key in QUIT_KEYS:
            self.quit()
        elif key == KEY_CTRL_L:
            self.view.invalidate()
        elif key == KEY_CTRL_R:
            self.reload()

    def reload(self) -> bool:
        """Load the current file again, keeping the old table on failure."""
        if self.path is None:
            return False
        return self.view.load(self.path)
