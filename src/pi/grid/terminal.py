"""Terminal abstraction for the grid view.

Provides the ``Terminal`` protocol the view draws through, the wider
``InteractiveTerminal`` protocol the event loop needs, and a concrete
``ProcessTerminal`` that drives ``sys.stdin``/``sys.stdout`` with raw mode,
the alternate screen and ANSI cursor addressing.

Draw methods raise ``OSError`` when the underlying stream fails; the view
turns that into a ``DrawError`` for the frame being drawn.
"""

from __future__ import annotations

import logging
import os
import select
import signal
import sys
import termios
import tty
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_LINE = "\x1b[2K"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_CURSOR_FMT = "\x1b[{};{}H"

_FALLBACK_COLUMNS = 80
_FALLBACK_ROWS = 24

WRITE_LOG_ENV = "PI_GRID_WRITE_LOG"


@dataclass(frozen=True)
class Size:
    """Viewport dimensions in character cells."""

    width: int = 0
    height: int = 0


# ---------------------------------------------------------------------------
# Terminal protocols
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """The draw operations the grid view needs."""

    def size(self) -> Size: ...

    def move_cursor(self, row: int, col: int) -> None: ...

    def clear_line(self) -> None: ...

    def print(self, text: str) -> None: ...


class InteractiveTerminal(Terminal, Protocol):
    """A terminal that can also run an interactive session."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def flush(self) -> None: ...

    def read_key(self, timeout: float | None = None) -> str | None: ...

    def take_resize(self) -> bool: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by ``sys.stdin``/``sys.stdout``.

    Output is buffered in memory and written by :meth:`flush`, so a frame
    reaches the screen in one write.  Resize events only set a flag, which
    the event loop collects with :meth:`take_resize`.
    """

    def __init__(self) -> None:
        self._pending: list[str] = []
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._resize_pending: bool = False
        self._write_log_path: str = os.environ.get(WRITE_LOG_ENV, "")

    # -- Terminal protocol --------------------------------------------------

    def size(self) -> Size:
        try:
            sz = os.get_terminal_size(sys.stdout.fileno())
        except (ValueError, OSError):
            return Size(_FALLBACK_COLUMNS, _FALLBACK_ROWS)
        return Size(sz.columns, sz.lines)

    def move_cursor(self, row: int, col: int) -> None:
        # ANSI cursor addresses are 1-based.
        self._pending.append(_MOVE_CURSOR_FMT.format(row + 1, col + 1))

    def clear_line(self) -> None:
        self._pending.append(_CLEAR_LINE)

    def print(self, text: str) -> None:
        self._pending.append(text)

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enter raw mode and the alternate screen, and watch for resizes."""
        fd = sys.stdin.fileno()

        # Save previous terminal state
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)

        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)

        self._pending.append(_ALT_SCREEN_ENABLE + _HIDE_CURSOR + _CLEAR_SCREEN)
        self.flush()

    def stop(self) -> None:
        """Leave the alternate screen and restore the terminal state."""
        self._pending.append(_SHOW_CURSOR + _ALT_SCREEN_DISABLE)
        try:
            self.flush()
        except OSError:
            logger.warning("could not restore screen", exc_info=True)

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

        if self._original_termios is not None:
            termios.tcsetattr(
                sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios
            )
            self._original_termios = None

    # -- output -------------------------------------------------------------

    def flush(self) -> None:
        """Write everything queued since the last flush."""
        if not self._pending:
            return
        data = "".join(self._pending)
        self._pending.clear()

        sys.stdout.write(data)
        sys.stdout.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError:
                logger.debug("write log %s unavailable", self._write_log_path)

    # -- input --------------------------------------------------------------

    def read_key(self, timeout: float | None = None) -> str | None:
        """Wait up to *timeout* seconds for input and return it decoded.

        Returns ``None`` when nothing arrived.  One call may return several
        keys if they were typed faster than the loop polls.
        """
        fd = sys.stdin.fileno()
        readable, _, _ = select.select([fd], [], [], timeout)
        if not readable:
            return None

        raw = os.read(fd, 1024)
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace")

    def take_resize(self) -> bool:
        """Return ``True`` once per resize signal received since last call."""
        pending = self._resize_pending
        self._resize_pending = False
        return pending

    # -- private: SIGWINCH -------------------------------------------------

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        self._resize_pending = True
