"""Grid view: lays a table out as a bordered cell grid on a terminal.

The view owns the viewport size, the cell geometry and the table, and keeps
a dirty flag so a frame is only drawn when something it depends on changed.
A frame is drawn row by row, top to bottom:

* every ``cell_height + 1``-th row, starting at row 0, is a separator rule;
* every other row shows the next record of the table, one record per row,
  with each field truncated or left-padded to exactly ``cell_width`` bytes.

Rows past the end of the table keep their cell borders but are blank.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pi.grid.config import NAME, VERSION, GridConfig
from pi.grid.errors import DataSourceError, DegenerateConfigError, DrawError
from pi.grid.table import Record, Table
from pi.grid.terminal import Size, Terminal
from pi.grid.utils import clip_to_width, visible_width

logger = logging.getLogger(__name__)

HORIZONTAL_RULE = "─"
VERTICAL_RULE = "│"
BANNER_MARKER = "~"

WELCOME_MESSAGE = f"{NAME} viewer -- version {VERSION}"


# ---------------------------------------------------------------------------
# Line builders
# ---------------------------------------------------------------------------


def format_cell(field: str, cell_width: int) -> str:
    """Fit *field* into exactly *cell_width* bytes.

    Fields at least as long as the cell keep their leftmost *cell_width*
    bytes; shorter fields are right-aligned with leading spaces.  A
    multi-byte character cut by the limit is dropped and its bytes made up
    with padding.
    """
    encoded = field.encode("utf-8")
    if len(encoded) >= cell_width:
        text = encoded[:cell_width].decode("utf-8", errors="ignore")
    else:
        text = field
    padding = cell_width - len(text.encode("utf-8"))
    return " " * padding + text


def build_row(record: Record | None, cell_count: int, cell_width: int) -> str:
    """Build one content row holding *record* in *cell_count* cells.

    Fields beyond *cell_count* are dropped.  Cells the record does not fill
    are blank.
    """
    blank = " " * cell_width
    cells = [format_cell(field, cell_width) for field in (record or ())[:cell_count]]
    padding = [blank] * (cell_count - len(cells))

    if not cells:
        return VERTICAL_RULE + VERTICAL_RULE.join(padding)
    return (
        VERTICAL_RULE
        + VERTICAL_RULE.join(cells)
        + VERTICAL_RULE
        + VERTICAL_RULE.join(padding)
    )


def build_separator(width: int) -> str:
    """Return a horizontal rule spanning *width* columns."""
    if width <= 0:
        return " "
    return HORIZONTAL_RULE * width


def build_welcome_message(width: int) -> str:
    """Return the welcome banner centred in *width* columns.

    Falls back to a lone marker when the message does not fit.
    """
    if width <= 0:
        return ""

    message_width = visible_width(WELCOME_MESSAGE)
    if width <= message_width:
        return BANNER_MARKER

    padding = (width - message_width - 1) // 2
    return clip_to_width(f"{BANNER_MARKER}{' ' * padding}{WELCOME_MESSAGE}", width)


# ---------------------------------------------------------------------------
# GridView
# ---------------------------------------------------------------------------


class GridView:
    """Renders a :class:`Table` as a fixed grid of cells.

    ``render`` either draws a complete frame and clears the dirty flag, or
    raises :class:`DrawError` part way through and leaves the flag set so
    the next call redraws the whole frame from row 0.
    """

    def __init__(
        self,
        terminal: Terminal,
        config: GridConfig | None = None,
        table: Table | None = None,
        size: Size | None = None,
    ) -> None:
        self.terminal = terminal
        self._config = config if config is not None else GridConfig()
        self._table = table if table is not None else Table()
        self._size = size if size is not None else self._query_size()
        self._needs_redraw = True
        self._redraw_count = 0

    def _query_size(self) -> Size:
        try:
            return self.terminal.size()
        except OSError:
            logger.warning("terminal size unavailable, starting at 0x0", exc_info=True)
            return Size()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def needs_redraw(self) -> bool:
        return self._needs_redraw

    @property
    def size(self) -> Size:
        return self._size

    @property
    def config(self) -> GridConfig:
        return self._config

    @property
    def table(self) -> Table:
        return self._table

    @property
    def redraw_count(self) -> int:
        """Number of complete frames drawn so far."""
        return self._redraw_count

    def cells_per_row(self) -> int:
        """Number of whole cells that fit across the current viewport."""
        cell_width = self._config.cell_width
        if cell_width < 1:
            raise DegenerateConfigError(f"cell_width must be at least 1, got {cell_width}")
        return max(0, self._size.width) // cell_width

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------

    def resize(self, size: Size) -> None:
        self._size = size
        self._needs_redraw = True

    def invalidate(self) -> None:
        """Force the next ``render`` to draw a full frame."""
        self._needs_redraw = True

    def load(self, path: str | Path) -> bool:
        """Replace the table with the contents of *path*.

        A failed load leaves the current table and the dirty flag alone, so
        whatever is on screen stays valid.  Returns whether the load
        succeeded.
        """
        try:
            table = Table.load(path)
        except DataSourceError as exc:
            logger.warning("keeping current table: %s", exc)
            return False

        self._table = table
        self._needs_redraw = True
        return True

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def render(self) -> None:
        """Draw the grid if anything changed since the last full frame."""
        if not self._needs_redraw:
            return

        width, height = self._size.width, self._size.height
        if width <= 0 or height <= 0:
            return

        cell_width = self._config.cell_width
        row_span = self._config.cell_height + 1
        cell_count = self.cells_per_row()
        banner_row = self._banner_row(height, row_span)

        # Index of the next record to show; restarts with every frame.
        cursor = 0

        for row in range(height):
            if row % row_span == 0:
                line = build_separator(width)
            elif row == banner_row:
                line = build_welcome_message(width)
            else:
                line = build_row(self._table.record(cursor), cell_count, cell_width)
                cursor += 1
            self._render_line(row, line)

        self._needs_redraw = False
        self._redraw_count += 1
        logger.debug(
            "drew %dx%d frame, %d of %d records visible",
            width,
            height,
            min(cursor, len(self._table)),
            len(self._table),
        )

    def _banner_row(self, height: int, row_span: int) -> int | None:
        """First content row at or below a third of the viewport."""
        if not self._config.show_banner or not self._table.is_empty():
            return None
        for row in range(height // 3, height):
            if row % row_span != 0:
                return row
        return None

    def _render_line(self, row: int, line: str) -> None:
        try:
            self.terminal.move_cursor(row, 0)
            self.terminal.clear_line()
            self.terminal.print(line)
        except OSError as exc:
            raise DrawError(f"failed to draw row {row}: {exc}", row) from exc
