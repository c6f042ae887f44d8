"""Configuration for the grid view."""

from __future__ import annotations

from dataclasses import dataclass

from pi.grid.errors import DegenerateConfigError

NAME = "pi-grid"
VERSION = "0.1.0"

DEFAULT_CELL_WIDTH = 10
DEFAULT_CELL_HEIGHT = 1


@dataclass(frozen=True)
class GridConfig:
    """Fixed cell geometry.

    ``cell_width`` is the number of columns of text per cell and
    ``cell_height`` the number of content rows between two separator rows.
    ``show_banner`` puts the welcome banner on screen while the table is
    empty.
    """

    cell_width: int = DEFAULT_CELL_WIDTH
    cell_height: int = DEFAULT_CELL_HEIGHT
    show_banner: bool = False

    def __post_init__(self) -> None:
        if self.cell_width < 1:
            raise DegenerateConfigError(
                f"cell_width must be at least 1, got {self.cell_width}"
            )
        if self.cell_height < 0:
            raise DegenerateConfigError(
                f"cell_height must not be negative, got {self.cell_height}"
            )
