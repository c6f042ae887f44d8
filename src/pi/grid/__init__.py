"""pi-grid: comma-separated data rendered as a fixed terminal grid."""

# Configuration
from pi.grid.config import VERSION as __version__
from pi.grid.config import GridConfig

# Errors
from pi.grid.errors import (
    DataSourceError,
    DegenerateConfigError,
    DrawError,
    GridError,
    TableEncodingError,
    TableIOError,
)

# Data source
from pi.grid.table import Record, Table

# Terminal
from pi.grid.terminal import InteractiveTerminal, ProcessTerminal, Size, Terminal

# View
from pi.grid.view import (
    GridView,
    build_row,
    build_separator,
    build_welcome_message,
    format_cell,
)

__all__ = [
    "__version__",
    "DataSourceError",
    "DegenerateConfigError",
    "DrawError",
    "GridConfig",
    "GridError",
    "GridView",
    "InteractiveTerminal",
    "ProcessTerminal",
    "Record",
    "Size",
    "Table",
    "TableEncodingError",
    "TableIOError",
    "Terminal",
    "build_row",
    "build_separator",
    "build_welcome_message",
    "format_cell",
]
