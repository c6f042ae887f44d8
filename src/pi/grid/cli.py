"""Entry point for the pi-grid CLI."""

from __future__ import annotations

import argparse
import logging

from pi.grid.config import DEFAULT_CELL_HEIGHT, DEFAULT_CELL_WIDTH, NAME, VERSION, GridConfig
from pi.grid.errors import DegenerateConfigError

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=NAME, description="pi-grid: view comma-separated data as a terminal grid"
    )
    parser.add_argument("path", nargs="?", default=None, help="File to display")
    parser.add_argument(
        "--cell-width",
        type=int,
        default=DEFAULT_CELL_WIDTH,
        help=f"Columns per cell (default: {DEFAULT_CELL_WIDTH})",
    )
    parser.add_argument(
        "--cell-height",
        type=int,
        default=DEFAULT_CELL_HEIGHT,
        help=f"Rows between separators (default: {DEFAULT_CELL_HEIGHT})",
    )
    parser.add_argument(
        "--banner", action="store_true", help="Show the welcome banner while no data is loaded"
    )
    parser.add_argument("--log-file", default=None, help="Write logs to this file")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--version", action="version", version=f"{NAME} {VERSION}")
    return parser


def configure_logging(log_file: str | None, log_level: str) -> None:
    """Send logs to *log_file*, or nowhere, since stdout belongs to the grid."""
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=getattr(logging, log_level.upper()),
            format=LOG_FORMAT,
        )
    else:
        logging.getLogger("pi.grid").addHandler(logging.NullHandler())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = GridConfig(
            cell_width=args.cell_width,
            cell_height=args.cell_height,
            show_banner=args.banner,
        )
    except DegenerateConfigError as exc:
        parser.error(str(exc))

    configure_logging(args.log_file, args.log_level)

    from pi.grid.app import GridApp
    from pi.grid.terminal import ProcessTerminal
    from pi.grid.view import GridView

    terminal = ProcessTerminal()
    view = GridView(terminal, config)
    GridApp(terminal, view, path=args.path).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
