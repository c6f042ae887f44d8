"""Comma-separated table source.

Each line of the input becomes one record and each comma-separated piece of
a line becomes one field.  Fields are kept verbatim: nothing is trimmed and
there is no quoting, so a field can never contain the delimiter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from pi.grid.errors import TableEncodingError, TableIOError

logger = logging.getLogger(__name__)

DELIMITER = ","

Record = tuple[str, ...]


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping one trailing ``\\r`` per line.

    A final line terminator does not start another line, so ``"a\\n"`` is
    one line and ``""`` is none.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(frozen=True)
class Table:
    """An immutable, ordered collection of records."""

    records: tuple[Record, ...] = ()

    # -- construction -------------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[str]]) -> Table:
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def parse(cls, text: str) -> Table:
        """Build a table from already-decoded text."""
        return cls(
            tuple(tuple(line.split(DELIMITER)) for line in _split_lines(text))
        )

    @classmethod
    def load(cls, path: str | Path) -> Table:
        """Read and parse the file at *path*.

        Raises :class:`TableIOError` when the file cannot be read and
        :class:`TableEncodingError` when its content is not UTF-8.
        """
        source = str(path)
        try:
            raw = Path(path).read_bytes()
        except OSError as exc:
            raise TableIOError(f"cannot read {source}: {exc}", source) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TableEncodingError(
                f"{source} is not valid UTF-8: {exc}", source
            ) from exc

        table = cls.parse(text)
        logger.debug("loaded %d records from %s", len(table), source)
        return table

    # -- queries ------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self.records

    def record(self, index: int) -> Record | None:
        """Return the record at *index*, or ``None`` past either end."""
        if 0 <= index < len(self.records):
            return self.records[index]
        return None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)
