"""Parse a full almanac document: initial values plus named mapping tables.

Document layout (blocks separated by blank lines)::

    seeds: 79 14 55 13

    seed-to-soil map:
    50 98 2
    52 50 48

    soil-to-fertilizer map:
    ...
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from almanac.errors import ParseError
from almanac.intervals import Interval
from almanac.io_utils import read_text
from almanac.mapping_table import MappingTable, parse_table
from almanac.pipeline import DEFAULT_STAGE_ORDER, MappingPipeline

_BLANK_LINE_RE = re.compile(r"^[ \t]*$")


@dataclass(frozen=True, slots=True)
class Almanac:
    label: str
    values: tuple[int, ...]
    tables: tuple[MappingTable, ...]  # declaration order

    @property
    def table_names(self) -> tuple[str, ...]:
        return tuple(table.name for table in self.tables)

    def table(self, name: str) -> MappingTable | None:
        return next((t for t in self.tables if t.name == name), None)

    def seed_points(self) -> tuple[int, ...]:
        return self.values

    @property
    def unpaired_value(self) -> int | None:
        """Trailing value left over when the values are read as pairs."""
        return self.values[-1] if len(self.values) % 2 else None

    def seed_ranges(self) -> list[Interval]:
        """Read the values pairwise as ``(start, length)``.

        An unpaired trailing value is ignored; see ``unpaired_value``.
        """
        pairs = zip(self.values[0::2], self.values[1::2])
        return [Interval.from_length(start, length) for start, length in pairs]

    def pipeline(self, order: Sequence[str] = DEFAULT_STAGE_ORDER) -> MappingPipeline:
        return MappingPipeline.from_tables(self.tables, order)


def _split_blocks(text: str) -> list[tuple[int, str]]:
    """Split into (first_line_no, block_text) pairs on blank lines."""
    blocks: list[tuple[int, str]] = []
    current: list[str] = []
    start = 0
    for line_no, line in enumerate(text.splitlines(), start=1):
        if _BLANK_LINE_RE.match(line):
            if current:
                blocks.append((start, "\n".join(current)))
                current = []
            continue
        if not current:
            start = line_no
        current.append(line)
    if current:
        blocks.append((start, "\n".join(current)))
    return blocks


def _parse_values(block: str, line_no: int) -> tuple[str, tuple[int, ...]]:
    label, sep, rest = block.partition(":")
    if not sep:
        raise ParseError("expected '<label>: v1 v2 ...' values line", line_no=line_no)
    values: list[int] = []
    for field in rest.split():
        try:
            value = int(field)
        except ValueError as exc:
            raise ParseError(f"non-integer value {field!r}", line_no=line_no) from exc
        if value < 0:
            raise ParseError(f"negative value {value}", line_no=line_no)
        values.append(value)
    return label.strip(), tuple(values)


def parse_almanac(text: str) -> Almanac:
    """Parse document text into an Almanac.

    Raises:
        ParseError: Empty document, malformed values line, malformed
            table block, or a table name declared twice.
    """
    blocks = _split_blocks(text)
    if not blocks:
        raise ParseError("empty almanac")

    values_line_no, values_block = blocks[0]
    label, values = _parse_values(values_block, values_line_no)

    tables: list[MappingTable] = []
    seen: set[str] = set()
    for line_no, block in blocks[1:]:
        table = parse_table(block, first_line_no=line_no)
        if table.name in seen:
            raise ParseError(f"duplicate table {table.name!r}", line_no=line_no)
        seen.add(table.name)
        tables.append(table)
    return Almanac(label=label, values=values, tables=tuple(tables))


def load_almanac(path: Path) -> Almanac:
    return parse_almanac(read_text(path))
