"""One stage of the almanac: a named table of interval offset rules.

A table maps a value through the first rule whose source interval
contains it; uncovered values pass through unchanged. Ranges are
resolved by splitting them at rule boundaries, so a billion-wide range
costs no more than a handful of interval operations.

Block format accepted by ``parse_table``::

    seed-to-soil map:
    50 98 2
    52 50 48

Each rule line is ``destination_start source_start length``.
"""
from __future__ import annotations

from dataclasses import dataclass

from almanac.errors import ParseError
from almanac.intervals import Interval

HEADER_SUFFIX = " map"
CATEGORY_SEPARATOR = "-to-"


@dataclass(frozen=True, slots=True)
class Rule:
    """Length-preserving mapping of ``source`` onto ``destination``."""

    source: Interval
    destination: Interval

    def __post_init__(self) -> None:
        if self.source.length != self.destination.length:
            raise ValueError(
                f"rule lengths differ: source {self.source.length}, "
                f"destination {self.destination.length}"
            )

    @classmethod
    def from_triple(cls, destination_start: int, source_start: int, length: int) -> Rule:
        return cls(
            source=Interval.from_length(source_start, length),
            destination=Interval.from_length(destination_start, length),
        )

    @property
    def offset(self) -> int:
        return self.destination.start - self.source.start


@dataclass(frozen=True, slots=True)
class Segment:
    """A piece of a queried range together with the shift applied to it."""

    source: Interval
    offset: int
    rule_index: int | None  # None for identity fallthrough

    @property
    def output(self) -> Interval:
        return self.source.shifted(self.offset)


@dataclass(frozen=True, slots=True)
class MappingTable:
    name: str
    rules: tuple[Rule, ...]

    @property
    def source_category(self) -> str:
        return self.name.split(CATEGORY_SEPARATOR, 1)[0]

    @property
    def destination_category(self) -> str:
        parts = self.name.split(CATEGORY_SEPARATOR, 1)
        return parts[1] if len(parts) == 2 else ""

    def resolve_point(self, value: int) -> int:
        """Translate one value; the first matching rule in declaration order wins."""
        for rule in self.rules:
            if rule.source.contains(value):
                return value + rule.offset
        return value

    def partition(self, interval: Interval) -> list[Segment]:
        """Split *interval* into maximal pieces that each map by a single offset.

        Rules claim pieces in declaration order, so an overlap goes to the
        earlier rule exactly as in ``resolve_point``. Whatever no rule
        claims becomes an identity segment. Segments come back sorted by
        source start and tile *interval* exactly.
        """
        if interval.is_empty:
            return []
        segments: list[Segment] = []
        pending = [interval]
        for index, rule in enumerate(self.rules):
            unclaimed: list[Interval] = []
            for piece in pending:
                hit = piece.intersection(rule.source)
                if hit is None:
                    unclaimed.append(piece)
                    continue
                segments.append(Segment(hit, rule.offset, index))
                if piece.start < hit.start:
                    unclaimed.append(Interval(piece.start, hit.start))
                if hit.end < piece.end:
                    unclaimed.append(Interval(hit.end, piece.end))
            pending = unclaimed
            if not pending:
                break
        segments.extend(Segment(piece, 0, None) for piece in pending)
        segments.sort(key=lambda s: s.source.start)
        return segments

    def resolve_range(self, interval: Interval) -> list[Interval]:
        """Translate a range; output lengths sum to ``interval.length``."""
        return [segment.output for segment in self.partition(interval)]


def _parse_header(line: str, line_no: int) -> tuple[str, str]:
    name, sep, rest = line.partition(":")
    if not sep:
        raise ParseError(f"expected '<name> map:' header, got {line.strip()!r}", line_no=line_no)
    name = name.strip()
    if name.endswith(HEADER_SUFFIX):
        name = name[: -len(HEADER_SUFFIX)].rstrip()
    if not name:
        raise ParseError("table header has an empty name", line_no=line_no)
    return name, rest


def _parse_rule(line: str, line_no: int) -> Rule:
    fields = line.split()
    if len(fields) != 3:
        raise ParseError(
            f"expected 3 integers (destination source length), got {len(fields)}",
            line_no=line_no,
        )
    try:
        dst, src, length = (int(f) for f in fields)
    except ValueError as exc:
        raise ParseError(f"non-integer field in {line.strip()!r}", line_no=line_no) from exc
    if dst < 0 or src < 0 or length < 0:
        raise ParseError(f"negative field in {line.strip()!r}", line_no=line_no)
    if length == 0:
        raise ParseError("rule length must be positive", line_no=line_no)
    return Rule.from_triple(dst, src, length)


def parse_table(text: str, *, first_line_no: int = 1) -> MappingTable:
    """Parse one named block into a MappingTable.

    Args:
        text: The block, header first.
        first_line_no: Line number of the block's first line in the
            enclosing document, used in error messages.

    Raises:
        ParseError: Missing header, empty name, or a malformed rule line.
    """
    lines = text.splitlines()
    header_idx = next((i for i, line in enumerate(lines) if line.strip()), None)
    if header_idx is None:
        raise ParseError("empty table block", line_no=first_line_no)

    name, rest = _parse_header(lines[header_idx], first_line_no + header_idx)
    rules: list[Rule] = []
    if rest.strip():
        rules.append(_parse_rule(rest, first_line_no + header_idx))
    for idx, line in enumerate(lines[header_idx + 1:], start=header_idx + 1):
        if line.strip():
            rules.append(_parse_rule(line, first_line_no + idx))
    return MappingTable(name=name, rules=tuple(rules))
