"""Chain of mapping tables applied in a fixed stage order."""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from almanac.errors import MissingStageError
from almanac.intervals import Interval
from almanac.mapping_table import MappingTable

DEFAULT_STAGE_ORDER: tuple[str, ...] = (
    "seed-to-soil",
    "soil-to-fertilizer",
    "fertilizer-to-water",
    "water-to-light",
    "light-to-temperature",
    "temperature-to-humidity",
    "humidity-to-location",
)


@dataclass(frozen=True, slots=True)
class MappingPipeline:
    stages: tuple[MappingTable, ...]

    @classmethod
    def from_tables(
        cls,
        tables: Mapping[str, MappingTable] | Iterable[MappingTable],
        order: Sequence[str] = DEFAULT_STAGE_ORDER,
    ) -> MappingPipeline:
        """Resolve *order* against parsed tables once, up front.

        Raises:
            MissingStageError: A name in *order* has no table.
            ValueError: *order* is empty.
        """
        if not order:
            raise ValueError("stage order must name at least one stage")
        if isinstance(tables, Mapping):
            by_name = dict(tables)
        else:
            by_name = {table.name: table for table in tables}
        stages: list[MappingTable] = []
        for name in order:
            table = by_name.get(name)
            if table is None:
                raise MissingStageError(name, by_name)
            stages.append(table)
        return cls(stages=tuple(stages))

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(stage.name for stage in self.stages)

    def translate_point(self, value: int) -> int:
        for stage in self.stages:
            value = stage.resolve_point(value)
        return value

    def translate_range(self, interval: Interval) -> list[Interval]:
        """Push a range through every stage without expanding it.

        Each sub-interval is resolved independently at every stage; pieces
        are never merged, so the segment count can only grow.
        """
        current = [interval] if not interval.is_empty else []
        for stage in self.stages:
            current = [out for piece in current for out in stage.resolve_range(piece)]
        return current

    def _lowest(self, item: int | Interval) -> int | None:
        if isinstance(item, Interval):
            outputs = self.translate_range(item)
            return min((iv.start for iv in outputs), default=None)
        return self.translate_point(item)

    def minimum_output(self, inputs: Iterable[int | Interval], *, workers: int = 1) -> int:
        """Smallest final value reachable from any input point or range.

        Ranges are reduced by the start of each output sub-interval, never
        by enumerating their members. With ``workers > 1`` inputs are
        translated on a thread pool; ``min`` makes the result independent
        of completion order.

        Raises:
            ValueError: No input produced a value (no inputs, or only
                empty ranges), or *workers* is below 1.
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        items = list(inputs)
        if workers == 1 or len(items) < 2:
            lows = [self._lowest(item) for item in items]
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                lows = list(pool.map(self._lowest, items))
        found = [low for low in lows if low is not None]
        if not found:
            raise ValueError("no input values to translate")
        return min(found)
