"""Tests for almanac.document module."""
from __future__ import annotations

from pathlib import Path

import pytest

from almanac.document import Almanac, load_almanac, parse_almanac
from almanac.errors import MissingStageError, ParseError
from almanac.intervals import Interval
from almanac.pipeline import DEFAULT_STAGE_ORDER


class TestParseAlmanac:
    def test_values(self, example_almanac: Almanac) -> None:
        assert example_almanac.label == "seeds"
        assert example_almanac.seed_points() == (79, 14, 55, 13)

    def test_tables_in_declaration_order(self, example_almanac: Almanac) -> None:
        assert example_almanac.table_names == DEFAULT_STAGE_ORDER

    def test_table_lookup(self, example_almanac: Almanac) -> None:
        table = example_almanac.table("seed-to-soil")
        assert table is not None
        assert len(table.rules) == 2
        assert example_almanac.table("seed-to-moon") is None

    def test_seed_ranges(self, example_almanac: Almanac) -> None:
        assert example_almanac.seed_ranges() == [Interval(79, 93), Interval(55, 68)]

    def test_odd_values_drop_trailing_from_ranges(self) -> None:
        almanac = parse_almanac("seeds: 1 2 3\n")
        assert almanac.seed_points() == (1, 2, 3)
        assert almanac.seed_ranges() == [Interval(1, 3)]
        assert almanac.unpaired_value == 3

    def test_even_values_have_no_unpaired(self, example_almanac: Almanac) -> None:
        assert example_almanac.unpaired_value is None

    def test_crlf_line_endings(self, example_text: str, example_almanac: Almanac) -> None:
        assert parse_almanac(example_text.replace("\n", "\r\n")) == example_almanac

    def test_whitespace_only_separator(self, example_text: str, example_almanac: Almanac) -> None:
        assert parse_almanac(example_text.replace("\n\n", "\n   \n")) == example_almanac

    def test_values_may_wrap(self) -> None:
        almanac = parse_almanac("seeds:\n79 14\n55 13\n")
        assert almanac.seed_points() == (79, 14, 55, 13)

    def test_empty_document(self) -> None:
        with pytest.raises(ParseError, match="empty"):
            parse_almanac(" \n\n")

    def test_values_line_without_colon(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_almanac("79 14\n\nseed-to-soil map:\n1 2 3\n")
        assert exc_info.value.line_no == 1

    def test_non_integer_value(self) -> None:
        with pytest.raises(ParseError, match="non-integer"):
            parse_almanac("seeds: 1 x\n")

    def test_negative_value(self) -> None:
        with pytest.raises(ParseError, match="negative"):
            parse_almanac("seeds: 1 -4\n")

    def test_duplicate_table(self) -> None:
        text = "seeds: 1\n\na-to-b map:\n1 2 3\n\na-to-b map:\n4 5 6\n"
        with pytest.raises(ParseError, match="duplicate") as exc_info:
            parse_almanac(text)
        assert exc_info.value.line_no == 6

    def test_malformed_rule_reports_document_line(self) -> None:
        text = "seeds: 1\n\na-to-b map:\n1 2 3\n4 5\n"
        with pytest.raises(ParseError) as exc_info:
            parse_almanac(text)
        assert exc_info.value.line_no == 5


class TestPipeline:
    def test_default_pipeline(self, example_almanac: Almanac) -> None:
        assert example_almanac.pipeline().minimum_output(example_almanac.seed_points()) == 35

    def test_missing_default_stage(self) -> None:
        almanac = parse_almanac("seeds: 1\n\na-to-b map:\n1 2 3\n")
        with pytest.raises(MissingStageError) as exc_info:
            almanac.pipeline()
        assert exc_info.value.stage == "seed-to-soil"

    def test_custom_order(self) -> None:
        almanac = parse_almanac("seeds: 1\n\na-to-b map:\n10 0 5\n")
        assert almanac.pipeline(("a-to-b",)).translate_point(1) == 11


def test_load_almanac(tmp_path: Path, example_text: str, example_almanac: Almanac) -> None:
    path = tmp_path / "input.txt"
    path.write_text(example_text, encoding="utf-8")
    assert load_almanac(path) == example_almanac
