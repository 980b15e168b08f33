# test/test_segmenter.py

import io

import pytest

from ssam.errors import InputError, ParseError
from ssam.loader.segmenter import open_column, read_units, segment_lines
from ssam.splitter.writer import Sink


def test_one_unit_per_line_without_delimiter():
    lines = ["first", "", "third", "  "]
    assert segment_lines(lines) == lines


def test_blank_line_delimiter_groups_lines():
    lines = ["a", "b", "", "c", "d"]
    assert segment_lines(lines, "") == ["a\nb", "c\nd"]


def test_delimiter_is_compared_after_stripping():
    lines = ["x", "  ---  ", "y"]
    assert segment_lines(lines, "---") == ["x", "y"]


def test_trailing_delimiter_yields_final_empty_unit():
    assert segment_lines(["a", "", "b", ""], "") == ["a", "b", ""]


def test_empty_input_with_delimiter_yields_one_empty_unit():
    assert segment_lines([], "") == [""]
    assert segment_lines([]) == []


def test_delimiter_round_trip():
    original = ["doc one", "line two", "---", "doc two", "---", "doc three"]
    units = segment_lines(original, "---")

    out = io.StringIO()
    sink = Sink(out, "mem", "---")
    for unit in units:
        sink.write(unit)

    written = out.getvalue().split("\n")[:-1]
    assert written == original
    assert segment_lines(written, "---") == units


def test_read_units_strips_line_endings():
    stream = io.BytesIO(b"x\r\ny\nz")
    assert read_units(stream) == ["x", "y", "z"]


def test_read_units_reports_line_number_on_bad_encoding():
    stream = io.BytesIO(b"ok\n\xff\xfe broken\nfine\n")
    with pytest.raises(ParseError) as excinfo:
        read_units(stream, source="bad.txt")
    assert excinfo.value.line_number == 2
    assert "bad.txt" in str(excinfo.value)


def test_open_column_reads_file(tmp_path):
    path = tmp_path / "units.txt"
    path.write_text("one\ntwo\n\nthree\n", encoding="utf-8")
    assert open_column(str(path), delimiter="") == ["one\ntwo", "three"]


def test_open_column_missing_file(tmp_path):
    with pytest.raises(InputError):
        open_column(str(tmp_path / "missing.txt"))


def test_leading_blank_lines_are_kept_in_unit():
    lines = ["", "x", "---", "", "", "y"]
    assert segment_lines(lines, "---") == ["\nx", "\n\ny"]


def test_delimiter_round_trip_with_blank_lines():
    original = ["", "first", "", "---", "second", ""]
    units = segment_lines(original, "---")

    out = io.StringIO()
    sink = Sink(out, "mem", "---")
    for unit in units:
        sink.write(unit)

    assert out.getvalue().split("\n")[:-1] == original
