"""Tests for phone segment files."""

import pytest

from scriptlab.align.segments import PhoneSegment, parse_segments, read_segments, write_lines


def test_to_line_fixed_five_decimals():
    assert PhoneSegment(0.1, "sil").to_line() == "0.10000 sil"
    assert str(PhoneSegment(12.345678, "ae")) == "12.34568 ae"


def test_silence_feature():
    assert PhoneSegment(0.0, "-sil-").is_silence_feature
    assert PhoneSegment(0.0, "SP").is_silence_feature
    assert not PhoneSegment(0.0, "s").is_silence_feature


def test_empty_label_rejected():
    with pytest.raises(ValueError):
        PhoneSegment(0.0, "")


def test_parse_fills_end_times():
    segs = parse_segments(["0.0 sil", "", "0.25 k 0.9", "0.31 ae", ".", "9.0 ignored"])
    assert [s.label for s in segs] == ["sil", "k", "ae"]
    assert segs[0].end == 0.25
    assert segs[1].confidence == 0.9
    assert segs[1].duration == pytest.approx(0.06)
    assert segs[2].end is None
    assert segs[2].duration is None


def test_parse_malformed_line():
    with pytest.raises(ValueError, match="timestamp"):
        parse_segments(["0.1"])
    with pytest.raises(ValueError, match="Invalid number"):
        parse_segments(["abc sil"])


def test_read_and_write(tmp_path):
    path = tmp_path / "nested" / "0001.txt"
    write_lines(["0.00000 sil", "0.10000 k"], path)
    assert path.read_text() == "0.00000 sil\n0.10000 k\n"
    assert [s.label for s in read_segments(path)] == ["sil", "k"]
