"""Tests for MLF label export."""

import pytest

from scriptlab.align.mlf import build_item_labels, build_mono_mlf
from scriptlab.align.phonemap import MappingMode, PhoneMap, default_phone_map
from scriptlab.errors import ErrorKind
from scriptlab.types import Item, Sentence, Word, WordType


def _item(item_id: str, *words: Word) -> Item:
    item = Item(id=item_id)
    sentence = item.add_sentence(Sentence())
    for w in words:
        sentence.add_word(w)
    return item


def _hello_world(item_id: str = "0001") -> Item:
    return _item(
        item_id,
        Word("hello", pronunciation="h ax 0 - l ow 1"),
        Word(",", WordType.PUNCTUATION),
        Word("world", pronunciation="w er 1 l d"),
    )


class TestBuildItemLabels:
    def test_phone_based_layout(self):
        result = build_item_labels(_hello_world(), default_phone_map())
        assert result.ok
        assert result.labels == ["sil", "HH", "AX", "L", "OW", "sp", "W", "ER", "L", "D", "sil"]

    def test_block(self):
        result = build_item_labels(_item("7", Word("a", pronunciation="ax 0")), default_phone_map())
        assert result.block() == ['"*/7.lab"', "sil", "AX", "sil", "."]

    def test_syllable_based(self):
        pm = PhoneMap({"h ax": "HH AH", "l ow": "L OW", "w er l d": "W ER L D"}, MappingMode.SYLLABLE_BASED)
        result = build_item_labels(_hello_world(), pm)
        assert result.labels == ["sil", "HH", "AH", "L", "OW", "sp", "W", "ER", "L", "D", "sil"]

    def test_no_pronounced_word(self):
        item = _item("0002", Word(".", WordType.PUNCTUATION), Word("x"))
        result = build_item_labels(item, default_phone_map())
        assert not result.ok
        assert [e.kind for e in result.errors] == [ErrorKind.NO_PRONOUNCED_WORD]
        assert result.labels == []

    def test_blank_pronunciation(self):
        item = _item("0003", Word("a", pronunciation="ax 0"), Word("b", pronunciation="   "))
        result = build_item_labels(item, default_phone_map())
        assert [e.kind for e in result.errors] == [ErrorKind.MISSING_PRONUNCIATION]
        assert "'b'" in result.errors[0].message
        assert result.labels == []

    def test_untranslatable_collects_all(self):
        item = _item("0004", Word("a", pronunciation="qq 1 - zz"), Word("b", pronunciation="b iy 1"))
        result = build_item_labels(item, default_phone_map())
        assert [e.kind for e in result.errors] == [ErrorKind.UNTRANSLATABLE] * 2
        assert "Invalid TTS phone[qq]" in result.errors[0].message
        assert result.labels == []


class TestBuildMonoMlf:
    def test_writes_file(self, tmp_path):
        out = tmp_path / "mono.mlf"
        errors = build_mono_mlf([_hello_world("0001")], default_phone_map(), out)
        assert errors == []
        assert out.read_text().splitlines() == [
            "#!MLF!#", '"*/0001.lab"',
            "sil", "HH", "AX", "L", "OW", "sp", "W", "ER", "L", "D", "sil",
            ".",
        ]

    def test_failed_items_excluded(self, tmp_path):
        out = tmp_path / "mono.mlf"
        items = [
            _item("bad", Word("a", pronunciation="qq 1")),
            _item("good", Word("a", pronunciation="ax 0")),
        ]
        errors = build_mono_mlf(items, default_phone_map(), out)
        assert [e.item_id for e in errors] == ["bad"]
        lines = out.read_text().splitlines()
        assert '"*/good.lab"' in lines
        assert '"*/bad.lab"' not in lines

    def test_validate_only_writes_nothing(self, tmp_path):
        errors = build_mono_mlf([_hello_world()], default_phone_map())
        assert errors == []
        assert list(tmp_path.iterdir()) == []

    def test_empty_items_rejected(self):
        with pytest.raises(ValueError):
            build_mono_mlf([], default_phone_map())
