"""Tests for the TTS to recognizer phone map."""

import json

import pytest

from scriptlab.align.phonemap import (
    MappingMode,
    PhoneMap,
    default_phone_map,
    is_short_pause_phone,
    is_silence_feature,
    is_silence_phone,
    load_phone_map,
)


def test_silence_markers_case_insensitive():
    assert is_silence_phone("sil")
    assert is_silence_phone("SIL")
    assert is_silence_phone("-sil-")
    assert is_short_pause_phone("Sp")
    assert is_short_pause_phone("-sp-")
    assert is_silence_feature("-SP-")
    assert not is_silence_feature("s")


class TestPhoneMap:
    def test_default_map_translates(self):
        pm = default_phone_map()
        assert pm.mode == MappingMode.PHONE_BASED
        assert pm.translate("h") == ["HH"]
        assert pm.translate("ae") == ["AE"]

    def test_unknown_symbol(self):
        assert default_phone_map().translate("qq") is None

    def test_multi_phone_value(self):
        pm = PhoneMap({"k ao": "K AO"}, MappingMode.SYLLABLE_BASED)
        assert pm.translate("k . ao") == ["K", "AO"]

    def test_empty_value_maps_to_nothing(self):
        assert PhoneMap({"x": ""}).translate("x") == []

    def test_empty_symbol_rejected(self):
        with pytest.raises(ValueError):
            default_phone_map().translate("")


class TestLoadPhoneMap:
    def test_syllable_source(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text(json.dumps({"source": "tts_syllable", "items": {"k ao": "K AO"}}))
        pm = load_phone_map(path)
        assert pm.mode == MappingMode.SYLLABLE_BASED
        assert len(pm) == 1

    def test_default_source_is_phone(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text(json.dumps({"items": {"a": "AA"}}))
        assert load_phone_map(path).mode == MappingMode.PHONE_BASED

    def test_unknown_source(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text(json.dumps({"source": "ipa", "items": {}}))
        with pytest.raises(ValueError, match="Unknown phone map source"):
            load_phone_map(path)

    def test_missing_items(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text(json.dumps({"source": "tts_phone"}))
        with pytest.raises(ValueError, match="no 'items'"):
            load_phone_map(path)
