"""TTS phone / syllable to speech-recognition phone mapping."""

import json
import logging
from enum import Enum
from pathlib import Path

from scriptlab.pronunciation import untag_unit_boundary

logger = logging.getLogger(__name__)

SILENCE_PHONE = "sil"
SHORT_PAUSE_PHONE = "sp"
RUNTIME_SILENCE = "-sil-"
RUNTIME_SHORT_PAUSE = "-sp-"


class MappingMode(Enum):
    PHONE_BASED = "tts_phone"
    SYLLABLE_BASED = "tts_syllable"


def is_silence_phone(phone: str) -> bool:
    return phone.lower() in (SILENCE_PHONE, RUNTIME_SILENCE)


def is_short_pause_phone(phone: str) -> bool:
    return phone.lower() in (SHORT_PAUSE_PHONE, RUNTIME_SHORT_PAUSE)


def is_silence_feature(phone: str) -> bool:
    """True for silence or short-pause markers, in either spelling."""
    return is_silence_phone(phone) or is_short_pause_phone(phone)


# en-US TTS phone set -> ARPABET recognizer phones (stress-free).
EN_US_TTS_TO_SR: dict[str, str] = {
    # Vowels
    "aa": "AA", "ae": "AE", "ah": "AH", "ao": "AO", "aw": "AW",
    "ax": "AX", "ay": "AY", "eh": "EH", "er": "ER", "ey": "EY",
    "ih": "IH", "iy": "IY", "ow": "OW", "oy": "OY", "uh": "UH",
    "uw": "UW",
    # Stops and affricates
    "b": "B", "d": "D", "g": "G", "k": "K", "p": "P", "t": "T",
    "ch": "CH", "jh": "JH",
    # Fricatives
    "dh": "DH", "f": "F", "h": "HH", "s": "S", "sh": "SH",
    "th": "TH", "v": "V", "z": "Z", "zh": "ZH",
    # Nasals, liquids, glides
    "m": "M", "n": "N", "ng": "NG", "l": "L", "r": "R",
    "w": "W", "y": "Y",
}


class PhoneMap:
    """Lookup from a TTS symbol to zero or more recognizer phones."""

    def __init__(self, items: dict[str, str], mode: MappingMode = MappingMode.PHONE_BASED):
        if items is None:
            raise ValueError("items must not be None")
        self.items = dict(items)
        self.mode = mode

    def translate(self, symbol: str) -> list[str] | None:
        """Recognizer phones for `symbol`, or None if it has no mapping."""
        if not symbol:
            raise ValueError("symbol must not be empty")
        key = untag_unit_boundary(symbol)
        if key not in self.items:
            return None
        return self.items[key].split()

    def __len__(self) -> int:
        return len(self.items)


def default_phone_map() -> PhoneMap:
    """Built-in phone-based en-US map."""
    return PhoneMap(EN_US_TTS_TO_SR, MappingMode.PHONE_BASED)


def load_phone_map(path: Path) -> PhoneMap:
    """Load a phone map from JSON.

    Format: {"source": "tts_phone" | "tts_syllable", "items": {symbol: "SR PHONES"}}
    The source selects phone-based or syllable-based mapping.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    try:
        mode = MappingMode(data.get("source", MappingMode.PHONE_BASED.value))
    except ValueError:
        raise ValueError(
            f"Unknown phone map source: {data.get('source')!r}. "
            f"Available: {[m.value for m in MappingMode]}"
        ) from None

    items = data.get("items")
    if not isinstance(items, dict):
        raise ValueError(f"Phone map {path} has no 'items' table")

    logger.info(f"Loaded {len(items)} {mode.value} mappings from {path}")
    return PhoneMap(items, mode)
