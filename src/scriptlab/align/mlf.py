"""Master label file (MLF) export for forced alignment.

Each item becomes a block of recognizer phones framed by silence:

    "*/<id>.lab"
    sil
    <phones of word 1>
    sp
    <phones of word 2>
    sil
    .
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from scriptlab.align.phonemap import (
    SHORT_PAUSE_PHONE,
    SILENCE_PHONE,
    MappingMode,
    PhoneMap,
)
from scriptlab.align.segments import write_lines
from scriptlab.errors import DataError, ErrorKind
from scriptlab.types import Item, Word

logger = logging.getLogger(__name__)

MLF_HEADER = "#!MLF!#"
END_OF_ITEM = "."


@dataclass
class ItemLabels:
    """Label lines for one item, or the errors that prevent writing it."""
    item_id: str
    labels: list[str] = field(default_factory=list)
    errors: list[DataError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def block(self) -> list[str]:
        """The item's MLF block: header line, labels and end marker."""
        return [f'"*/{self.item_id}.lab"', *self.labels, END_OF_ITEM]


def _validate(item: Item) -> tuple[list[Word], list[DataError]]:
    words = item.pronounceable_normal_words
    if not words:
        return [], [DataError(
            ErrorKind.NO_PRONOUNCED_WORD, item.id, "No pronounced normal word."
        )]

    errors = [
        DataError(
            ErrorKind.MISSING_PRONUNCIATION,
            item.id,
            f"No pronunciation normal word '{word.grapheme}' in script item {item.id}.",
        )
        for word in words
        if not word.pronunciation.strip()
    ]
    return words, errors


def _translate(
    phone_map: PhoneMap, symbol: str, kind: str, item_id: str
) -> tuple[list[str], DataError | None]:
    phones = phone_map.translate(symbol)
    if phones is None:
        return [], DataError(
            ErrorKind.UNTRANSLATABLE,
            item_id,
            f"Invalid TTS {kind}[{symbol}], which can not be converted to "
            f"Speech Recognition Phone.",
        )
    return phones, None


def _word_labels(word: Word, phone_map: PhoneMap, item_id: str) -> tuple[list[str], list[DataError]]:
    labels: list[str] = []
    errors: list[DataError] = []

    if phone_map.mode == MappingMode.SYLLABLE_BASED:
        symbols = [(syl.pronunciation(), "syllable") for syl in word.unit_syllables()]
    else:
        symbols = [
            (phone.name, "phone")
            for unit in word.units()
            for phone in unit.phones
            if phone.name
        ]

    for symbol, kind in symbols:
        phones, error = _translate(phone_map, symbol, kind, item_id)
        if error is not None:
            errors.append(error)
            continue
        labels.extend(phones)
    return labels, errors


def build_item_labels(item: Item, phone_map: PhoneMap) -> ItemLabels:
    """Translate one item into recognizer labels.

    Validation runs over every pronounceable word before any label is
    produced. Translation failures are collected and the remaining
    words are still translated, so one pass reports every bad symbol.
    """
    if item is None or phone_map is None:
        raise ValueError("item and phone_map must not be None")

    result = ItemLabels(item_id=item.id)
    words, errors = _validate(item)
    if errors:
        result.errors = errors
        return result

    labels = [SILENCE_PHONE]
    for i, word in enumerate(words):
        if i > 0:
            labels.append(SHORT_PAUSE_PHONE)
        word_labels, word_errors = _word_labels(word, phone_map, item.id)
        labels.extend(word_labels)
        result.errors.extend(word_errors)
    labels.append(SILENCE_PHONE)

    if result.ok:
        result.labels = labels
    return result


def build_mono_mlf(
    items: list[Item],
    phone_map: PhoneMap,
    out_path: Path | None = None,
) -> list[DataError]:
    """Build the monophone MLF for a script and return every data error.

    With ``out_path=None`` the items are only checked. Otherwise the file
    is written after all items have been built, and holds the items that
    had no errors.
    """
    if not items:
        raise ValueError("items must not be empty")

    results = [build_item_labels(item, phone_map) for item in items]
    errors = [e for r in results for e in r.errors]

    failed = sum(1 for r in results if not r.ok)
    if failed:
        logger.warning(f"{failed} of {len(results)} items have data errors")

    if out_path is None:
        return errors

    lines = [MLF_HEADER]
    for r in results:
        if r.ok:
            lines.extend(r.block())
    write_lines(lines, out_path)
    logger.info(f"Wrote {len(results) - failed} items to {out_path}")
    return errors
