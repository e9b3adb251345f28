"""JSON persistence for script items."""

import json
import logging
import os
import tempfile
from pathlib import Path

from scriptlab.types import Break, Item, Sentence, Word, WordType

logger = logging.getLogger(__name__)


def _atomic_write(target: Path, data: bytes) -> None:
    """Write data to target atomically via temp file + rename."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
    try:
        os.write(fd, data)
        os.close(fd)
        os.replace(tmp, target)
    except OSError:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def _enum_by_name(enum_cls, name: str, item_id: str):
    try:
        return enum_cls[name.upper()]
    except KeyError:
        raise ValueError(
            f"Item {item_id}: unknown {enum_cls.__name__} {name!r}. "
            f"Available: {[m.name.lower() for m in enum_cls]}"
        ) from None


def _serialize_item(item: Item) -> dict:
    return {
        "id": item.id,
        "text": item.text,
        "sentences": [
            {
                "id": sentence.id,
                "words": [
                    {
                        "grapheme": w.grapheme,
                        "type": w.word_type.name.lower(),
                        "break": w.break_strength.name.lower(),
                        "pronunciation": w.pronunciation,
                        "pos": w.pos,
                        "emphasis": w.emphasis,
                    }
                    for w in sentence.words
                ],
            }
            for sentence in item.sentences
        ],
    }


def _deserialize_item(data: dict) -> Item:
    item_id = data.get("id", "<unknown>")
    try:
        item = Item(id=data["id"], text=data.get("text", ""))
        for s_data in data["sentences"]:
            sentence = item.add_sentence(Sentence(id=s_data.get("id", "")))
            for w_data in s_data["words"]:
                sentence.add_word(Word(
                    grapheme=w_data["grapheme"],
                    word_type=_enum_by_name(WordType, w_data.get("type", "normal"), item_id),
                    break_strength=_enum_by_name(Break, w_data.get("break", "word"), item_id),
                    pronunciation=w_data.get("pronunciation", ""),
                    pos=w_data.get("pos", ""),
                    emphasis=bool(w_data.get("emphasis", False)),
                ))
    except KeyError as e:
        raise ValueError(f"Item {item_id}: missing key {e}") from None
    return item


def loads_script(text: str) -> list[Item]:
    """Parse a script JSON document into items."""
    data = json.loads(text)
    if not isinstance(data, dict) or "items" not in data:
        raise ValueError("Script document must be an object with an 'items' list")
    return [_deserialize_item(d) for d in data["items"]]


def load_script(path: str | Path) -> list[Item]:
    """Load script items from a JSON file."""
    items = loads_script(Path(path).read_text(encoding="utf-8"))
    logger.info(f"Loaded {len(items)} script items from {path}")
    return items


def dump_script(items: list[Item], path: str | Path) -> None:
    """Write script items as JSON."""
    doc = {"items": [_serialize_item(item) for item in items]}
    _atomic_write(Path(path), json.dumps(doc, indent=2, ensure_ascii=False).encode("utf-8"))
    logger.info(f"Wrote {len(items)} script items to {path}")
