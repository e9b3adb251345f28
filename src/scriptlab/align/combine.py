"""Re-chunk a phone-level segmentation to the script's unit boundaries."""

import logging
from pathlib import Path

from scriptlab.align.segments import PhoneSegment, read_segments, write_lines
from scriptlab.errors import AlignmentError, DataError, ErrorKind
from scriptlab.pronunciation import Unit, build_units
from scriptlab.types import Item

logger = logging.getLogger(__name__)

MISALIGNMENT_MESSAGE = "Data does not align between phone segmentation and pronunciation"


def combine_phones_to_units(
    units: list[Unit],
    segments: list[PhoneSegment],
    item_id: str,
    ignore_tone: bool = True,
) -> list[str]:
    """Walk segments and units in lock-step, emitting one line per unit.

    Silence and short-pause segments pass through unchanged and never
    count against a unit. Each unit takes the start time of its first
    segment and consumes as many non-silence segments as it has phones.
    A unit whose phone names are all empty is skipped without consuming
    anything.

    Raises:
        AlignmentError: a non-silence segment remains after every unit
            has been consumed, or the segments run out before the last
            labelled unit.
    """
    if units is None or segments is None:
        raise ValueError("units and segments must not be None")

    lines = []
    unit_index = 0
    i = 0
    while i < len(segments):
        segment = segments[i]
        if segment.is_silence_feature:
            lines.append(segment.to_line())
            i += 1
            continue

        if unit_index >= len(units):
            raise _misalignment(item_id)

        unit = units[unit_index]
        unit_index += 1
        label = unit.label(ignore_tone=ignore_tone)
        if not label:
            continue

        span = _unit_span(segments, i, unit.phone_count)
        if span is None:
            raise _misalignment(item_id)
        i, inner_silences = span

        lines.append(f"{segment.start:.5f} {label}")
        lines.extend(s.to_line() for s in inner_silences)

    leftover = [u for u in units[unit_index:] if u.label(ignore_tone=ignore_tone)]
    if leftover:
        logger.debug(
            f"Item {item_id}: {len(leftover)} unit(s) left after the last segment"
        )
        raise _misalignment(item_id)
    return lines


def _misalignment(item_id: str) -> AlignmentError:
    return AlignmentError(DataError(
        ErrorKind.MISALIGNMENT,
        item_id,
        f"{MISALIGNMENT_MESSAGE} in item {item_id}",
    ))


def _unit_span(
    segments: list[PhoneSegment], start: int, count: int
) -> tuple[int, list[PhoneSegment]] | None:
    """Index after `count` phone segments from `start`, plus skipped silences.

    Returns None when fewer than `count` phone segments remain.
    """
    silences = []
    taken = 0
    j = start
    while taken < count:
        if j >= len(segments):
            return None
        if segments[j].is_silence_feature:
            silences.append(segments[j])
        else:
            taken += 1
        j += 1
    return j, silences


def item_units(item: Item) -> list[Unit]:
    """Units of the item's whole pronunciation, stress removed."""
    return build_units(item.pronunciation())


def combine_item_segments(
    item: Item,
    segment_path: Path,
    target_path: Path,
    ignore_tone: bool = True,
) -> DataError | None:
    """Convert one phone-based segment file into a unit-based one.

    Lines are computed before anything is written. On a data error no
    target is produced and any stale target file is removed.
    """
    if item is None:
        raise ValueError("item must not be None")

    target_path = Path(target_path)
    try:
        segments = read_segments(segment_path)
    except ValueError as e:
        error = DataError(ErrorKind.MALFORMED_SEGMENTS, item.id, f"{segment_path}: {e}")
        logger.warning(f"Skipping {target_path.name}: {error}")
        target_path.unlink(missing_ok=True)
        return error

    try:
        lines = combine_phones_to_units(item_units(item), segments, item.id, ignore_tone)
    except AlignmentError as e:
        logger.warning(f"Skipping {target_path.name}: {e}")
        target_path.unlink(missing_ok=True)
        return e.error

    write_lines(lines, target_path)
    return None
