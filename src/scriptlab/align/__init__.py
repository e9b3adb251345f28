"""scriptlab align: label export and segmentation realignment for scripts."""

import logging
from pathlib import Path

from scriptlab.align.combine import combine_item_segments
from scriptlab.errors import DataError
from scriptlab.types import Item

logger = logging.getLogger(__name__)

SEGMENT_SUFFIX = ".txt"


def combine_segment_dir(
    items: list[Item],
    segments_dir: str | Path,
    output_dir: str | Path,
    ignore_tone: bool = True,
) -> list[DataError]:
    """Convert each item's phone segment file into a unit segment file.

    Reads ``<segments_dir>/<id>.txt`` and writes ``<output_dir>/<id>.txt``.
    Items without a segment file are skipped with a warning. Every item
    is attempted; the data errors of the failed ones are returned.
    """
    segments_dir = Path(segments_dir)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    errors = []
    converted = 0
    for item in items:
        segment_path = segments_dir / f"{item.id}{SEGMENT_SUFFIX}"
        if not segment_path.exists():
            logger.warning(f"No segment file for item {item.id}: {segment_path}")
            continue

        error = combine_item_segments(
            item,
            segment_path,
            output_dir / f"{item.id}{SEGMENT_SUFFIX}",
            ignore_tone=ignore_tone,
        )
        if error is not None:
            errors.append(error)
        else:
            converted += 1

    logger.info(f"Converted {converted} segment files into {output_dir}")
    return errors
