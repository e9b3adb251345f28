"""Phone-level time segmentation files."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from scriptlab.align.phonemap import is_short_pause_phone, is_silence_phone


@dataclass
class PhoneSegment:
    """One entry of an external phone segmentation."""
    start: float                    # seconds
    label: str
    end: float | None = None        # usually the next segment's start
    confidence: float | None = None

    def __post_init__(self):
        if not self.label:
            raise ValueError("segment label must not be empty")

    @property
    def is_silence_feature(self) -> bool:
        return is_silence_phone(self.label) or is_short_pause_phone(self.label)

    @property
    def duration(self) -> float | None:
        if self.end is None:
            return None
        return self.end - self.start

    def to_line(self) -> str:
        return f"{self.start:.5f} {self.label}"

    def __str__(self) -> str:
        return self.to_line()


def parse_segments(lines: Iterable[str]) -> list[PhoneSegment]:
    """Parse 'start label [confidence]' lines up to an optional '.' line."""
    segments = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if line == ".":
            break

        fields = line.split()
        if len(fields) < 2:
            raise ValueError(
                "The segment line should be (timestamp) (label) [confidence], "
                f"but {line!r} is found"
            )
        try:
            start = float(fields[0])
            confidence = float(fields[2]) if len(fields) > 2 else None
        except ValueError:
            raise ValueError(f"Invalid number in segment line {line!r}") from None
        segments.append(PhoneSegment(start=start, label=fields[1], confidence=confidence))

    for seg, nxt in zip(segments, segments[1:]):
        seg.end = nxt.start
    return segments


def read_segments(path: Path) -> list[PhoneSegment]:
    """Read a phone segment file."""
    with open(path, encoding="utf-8") as f:
        return parse_segments(f)


def write_lines(lines: Iterable[str], path: Path) -> None:
    """Write label lines, one per line, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(line + "\n")
