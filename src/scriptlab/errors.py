"""Data errors collected while exporting alignment labels."""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    MISALIGNMENT = "misalignment"
    MALFORMED_SEGMENTS = "malformed_segments"
    UNTRANSLATABLE = "untranslatable"
    MISSING_PRONUNCIATION = "missing_pronunciation"
    NO_PRONOUNCED_WORD = "no_pronounced_word"


@dataclass(frozen=True)
class DataError:
    """A recoverable per-item problem in the input data."""
    kind: ErrorKind
    item_id: str
    message: str

    def __str__(self) -> str:
        return f"[{self.item_id}] {self.message}"


class AlignmentError(ValueError):
    """Phone segmentation and pronunciation disagree for an item."""

    def __init__(self, error: DataError):
        super().__init__(str(error))
        self.error = error
