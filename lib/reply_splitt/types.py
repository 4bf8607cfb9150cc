"""Data types for the reply normalization pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Exactly three validated replies, in slot order.
ResponseTriple = tuple[str, str, str]

TERMINAL_MARKS = "。！？"


class StartHint(str, Enum):
    """Which kind of header preceded a segment in the raw completion."""

    NONE = "none"
    NUMBERED = "numbered"
    BRACKETED = "bracketed"
    LABELED = "labeled"


@dataclass(frozen=True, slots=True)
class Segment:
    """A candidate reply cut out of the raw completion."""

    text: str  # trimmed, always longer than the segmenter's noise floor
    start_hint: StartHint = StartHint.NONE


@dataclass(frozen=True, slots=True)
class Segmentation:
    """Segments produced by one delimiter strategy."""

    strategy: str  # name of the strategy that produced the segments
    segments: tuple[Segment, ...]

    def __len__(self) -> int:
        return len(self.segments)


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Final result of the normalization pipeline.

    ``strategy`` is the delimiter strategy that won the cascade, or
    ``"intelligent_split"`` when none of them produced three segments.
    ``fallback_slots`` lists the 1-based slots that hold canned text.
    """

    responses: ResponseTriple
    strategy: str
    fallback_slots: tuple[int, ...] = ()
