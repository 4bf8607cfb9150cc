"""Protocol definitions for the reply normalization pipeline."""

from typing import Protocol

from lib.reply_splitt.types import Segmentation


class Segmenter(Protocol):
    """Stage 1: Cut a raw completion into candidate segments."""

    def segment(self, text: str) -> Segmentation: ...


class SegmentCleaner(Protocol):
    """Stage 2: Strip leading headers left on a delimited segment."""

    def clean(self, text: str) -> str: ...


class FallbackSplitter(Protocol):
    """Stage 2 (alternative): Partition text that had no usable delimiters."""

    def split(self, text: str) -> list[str]: ...


class FallbackProvider(Protocol):
    """Canned reply for a slot that has no real content."""

    def text(self, index: int) -> str: ...


class ResultValidator(Protocol):
    """Stage 3: Enforce output invariants on one slot."""

    def validate(self, candidate: str, index: int) -> str: ...
