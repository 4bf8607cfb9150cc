"""Normalizer orchestrating the reply parsing pipeline."""

from __future__ import annotations

import logging
from typing import final

from lib.reply_splitt.cleaners import PrefixCleaner
from lib.reply_splitt.fallbacks import CannedFallback
from lib.reply_splitt.protocols import (
    FallbackProvider,
    FallbackSplitter,
    ResultValidator,
    SegmentCleaner,
    Segmenter,
)
from lib.reply_splitt.segmenters import DelimiterCascadeSegmenter
from lib.reply_splitt.splitters import IntelligentSplitter
from lib.reply_splitt.types import NormalizationResult, ResponseTriple
from lib.reply_splitt.validators import ResponseValidator

RESPONSE_COUNT = 3
INTELLIGENT_SPLIT = "intelligent_split"

logger = logging.getLogger("normalizer")


@final
class Normalizer:
    """Turn one raw completion into exactly three validated replies.

    Never raises on any string input: an empty completion yields three
    fallback replies.
    """

    def __init__(
        self,
        *,
        segmenter: Segmenter | None = None,
        cleaner: SegmentCleaner | None = None,
        splitter: FallbackSplitter | None = None,
        fallback: FallbackProvider | None = None,
        validator: ResultValidator | None = None,
    ) -> None:
        self._segmenter = segmenter if segmenter is not None else DelimiterCascadeSegmenter()
        self._cleaner = cleaner if cleaner is not None else PrefixCleaner()
        self._splitter = splitter if splitter is not None else IntelligentSplitter()
        self._fallback = fallback if fallback is not None else CannedFallback()
        self._validator = (
            validator if validator is not None else ResponseValidator(self._fallback)
        )

    def run(self, raw_text: str) -> NormalizationResult:
        """Run the full pipeline on a raw completion."""
        raw_text = raw_text or ""
        logger.debug("Normalizing completion of %d chars", len(raw_text))

        # Stage 1: Try the delimiter cascade
        segmentation = self._segmenter.segment(raw_text)
        logger.debug(
            "Segmentation: strategy=%s segments=%d", segmentation.strategy, len(segmentation)
        )

        if len(segmentation) >= RESPONSE_COUNT:
            # Stage 2a: Clean headers off the first segments
            strategy = segmentation.strategy
            items = [
                self._cleaner.clean(segment.text)
                for segment in segmentation.segments[:RESPONSE_COUNT]
            ]
        else:
            # Stage 2b: Restart from the full text without delimiters
            strategy = INTELLIGENT_SPLIT
            text = raw_text.replace("\r\n", "\n").strip()
            items = self._splitter.split(text)[:RESPONSE_COUNT]
            logger.debug("Intelligent split produced %d pieces", len(items))

        # Stage 3: Pad missing slots
        fallback_slots: list[int] = []
        while len(items) < RESPONSE_COUNT:
            index = len(items) + 1
            items.append(self._fallback.text(index))
            fallback_slots.append(index)

        # Stage 4: Validate every slot
        validated: list[str] = []
        for index, item in enumerate(items, start=1):
            result = self._validator.validate(item, index)
            if index not in fallback_slots and result == self._fallback.text(index):
                fallback_slots.append(index)
            validated.append(result)

        fallback_slots.sort()
        logger.debug("Normalized with strategy=%s fallback_slots=%s", strategy, fallback_slots)

        responses: ResponseTriple = (validated[0], validated[1], validated[2])
        return NormalizationResult(
            responses=responses,
            strategy=strategy,
            fallback_slots=tuple(fallback_slots),
        )


_default_normalizer = Normalizer()


def normalize_to_triple(raw_text: str) -> ResponseTriple:
    """Normalize a raw completion into exactly three replies."""
    return _default_normalizer.run(raw_text).responses
