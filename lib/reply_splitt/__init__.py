"""reply_splitt - Normalize free-form LLM output into three audit replies."""

from lib.reply_splitt.cleaners import PrefixCleaner
from lib.reply_splitt.fallbacks import CannedFallback
from lib.reply_splitt.pipeline import Normalizer, normalize_to_triple
from lib.reply_splitt.protocols import (
    FallbackProvider,
    FallbackSplitter,
    ResultValidator,
    SegmentCleaner,
    Segmenter,
)
from lib.reply_splitt.segmenters import (
    DEFAULT_STRATEGIES,
    DelimiterCascadeSegmenter,
    DelimiterStrategy,
)
from lib.reply_splitt.splitters import IntelligentSplitter, split_sentences
from lib.reply_splitt.types import (
    NormalizationResult,
    ResponseTriple,
    Segment,
    Segmentation,
    StartHint,
)
from lib.reply_splitt.validators import ResponseValidator, collapse_duplicate_sentences

__all__ = [
    # Pipeline
    "Normalizer",
    "normalize_to_triple",
    # Types
    "NormalizationResult",
    "ResponseTriple",
    "Segment",
    "Segmentation",
    "StartHint",
    # Protocols
    "FallbackProvider",
    "FallbackSplitter",
    "ResultValidator",
    "SegmentCleaner",
    "Segmenter",
    # Concrete implementations
    "CannedFallback",
    "DEFAULT_STRATEGIES",
    "DelimiterCascadeSegmenter",
    "DelimiterStrategy",
    "IntelligentSplitter",
    "PrefixCleaner",
    "ResponseValidator",
    # Helpers
    "collapse_duplicate_sentences",
    "split_sentences",
]
