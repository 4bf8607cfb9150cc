"""Delimiter-based segmentation of raw completions."""

from __future__ import annotations

import re
from dataclasses import dataclass

from lib.reply_splitt.types import Segment, Segmentation, StartHint

_DEFAULT_MIN_LENGTH = 20
_DEFAULT_TARGET_COUNT = 3


@dataclass(frozen=True, slots=True)
class DelimiterStrategy:
    """One entry of the delimiter cascade."""

    name: str
    pattern: re.Pattern[str]
    hint: StartHint = StartHint.NONE


# Ordered by precedence; the first strategy that yields enough segments wins.
DEFAULT_STRATEGIES: tuple[DelimiterStrategy, ...] = (
    DelimiterStrategy("triple_dash", re.compile(r"---")),
    DelimiterStrategy("dash_line", re.compile(r"\n\s*-{3,}\s*\n")),
    DelimiterStrategy(
        "ordinal_label",
        re.compile(r"\n\s*第[一二三1-3]个?(?:回复|回答)\s*[：:]\s*", re.IGNORECASE),
        StartHint.LABELED,
    ),
    DelimiterStrategy(
        "numeric_marker",
        re.compile(r"\n\s*[1-3][.、][：:]?\s*"),
        StartHint.NUMBERED,
    ),
    DelimiterStrategy(
        "reply_label",
        re.compile(r"\n\s*回复[1-3][：:]?\s*", re.IGNORECASE),
        StartHint.LABELED,
    ),
    DelimiterStrategy(
        "bracket_header",
        re.compile(r"\n\s*【[^】]*】\s*"),
        StartHint.BRACKETED,
    ),
    DelimiterStrategy("paragraph", re.compile(r"\n{2,}")),
)


class DelimiterCascadeSegmenter:
    """Split a completion by trying delimiter strategies in order.

    Every strategy splits the text, trims the pieces and drops those not
    longer than *min_length*. The first strategy left with at least
    *target_count* pieces is chosen. When none gets there, the result of the
    first strategy is returned as is, possibly empty.

    Satisfies the ``Segmenter`` protocol.
    """

    def __init__(
        self,
        strategies: tuple[DelimiterStrategy, ...] = DEFAULT_STRATEGIES,
        *,
        min_length: int = _DEFAULT_MIN_LENGTH,
        target_count: int = _DEFAULT_TARGET_COUNT,
    ) -> None:
        if not strategies:
            raise ValueError("at least one delimiter strategy is required")
        if target_count <= 0:
            raise ValueError("target_count must be positive")
        self._strategies = strategies
        self._min_length = min_length
        self._target_count = target_count

    def segment(self, text: str) -> Segmentation:
        text = (text or "").replace("\r\n", "\n").strip()

        first: Segmentation | None = None
        for strategy in self._strategies:
            result = self._apply(strategy, text)
            if first is None:
                first = result
            if len(result) >= self._target_count:
                return result

        return first

    def _apply(self, strategy: DelimiterStrategy, text: str) -> Segmentation:
        pieces = (piece.strip() for piece in strategy.pattern.split(text))
        segments = tuple(
            Segment(text=piece, start_hint=strategy.hint)
            for piece in pieces
            if len(piece) > self._min_length
        )
        return Segmentation(strategy=strategy.name, segments=segments)
