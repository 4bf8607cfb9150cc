"""Final per-slot validation of normalized replies."""

from __future__ import annotations

import re

from lib.reply_splitt.fallbacks import CannedFallback
from lib.reply_splitt.protocols import FallbackProvider
from lib.reply_splitt.splitters import split_sentences
from lib.reply_splitt.types import TERMINAL_MARKS

_DEFAULT_MIN_LENGTH = 30
_DEFAULT_MARK = "。"

# Whitespace standing alone between terminal marks, e.g. "。\n。".
_BLANK_SENTENCE = re.compile(r"(?:^|[。！？])\s+[。！？]")


def collapse_duplicate_sentences(text: str) -> str:
    """Keep only the first occurrence of every sentence in *text*.

    Sentences are compared without their terminal mark and surrounding
    whitespace. Whitespace-only sentences between two marks are dropped. Text
    without repeats or blank sentences is returned unchanged; otherwise the
    kept sentences are re-joined, each followed by its own terminal mark.
    """
    sentences = split_sentences(text)
    seen: set[str] = set()
    unique: list[tuple[str, str]] = []
    for body, mark in sentences:
        if body in seen:
            continue
        seen.add(body)
        unique.append((body, mark))

    if len(unique) == len(sentences) and not _BLANK_SENTENCE.search(text):
        return text
    return "".join(body + (mark or _DEFAULT_MARK) for body, mark in unique)


class ResponseValidator:
    """Enforce length, terminal punctuation and sentence uniqueness on a slot.

    A candidate shorter than *min_length* after trimming, or one that falls
    under it once repeated sentences are collapsed, is replaced with the
    fallback text for its slot.

    Satisfies the ``ResultValidator`` protocol.
    """

    def __init__(
        self,
        fallback: FallbackProvider | None = None,
        *,
        min_length: int = _DEFAULT_MIN_LENGTH,
    ) -> None:
        self._fallback = fallback if fallback is not None else CannedFallback()
        self._min_length = min_length

    def validate(self, candidate: str, index: int) -> str:
        text = (candidate or "").strip()
        if len(text) < self._min_length:
            return self._fallback.text(index)

        if not text.endswith(tuple(TERMINAL_MARKS)):
            text += _DEFAULT_MARK

        text = collapse_duplicate_sentences(text)
        if len(text) < self._min_length:
            return self._fallback.text(index)

        return text
