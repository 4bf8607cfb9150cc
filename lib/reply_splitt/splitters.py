"""Positional and sentence-based partitioning for unstructured completions."""

from __future__ import annotations

import math
import re

from lib.reply_splitt.types import TERMINAL_MARKS

_DEFAULT_PARTS = 3
_DEFAULT_MIN_LENGTH = 20
_DEFAULT_SENTENCE_THRESHOLD = 6
_DEFAULT_BREAK_RATIO = 0.7
_DEFAULT_MARK = "。"

# A run of non-terminal characters plus the terminal mark closing it, if any.
_SENTENCE_PATTERN = re.compile(r"([^。！？]+)([。！？]?)")


def split_sentences(text: str) -> list[tuple[str, str]]:
    """Split *text* into ``(body, mark)`` pairs.

    Bodies are whitespace-trimmed and blank ones are dropped. ``mark`` is the
    terminal punctuation that closed the sentence, or ``""`` for a trailing
    fragment.
    """
    result: list[tuple[str, str]] = []
    for match in _SENTENCE_PATTERN.finditer(text):
        body = match.group(1).strip()
        if body:
            result.append((body, match.group(2)))
    return result


class IntelligentSplitter:
    """Partition text into at most three pieces without relying on delimiters.

    - With fewer than *sentence_threshold* sentences, the text is cut into
      equal character windows. Every window except the last is shortened to
      its final terminal mark when that mark sits at or beyond
      *break_ratio* of the window.
    - Otherwise whole sentences are distributed over the pieces, ``ceil(n/3)``
      per piece, keeping each sentence's own terminal mark.

    Pieces not longer than *min_length* are dropped.

    Satisfies the ``FallbackSplitter`` protocol.
    """

    def __init__(
        self,
        *,
        parts: int = _DEFAULT_PARTS,
        min_length: int = _DEFAULT_MIN_LENGTH,
        sentence_threshold: int = _DEFAULT_SENTENCE_THRESHOLD,
        break_ratio: float = _DEFAULT_BREAK_RATIO,
    ) -> None:
        if parts <= 0:
            raise ValueError("parts must be positive")
        if not 0.0 <= break_ratio <= 1.0:
            raise ValueError(f"break_ratio must be within [0, 1], got {break_ratio}")
        self._parts = parts
        self._min_length = min_length
        self._sentence_threshold = sentence_threshold
        self._break_ratio = break_ratio

    def split(self, text: str) -> list[str]:
        text = (text or "").strip()
        if not text:
            return []

        sentences = split_sentences(text)
        if len(sentences) < self._sentence_threshold:
            pieces = self._split_by_windows(text)
        else:
            pieces = self._split_by_sentences(sentences)

        return [p for p in pieces if len(p) > self._min_length]

    def _split_by_windows(self, text: str) -> list[str]:
        width = len(text) // self._parts
        pieces: list[str] = []

        for i in range(self._parts):
            start = i * width
            last = i == self._parts - 1
            end = len(text) if last else (i + 1) * width
            window = text[start:end].strip()

            if not last:
                cut = _last_terminal_index(window)
                if cut >= 0 and cut >= len(window) * self._break_ratio:
                    window = window[: cut + 1]

            pieces.append(window)

        return pieces

    def _split_by_sentences(self, sentences: list[tuple[str, str]]) -> list[str]:
        per_piece = math.ceil(len(sentences) / self._parts)
        pieces: list[str] = []

        for i in range(self._parts):
            group = sentences[i * per_piece : (i + 1) * per_piece]
            if not group:
                continue
            pieces.append("".join(body + (mark or _DEFAULT_MARK) for body, mark in group))

        return pieces


def _last_terminal_index(text: str) -> int:
    """Return the index of the last terminal mark in *text*, or -1."""
    return max(text.rfind(mark) for mark in TERMINAL_MARKS)
