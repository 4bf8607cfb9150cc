"""Removal of leading headers from delimited segments."""

import re

# Prefix patterns (ordered by priority)
_BRACKET_TITLE = re.compile(r"^[【\[].*?[】\]]\s*")
_NUMERIC_MARKER = re.compile(r"^[1-3][.、：:]\s*")
_REPLY_LABEL = re.compile(r"^回复[1-3][：:]\s*", re.IGNORECASE)
_ORDINAL_LABEL = re.compile(r"^第[一二三1-3]个?(?:回复|回答)[：:]\s*", re.IGNORECASE)

DEFAULT_PREFIXES: tuple[re.Pattern[str], ...] = (
    _BRACKET_TITLE,
    _NUMERIC_MARKER,
    _REPLY_LABEL,
    _ORDINAL_LABEL,
)


class PrefixCleaner:
    """Strip structural markup a delimiter split left at the start of a segment.

    Only the highest-priority matching prefix is removed per pass. Passes
    repeat until no prefix matches, so ``clean(clean(s)) == clean(s)`` even
    for stacked headers such as ``【标题】1. 正文``.

    Satisfies the ``SegmentCleaner`` protocol.
    """

    def __init__(
        self, prefixes: tuple[re.Pattern[str], ...] = DEFAULT_PREFIXES
    ) -> None:
        self._prefixes = prefixes

    def clean(self, text: str) -> str:
        text = text.strip()
        while True:
            match = self._first_match(text)
            if match is None:
                return text
            text = text[match.end():].strip()

    def _first_match(self, text: str) -> re.Match[str] | None:
        for pattern in self._prefixes:
            match = pattern.match(text)
            if match is not None and match.end() > 0:
                return match
        return None
