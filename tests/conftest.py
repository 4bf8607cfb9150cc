"""Pytest configuration and fixtures."""

import re

import pytest

from lib.reply_splitt import CannedFallback

_TERMINAL_SPLIT = re.compile(r"[。！？]")


@pytest.fixture
def fallback():
    return CannedFallback()


@pytest.fixture
def assert_valid_triple():
    """Check the invariants every normalized triple must hold."""

    def check(responses):
        assert isinstance(responses, tuple)
        assert len(responses) == 3
        for response in responses:
            assert len(response) >= 30
            assert response[-1] in "。！？"
            sentences = [s.strip() for s in _TERMINAL_SPLIT.split(response) if s.strip()]
            assert len(sentences) == len(set(sentences))

    return check
