"""Tests for the normalizer and its invariants."""

import logging
from unittest.mock import MagicMock

import pytest

from lib.reply_splitt import Normalizer, normalize_to_triple
from lib.reply_splitt.fallbacks import DEFAULT_FALLBACKS
from tests.fixtures_replies import REPLY_A, REPLY_B, REPLY_C, SENTENCES


def test_replies_are_long_enough():
    assert all(len(text) >= 30 for text in (REPLY_A, REPLY_B, REPLY_C))


def test_order_is_preserved():
    assert normalize_to_triple(f"{REPLY_A}---{REPLY_B}---{REPLY_C}") == (REPLY_A, REPLY_B, REPLY_C)


def test_missing_terminal_mark_is_added():
    raw = f"{REPLY_A[:-1]}\n---\n{REPLY_B}\n---\n{REPLY_C[:-1]}"

    assert normalize_to_triple(raw) == (REPLY_A, REPLY_B, REPLY_C)


def test_extra_segments_are_dropped():
    raw = "---".join([REPLY_A, REPLY_B, REPLY_C, REPLY_A, REPLY_B])

    assert normalize_to_triple(raw) == (REPLY_A, REPLY_B, REPLY_C)


def test_triple_dash_wins_and_headers_are_cleaned():
    raw = f"【建议引导型】{REPLY_A}\n---\n【协作沟通型】{REPLY_B}\n---\n【专业指导型】{REPLY_C}"

    result = Normalizer().run(raw)

    assert result.strategy == "triple_dash"
    assert result.responses == (REPLY_A, REPLY_B, REPLY_C)
    assert result.fallback_slots == ()


@pytest.mark.parametrize(
    "raw",
    [
        f"1. {REPLY_A}\n2. {REPLY_B}\n3. {REPLY_C}",
        f"回复1：{REPLY_A}\n回复2：{REPLY_B}\n回复3：{REPLY_C}",
        f"第一个回复：{REPLY_A}\n第二个回复：{REPLY_B}\n第三个回复：{REPLY_C}",
        f"【平衡沟通型】\n{REPLY_A}\n【事实分析型】\n{REPLY_B}\n【解决方案型】\n{REPLY_C}",
        f"{REPLY_A}\n\n{REPLY_B}\n\n{REPLY_C}",
    ],
)
def test_labelled_outputs_are_cleaned(raw):
    assert normalize_to_triple(raw) == (REPLY_A, REPLY_B, REPLY_C)


def test_single_short_sentence_falls_back_entirely():
    result = Normalizer().run("只有一句话。")

    assert result.strategy == "intelligent_split"
    assert result.responses == DEFAULT_FALLBACKS
    assert result.fallback_slots == (1, 2, 3)


def test_empty_input_yields_fallbacks():
    assert normalize_to_triple("") == DEFAULT_FALLBACKS


def test_unstructured_text_is_split_by_sentences():
    raw = "".join(SENTENCES)

    result = Normalizer().run(raw)

    assert result.strategy == "intelligent_split"
    assert result.responses == (
        "".join(SENTENCES[0:3]),
        "".join(SENTENCES[3:6]),
        "".join(SENTENCES[6:9]),
    )
    assert result.fallback_slots == ()


def test_splitter_restarts_from_full_text():
    splitter = MagicMock()
    splitter.split.return_value = [REPLY_C]
    raw = f"  {REPLY_A}---{REPLY_B}  "

    result = Normalizer(splitter=splitter).run(raw)

    splitter.split.assert_called_once_with(raw.strip())
    assert result.responses == (REPLY_C, DEFAULT_FALLBACKS[1], DEFAULT_FALLBACKS[2])
    assert result.fallback_slots == (2, 3)


def test_short_segment_is_replaced_in_its_slot():
    raw = f"{REPLY_A}---这一条回复只有二十多个字符，因此达不到最低长度。---{REPLY_C}"

    result = Normalizer().run(raw)

    assert result.responses == (REPLY_A, DEFAULT_FALLBACKS[1], REPLY_C)
    assert result.fallback_slots == (2,)


def test_repeated_sentences_inside_a_segment_are_collapsed():
    raw = f"{REPLY_A}{REPLY_A}---{REPLY_B}---{REPLY_C}{REPLY_C}"

    assert normalize_to_triple(raw) == (REPLY_A, REPLY_B, REPLY_C)


def test_stages_are_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="normalizer"):
        Normalizer().run(f"{REPLY_A}---{REPLY_B}---{REPLY_C}")

    messages = [r.getMessage() for r in caplog.records if r.name == "normalizer"]
    assert "Segmentation: strategy=triple_dash segments=3" in messages
    assert "Normalized with strategy=triple_dash fallback_slots=[]" in messages


def test_splitter_receives_normalized_line_endings():
    splitter = MagicMock()
    splitter.split.return_value = []
    raw = f"{REPLY_A[:10]}\r\n{REPLY_A[10:]}\r\n{REPLY_B}\r\n"

    Normalizer(splitter=splitter).run(raw)

    splitter.split.assert_called_once_with(f"{REPLY_A[:10]}\n{REPLY_A[10:]}\n{REPLY_B}")


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "\n\n\n",
        "---",
        "---\n---\n---",
        "。！？。！？",
        "只有一句话。",
        "a" * 100,
        "重复的句子内容在这里出现。" * 20,
        f"{REPLY_A}---{REPLY_B}",
        REPLY_A + REPLY_B,
        "【标题】\n---\n【标题】\n---\n【标题】",
        "1.\n2.\n3.",
        "---".join([REPLY_A] * 5),
        "问题很严重。问题很严重。需要整改。",
        "".join(SENTENCES) * 3,
        "Some English text without any Chinese punctuation at all, repeated. " * 4,
    ],
)
def test_invariants_hold_for_any_input(raw, assert_valid_triple):
    assert_valid_triple(normalize_to_triple(raw))
