"""Tests for prompt construction."""

import pytest

from lib.prompts import (
    BALANCED_CONFIG,
    DEFAULT_SITUATION,
    FIRM_CONFIG,
    GENTLE_CONFIG,
    INTENSITY_DESCRIPTIONS,
    SYSTEM_PROMPT,
    analyze_situation,
    build_messages,
    create_prompt,
    get_generation_config,
    get_intensity_description,
    get_response_styles,
)


@pytest.mark.parametrize("level", range(1, 11))
def test_intensity_description_per_level(level):
    assert get_intensity_description(level) == INTENSITY_DESCRIPTIONS[level]


def test_intensity_description_out_of_range():
    assert get_intensity_description(42) == INTENSITY_DESCRIPTIONS[10]
    assert get_intensity_description(0) == INTENSITY_DESCRIPTIONS[5]
    assert get_intensity_description(-3) == INTENSITY_DESCRIPTIONS[5]


@pytest.mark.parametrize(
    "level, config, first_style",
    [
        (1, GENTLE_CONFIG, "建议引导型"),
        (3, GENTLE_CONFIG, "建议引导型"),
        (4, BALANCED_CONFIG, "平衡沟通型"),
        (6, BALANCED_CONFIG, "平衡沟通型"),
        (7, FIRM_CONFIG, "直接明确型"),
        (10, FIRM_CONFIG, "直接明确型"),
    ],
)
def test_bands(level, config, first_style):
    assert get_generation_config(level) == config
    styles = get_response_styles(level)
    assert len(styles) == 3
    assert styles[0].name == first_style


def test_generation_config_params():
    assert GENTLE_CONFIG.to_params() == {
        "temperature": 0.8,
        "max_tokens": 2000,
        "top_p": 0.9,
        "frequency_penalty": 0.3,
        "presence_penalty": 0.2,
    }


@pytest.mark.parametrize(
    "message, keyword",
    [
        ("我们没有这样的问题", "抗拒或否认"),
        ("整改起来确实有困难", "表达了困难"),
        ("好的，我们会配合整改", "配合态度"),
        ("由于人手紧张导致延误", "解释情况"),
    ],
)
def test_analyze_situation(message, keyword):
    assert keyword in analyze_situation(message)


def test_analyze_situation_default():
    assert analyze_situation("收到") == DEFAULT_SITUATION


def test_denial_takes_precedence_over_cooperation():
    assert "抗拒或否认" in analyze_situation("好的，但这不是我们的问题")


def test_create_prompt():
    prompt = create_prompt("这笔费用没有经过审批", 8)

    assert '"这笔费用没有经过审批"' in prompt
    assert "强度级别：8/10" in prompt
    assert INTENSITY_DESCRIPTIONS[8] in prompt
    assert "【直接明确型】" in prompt
    assert "【规范要求型】" in prompt
    assert "【权威指导型】" in prompt
    assert '用"---"分隔' in prompt


def test_build_messages():
    messages = build_messages("收到", 5)

    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[0]["content"] == SYSTEM_PROMPT
    assert "强度级别：5/10" in messages[1]["content"]
