"""
Prompt construction for audit reply generation.
"""
import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Union

SYSTEM_PROMPT = "你是一位经验丰富的审计专家，具备优秀的沟通技巧和深厚的专业素养。请根据要求生成专业、实用的审计沟通回复。"

CONNECTION_CHECK_SYSTEM_PROMPT = "你是一个专业的AI助手。"
CONNECTION_CHECK_PROMPT = "请回复'测试成功'"

MIN_INTENSITY = 1
MAX_INTENSITY = 10

INTENSITY_DESCRIPTIONS = [
    "",
    "极其温和，以理解和引导为主，营造合作氛围",
    "温和友善，重视对方感受，循序渐进地指出问题",
    "温和但明确，既保持礼貌又清晰表达专业立场",
    "适度坚定，平衡专业要求与沟通效果",
    "中等强度，直接明确地指出问题，保持专业客观",
    "较为坚定，重点突出问题的重要性和紧迫性",
    "坚定直接，强调合规要求的不可妥协性",
    "强硬专业，明确指出严重性，要求立即整改",
    "非常强硬，直接指出严重违规，态度不容商榷",
    "极其强硬，涉及重大违规，必须立即纠正，后果严重",
]

# Keyword heuristics checked in order; the first hit decides the strategy line.
SITUATION_RULES = [
    (
        re.compile(r"不是|没有|不对|不存在|不可能|推脱|拒绝"),
        "对方表现出抗拒或否认态度，需要用事实和耐心来说服，避免直接对抗。",
    ),
    (
        re.compile(r"困难|难以|无法|不好|复杂|麻烦"),
        "对方表达了困难，需要理解其处境的同时，提供可行的解决方案。",
    ),
    (
        re.compile(r"会|好的|明白|理解|配合|支持|改进"),
        "对方表现出配合态度，应该给予肯定并提供具体的指导建议。",
    ),
    (
        re.compile(r"因为|由于|原因|情况|实际|现实"),
        "对方在解释情况，需要认真听取并基于实际情况提供专业建议。",
    ),
]
DEFAULT_SITUATION = "根据对方的回应，需要保持专业客观的态度，既要坚持审计原则，又要促进有效沟通。"


@dataclass(frozen=True)
class ResponseStyle:
    name: str
    approach: str
    focus: str
    tone: str


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float
    max_tokens: int
    top_p: float
    frequency_penalty: float
    presence_penalty: float

    def to_params(self) -> Dict[str, Union[int, float]]:
        return asdict(self)


GENTLE_STYLES = (
    ResponseStyle("建议引导型", "温和建议", "共同寻找解决方案", "亲和、理解、建设性"),
    ResponseStyle("协作沟通型", "协作讨论", "双方合作改进", "友善、开放、支持性"),
    ResponseStyle("专业指导型", "专业指导", "提供专业建议", "专业、耐心、详细"),
)
BALANCED_STYLES = (
    ResponseStyle("平衡沟通型", "既友善又明确", "平衡关系与要求", "专业、友善、明确"),
    ResponseStyle("事实分析型", "基于事实分析", "客观分析问题", "客观、理性、专业"),
    ResponseStyle("解决方案型", "聚焦解决方案", "具体可行的改进措施", "务实、专业、积极"),
)
FIRM_STYLES = (
    ResponseStyle("直接明确型", "直接指出问题", "问题的严重性", "坚定、直接、权威"),
    ResponseStyle("规范要求型", "强调合规要求", "法规要求和风险", "严肃、专业、不容商榷"),
    ResponseStyle("权威指导型", "权威性指导", "必须执行的整改措施", "权威、坚决、明确"),
)

GENTLE_CONFIG = GenerationConfig(0.8, 2000, 0.9, 0.3, 0.2)
BALANCED_CONFIG = GenerationConfig(0.7, 2000, 0.85, 0.4, 0.3)
FIRM_CONFIG = GenerationConfig(0.6, 2000, 0.8, 0.5, 0.4)
CONNECTION_CHECK_CONFIG = {"max_tokens": 50, "temperature": 0.7}


def get_intensity_description(level: int) -> str:
    """Describe the requested tone; levels above 10 clamp, levels below 1 use 5."""
    level = min(level, MAX_INTENSITY)
    if level < MIN_INTENSITY:
        return INTENSITY_DESCRIPTIONS[5]
    return INTENSITY_DESCRIPTIONS[level]


def get_response_styles(level: int) -> tuple:
    if level <= 3:
        return GENTLE_STYLES
    elif level <= 6:
        return BALANCED_STYLES
    return FIRM_STYLES


def get_generation_config(level: int) -> GenerationConfig:
    if level <= 3:
        return GENTLE_CONFIG
    elif level <= 6:
        return BALANCED_CONFIG
    return FIRM_CONFIG


def analyze_situation(message: str) -> str:
    for pattern, strategy in SITUATION_RULES:
        if pattern.search(message):
            return strategy
    return DEFAULT_SITUATION


def create_prompt(message: str, level: int) -> str:
    intensity_description = get_intensity_description(level)
    situation = analyze_situation(message)

    style_blocks = []
    for style in get_response_styles(level):
        style_blocks.append(
            f"""【{style.name}】
- 采用{style.approach}的方式
- 重点关注{style.focus}
- 语言风格：{style.tone}"""
        )
    styles_text = "\n\n".join(style_blocks)

    return f"""你是一位经验丰富的审计专家，具有优秀的沟通技巧和深厚的专业素养。请根据审计对象的回应，生成专业而有效的沟通回复。

<对方回应>
"{message}"

<沟通策略>
{situation}
沟通语气: {intensity_description}（强度级别：{level}/10）

<回复要求>
请生成3种不同风格的专业回复：

{styles_text}

<专业要求>
每个回复都应该：
✓ 体现专业水准，但避免过度专业术语
✓ 根据情况适当引用相关规定（不强制）
✓ 提供建设性的解决思路
✓ 保持审计人员的权威性和可信度
✓ 语言自然流畅，符合实际沟通习惯

<输出格式>
直接输出3个回复内容，每个回复之间用"---"分隔，不需要标题或编号：

第一个回复内容
---
第二个回复内容
---
第三个回复内容"""


def build_messages(message: str, level: int) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": create_prompt(message, level)},
    ]
