"""Build the chat-completion request for a life analysis.

The user prompt embeds the pre-computed pillars, the Da Yun direction and the
age table the model must follow when it fills in chartPoints.
"""

from __future__ import annotations

import logging

from ..core.constants import ANONYMOUS_NAME
from ..core.models import DaYunDirection, Gender, RequestPayload, UserInput
from ..core.pillars import get_stem_polarity, parse_start_age, resolve_direction
from .loader import format_prompt, load_prompt

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_NAME = "system_instruction"
USER_PROMPT_NAME = "life_analysis"

_DIRECTION_EXAMPLES = {
    DaYunDirection.FORWARD: "例如：第一步是【戊申】，第二步则是【己酉】（顺排）",
    DaYunDirection.BACKWARD: "例如：第一步是【戊申】，第二步则是【丁未】（逆排）",
}


def _gender_label(gender: Gender) -> str:
    return "男 (乾造)" if gender is Gender.MALE else "女 (坤造)"


def build_user_prompt(user_input: UserInput) -> str:
    """Format the user prompt for a chart.

    Args:
        user_input: Chart data supplied by the caller

    Returns:
        The prompt text sent as the user message.
    """
    year_polarity = get_stem_polarity(user_input.year_pillar)
    direction = resolve_direction(user_input.gender, year_polarity)
    start_age = parse_start_age(user_input.start_age)

    logger.debug(
        f"Year stem polarity {year_polarity.value}, gender {user_input.gender.value} "
        f"-> Da Yun {direction.value}, start age {start_age}"
    )

    return format_prompt(
        USER_PROMPT_NAME,
        gender_label=_gender_label(user_input.gender),
        name=user_input.name or ANONYMOUS_NAME,
        birth_year=str(user_input.birth_year),
        year_pillar=user_input.year_pillar,
        year_polarity=year_polarity.label,
        month_pillar=user_input.month_pillar,
        day_pillar=user_input.day_pillar,
        hour_pillar=user_input.hour_pillar,
        # The raw text is echoed; the table below uses the parsed value
        start_age=user_input.start_age,
        first_da_yun=user_input.first_da_yun,
        direction=direction.label,
        direction_example=_DIRECTION_EXAMPLES[direction],
        childhood_end=str(start_age - 1),
        step1_start=str(start_age),
        step1_end=str(start_age + 9),
        step2_start=str(start_age + 10),
        step2_end=str(start_age + 19),
        step3_start=str(start_age + 20),
        step3_end=str(start_age + 29),
    )


def build_request_payload(user_input: UserInput, model: str) -> RequestPayload:
    """Build a fresh request payload for one call."""
    return RequestPayload(
        model=model,
        system_instruction=load_prompt(SYSTEM_PROMPT_NAME),
        user_prompt=build_user_prompt(user_input),
    )
