"""
목적: 대화 프롬프트 공개 API를 제공한다.
설명: 시스템 프롬프트 상수와 프롬프트 빌더를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/core/chat/prompts/system_prompt.py, src/agent_gateway/core/chat/prompts/prompt_builder.py
"""

from agent_gateway.core.chat.prompts.prompt_builder import BuiltPrompt, PromptBuilder
from agent_gateway.core.chat.prompts.system_prompt import (
    ATTACHMENT_HINT,
    DEFAULT_ASSISTANT_NAME,
    SYSTEM_PROMPT,
    USER_INPUT_TEMPLATE,
)

__all__ = [
    "ATTACHMENT_HINT",
    "BuiltPrompt",
    "DEFAULT_ASSISTANT_NAME",
    "PromptBuilder",
    "SYSTEM_PROMPT",
    "USER_INPUT_TEMPLATE",
]
