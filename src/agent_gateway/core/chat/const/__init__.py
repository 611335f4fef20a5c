"""
목적: 코어 상수 공개 API를 제공한다.
설명: 기본 설정값과 고정 응답 문구를 한 곳에서 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/core/chat/const/settings.py, src/agent_gateway/core/chat/const/messages/__init__.py
"""

from agent_gateway.core.chat.const.messages import GREETINGS, AgentResponseMessage
from agent_gateway.core.chat.const.settings import (
    API_VERSION,
    CONTINUE_TOKEN,
    DEFAULT_INGEST_CONCURRENCY,
    DEFAULT_LLM_TEMPERATURE,
    DEFAULT_MAX_AGENT_ITERATIONS,
    DEFAULT_RAG_TOP_K,
    DEFAULT_TOOL_CONCURRENCY,
    GREETING_TOKENS,
)

__all__ = [
    "API_VERSION",
    "AgentResponseMessage",
    "CONTINUE_TOKEN",
    "DEFAULT_INGEST_CONCURRENCY",
    "DEFAULT_LLM_TEMPERATURE",
    "DEFAULT_MAX_AGENT_ITERATIONS",
    "DEFAULT_RAG_TOP_K",
    "DEFAULT_TOOL_CONCURRENCY",
    "GREETINGS",
    "GREETING_TOKENS",
]
