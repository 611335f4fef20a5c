"""
목적: 에이전트 대화 기본 상수를 정의한다.
설명: 제어 토큰, 반복 상한, RAG 개수 등 코어 계층 기본값을 모은다.
디자인 패턴: 상수 모듈
참조: src/agent_gateway/shared/chat/services/chat_service.py, src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from __future__ import annotations

API_VERSION = "1.0"

GREETING_TOKENS = frozenset({"[START]", "[GREETING]"})
CONTINUE_TOKEN = "[CONTINUE]"

DEFAULT_MAX_AGENT_ITERATIONS = 100
DEFAULT_RAG_TOP_K = 3
DEFAULT_TOOL_CONCURRENCY = 8
DEFAULT_INGEST_CONCURRENCY = 3
DEFAULT_LLM_TEMPERATURE = 0.2
