"""
목적: LLM 통합 공개 API를 제공한다.
설명: 로깅/예외 처리 래퍼와 OpenAI 채팅 모델 팩토리를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/integrations/llm/client.py, src/agent_gateway/integrations/llm/factory.py
"""

from agent_gateway.integrations.llm.client import LLMClient
from agent_gateway.integrations.llm.factory import DEFAULT_OPENAI_MODEL, create_chat_model

__all__ = ["DEFAULT_OPENAI_MODEL", "LLMClient", "create_chat_model"]
