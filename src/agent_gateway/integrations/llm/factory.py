"""
목적: OpenAI 채팅 모델 생성 함수를 제공한다.
설명: 환경 변수의 모델명/API 키로 ChatOpenAI를 만들고 LLMClient로 감싼다.
디자인 패턴: 팩토리
참조: src/agent_gateway/integrations/llm/client.py, src/agent_gateway/api/chat/services/runtime.py
"""

from __future__ import annotations

import os

from langchain_openai import ChatOpenAI
from pydantic import SecretStr

from agent_gateway.core.chat.const import DEFAULT_LLM_TEMPERATURE
from agent_gateway.integrations.llm.client import LLMClient
from agent_gateway.shared.logging import Logger

DEFAULT_OPENAI_MODEL = "gpt-4.1-mini"


def create_chat_model(
    temperature: float = DEFAULT_LLM_TEMPERATURE,
    logger: Logger | None = None,
) -> LLMClient:
    """OPENAI_MODEL/OPENAI_API_KEY 기반 LLMClient를 만든다."""

    model_name = str(os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)).strip() or DEFAULT_OPENAI_MODEL
    model = ChatOpenAI(
        model=model_name,
        temperature=temperature,
        streaming=True,
        api_key=SecretStr(os.getenv("OPENAI_API_KEY", "")),
    )
    return LLMClient(model=model, name=model_name, logger=logger)


__all__ = ["DEFAULT_OPENAI_MODEL", "create_chat_model"]
