"""
목적: OpenAI 임베딩 생성 함수를 제공한다.
설명: 환경 변수의 모델명/API 키로 LangChain OpenAIEmbeddings를 만든다.
디자인 패턴: 팩토리
참조: src/agent_gateway/shared/chat/rags/document_store.py
"""

from __future__ import annotations

import os

from langchain_openai import OpenAIEmbeddings
from pydantic import SecretStr

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"


def create_embeddings() -> OpenAIEmbeddings:
    """OPENAI_EMBEDDING_MODEL/OPENAI_API_KEY 기반 임베딩 모델을 만든다."""

    model_name = (
        str(os.getenv("OPENAI_EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL)).strip() or DEFAULT_EMBEDDING_MODEL
    )
    return OpenAIEmbeddings(
        model=model_name,
        openai_api_key=SecretStr(os.getenv("OPENAI_API_KEY", "")),
    )


__all__ = ["DEFAULT_EMBEDDING_MODEL", "create_embeddings"]
