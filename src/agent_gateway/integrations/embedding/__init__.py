"""
목적: 임베딩 통합 공개 API를 제공한다.
설명: OpenAI 임베딩 팩토리를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/integrations/embedding/factory.py
"""

from agent_gateway.integrations.embedding.factory import DEFAULT_EMBEDDING_MODEL, create_embeddings

__all__ = ["DEFAULT_EMBEDDING_MODEL", "create_embeddings"]
