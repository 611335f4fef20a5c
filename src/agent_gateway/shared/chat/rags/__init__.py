"""
목적: 지식 베이스(RAG) 공개 API를 제공한다.
설명: 임베딩 문서 저장소와 초기 적재기를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/rags/document_store.py, src/agent_gateway/shared/chat/rags/initializer.py
"""

from agent_gateway.shared.chat.rags.document_store import EmbeddingDocumentStore
from agent_gateway.shared.chat.rags.initializer import (
    IngestionReport,
    KnowledgeBaseInitializer,
    KnowledgeBaseStatus,
)

__all__ = [
    "EmbeddingDocumentStore",
    "IngestionReport",
    "KnowledgeBaseInitializer",
    "KnowledgeBaseStatus",
]
