"""
목적: 임베딩 기반 지식 문서 저장소를 제공한다.
설명: 파일 단위로 본문을 임베딩해 메모리에 보관하고, 질의 임베딩과의 코사인 유사도로 관련 문서를 정렬해 반환한다.
디자인 패턴: 저장소 패턴
참조: src/agent_gateway/shared/chat/rags/initializer.py, src/agent_gateway/shared/chat/services/chat_service.py
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from langchain_core.embeddings import Embeddings

from agent_gateway.core.chat.models import RetrievedDocument
from agent_gateway.integrations.fs import BaseFSEngine, LocalFSEngine
from agent_gateway.shared.const import SharedConst
from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail
from agent_gateway.shared.logging import Logger, create_default_logger


@dataclass(frozen=True)
class _StoredDocument:
    path: str
    file_name: str
    content: str
    vector: np.ndarray


class EmbeddingDocumentStore:
    """
    임베딩 문서 저장소.

    Args:
        embeddings: LangChain Embeddings 구현체.
        fs_engine: 문서 파일을 읽을 파일 시스템 엔진.
        encoding: 문서 파일 인코딩.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        *,
        fs_engine: BaseFSEngine | None = None,
        encoding: str = SharedConst.DEFAULT_ENCODING,
        logger: Logger | None = None,
    ) -> None:
        self._embeddings = embeddings
        self._engine = fs_engine or LocalFSEngine()
        self._encoding = encoding
        self._logger = logger or create_default_logger("EmbeddingDocumentStore")
        self._lock = threading.Lock()
        self._documents: dict[str, _StoredDocument] = {}

    async def store(self, path: str | Path) -> None:
        """파일을 읽어 임베딩한 뒤 저장한다. 같은 경로는 덮어쓴다."""

        file_path = Path(path)
        content = await asyncio.to_thread(self._engine.read_text, str(file_path), self._encoding)
        try:
            vectors = await self._embeddings.aembed_documents([content])
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            detail = ExceptionDetail(code="RAG_EMBED_ERROR", cause=f"path={file_path}, error={error}")
            raise BaseAppException("문서 임베딩에 실패했습니다.", detail, error) from error
        document = _StoredDocument(
            path=str(file_path),
            file_name=file_path.name,
            content=content,
            vector=np.asarray(vectors[0], dtype=np.float32),
        )
        with self._lock:
            self._documents[document.path] = document
        self._logger.debug(f"rag.document.stored: path={file_path}, chars={len(content)}")

    async def most_relevant_documents(self, query: str, count: int) -> list[RetrievedDocument]:
        """질의와 유사도가 높은 순으로 최대 count건을 반환한다."""

        with self._lock:
            documents = list(self._documents.values())
        if count < 1 or not documents or not query.strip():
            return []
        try:
            query_vector = np.asarray(await self._embeddings.aembed_query(query), dtype=np.float32)
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            detail = ExceptionDetail(code="RAG_QUERY_EMBED_ERROR", cause=str(error))
            raise BaseAppException("질의 임베딩에 실패했습니다.", detail, error) from error

        matrix = np.vstack([document.vector for document in documents])
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query_vector)
        scores = np.divide(
            matrix @ query_vector,
            norms,
            out=np.zeros(len(documents), dtype=np.float32),
            where=norms > 0,
        )
        # 동점이면 경로 순서를 유지한다.
        order = sorted(range(len(documents)), key=lambda index: (-float(scores[index]), documents[index].path))
        return [
            RetrievedDocument(
                path=documents[index].path,
                file_name=documents[index].file_name,
                content=documents[index].content,
                score=float(scores[index]),
            )
            for index in order[:count]
        ]

    def documents(self) -> list[str]:
        """저장된 문서 경로 목록을 반환한다."""

        with self._lock:
            return sorted(self._documents)

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)


__all__ = ["EmbeddingDocumentStore"]
