"""
목적: 지식 베이스 초기 적재기를 제공한다.
설명: 지식 베이스 디렉터리의 파일을 동시성 상한 안에서 문서 저장소에 적재하고, 파일별 실패는 로그만 남긴다.
    적재 완료 여부는 저장 문서 수와 디렉터리 파일 수 비교로 판단한다.
디자인 패턴: 초기화 작업(Initializer)
참조: src/agent_gateway/shared/chat/rags/document_store.py, src/agent_gateway/api/main.py
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from agent_gateway.core.chat.const import DEFAULT_INGEST_CONCURRENCY
from agent_gateway.integrations.fs import BaseFSEngine, LocalFSEngine
from agent_gateway.shared.chat.rags.document_store import EmbeddingDocumentStore
from agent_gateway.shared.logging import Logger, create_default_logger


@dataclass
class IngestionReport:
    """적재 결과 요약."""

    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


@dataclass(frozen=True)
class KnowledgeBaseStatus:
    """지식 베이스 준비 상태."""

    ready: bool
    documents: int
    files: int

    def to_dict(self) -> dict[str, object]:
        return {"ready": self.ready, "documents": self.documents, "files": self.files}


class KnowledgeBaseInitializer:
    """지식 베이스 적재기."""

    def __init__(
        self,
        store: EmbeddingDocumentStore,
        knowledge_base_path: str | Path,
        *,
        max_concurrency: int = DEFAULT_INGEST_CONCURRENCY,
        fs_engine: BaseFSEngine | None = None,
        logger: Logger | None = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency는 1 이상이어야 합니다.")
        self._store = store
        self._path = Path(knowledge_base_path)
        self._max_concurrency = max_concurrency
        self._engine = fs_engine or LocalFSEngine()
        self._logger = logger or create_default_logger("KnowledgeBaseInitializer")

    @property
    def path(self) -> Path:
        return self._path

    async def initialize(self) -> IngestionReport:
        """디렉터리의 모든 파일을 적재한다."""

        report = IngestionReport()
        files = self._engine.list_files(str(self._path))
        if not files:
            self._logger.warning(f"rag.ingest.empty: path={self._path.resolve()}")
            return report

        self._logger.info(
            f"rag.ingest.start: path={self._path.resolve()}, files={len(files)}, "
            f"max_concurrency={self._max_concurrency}"
        )
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _ingest(file_path: str) -> None:
            async with semaphore:
                try:
                    await self._store.store(file_path)
                except asyncio.CancelledError:
                    raise
                except Exception as error:  # noqa: BLE001 - 파일 단위 실패 격리
                    self._logger.error(f"rag.ingest.failed: path={file_path}, error={error}")
                    report.failed[file_path] = str(error)
                    return
                report.succeeded.append(file_path)

        await asyncio.gather(*(_ingest(file_path) for file_path in files))
        self._logger.info(
            f"rag.ingest.done: succeeded={len(report.succeeded)}, failed={len(report.failed)}"
        )
        return report

    def status(self) -> KnowledgeBaseStatus:
        """저장 문서 수가 디렉터리 파일 수와 같으면 준비 완료로 본다."""

        files = len(self._engine.list_files(str(self._path)))
        documents = len(self._store)
        return KnowledgeBaseStatus(ready=documents == files, documents=documents, files=files)


__all__ = ["IngestionReport", "KnowledgeBaseInitializer", "KnowledgeBaseStatus"]
