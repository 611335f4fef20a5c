"""
목적: 임베딩 문서 저장소와 지식 베이스 적재기를 검증한다.
설명: 유사도 순위, 빈 질의 처리, 파일 단위 실패 격리, 준비 상태 계산을 테스트한다.
디자인 패턴: RAG 단위 테스트
참조: src/agent_gateway/shared/chat/rags/document_store.py, src/agent_gateway/shared/chat/rags/initializer.py
"""

from __future__ import annotations

import pytest

from support.stubs import KeywordEmbeddings

from agent_gateway.shared.chat.rags import EmbeddingDocumentStore, KnowledgeBaseInitializer

_VOCABULARY = ["rivendell", "valley", "lorien", "wood", "gold"]


def _write_knowledge_base(root) -> None:
    root.mkdir(parents=True, exist_ok=True)
    (root / "rivendell.md").write_text("Rivendell is a hidden valley. The valley is quiet.", encoding="utf-8")
    (root / "lorien.md").write_text("Lorien is a golden wood. The wood shines like gold.", encoding="utf-8")
    (root / ".hidden").write_text("ignored", encoding="utf-8")


@pytest.mark.asyncio
async def test_document_store_ranks_by_similarity(tmp_path) -> None:
    """질의와 가까운 문서가 먼저 반환되어야 한다."""

    _write_knowledge_base(tmp_path)
    store = EmbeddingDocumentStore(KeywordEmbeddings(_VOCABULARY))
    await store.store(tmp_path / "rivendell.md")
    await store.store(tmp_path / "lorien.md")

    documents = await store.most_relevant_documents("Tell me about the wood of Lorien", 2)

    assert [document.file_name for document in documents] == ["lorien.md", "rivendell.md"]
    assert documents[0].score > documents[1].score
    assert len(await store.most_relevant_documents("valley", 1)) == 1
    assert store.documents() == sorted([str(tmp_path / "lorien.md"), str(tmp_path / "rivendell.md")])


@pytest.mark.asyncio
async def test_document_store_returns_nothing_for_blank_query_or_empty_store(tmp_path) -> None:
    """빈 질의, 0건 요청, 빈 저장소는 빈 목록이어야 한다."""

    store = EmbeddingDocumentStore(KeywordEmbeddings(_VOCABULARY))

    assert await store.most_relevant_documents("valley", 3) == []

    _write_knowledge_base(tmp_path)
    await store.store(tmp_path / "rivendell.md")

    assert await store.most_relevant_documents("   ", 3) == []
    assert await store.most_relevant_documents("valley", 0) == []


@pytest.mark.asyncio
async def test_knowledge_base_initializer_ingests_all_files(tmp_path) -> None:
    """디렉터리의 모든 파일(숨김 파일 제외)을 적재하고 준비 상태가 되어야 한다."""

    _write_knowledge_base(tmp_path)
    store = EmbeddingDocumentStore(KeywordEmbeddings(_VOCABULARY))
    initializer = KnowledgeBaseInitializer(store, tmp_path, max_concurrency=1)

    assert initializer.status().ready is False

    report = await initializer.initialize()

    assert report.total == 2
    assert report.failed == {}
    assert initializer.status().to_dict() == {"ready": True, "documents": 2, "files": 2}


@pytest.mark.asyncio
async def test_knowledge_base_initializer_isolates_file_failures(tmp_path) -> None:
    """한 파일의 실패가 다른 파일 적재를 막지 않아야 한다."""

    _write_knowledge_base(tmp_path)
    (tmp_path / "broken.bin").write_bytes(b"\xff\xfe\xfa")
    store = EmbeddingDocumentStore(KeywordEmbeddings(_VOCABULARY))
    initializer = KnowledgeBaseInitializer(store, tmp_path)

    report = await initializer.initialize()

    assert sorted(report.succeeded) == sorted([str(tmp_path / "lorien.md"), str(tmp_path / "rivendell.md")])
    assert list(report.failed) == [str(tmp_path / "broken.bin")]
    assert initializer.status().ready is False


@pytest.mark.asyncio
async def test_knowledge_base_initializer_handles_missing_directory(tmp_path) -> None:
    """디렉터리가 없으면 빈 결과를 반환해야 한다."""

    initializer = KnowledgeBaseInitializer(
        EmbeddingDocumentStore(KeywordEmbeddings(_VOCABULARY)),
        tmp_path / "missing",
    )

    report = await initializer.initialize()

    assert report.total == 0
    assert initializer.status().to_dict() == {"ready": True, "documents": 0, "files": 0}
