"""
목적: 세션 체크포인트 저장소를 검증한다.
설명: 인메모리/파일 저장소의 저장-복원, 접두 일치 검사, 파일명 변환, 손상 파일 처리를 테스트한다.
디자인 패턴: 저장소 단위 테스트
참조: src/agent_gateway/shared/chat/memory/session_store.py
"""

from __future__ import annotations

import hashlib
import json

import pytest

from agent_gateway.core.chat.models import ChatMessage, ChatRole, ToolCall
from agent_gateway.shared.chat.memory import FileSessionStore, InMemorySessionStore
from agent_gateway.shared.exceptions import PersistenceFailure


def _conversation(session_id: str) -> list[ChatMessage]:
    return [
        ChatMessage(session_id=session_id, role=ChatRole.USER, content="AAPL?"),
        ChatMessage(
            session_id=session_id,
            role=ChatRole.TOOL_CALL,
            tool_calls=[ToolCall(id="call-1", name="stock_price", arguments={"symbol": "AAPL"})],
        ),
        ChatMessage(session_id=session_id, role=ChatRole.TOOL_RESULT, content="[43.32:42.45]", tool_call_id="call-1"),
        ChatMessage(session_id=session_id, role=ChatRole.ASSISTANT, content="It is [43.32:42.45]."),
    ]


@pytest.mark.asyncio
async def test_in_memory_session_store_round_trip_and_unknown_session() -> None:
    """저장한 히스토리를 그대로 복원하고, 모르는 세션은 빈 목록이어야 한다."""

    store = InMemorySessionStore()
    messages = _conversation("s-1")

    await store.save("s-1", messages[:2])
    await store.save("s-1", messages)

    assert await store.load("s-1") == messages
    assert await store.load("unknown") == []
    assert len(store) == 1


@pytest.mark.asyncio
async def test_in_memory_session_store_rejects_diverged_history() -> None:
    """기존 히스토리를 확장하지 않는 저장은 실패해야 한다."""

    store = InMemorySessionStore()
    messages = _conversation("s-1")
    await store.save("s-1", messages)

    with pytest.raises(PersistenceFailure) as captured:
        await store.save("s-1", messages[1:])

    assert captured.value.code == "CHECKPOINT_HISTORY_DIVERGED"
    assert await store.load("s-1") == messages


@pytest.mark.asyncio
async def test_file_session_store_persists_json_document(tmp_path) -> None:
    """파일 저장소는 세션당 JSON 문서 1개를 남기고 새 인스턴스에서도 복원해야 한다."""

    store = FileSessionStore(tmp_path / "sessions")
    messages = _conversation("s-1")

    await store.save("s-1", messages)

    path = store.path_for("s-1")
    assert path.name == "s-1.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["session_id"] == "s-1"
    assert len(payload["messages"]) == 4
    assert await FileSessionStore(tmp_path / "sessions").load("s-1") == messages
    assert [item.name for item in (tmp_path / "sessions").iterdir()] == ["s-1.json"]


@pytest.mark.asyncio
async def test_file_session_store_hashes_unsafe_session_ids(tmp_path) -> None:
    """파일명으로 쓸 수 없는 세션 ID는 sha256 파일명으로 저장되어야 한다."""

    store = FileSessionStore(tmp_path)
    session_id = "../../etc/passwd"

    await store.save(session_id, _conversation(session_id))

    expected = hashlib.sha256(session_id.encode("utf-8")).hexdigest() + ".json"
    assert store.path_for(session_id).name == expected
    assert (tmp_path / expected).exists()
    assert len(await store.load(session_id)) == 4


@pytest.mark.asyncio
async def test_file_session_store_rejects_diverged_history(tmp_path) -> None:
    """파일 저장소도 접두 일치 검사를 해야 한다."""

    store = FileSessionStore(tmp_path)
    await store.save("s-1", _conversation("s-1"))

    with pytest.raises(PersistenceFailure) as captured:
        await store.save("s-1", _conversation("s-1"))

    assert captured.value.code == "CHECKPOINT_HISTORY_DIVERGED"


@pytest.mark.asyncio
async def test_file_session_store_reports_corrupted_checkpoint(tmp_path) -> None:
    """손상된 체크포인트는 읽기 오류로 보고되어야 한다."""

    store = FileSessionStore(tmp_path)
    store.path_for("broken").write_text("{not json", encoding="utf-8")

    with pytest.raises(PersistenceFailure) as captured:
        await store.load("broken")

    assert captured.value.code == "CHECKPOINT_READ_ERROR"


@pytest.mark.asyncio
async def test_file_session_store_quarantines_corrupted_checkpoint_on_save(tmp_path) -> None:
    """손상된 체크포인트가 있어도 저장은 성공하고, 기존 파일은 .corrupt로 격리되어야 한다."""

    store = FileSessionStore(tmp_path)
    store.path_for("broken").write_text("{not json", encoding="utf-8")
    messages = _conversation("broken")

    await store.save("broken", messages[:2])
    await store.save("broken", messages)

    assert await store.load("broken") == messages
    assert (tmp_path / "broken.corrupt").read_text(encoding="utf-8") == "{not json"
    assert sorted(item.name for item in tmp_path.iterdir()) == ["broken.corrupt", "broken.json"]
