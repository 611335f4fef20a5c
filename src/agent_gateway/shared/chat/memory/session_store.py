"""
목적: 세션 체크포인트 저장소를 제공한다.
설명: 세션 메시지 히스토리 전체 스냅샷을 저장/복원한다. 저장 시 기존 히스토리를 확장하는지(접두 일치) 검사한다.
    파일 저장소는 세션당 JSON 문서 1개를 원자적으로 교체 기록하고, 손상된 문서는 저장 시 격리한다.
디자인 패턴: 저장소 패턴
참조: src/agent_gateway/shared/chat/graph/checkpoint.py, src/agent_gateway/integrations/fs/engines/local.py
"""

from __future__ import annotations

import asyncio
import hashlib
import re
import threading
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from agent_gateway.core.chat.models import ChatMessage, SessionCheckpoint
from agent_gateway.integrations.fs import BaseFSEngine, LocalFSEngine
from agent_gateway.shared.const import SharedConst
from agent_gateway.shared.exceptions import ExceptionDetail, PersistenceFailure
from agent_gateway.shared.logging import Logger, create_default_logger

_SAFE_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def _ensure_extends(session_id: str, stored: Sequence[ChatMessage], incoming: Sequence[ChatMessage]) -> None:
    stored_ids = [message.message_id for message in stored]
    incoming_ids = [message.message_id for message in incoming[: len(stored_ids)]]
    if incoming_ids != stored_ids:
        detail = ExceptionDetail(
            code="CHECKPOINT_HISTORY_DIVERGED",
            cause=f"session_id={session_id}, stored={len(stored_ids)}, incoming={len(incoming)}",
            hint="히스토리는 추가만 가능합니다.",
        )
        raise PersistenceFailure("세션 히스토리가 기존 체크포인트를 확장하지 않습니다.", detail)


class InMemorySessionStore:
    """프로세스 메모리 세션 저장소."""

    def __init__(self, logger: Logger | None = None) -> None:
        self._logger = logger or create_default_logger("InMemorySessionStore")
        self._lock = threading.RLock()
        self._sessions: dict[str, list[ChatMessage]] = {}

    async def load(self, session_id: str) -> list[ChatMessage]:
        with self._lock:
            return [message.model_copy(deep=True) for message in self._sessions.get(session_id, [])]

    async def save(self, session_id: str, messages: Sequence[ChatMessage]) -> None:
        with self._lock:
            _ensure_extends(session_id, self._sessions.get(session_id, []), messages)
            self._sessions[session_id] = [message.model_copy(deep=True) for message in messages]
        self._logger.debug(f"session.saved: session_id={session_id}, messages={len(messages)}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class FileSessionStore:
    """
    파일 기반 세션 저장소.

    Args:
        root: 체크포인트 디렉터리.
        fs_engine: 파일 시스템 엔진. 기본값은 LocalFSEngine.
        encoding: 파일 인코딩.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        root: str | Path,
        *,
        fs_engine: BaseFSEngine | None = None,
        encoding: str = SharedConst.DEFAULT_ENCODING,
        logger: Logger | None = None,
    ) -> None:
        self._root = Path(root)
        self._engine = fs_engine or LocalFSEngine()
        self._encoding = encoding
        self._logger = logger or create_default_logger("FileSessionStore")
        self._lock = threading.Lock()
        self._engine.mkdir(str(self._root), exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, session_id: str) -> Path:
        """세션 체크포인트 파일 경로를 반환한다. 파일명으로 쓸 수 없는 id는 sha256으로 바꾼다."""

        if _SAFE_SESSION_ID.match(session_id):
            return self._root / f"{session_id}.json"
        digest = hashlib.sha256(session_id.encode(self._encoding)).hexdigest()
        return self._root / f"{digest}.json"

    async def load(self, session_id: str) -> list[ChatMessage]:
        checkpoint = await asyncio.to_thread(self._read_checkpoint, session_id)
        return list(checkpoint.messages) if checkpoint is not None else []

    async def save(self, session_id: str, messages: Sequence[ChatMessage]) -> None:
        await asyncio.to_thread(self._write_checkpoint, session_id, list(messages))
        self._logger.debug(f"session.saved: session_id={session_id}, messages={len(messages)}")

    def _read_checkpoint(self, session_id: str) -> SessionCheckpoint | None:
        path = self.path_for(session_id)
        if not self._engine.exists(str(path)):
            return None
        try:
            raw = self._engine.read_text(str(path), self._encoding)
            return SessionCheckpoint.model_validate_json(raw)
        except (OSError, ValidationError, ValueError) as error:
            detail = ExceptionDetail(
                code="CHECKPOINT_READ_ERROR",
                cause=f"session_id={session_id}, path={path}, error={error}",
            )
            raise PersistenceFailure("세션 체크포인트를 읽을 수 없습니다.", detail, error) from error

    def _read_for_write(self, session_id: str) -> SessionCheckpoint | None:
        """저장 직전 기존 체크포인트를 읽는다. 손상된 파일은 <id>.corrupt로 옮기고 빈 히스토리로 본다."""

        try:
            return self._read_checkpoint(session_id)
        except PersistenceFailure as error:
            path = self.path_for(session_id)
            quarantine = path.with_suffix(".corrupt")
            self._logger.warning(
                f"session.checkpoint.corrupt: session_id={session_id}, moved_to={quarantine}, "
                f"cause={error.detail.cause}"
            )
            try:
                self._engine.move(str(path), str(quarantine))
            except OSError as move_error:
                self._logger.warning(
                    f"session.checkpoint.quarantine_failed: session_id={session_id}, error={move_error}"
                )
            return None

    def _write_checkpoint(self, session_id: str, messages: list[ChatMessage]) -> None:
        with self._lock:
            stored = self._read_for_write(session_id)
            _ensure_extends(session_id, stored.messages if stored is not None else [], messages)
            checkpoint = SessionCheckpoint(session_id=session_id, messages=messages)
            path = self.path_for(session_id)
            try:
                self._engine.write_text_atomic(
                    str(path),
                    checkpoint.model_dump_json(indent=2),
                    self._encoding,
                )
            except OSError as error:
                detail = ExceptionDetail(
                    code="CHECKPOINT_WRITE_ERROR",
                    cause=f"session_id={session_id}, path={path}, error={error}",
                )
                raise PersistenceFailure("세션 체크포인트를 저장할 수 없습니다.", detail, error) from error


__all__ = ["FileSessionStore", "InMemorySessionStore"]
