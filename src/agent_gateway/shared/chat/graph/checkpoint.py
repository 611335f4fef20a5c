"""
목적: 노드 실행 직후 세션 히스토리를 저장하는 체크포인트 훅을 제공한다.
설명: 이전 히스토리 + 이번 턴 메시지 + 노드가 새로 만든 메시지 전체 스냅샷을 저장한다.
    저장 실패는 로그만 남기고 실행을 계속한다.
디자인 패턴: 라이트스루 캐시 정책
참조: src/agent_gateway/shared/chat/graph/builder.py, src/agent_gateway/shared/chat/memory/session_store.py
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from agent_gateway.core.chat.models import ChatMessage
from agent_gateway.shared.exceptions import BaseAppException
from agent_gateway.shared.logging import Logger, create_default_logger

if TYPE_CHECKING:
    from agent_gateway.shared.chat.interface import SessionStorePort


class SessionCheckpointHook:
    """세션 저장소 기반 자동 체크포인트 훅."""

    def __init__(
        self,
        store: SessionStorePort,
        *,
        history_key: str = "history",
        messages_key: str = "messages",
        logger: Logger | None = None,
    ) -> None:
        self._store = store
        self._history_key = history_key
        self._messages_key = messages_key
        self._logger = logger or create_default_logger("SessionCheckpointHook")

    @staticmethod
    def snapshot(
        state: Mapping[str, Any],
        update: Mapping[str, Any],
        history_key: str = "history",
        messages_key: str = "messages",
    ) -> list[ChatMessage]:
        """state와 노드 출력을 합친 히스토리 스냅샷을 만든다."""

        return [
            *list(state.get(history_key) or []),
            *list(state.get(messages_key) or []),
            *list(update.get(messages_key) or []),
        ]

    async def __call__(self, state: Mapping[str, Any], update: Mapping[str, Any]) -> None:
        session_id = str(state.get("session_id") or "").strip()
        if not session_id:
            return
        messages = self.snapshot(state, update, self._history_key, self._messages_key)
        try:
            await self._store.save(session_id, messages)
        except BaseAppException as error:
            self._logger.warning(
                f"checkpoint.save.failed: session_id={session_id}, code={error.code}, cause={error.detail.cause}"
            )
            return
        except Exception as error:  # noqa: BLE001 - 저장소 구현 오류 캡처
            self._logger.warning(
                f"checkpoint.save.failed: session_id={session_id}, error={type(error).__name__}: {error}"
            )
            return
        self._logger.debug(
            f"checkpoint.saved: session_id={session_id}, node={update.get('cursor')}, messages={len(messages)}"
        )


__all__ = ["SessionCheckpointHook"]
