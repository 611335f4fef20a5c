"""
목적: 한 모델 턴의 도구 호출을 병렬 실행하는 노드를 제공한다.
설명: 대기 중 도구 호출을 레지스트리 배치로 실행하고, 호출 id와 1:1로 대응하는 tool_result 메시지를 만든다.
디자인 패턴: 커맨드 디스패처
참조: src/agent_gateway/shared/chat/tools/registry.py, src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from agent_gateway.core.chat.models import ChatMessage, ChatRole, ToolCall, ToolResult
from agent_gateway.shared.chat.nodes._state_adapter import coerce_state_mapping
from agent_gateway.shared.chat.tools import ToolRegistry
from agent_gateway.shared.exceptions import ExceptionDetail, ProtocolFailure
from agent_gateway.shared.logging import Logger, create_default_logger


class ToolExecutionNode:
    """도구 실행 노드."""

    def __init__(
        self,
        *,
        registry: ToolRegistry,
        pending_key: str = "pending_tool_calls",
        messages_key: str = "messages",
        logger: Logger | None = None,
    ) -> None:
        self._registry = registry
        self._pending_key = pending_key
        self._messages_key = messages_key
        self._logger = logger or create_default_logger("ToolExecutionNode")

    async def run(self, state: Any) -> dict[str, Any]:
        """
        대기 중 도구 호출 전체를 실행하고 결과가 모두 모인 뒤에 반환한다.

        Raises:
            ProtocolFailure: 호출 id가 중복되었거나 결과 id가 호출 id와 맞지 않는 경우.
        """

        mapping = coerce_state_mapping(state)
        session_id = str(mapping.get("session_id") or "")
        calls: list[ToolCall] = list(mapping.get(self._pending_key) or [])
        duplicated = [call_id for call_id, count in Counter(call.id for call in calls).items() if count > 1]
        if duplicated:
            detail = ExceptionDetail(code="TOOL_CALL_ID_DUPLICATED", cause=f"ids={duplicated}")
            raise ProtocolFailure("도구 호출 id가 중복되었습니다.", detail)

        results = await self._registry.invoke_batch(calls)
        self._verify_correlation(calls, results)
        self._logger.info(
            f"tool.batch.done: session_id={session_id}, calls={len(calls)}, "
            f"failed={sum(1 for result in results if result.is_error)}"
        )
        return {
            self._messages_key: [self._to_message(session_id, result) for result in results],
            self._pending_key: [],
        }

    def _verify_correlation(self, calls: list[ToolCall], results: list[ToolResult]) -> None:
        expected = {call.id for call in calls}
        received = [result.id for result in results]
        if len(received) != len(calls) or set(received) != expected:
            detail = ExceptionDetail(
                code="TOOL_RESULT_UNMATCHED",
                cause=f"expected={sorted(expected)}, received={received}",
            )
            raise ProtocolFailure("도구 결과가 도구 호출과 대응하지 않습니다.", detail)

    def _to_message(self, session_id: str, result: ToolResult) -> ChatMessage:
        return ChatMessage(
            session_id=session_id,
            role=ChatRole.TOOL_RESULT,
            content=result.error if result.is_error else (result.content or ""),
            tool_call_id=result.id,
            is_error=result.is_error,
            metadata={"tool": result.name},
        )


__all__ = ["ToolExecutionNode"]
