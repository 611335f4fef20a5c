"""
목적: 모델 호출 기반 범용 노드 구현체를 제공한다.
설명: 상태 → 모델 입력 메시지 변환 → 블로킹 호출 또는 토큰 스트리밍 → 도구 호출/최종 답변 메시지 생성을 공통화한다.
    스트리밍 모드에서는 조각이 도착하는 즉시 stream writer로 내보내면서, 전체 청크를 합쳐 스트림 종료 시점의 도구 호출을 감지한다.
디자인 패턴: 전략 주입 + 템플릿 메서드
참조: src/agent_gateway/core/chat/graphs/agent_graph.py, src/agent_gateway/shared/chat/nodes/_message_adapter.py
"""

from __future__ import annotations

from contextlib import aclosing
from typing import TYPE_CHECKING, Any

from langchain_core.messages import BaseMessage
from langgraph.config import get_stream_writer

from agent_gateway.core.chat.const import DEFAULT_MAX_AGENT_ITERATIONS
from agent_gateway.core.chat.models import ChatMessage, ChatRole
from agent_gateway.shared.chat.nodes._message_adapter import (
    extract_text,
    extract_tool_calls,
    to_langchain_messages,
)
from agent_gateway.shared.chat.nodes._state_adapter import coerce_state_mapping
from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail, ModelFailure
from agent_gateway.shared.logging import Logger, create_default_logger

if TYPE_CHECKING:
    from agent_gateway.shared.chat.interface import ChatModelPort


class ModelCallNode:
    """
    모델 호출 노드.

    core 계층에서는 상속하지 않고 `ModelCallNode(...)` 조립으로 사용한다.
    같은 인스턴스 구성을 다른 node_name으로 두 번 조립하면 최초 호출과 도구 결과 전달 호출을 구분할 수 있다.
    """

    def __init__(
        self,
        *,
        model: ChatModelPort,
        node_name: str,
        max_iterations: int = DEFAULT_MAX_AGENT_ITERATIONS,
        system_prompt_key: str = "system_prompt",
        history_key: str = "history",
        messages_key: str = "messages",
        stream_flag_key: str = "stream_tokens",
        logger: Logger | None = None,
    ) -> None:
        """
        Args:
            model:
                `ainvoke`/`astream`을 제공하는 모델. 도구가 있으면 `bind_tools` 결과를 주입한다.
            node_name:
                노드 식별 이름. 토큰 이벤트의 `node` 필드로도 쓰인다.
            max_iterations:
                한 실행에서 허용하는 모델 호출 횟수. 초과하면 ModelFailure로 실행을 끝낸다.
            system_prompt_key / history_key / messages_key:
                시스템 프롬프트, 이전 히스토리, 이번 턴 메시지를 읽을 state 키.
            stream_flag_key:
                참이면 토큰 스트리밍 호출을 사용한다.
            logger:
                주입 가능한 로거.
        """

        if not node_name.strip():
            raise ValueError("node_name은 비어 있을 수 없습니다.")
        if max_iterations < 1:
            raise ValueError("max_iterations는 1 이상이어야 합니다.")
        self._model = model
        self._node_name = node_name
        self._max_iterations = max_iterations
        self._system_prompt_key = system_prompt_key
        self._history_key = history_key
        self._messages_key = messages_key
        self._stream_flag_key = stream_flag_key
        self._logger = logger or create_default_logger("ModelCallNode")

    @property
    def node_name(self) -> str:
        return self._node_name

    async def run(self, state: Any) -> dict[str, Any]:
        """모델을 1회 호출하고 생성된 메시지와 대기 중 도구 호출을 반환한다."""

        mapping = coerce_state_mapping(state)
        session_id = str(mapping.get("session_id") or "")
        iterations = int(mapping.get("iterations") or 0) + 1
        if iterations > self._max_iterations:
            detail = ExceptionDetail(
                code="AGENT_MAX_ITERATIONS_EXCEEDED",
                cause=f"node={self._node_name}, max_iterations={self._max_iterations}",
            )
            raise ModelFailure("에이전트 반복 횟수 상한을 초과했습니다.", detail)

        prompt_messages = to_langchain_messages(
            str(mapping.get(self._system_prompt_key) or ""),
            [
                *list(mapping.get(self._history_key) or []),
                *list(mapping.get(self._messages_key) or []),
            ],
        )
        streaming = bool(mapping.get(self._stream_flag_key))
        self._logger.info(
            f"model.call.start: node={self._node_name}, session_id={session_id}, "
            f"iteration={iterations}, stream={streaming}, messages={len(prompt_messages)}"
        )
        if streaming:
            response = await self._astream(prompt_messages)
        else:
            response = await self._ainvoke(prompt_messages)

        text = extract_text(response.content)
        tool_calls = extract_tool_calls(response)
        if tool_calls:
            message = ChatMessage(
                session_id=session_id,
                role=ChatRole.TOOL_CALL,
                content=text,
                tool_calls=tool_calls,
            )
        elif text.strip():
            message = ChatMessage(session_id=session_id, role=ChatRole.ASSISTANT, content=text)
        else:
            detail = ExceptionDetail(
                code="MODEL_RESPONSE_EMPTY",
                cause=f"node={self._node_name}, session_id={session_id}",
            )
            raise ModelFailure("모델 응답이 비어 있습니다.", detail)

        self._logger.info(
            f"model.call.done: node={self._node_name}, session_id={session_id}, "
            f"tool_calls={[call.name for call in tool_calls]}"
        )
        return {
            self._messages_key: [message],
            "pending_tool_calls": tool_calls,
            "iterations": iterations,
        }

    async def _ainvoke(self, messages: list[BaseMessage]) -> BaseMessage:
        try:
            return await self._model.ainvoke(messages)
        except BaseAppException:
            raise
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            detail = ExceptionDetail(code="MODEL_INVOKE_ERROR", cause=str(error))
            raise ModelFailure("모델 호출에 실패했습니다.", detail, error) from error

    async def _astream(self, messages: list[BaseMessage]) -> BaseMessage:
        writer = get_stream_writer()
        merged: Any = None
        try:
            async with aclosing(self._model.astream(messages)) as chunks:
                async for chunk in chunks:
                    text = extract_text(chunk.content)
                    if text:
                        writer({"node": self._node_name, "event": "token", "data": text})
                    merged = chunk if merged is None else merged + chunk
        except BaseAppException:
            raise
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            detail = ExceptionDetail(code="MODEL_STREAM_ERROR", cause=str(error))
            raise ModelFailure("모델 스트리밍 호출에 실패했습니다.", detail, error) from error
        if merged is None:
            detail = ExceptionDetail(code="MODEL_STREAM_EMPTY", cause=f"node={self._node_name}")
            raise ModelFailure("모델 스트림이 비어 있습니다.", detail)
        return merged


__all__ = ["ModelCallNode"]
