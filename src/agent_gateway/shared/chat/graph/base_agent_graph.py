"""
목적: 에이전트 그래프 공통 실행 구현체를 제공한다.
설명: 빌더가 만든 그래프를 컴파일해 블로킹/스트리밍 실행, 이벤트 표준화, 스트림 노드 정책 필터, 다이어그램 출력을 공통화한다.
디자인 패턴: 합성(Builder 주입)
참조: src/agent_gateway/core/chat/graphs/agent_graph.py, src/agent_gateway/shared/chat/graph/builder.py
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator, Sequence
from contextlib import aclosing
from typing import Any

from agent_gateway.core.chat.models import ModerationVerdict
from agent_gateway.shared.chat.graph.builder import AgentGraphBuilder
from agent_gateway.shared.chat.graph.diagram import render_mermaid
from agent_gateway.shared.chat.graph.models import (
    AgentRunInput,
    AgentRunResult,
    GraphSpec,
    StreamNodeConfig,
)
from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail
from agent_gateway.shared.logging import Logger, create_default_logger


class BaseAgentGraph:
    """
    Builder 주입형 에이전트 그래프 실행 구현체.

    Args:
        builder: 노드/간선이 선언된 AgentGraphBuilder.
        stream_node: 노드별로 외부에 내보낼 스트림 이벤트 화이트리스트.
        recursion_limit: LangGraph super-step 상한. 반복 상한보다 넉넉해야 한다.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        *,
        builder: AgentGraphBuilder,
        stream_node: StreamNodeConfig | None = None,
        recursion_limit: int = 250,
        logger: Logger | None = None,
    ) -> None:
        self._logger = logger or create_default_logger("BaseAgentGraph")
        self._builder = builder
        self._spec = builder.spec()
        self._recursion_limit = recursion_limit
        self._stream_node: dict[str, set[str]] = {}
        self.set_stream_node(stream_node or {})
        self._compiled_graph = builder.compile()

    @property
    def spec(self) -> GraphSpec:
        """구성 시점에 기록된 그래프 메타데이터를 반환한다."""

        return self._spec

    def set_stream_node(self, stream_node: StreamNodeConfig) -> None:
        """스트림 노드 정책을 교체한다."""

        self._stream_node = self._normalize_stream_node(stream_node)

    def diagram(self) -> str:
        """그래프 구조를 mermaid 텍스트로 반환한다."""

        return render_mermaid(self._spec)

    async def ainvoke(self, run_input: AgentRunInput) -> AgentRunResult:
        """그래프를 블로킹 모드로 끝까지 실행한다."""

        state = await self._compiled_graph.ainvoke(
            self._build_input(run_input, stream_tokens=False),
            config=self._build_config(run_input),
        )
        return self._to_result(state)

    async def astream_events(self, run_input: AgentRunInput) -> AsyncIterator[dict[str, Any]]:
        """그래프를 스트리밍 모드로 실행해 custom/updates 이벤트를 표준 이벤트로 반환한다."""

        stream = self._compiled_graph.astream(
            self._build_input(run_input, stream_tokens=True),
            config=self._build_config(run_input),
            stream_mode=["custom", "updates"],
        )
        async with aclosing(stream) as updates:
            async for mode, payload in updates:
                for event in self._to_events(mode=mode, payload=payload):
                    if self._is_allowed_event(node=event["node"], event_name=event["event"]):
                        yield event

    def _build_input(self, run_input: AgentRunInput, stream_tokens: bool) -> dict[str, Any]:
        return {
            "session_id": run_input.session_id,
            "user_text": run_input.user_text,
            "system_prompt": run_input.system_prompt,
            "history": list(run_input.history),
            "messages": [run_input.user_message],
            "stream_tokens": stream_tokens,
            "cursor": self._spec.entry,
            "iterations": 0,
            "assistant_message": "",
        }

    def _build_config(self, run_input: AgentRunInput) -> dict[str, Any]:
        return {
            "configurable": {"thread_id": run_input.session_id},
            "recursion_limit": self._recursion_limit,
        }

    def _to_result(self, state: object) -> AgentRunResult:
        if not isinstance(state, dict):
            detail = ExceptionDetail(
                code="AGENT_RESULT_INVALID",
                cause=f"state_type={type(state).__name__}",
            )
            raise BaseAppException("그래프 실행 결과 형식이 올바르지 않습니다.", detail)
        content = state.get("assistant_message")
        if not isinstance(content, str) or not content.strip():
            detail = ExceptionDetail(
                code="AGENT_RESPONSE_EMPTY",
                cause=f"cursor={state.get('cursor')}",
            )
            raise BaseAppException("최종 응답이 비어 있습니다.", detail)
        verdict = state.get("moderation")
        return AgentRunResult(
            assistant_message=content,
            messages=list(state.get("messages") or []),
            moderated=isinstance(verdict, ModerationVerdict) and verdict.is_harmful,
            iterations=int(state.get("iterations") or 0),
        )

    def _to_events(self, mode: str, payload: Any) -> Iterator[dict[str, Any]]:
        if mode == "custom":
            if not isinstance(payload, dict):
                return
            node = str(payload.get("node") or "").strip()
            event = str(payload.get("event") or "").strip()
            if node and event:
                yield {"node": node, "event": event, "data": payload.get("data")}
            return
        if mode != "updates" or not isinstance(payload, dict):
            return
        for node_name, delta in payload.items():
            if not isinstance(delta, dict):
                continue
            for event_name, value in delta.items():
                yield {"node": str(node_name), "event": str(event_name), "data": value}

    def _normalize_stream_node(self, raw: StreamNodeConfig) -> dict[str, set[str]]:
        normalized: dict[str, set[str]] = {}
        for node, events in raw.items():
            node_name = str(node).strip()
            if not node_name:
                continue
            if isinstance(events, str):
                normalized[node_name] = {events.strip()} if events.strip() else set()
                continue
            if not isinstance(events, Sequence):
                detail = ExceptionDetail(
                    code="AGENT_STREAM_NODE_INVALID",
                    cause=f"node={node_name}, value_type={type(events).__name__}",
                )
                raise BaseAppException("stream_node 설정 형식이 올바르지 않습니다.", detail)
            normalized[node_name] = {str(item).strip() for item in events if str(item).strip()}
        return normalized

    def _is_allowed_event(self, node: str, event_name: str) -> bool:
        return event_name in self._stream_node.get(node, set())


__all__ = ["BaseAgentGraph"]
