"""
목적: 간선 메타데이터를 기록하는 에이전트 그래프 빌더를 제공한다.
설명: 노드/간선 선언을 LangGraph StateGraph에 등록하면서 (출발, 조건 라벨, 도착) 목록을 함께 보관한다.
    조건부 간선은 선언 순서대로 guard를 평가해 처음 참이 되는 간선을 택한다.
디자인 패턴: 빌더 패턴, 그래프-데이터 표현
참조: src/agent_gateway/shared/chat/graph/diagram.py, src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from langgraph.graph import END, START, StateGraph

from agent_gateway.shared.chat.graph.models import GraphEdge, GraphSpec, GuardedEdge
from agent_gateway.shared.chat.nodes._state_adapter import coerce_state_mapping
from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail
from agent_gateway.shared.logging import Logger, create_default_logger

NodeAction = Callable[[Any], Awaitable[Mapping[str, Any]] | Mapping[str, Any]]
CheckpointHook = Callable[[Mapping[str, Any], Mapping[str, Any]], Awaitable[None]]


class AgentGraphBuilder:
    """
    LangGraph 등록과 간선 메타데이터 기록을 함께 수행하는 빌더.

    Args:
        state_schema: LangGraph 상태 타입(TypedDict).
        checkpoint_hook: `checkpoint=True` 노드 실행 직후 (입력 state, 노드 출력)으로 호출되는 훅.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        state_schema: type,
        *,
        checkpoint_hook: CheckpointHook | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._graph = StateGraph(state_schema)
        self._checkpoint_hook = checkpoint_hook
        self._logger = logger or create_default_logger("AgentGraphBuilder")
        self._nodes: list[str] = []
        self._edges: list[GraphEdge] = []
        self._routed_sources: set[str] = set()

    def add_node(
        self,
        name: str,
        action: NodeAction,
        *,
        checkpoint: bool = False,
    ) -> "AgentGraphBuilder":
        """노드를 등록한다. 노드 출력에는 실행 위치(cursor)가 자동으로 포함된다."""

        if name in self._nodes or name in {START, END}:
            raise ValueError(f"이미 사용 중인 노드 이름입니다: {name}")
        self._graph.add_node(name, self._wrap(name, action, checkpoint))
        self._nodes.append(name)
        return self

    def set_entry(self, name: str) -> "AgentGraphBuilder":
        """시작 노드를 지정한다."""

        return self.add_edge(START, name)

    def set_finish(self, name: str) -> "AgentGraphBuilder":
        """종료 노드를 지정한다."""

        return self.add_edge(name, END)

    def add_edge(self, source: str, target: str) -> "AgentGraphBuilder":
        """무조건 간선을 등록한다."""

        self._require_known(source, target)
        self._graph.add_edge(source, target)
        self._edges.append(GraphEdge(source=source, target=target))
        return self

    def add_guarded_edges(
        self,
        source: str,
        edges: Sequence[GuardedEdge],
    ) -> "AgentGraphBuilder":
        """조건부 간선 묶음을 등록한다. 출발 노드당 한 번만 선언할 수 있다."""

        if not edges:
            raise ValueError("조건부 간선은 1개 이상이어야 합니다.")
        if source in self._routed_sources:
            raise ValueError(f"이미 조건부 간선이 선언된 노드입니다: {source}")
        for edge in edges:
            self._require_known(source, edge.target)
        self._graph.add_conditional_edges(
            source,
            self._router(source, tuple(edges)),
            {edge.target: edge.target for edge in edges},
        )
        self._routed_sources.add(source)
        self._edges.extend(
            GraphEdge(source=source, target=edge.target, label=edge.label) for edge in edges
        )
        return self

    def spec(self) -> GraphSpec:
        """기록된 노드/간선 메타데이터 스냅샷을 반환한다."""

        return GraphSpec(nodes=tuple(self._nodes), edges=tuple(self._edges))

    def compile(self, checkpointer: object | None = None) -> Any:
        """LangGraph 실행 객체로 컴파일한다."""

        return self._graph.compile(checkpointer=checkpointer)

    def _wrap(self, name: str, action: NodeAction, checkpoint: bool) -> Callable[[Any], Awaitable[dict[str, Any]]]:
        hook = self._checkpoint_hook

        async def _run(state: Any) -> dict[str, Any]:
            result = action(state)
            if inspect.isawaitable(result):
                result = await result
            update = dict(result or {})
            update["cursor"] = name
            if checkpoint and hook is not None:
                await hook(coerce_state_mapping(state), update)
            return update

        _run.__name__ = f"node_{name}"
        return _run

    def _router(self, source: str, edges: tuple[GuardedEdge, ...]) -> Callable[[Any], str]:
        def _route(state: Any) -> str:
            mapping = coerce_state_mapping(state)
            for edge in edges:
                if edge.guard(mapping):
                    return edge.target
            detail = ExceptionDetail(
                code="GRAPH_ROUTE_NOT_FOUND",
                cause=f"source={source}, candidates={[edge.target for edge in edges]}",
            )
            raise BaseAppException("다음 노드를 결정할 수 없습니다.", detail)

        _route.__name__ = f"route_{source}"
        return _route

    def _require_known(self, source: str, target: str) -> None:
        if source != START and source not in self._nodes:
            raise ValueError(f"등록되지 않은 출발 노드입니다: {source}")
        if target != END and target not in self._nodes:
            raise ValueError(f"등록되지 않은 도착 노드입니다: {target}")


__all__ = ["AgentGraphBuilder", "CheckpointHook", "NodeAction"]
