"""
목적: 에이전트 그래프 조립 함수를 제공한다.
설명: moderate -> call_model -> execute_tool -> send_tool_result -> finish 흐름을 빌더로 선언하고,
    조건 라벨이 붙은 간선 메타데이터와 함께 BaseAgentGraph로 감싸 반환한다.
디자인 패턴: 팩토리 + 빌더 조립
참조: src/agent_gateway/shared/chat/graph/builder.py, src/agent_gateway/shared/chat/graph/base_agent_graph.py
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agent_gateway.core.chat.const import DEFAULT_MAX_AGENT_ITERATIONS
from agent_gateway.core.chat.nodes import (
    has_tool_calls,
    is_harmful,
    is_plain_message,
    is_safe,
    run_finish,
)
from agent_gateway.core.chat.state import AgentRunState
from agent_gateway.shared.chat.graph import (
    AgentGraphBuilder,
    BaseAgentGraph,
    GuardedEdge,
    SessionCheckpointHook,
    StreamNodeConfig,
)
from agent_gateway.shared.chat.moderation import ModerationGate
from agent_gateway.shared.chat.nodes import ModelCallNode, ModerationNode, ToolExecutionNode
from agent_gateway.shared.chat.tools import ToolRegistry
from agent_gateway.shared.logging import Logger, create_default_logger

if TYPE_CHECKING:
    from agent_gateway.shared.chat.interface import ChatModelPort, SessionStorePort

MODERATE_NODE = "moderate"
CALL_MODEL_NODE = "call_model"
EXECUTE_TOOL_NODE = "execute_tool"
SEND_TOOL_RESULT_NODE = "send_tool_result"
FINISH_NODE = "finish"

LABEL_INPUT_SAFE = "input is safe"
LABEL_INPUT_HARMFUL = "input is harmful"
LABEL_TOOL_CALLS = "tool calls requested"
LABEL_ASSISTANT_MESSAGE = "assistant message"

# Stream 할 노드 정의
STREAM_NODE: StreamNodeConfig = {
    MODERATE_NODE: ["moderation"],
    CALL_MODEL_NODE: ["token", "messages"],
    EXECUTE_TOOL_NODE: ["messages"],
    SEND_TOOL_RESULT_NODE: ["token", "messages"],
    FINISH_NODE: ["assistant_message"],
}


def _model_edges() -> list[GuardedEdge]:
    return [
        GuardedEdge(target=EXECUTE_TOOL_NODE, label=LABEL_TOOL_CALLS, guard=has_tool_calls),
        GuardedEdge(target=FINISH_NODE, label=LABEL_ASSISTANT_MESSAGE, guard=is_plain_message),
    ]


def build_agent_graph(
    *,
    model: ChatModelPort,
    moderation_gate: ModerationGate,
    tool_registry: ToolRegistry,
    session_store: SessionStorePort | None = None,
    max_iterations: int = DEFAULT_MAX_AGENT_ITERATIONS,
    logger: Logger | None = None,
) -> BaseAgentGraph:
    """
    에이전트 그래프를 조립한다.

    Args:
        model: 도구가 바인딩된 모델. `ainvoke`/`astream`을 제공해야 한다.
        moderation_gate: 입력 모더레이션 게이트.
        tool_registry: 도구 레지스트리.
        session_store: 지정하면 모델/도구 단계 직후 히스토리를 자동 저장한다.
        max_iterations: 한 실행에서 허용하는 모델 호출 횟수.
        logger: 주입 가능한 로거.

    Returns:
        BaseAgentGraph: 컴파일된 에이전트 그래프.
    """

    graph_logger = logger or create_default_logger("AgentGraph")
    checkpoint_hook = SessionCheckpointHook(session_store) if session_store is not None else None

    moderation_node = ModerationNode(gate=moderation_gate)
    call_model_node = ModelCallNode(model=model, node_name=CALL_MODEL_NODE, max_iterations=max_iterations)
    send_tool_result_node = ModelCallNode(
        model=model,
        node_name=SEND_TOOL_RESULT_NODE,
        max_iterations=max_iterations,
    )
    tool_execution_node = ToolExecutionNode(registry=tool_registry)

    # 그래프 선언
    builder = AgentGraphBuilder(AgentRunState, checkpoint_hook=checkpoint_hook, logger=graph_logger)
    # 노드 추가
    builder.add_node(MODERATE_NODE, moderation_node.run)
    builder.add_node(CALL_MODEL_NODE, call_model_node.run, checkpoint=True)
    builder.add_node(EXECUTE_TOOL_NODE, tool_execution_node.run, checkpoint=True)
    builder.add_node(SEND_TOOL_RESULT_NODE, send_tool_result_node.run, checkpoint=True)
    builder.add_node(FINISH_NODE, run_finish)
    # 진입점 설정
    builder.set_entry(MODERATE_NODE)
    # 엣지 설정
    builder.add_guarded_edges(
        MODERATE_NODE,
        [
            GuardedEdge(target=CALL_MODEL_NODE, label=LABEL_INPUT_SAFE, guard=is_safe),
            GuardedEdge(target=FINISH_NODE, label=LABEL_INPUT_HARMFUL, guard=is_harmful),
        ],
    )
    builder.add_guarded_edges(CALL_MODEL_NODE, _model_edges())
    builder.add_edge(EXECUTE_TOOL_NODE, SEND_TOOL_RESULT_NODE)
    builder.add_guarded_edges(SEND_TOOL_RESULT_NODE, _model_edges())
    builder.set_finish(FINISH_NODE)

    # 모델 호출 1회당 super-step은 최대 2개(모델, 도구)이므로 반복 상한보다 넉넉하게 둔다.
    return BaseAgentGraph(
        builder=builder,
        stream_node=STREAM_NODE,
        recursion_limit=max_iterations * 2 + 10,
        logger=graph_logger,
    )


__all__ = [
    "CALL_MODEL_NODE",
    "EXECUTE_TOOL_NODE",
    "FINISH_NODE",
    "LABEL_ASSISTANT_MESSAGE",
    "LABEL_INPUT_HARMFUL",
    "LABEL_INPUT_SAFE",
    "LABEL_TOOL_CALLS",
    "MODERATE_NODE",
    "SEND_TOOL_RESULT_NODE",
    "STREAM_NODE",
    "build_agent_graph",
]
