"""
목적: 에이전트 그래프 공통 공개 API를 제공한다.
설명: 빌더/실행기/체크포인트 훅/다이어그램 렌더러와 그래프 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/graph/builder.py, src/agent_gateway/shared/chat/graph/base_agent_graph.py
"""

from agent_gateway.shared.chat.graph.base_agent_graph import BaseAgentGraph
from agent_gateway.shared.chat.graph.builder import AgentGraphBuilder, CheckpointHook
from agent_gateway.shared.chat.graph.checkpoint import SessionCheckpointHook
from agent_gateway.shared.chat.graph.diagram import render_mermaid
from agent_gateway.shared.chat.graph.models import (
    END_NODE,
    START_NODE,
    AgentRunInput,
    AgentRunResult,
    GraphEdge,
    GraphSpec,
    GuardedEdge,
    StreamNodeConfig,
)

__all__ = [
    "AgentGraphBuilder",
    "AgentRunInput",
    "AgentRunResult",
    "BaseAgentGraph",
    "CheckpointHook",
    "END_NODE",
    "GraphEdge",
    "GraphSpec",
    "GuardedEdge",
    "START_NODE",
    "SessionCheckpointHook",
    "StreamNodeConfig",
    "render_mermaid",
]
