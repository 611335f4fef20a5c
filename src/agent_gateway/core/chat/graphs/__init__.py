"""
목적: 에이전트 그래프 조립 공개 API를 제공한다.
설명: 그래프 팩토리와 노드/라벨 상수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from agent_gateway.core.chat.graphs.agent_graph import (
    CALL_MODEL_NODE,
    EXECUTE_TOOL_NODE,
    FINISH_NODE,
    LABEL_ASSISTANT_MESSAGE,
    LABEL_INPUT_HARMFUL,
    LABEL_INPUT_SAFE,
    LABEL_TOOL_CALLS,
    MODERATE_NODE,
    SEND_TOOL_RESULT_NODE,
    STREAM_NODE,
    build_agent_graph,
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
