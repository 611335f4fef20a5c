"""
목적: 코어 대화 노드 공개 API를 제공한다.
설명: 종료 노드와 간선 guard 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/core/chat/nodes/finish_node.py, src/agent_gateway/core/chat/nodes/routes.py
"""

from agent_gateway.core.chat.nodes.finish_node import run_finish
from agent_gateway.core.chat.nodes.routes import (
    has_tool_calls,
    is_harmful,
    is_plain_message,
    is_safe,
)

__all__ = ["has_tool_calls", "is_harmful", "is_plain_message", "is_safe", "run_finish"]
