"""
목적: 에이전트 공용 노드 공개 API를 제공한다.
설명: 모델 호출/모더레이션/도구 실행 노드를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/nodes/model_call_node.py, src/agent_gateway/shared/chat/nodes/moderation_node.py, src/agent_gateway/shared/chat/nodes/tool_execution_node.py
"""

from agent_gateway.shared.chat.nodes.model_call_node import ModelCallNode
from agent_gateway.shared.chat.nodes.moderation_node import ModerationNode
from agent_gateway.shared.chat.nodes.tool_execution_node import ToolExecutionNode

__all__ = ["ModelCallNode", "ModerationNode", "ToolExecutionNode"]
