"""
목적: 에이전트 그래프 상태 공개 API를 제공한다.
설명: AgentRunState 타입을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/core/chat/state/graph_state.py
"""

from agent_gateway.core.chat.state.graph_state import AgentRunState

__all__ = ["AgentRunState"]
