"""
목적: 도구 레지스트리 공개 API를 제공한다.
설명: 레지스트리와 도구 정의 타입을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/tools/registry.py
"""

from agent_gateway.shared.chat.tools.registry import ToolHandler, ToolRegistry, ToolSpec

__all__ = ["ToolHandler", "ToolRegistry", "ToolSpec"]
