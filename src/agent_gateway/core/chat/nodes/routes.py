"""
목적: 에이전트 그래프 간선 guard 함수를 제공한다.
설명: 모더레이션 판정과 마지막 모델 출력 종류(도구 호출/일반 메시지)를 state에서 판별한다.
디자인 패턴: 술어(Predicate) 모음
참조: src/agent_gateway/core/chat/graphs/agent_graph.py, src/agent_gateway/shared/chat/graph/builder.py
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from agent_gateway.core.chat.models import ChatRole, ModerationVerdict


def is_harmful(state: Mapping[str, Any]) -> bool:
    verdict = state.get("moderation")
    return isinstance(verdict, ModerationVerdict) and verdict.is_harmful


def is_safe(state: Mapping[str, Any]) -> bool:
    verdict = state.get("moderation")
    return isinstance(verdict, ModerationVerdict) and not verdict.is_harmful


def has_tool_calls(state: Mapping[str, Any]) -> bool:
    return bool(state.get("pending_tool_calls"))


def is_plain_message(state: Mapping[str, Any]) -> bool:
    if state.get("pending_tool_calls"):
        return False
    messages = list(state.get("messages") or [])
    return bool(messages) and messages[-1].role == ChatRole.ASSISTANT


__all__ = ["has_tool_calls", "is_harmful", "is_plain_message", "is_safe"]
