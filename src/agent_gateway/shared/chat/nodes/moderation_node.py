"""
목적: 모더레이션 게이트 호출 노드를 제공한다.
설명: state의 사용자 원문을 판정해 ModerationVerdict를 기록한다. 분기는 간선 guard가 담당한다.
디자인 패턴: 어댑터
참조: src/agent_gateway/shared/chat/moderation/gate.py, src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from __future__ import annotations

from typing import Any

from agent_gateway.shared.chat.moderation import ModerationGate
from agent_gateway.shared.chat.nodes._state_adapter import coerce_state_mapping


class ModerationNode:
    """모더레이션 노드."""

    def __init__(
        self,
        *,
        gate: ModerationGate,
        input_key: str = "user_text",
        output_key: str = "moderation",
    ) -> None:
        self._gate = gate
        self._input_key = input_key
        self._output_key = output_key

    async def run(self, state: Any) -> dict[str, Any]:
        mapping = coerce_state_mapping(state)
        verdict = await self._gate.classify(str(mapping.get(self._input_key) or ""))
        return {self._output_key: verdict}


__all__ = ["ModerationNode"]
