"""
목적: 모더레이션 게이트 공개 API를 제공한다.
설명: ModerationGate를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/moderation/gate.py
"""

from agent_gateway.shared.chat.moderation.gate import ModerationGate

__all__ = ["ModerationGate"]
