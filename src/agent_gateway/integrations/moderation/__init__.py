"""
목적: 모더레이션 분류기 통합 공개 API를 제공한다.
설명: OpenAI 모더레이션 어댑터를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/integrations/moderation/openai_moderation.py
"""

from agent_gateway.integrations.moderation.openai_moderation import (
    DEFAULT_MODERATION_MODEL,
    OpenAIModerationClassifier,
)

__all__ = ["DEFAULT_MODERATION_MODEL", "OpenAIModerationClassifier"]
