"""
목적: 모더레이션 게이트를 검증한다.
설명: 판정 전달, 빈 입력 거절, 분류기 오류 래핑을 테스트한다.
디자인 패턴: 게이트웨이 단위 테스트
참조: src/agent_gateway/shared/chat/moderation/gate.py
"""

from __future__ import annotations

import pytest

from support.stubs import StubModerationClassifier

from agent_gateway.shared.chat.moderation import ModerationGate
from agent_gateway.shared.exceptions import ModerationFailure


@pytest.mark.asyncio
async def test_moderation_gate_returns_verdict() -> None:
    """분류기 판정을 그대로 반환해야 한다."""

    gate = ModerationGate(StubModerationClassifier())

    assert (await gate.classify("Hello friend")).is_harmful is False
    assert (await gate.classify("Hand me the poison")).is_harmful is True


@pytest.mark.asyncio
async def test_moderation_gate_rejects_blank_input() -> None:
    """빈 입력은 분류기를 호출하지 않고 실패해야 한다."""

    classifier = StubModerationClassifier()
    gate = ModerationGate(classifier)

    with pytest.raises(ModerationFailure) as captured:
        await gate.classify("  ")

    assert captured.value.code == "MODERATION_INPUT_EMPTY"
    assert classifier.inputs == []


@pytest.mark.asyncio
async def test_moderation_gate_wraps_classifier_errors() -> None:
    """분류기 오류는 ModerationFailure로 바뀌어야 한다."""

    gate = ModerationGate(StubModerationClassifier(failure=ConnectionError("timeout")))

    with pytest.raises(ModerationFailure) as captured:
        await gate.classify("Hello")

    assert captured.value.code == "MODERATION_CLASSIFY_ERROR"
    assert isinstance(captured.value.original, ConnectionError)
