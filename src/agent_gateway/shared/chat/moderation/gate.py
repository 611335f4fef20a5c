"""
목적: 외부 모더레이션 분류기 호출 게이트를 제공한다.
설명: 분류기 결과를 ModerationVerdict로 고정하고, 호출 실패는 안전 판정으로 간주하지 않고 ModerationFailure로 올린다.
디자인 패턴: 게이트웨이, 프록시
참조: src/agent_gateway/integrations/moderation/openai_moderation.py, src/agent_gateway/shared/chat/nodes/moderation_node.py
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agent_gateway.core.chat.models import ModerationVerdict
from agent_gateway.shared.exceptions import (
    BaseAppException,
    ExceptionDetail,
    ModerationFailure,
)
from agent_gateway.shared.logging import Logger, create_default_logger

if TYPE_CHECKING:
    from agent_gateway.shared.chat.interface import ModerationClassifierPort


class ModerationGate:
    """모더레이션 분류기 게이트."""

    def __init__(
        self,
        classifier: ModerationClassifierPort,
        logger: Logger | None = None,
    ) -> None:
        self._classifier = classifier
        self._logger = logger or create_default_logger("ModerationGate")

    async def classify(self, text: str) -> ModerationVerdict:
        """
        사용자 원문의 유해 여부를 판정한다.

        Raises:
            ModerationFailure: 입력이 비어 있거나 분류기 호출이 실패한 경우.
        """

        if not text or not text.strip():
            detail = ExceptionDetail(code="MODERATION_INPUT_EMPTY", cause="text is blank")
            raise ModerationFailure("모더레이션 입력이 비어 있습니다.", detail)
        try:
            verdict = await self._classifier.aclassify(text)
        except ModerationFailure:
            raise
        except BaseAppException as error:
            raise ModerationFailure(error.message, error.detail, error) from error
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            self._logger.error(f"moderation.classify.failed: error={type(error).__name__}: {error}")
            detail = ExceptionDetail(code="MODERATION_CLASSIFY_ERROR", cause=str(error))
            raise ModerationFailure("모더레이션 분류기 호출에 실패했습니다.", detail, error) from error
        if not isinstance(verdict, ModerationVerdict):
            detail = ExceptionDetail(
                code="MODERATION_VERDICT_INVALID",
                cause=f"verdict_type={type(verdict).__name__}",
            )
            raise ModerationFailure("모더레이션 결과 형식이 올바르지 않습니다.", detail)
        if verdict.is_harmful:
            flagged = sorted(name for name, score in verdict.categories.items() if score >= 0.5)
            self._logger.warning(f"moderation.flagged: categories={flagged}")
        return verdict


__all__ = ["ModerationGate"]
