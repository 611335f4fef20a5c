"""
목적: OpenAI 모더레이션 분류기 어댑터를 제공한다.
설명: openai SDK의 비동기 모더레이션 API를 호출해 ModerationVerdict로 변환한다.
    호출 실패는 그대로 전파하고, 안전 판정 여부는 ModerationGate가 결정한다.
디자인 패턴: 어댑터 패턴
참조: src/agent_gateway/shared/chat/moderation/gate.py
"""

from __future__ import annotations

import os
from typing import Any

from openai import AsyncOpenAI

from agent_gateway.core.chat.models import ModerationVerdict
from agent_gateway.shared.exceptions import ExceptionDetail, ModerationFailure
from agent_gateway.shared.logging import Logger, create_default_logger

DEFAULT_MODERATION_MODEL = "omni-moderation-latest"


class OpenAIModerationClassifier:
    """OpenAI 모더레이션 분류기."""

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        model: str = DEFAULT_MODERATION_MODEL,
        logger: Logger | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(api_key=os.getenv("OPENAI_API_KEY", ""))
        self._model = model
        self._logger = logger or create_default_logger("OpenAIModerationClassifier")

    async def aclassify(self, text: str) -> ModerationVerdict:
        response = await self._client.moderations.create(model=self._model, input=text)
        results = list(getattr(response, "results", None) or [])
        if not results:
            detail = ExceptionDetail(code="MODERATION_RESULT_EMPTY", cause=f"model={self._model}")
            raise ModerationFailure("모더레이션 결과가 비어 있습니다.", detail)
        result = results[0]
        verdict = ModerationVerdict(
            is_harmful=bool(result.flagged),
            message=text,
            categories=self._scores(getattr(result, "category_scores", None)),
        )
        self._logger.debug(f"moderation.classified: model={self._model}, flagged={verdict.is_harmful}")
        return verdict

    async def aclose(self) -> None:
        await self._client.close()

    def _scores(self, raw: Any) -> dict[str, float]:
        if raw is None:
            return {}
        values = raw.model_dump() if hasattr(raw, "model_dump") else dict(raw)
        return {str(key): float(value) for key, value in values.items() if isinstance(value, (int, float))}


__all__ = ["DEFAULT_MODERATION_MODEL", "OpenAIModerationClassifier"]
