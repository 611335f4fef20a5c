"""
목적: 게이트웨이 오류 분류 체계를 제공한다.
설명: 모더레이션/모델/도구/프로토콜/영속화 실패를 BaseAppException 하위 타입으로 구분한다.
디자인 패턴: 예외 계층
참조: src/agent_gateway/shared/exceptions/base.py
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from agent_gateway.shared.exceptions.base import BaseAppException
from agent_gateway.shared.exceptions.models import ExceptionDetail


class ModerationFailure(BaseAppException):
    """모더레이션 분류기 호출 자체가 실패했다. 유해 판정과는 다르다."""


class ModelFailure(BaseAppException):
    """모델 호출 또는 스트림이 실패했다."""


class ProtocolFailure(BaseAppException):
    """인바운드 메시지 형식 오류 또는 상관관계 식별자 불일치."""


class PersistenceFailure(BaseAppException):
    """체크포인트 읽기/쓰기 실패."""


class ToolErrorKind(str, Enum):
    """도구 실패 종류."""

    NOT_FOUND = "NotFound"
    INVALID_ARGUMENTS = "InvalidArguments"
    EXECUTION_FAILED = "ExecutionFailed"


_TOOL_ERROR_CODES = {
    ToolErrorKind.NOT_FOUND: "TOOL_NOT_FOUND",
    ToolErrorKind.INVALID_ARGUMENTS: "TOOL_INVALID_ARGUMENTS",
    ToolErrorKind.EXECUTION_FAILED: "TOOL_EXECUTION_FAILED",
}


class ToolError(BaseAppException):
    """도구 호출 실패. 호출 단위로 복구되어 모델에 오류 결과로 전달된다.

    Args:
        kind: 실패 종류.
        tool_name: 대상 도구 이름.
        cause: 원인 설명.
        original: 핸들러가 던진 원본 예외.
    """

    def __init__(
        self,
        kind: ToolErrorKind,
        tool_name: str,
        cause: str,
        original: Optional[BaseException] = None,
    ) -> None:
        detail = ExceptionDetail(
            code=_TOOL_ERROR_CODES[kind],
            cause=cause,
            metadata={"tool": tool_name, "kind": kind.value},
        )
        super().__init__(f"도구 실행에 실패했습니다: {tool_name}", detail, original)
        self._kind = kind
        self._tool_name = tool_name

    @property
    def kind(self) -> ToolErrorKind:
        return self._kind

    @property
    def tool_name(self) -> str:
        return self._tool_name

    def describe(self) -> str:
        """모델에 전달할 오류 문자열을 만든다."""

        return f"{self._kind.value}: {self._detail.cause}"


__all__ = [
    "ModerationFailure",
    "ModelFailure",
    "ProtocolFailure",
    "PersistenceFailure",
    "ToolError",
    "ToolErrorKind",
]
