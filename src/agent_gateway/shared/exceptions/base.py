"""
목적: 공통 예외 베이스 클래스를 제공한다.
설명: 메시지를 외부에서 주입받고, Pydantic 기반 상세 모델과 함께 보관한다.
디자인 패턴: 도메인 예외 객체
참조: src/agent_gateway/shared/exceptions/models.py
"""

from __future__ import annotations

from typing import Optional

from agent_gateway.shared.exceptions.models import ExceptionDetail


class BaseAppException(Exception):
    """애플리케이션 공통 예외 클래스이다.

    Args:
        message: 시스템 로그에 남길 메시지. 사용자에게 그대로 노출하지 않는다.
        detail: 예외 상세 정보 모델.
        original: 원본 예외 객체.
    """

    def __init__(
        self,
        message: str,
        detail: ExceptionDetail,
        original: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._detail = detail
        self._original = original

    @property
    def message(self) -> str:
        return self._message

    @property
    def detail(self) -> ExceptionDetail:
        return self._detail

    @property
    def code(self) -> str:
        """오류 코드를 반환한다."""

        return self._detail.code

    @property
    def original(self) -> Optional[BaseException]:
        return self._original

    def to_dict(self) -> dict:
        """예외 정보를 사전으로 변환한다."""

        return {
            "type": type(self).__name__,
            "message": self._message,
            "detail": self._detail.model_dump(),
            "original": repr(self._original) if self._original else None,
        }
