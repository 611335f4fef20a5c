"""
목적: 로깅에 필요한 공통 모델을 정의한다.
설명: 로그 레벨, 컨텍스트, 레코드 구조를 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/agent_gateway/shared/logging/logger.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """로그 레벨 열거형."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def severity(self) -> int:
        """비교용 심각도 값을 반환한다."""

        return _SEVERITY[self]

    @classmethod
    def parse(cls, raw: str | None, default: "LogLevel") -> "LogLevel":
        """문자열을 로그 레벨로 변환한다. 알 수 없는 값이면 기본값을 쓴다."""

        if not raw:
            return default
        normalized = raw.strip().upper()
        if normalized == "WARN":
            normalized = "WARNING"
        try:
            return cls(normalized)
        except ValueError:
            return default


_SEVERITY = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
    LogLevel.CRITICAL: 50,
}


class LogContext(BaseModel):
    """로그 컨텍스트 모델이다.

    Args:
        session_id: 대화 세션 식별자.
        request_id: 요청 상관관계 식별자(WebSocket chatRequestId 등).
        connection_id: WebSocket 연결 식별자.
        tags: 자유형 태그.
    """

    session_id: Optional[str] = None
    request_id: Optional[str] = None
    connection_id: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)


def _utc_now() -> datetime:
    """UTC 기준의 timezone-aware 시간을 반환한다."""

    return datetime.now(timezone.utc)


class LogRecord(BaseModel):
    """로그 레코드 모델이다.

    Args:
        level: 로그 레벨.
        message: 로그 메시지.
        timestamp: 기록 시각.
        logger_name: 로거 이름.
        context: 로그 컨텍스트.
        metadata: 추가 메타데이터.
    """

    level: LogLevel
    message: str
    timestamp: datetime = Field(default_factory=_utc_now)
    logger_name: str
    context: Optional[LogContext] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
