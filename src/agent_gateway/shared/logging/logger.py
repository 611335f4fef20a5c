"""
목적: 로거 인터페이스와 기본 구현체를 제공한다.
설명: 용량 제한 인메모리 저장소 기반 로거와 레벨 임계값, JSON 표준 출력을 지원한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/agent_gateway/shared/logging/models.py
"""

from __future__ import annotations

import json
import os
import threading
from abc import ABC, abstractmethod
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional

from agent_gateway.shared.logging.models import LogContext, LogLevel, LogRecord

_DEFAULT_MAX_RECORDS = 5000


class LogRepository(ABC):
    """로그 저장소 인터페이스."""

    @abstractmethod
    def add(self, record: LogRecord) -> None:
        """로그 레코드를 저장한다."""

    @abstractmethod
    def list(self) -> List[LogRecord]:
        """저장된 로그를 반환한다."""


class InMemoryLogRepository(LogRepository):
    """최근 N건만 유지하는 인메모리 로그 저장소."""

    def __init__(self, max_records: int = _DEFAULT_MAX_RECORDS) -> None:
        if max_records <= 0:
            raise ValueError("max_records는 1 이상이어야 합니다.")
        self._records: Deque[LogRecord] = deque(maxlen=max_records)
        self._lock = threading.Lock()

    def add(self, record: LogRecord) -> None:
        with self._lock:
            self._records.append(record)

    def list(self) -> List[LogRecord]:
        with self._lock:
            return list(self._records)


class Logger(ABC):
    """로거 인터페이스."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """로그를 기록한다."""

    @abstractmethod
    def with_context(self, context: LogContext) -> "Logger":
        """컨텍스트가 합쳐진 새 로거를 반환한다."""

    def debug(
        self,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        self.log(LogLevel.DEBUG, message, context, metadata)

    def info(
        self,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        self.log(LogLevel.INFO, message, context, metadata)

    def warning(
        self,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        self.log(LogLevel.WARNING, message, context, metadata)

    def error(
        self,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        self.log(LogLevel.ERROR, message, context, metadata)

    def critical(
        self,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        self.log(LogLevel.CRITICAL, message, context, metadata)


class InMemoryLogger(Logger):
    """인메모리 로거 구현체.

    Args:
        name: 로거 이름.
        repository: 로그 저장소. 없으면 기본 인메모리 저장소를 만든다.
        base_context: 모든 레코드에 합쳐질 기본 컨텍스트.
        emit_stdout: JSON 표준 출력 여부. None이면 LOG_STDOUT 환경 변수를 따른다.
        min_level: 기록 임계 레벨. None이면 LOG_LEVEL 환경 변수를 따른다.
    """

    def __init__(
        self,
        name: str,
        repository: Optional[LogRepository] = None,
        base_context: Optional[LogContext] = None,
        emit_stdout: Optional[bool] = None,
        min_level: Optional[LogLevel] = None,
    ) -> None:
        self._name = name
        self._repository = repository or InMemoryLogRepository()
        self._base_context = base_context
        self._emit_stdout = _read_emit_stdout_env() if emit_stdout is None else emit_stdout
        self._min_level = min_level or LogLevel.parse(os.getenv("LOG_LEVEL"), LogLevel.DEBUG)

    @property
    def name(self) -> str:
        return self._name

    @property
    def repository(self) -> LogRepository:
        """저장소를 반환한다."""

        return self._repository

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        if level.severity < self._min_level.severity:
            return
        record = LogRecord(
            level=level,
            message=message,
            timestamp=datetime.now(timezone.utc),
            logger_name=self._name,
            context=self._merge_context(context),
            metadata=metadata or {},
        )
        self._repository.add(record)
        if self._emit_stdout:
            self._write_stdout(record)

    def with_context(self, context: LogContext) -> "Logger":
        return InMemoryLogger(
            name=self._name,
            repository=self._repository,
            base_context=self._merge_context(context),
            emit_stdout=self._emit_stdout,
            min_level=self._min_level,
        )

    def _merge_context(self, context: Optional[LogContext]) -> Optional[LogContext]:
        if self._base_context is None:
            return context
        if context is None:
            return self._base_context
        return LogContext(
            session_id=context.session_id or self._base_context.session_id,
            request_id=context.request_id or self._base_context.request_id,
            connection_id=context.connection_id or self._base_context.connection_id,
            tags={**self._base_context.tags, **context.tags},
        )

    def _write_stdout(self, record: LogRecord) -> None:
        payload: dict[str, object] = {
            "timestamp": record.timestamp.astimezone(timezone.utc).isoformat(),
            "level": record.level.value,
            "logger": record.logger_name,
            "message": record.message,
        }
        if record.context is not None:
            payload["context"] = record.context.model_dump(exclude_none=True)
        if record.metadata:
            payload["metadata"] = record.metadata
        print(json.dumps(payload, ensure_ascii=False, default=str), flush=True)


def _read_emit_stdout_env() -> bool:
    raw = os.getenv("LOG_STDOUT")
    if raw is None:
        return False
    return raw.strip().lower() in {"1", "true", "yes", "on"}


_SHARED_REPOSITORY = InMemoryLogRepository()


def create_default_logger(name: str) -> InMemoryLogger:
    """프로세스 공용 저장소를 쓰는 기본 인메모리 로거를 생성한다."""

    return InMemoryLogger(name=name, repository=_SHARED_REPOSITORY)
