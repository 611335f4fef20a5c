"""
목적: 인메모리 로거 동작을 검증한다.
설명: 레벨 임계값, 컨텍스트 병합, 저장소 용량 제한을 테스트한다.
디자인 패턴: 단위 테스트
참조: src/agent_gateway/shared/logging/logger.py
"""

from __future__ import annotations

from agent_gateway.shared.logging import (
    InMemoryLogRepository,
    InMemoryLogger,
    LogContext,
    LogLevel,
)


def test_logger_filters_below_min_level() -> None:
    """임계 레벨 미만 로그는 기록되지 않아야 한다."""

    repository = InMemoryLogRepository()
    logger = InMemoryLogger("unit", repository=repository, emit_stdout=False, min_level=LogLevel.INFO)

    logger.debug("hidden")
    logger.warning("shown", metadata={"code": "X"})

    [record] = repository.list()
    assert record.level == LogLevel.WARNING
    assert record.message == "shown"
    assert record.metadata == {"code": "X"}
    assert record.logger_name == "unit"


def test_logger_merges_bound_context() -> None:
    """with_context로 묶은 컨텍스트가 호출 컨텍스트와 병합되어야 한다."""

    repository = InMemoryLogRepository()
    logger = InMemoryLogger("unit", repository=repository, emit_stdout=False).with_context(
        LogContext(session_id="s-1", tags={"transport": "ws"})
    )

    logger.info("exchange", context=LogContext(request_id="r-1", tags={"node": "call_model"}))

    [record] = repository.list()
    assert record.context is not None
    assert record.context.session_id == "s-1"
    assert record.context.request_id == "r-1"
    assert record.context.tags == {"transport": "ws", "node": "call_model"}


def test_log_repository_keeps_latest_records() -> None:
    """저장소는 최대 개수를 넘으면 오래된 레코드부터 버려야 한다."""

    repository = InMemoryLogRepository(max_records=2)
    logger = InMemoryLogger("unit", repository=repository, emit_stdout=False)

    for index in range(3):
        logger.info(f"line-{index}")

    assert [record.message for record in repository.list()] == ["line-1", "line-2"]


def test_log_level_parse_accepts_aliases() -> None:
    """WARN 별칭과 알 수 없는 값을 처리해야 한다."""

    assert LogLevel.parse("warn", LogLevel.INFO) == LogLevel.WARNING
    assert LogLevel.parse("verbose", LogLevel.INFO) == LogLevel.INFO
