"""
목적: 테스트 공통 환경/로깅 훅을 단일화해 제공한다.
설명: 외부 서비스 없이 앱을 import할 수 있도록 기본 환경 변수를 준비하고, 세션/테스트 단위 로깅 훅을 제공한다.
디자인 패턴: 테스트 픽스처 + 테스트 훅
참조: tests/support/stubs.py, pyproject.toml
"""

from __future__ import annotations

import logging
import os
import tempfile

_LOGGER = logging.getLogger("tests")


def _prepare_default_env() -> None:
    """테스트 기본 환경 변수를 준비한다."""

    os.environ.setdefault("OPENAI_API_KEY", "test-key")
    os.environ.setdefault("GATEWAY_SESSION_STORE", "memory")
    # 지식 베이스는 빈 디렉터리로 두어 앱 기동 시 임베딩 호출이 없도록 한다.
    os.environ.setdefault("GATEWAY_KNOWLEDGE_BASE_PATH", tempfile.mkdtemp(prefix="gateway-kb-"))


_prepare_default_env()


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
