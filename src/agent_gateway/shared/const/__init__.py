"""
목적: 공통 상수를 제공한다.
설명: 인코딩/환경 변수 구분자처럼 여러 계층에서 공유하는 값을 모은다.
디자인 패턴: 상수 네임스페이스
참조: src/agent_gateway/shared/config/loader.py, src/agent_gateway/integrations/fs/engines/local.py
"""

from __future__ import annotations


class SharedConst:
    """공통 상수 네임스페이스."""

    DEFAULT_ENCODING = "utf-8"
    ENV_NESTED_DELIMITER = "__"
    ENV_PREFIX = "GATEWAY_"


__all__ = ["SharedConst"]
