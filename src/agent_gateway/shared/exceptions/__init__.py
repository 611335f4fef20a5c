"""
목적: 예외 모듈 공개 API를 제공한다.
설명: 외부에서 사용할 예외 모델, 베이스 클래스, 오류 분류 타입을 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/exceptions/models.py, src/agent_gateway/shared/exceptions/base.py, src/agent_gateway/shared/exceptions/errors.py
"""

from agent_gateway.shared.exceptions.base import BaseAppException
from agent_gateway.shared.exceptions.errors import (
    ModelFailure,
    ModerationFailure,
    PersistenceFailure,
    ProtocolFailure,
    ToolError,
    ToolErrorKind,
)
from agent_gateway.shared.exceptions.models import ExceptionDetail

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "ModelFailure",
    "ModerationFailure",
    "PersistenceFailure",
    "ProtocolFailure",
    "ToolError",
    "ToolErrorKind",
]
