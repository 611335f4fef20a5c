"""
목적: 예외 상세 모델을 정의한다.
설명: 오류 코드/원인/힌트/메타데이터를 Pydantic 모델로 보관한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/agent_gateway/shared/exceptions/base.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ExceptionDetail(BaseModel):
    """예외 상세 정보 모델이다.

    Args:
        code: 오류 코드(예: `LLM_INVOKE_ERROR`, `TOOL_NOT_FOUND`).
        cause: 원인 설명.
        hint: 해결 힌트.
        metadata: 추가 메타데이터.
    """

    code: str
    cause: Optional[str] = None
    hint: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
