"""
목적: HTTP 대화 API 모델을 정의한다.
설명: POST /api/chat 요청/응답 본문을 camelCase 별칭으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/agent_gateway/api/chat/routers/chat.py
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """대화 요청 모델."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="사용자 메시지 본문")
    session_id: str | None = Field(default=None, alias="sessionId", description="기존 세션 식별자")


class ChatAnswer(BaseModel):
    """대화 응답 모델."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    session_id: str = Field(..., alias="sessionId")
