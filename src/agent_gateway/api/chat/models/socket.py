"""
목적: WebSocket 대화 프레임 모델을 정의한다.
설명: 인바운드 요청 프레임과 아웃바운드 응답 프레임을 camelCase 별칭으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/agent_gateway/api/chat/services/socket_handler.py
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SocketChatRequest(BaseModel):
    """WebSocket 인바운드 프레임."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    chat_session_id: str | None = Field(default=None, alias="chatSessionId")
    chat_request_id: str | None = Field(default=None, alias="chatRequestId")


class SocketChatAnswer(BaseModel):
    """WebSocket 아웃바운드 프레임. completed=false 프레임은 응답 조각 1개를 담는다."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    chat_session_id: str = Field(..., alias="chatSessionId")
    chat_request_id: str | None = Field(default=None, alias="chatRequestId")
    completed: bool = False

    def to_frame(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
