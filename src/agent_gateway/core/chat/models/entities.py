"""
목적: 게이트웨이 도메인 엔티티 모델을 정의한다.
설명: 메시지/첨부/도구 호출/도구 결과/모더레이션 판정/체크포인트를 Pydantic 기반으로 제공한다.
디자인 패턴: 엔티티 패턴
참조: src/agent_gateway/shared/chat/memory/session_store.py, src/agent_gateway/core/chat/state/graph_state.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from agent_gateway.shared.exceptions import ToolErrorKind


def utc_now() -> datetime:
    """UTC 기준 timezone-aware 현재 시각을 반환한다."""

    return datetime.now(timezone.utc)


def new_session_id() -> str:
    """서버 측 세션 ID를 생성한다."""

    return uuid4().hex


class ChatRole(str, Enum):
    """대화 메시지 역할 타입."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"


class Attachment(BaseModel):
    """프롬프트에 첨부되는 파일형 컨텍스트."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    content: str
    format: str = "md"
    mime_type: str = "text/plain"


class ToolCall(BaseModel):
    """모델이 요청한 도구 호출."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    # 모델이 보낸 인자 JSON을 해석하지 못했을 때의 원인.
    arguments_error: str | None = None


class ToolResult(BaseModel):
    """도구 호출 결과. id는 ToolCall.id와 1:1로 대응한다."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    content: str | None = None
    error: str | None = None
    error_kind: ToolErrorKind | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class ChatMessage(BaseModel):
    """대화 메시지 엔티티. 히스토리에 추가된 뒤에는 변경하지 않는다."""

    model_config = ConfigDict(frozen=True)

    message_id: str = Field(default_factory=lambda: str(uuid4()))
    session_id: str
    role: ChatRole
    content: str = ""
    attachments: list[Attachment] = Field(default_factory=list)
    tool_calls: list[ToolCall] = Field(default_factory=list)
    tool_call_id: str | None = None
    is_error: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    metadata: dict[str, Any] = Field(default_factory=dict)


class ModerationVerdict(BaseModel):
    """모더레이션 판정 결과."""

    model_config = ConfigDict(frozen=True)

    is_harmful: bool
    message: str
    categories: dict[str, float] = Field(default_factory=dict)


class SessionCheckpoint(BaseModel):
    """세션 메시지 히스토리의 영속 스냅샷."""

    session_id: str
    saved_at: datetime = Field(default_factory=utc_now)
    messages: list[ChatMessage] = Field(default_factory=list)


class RetrievedDocument(BaseModel):
    """관련도 순으로 검색된 지식 문서."""

    model_config = ConfigDict(frozen=True)

    path: str
    file_name: str
    content: str
    score: float = 0.0


class ChatReply(BaseModel):
    """블로킹 대화 응답."""

    message: str
    session_id: str
