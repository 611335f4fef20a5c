"""
목적: 에이전트 게이트웨이 실행 계층 공통 추상체를 정의한다.
설명: 모델/모더레이션 분류기/문서 검색/세션 저장소/그래프 인터페이스를 Protocol로 제공한다.
디자인 패턴: 포트-어댑터(Port/Protocol)
참조: src/agent_gateway/shared/chat/services/chat_service.py, src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Any, Protocol

from langchain_core.messages import BaseMessage, BaseMessageChunk

from agent_gateway.core.chat.models import ChatMessage, ModerationVerdict, RetrievedDocument
from agent_gateway.shared.chat.graph.models import AgentRunInput, AgentRunResult, StreamNodeConfig


class ChatModelPort(Protocol):
    """언어 모델 호출 포트. LangChain Runnable(도구 바인딩 포함)이 그대로 만족한다."""

    async def ainvoke(self, input: Sequence[BaseMessage], **kwargs: Any) -> BaseMessage:
        """요청/응답 방식으로 모델을 호출한다."""

    def astream(self, input: Sequence[BaseMessage], **kwargs: Any) -> AsyncIterator[BaseMessageChunk]:
        """토큰 스트림 방식으로 모델을 호출한다."""


class ModerationClassifierPort(Protocol):
    """외부 모더레이션 분류기 포트."""

    async def aclassify(self, text: str) -> ModerationVerdict:
        """텍스트의 유해 여부를 판정한다."""


class DocumentRetrieverPort(Protocol):
    """관련 문서 검색 포트."""

    async def most_relevant_documents(self, query: str, count: int) -> list[RetrievedDocument]:
        """질의와 관련도가 높은 순으로 최대 count건을 반환한다."""


class SessionStorePort(Protocol):
    """세션 체크포인트 저장소 포트."""

    async def load(self, session_id: str) -> list[ChatMessage]:
        """세션 히스토리를 반환한다. 모르는 세션이면 빈 목록이다."""

    async def save(self, session_id: str, messages: Sequence[ChatMessage]) -> None:
        """세션 히스토리 전체 스냅샷을 저장한다."""


class AgentGraphPort(Protocol):
    """에이전트 그래프 실행 포트."""

    async def ainvoke(self, run_input: AgentRunInput) -> AgentRunResult:
        """그래프를 끝까지 실행해 결과를 반환한다."""

    def astream_events(self, run_input: AgentRunInput) -> AsyncIterator[dict[str, Any]]:
        """그래프를 스트리밍 실행해 표준 이벤트를 반환한다."""

    def diagram(self) -> str:
        """그래프 구조를 텍스트 다이어그램으로 반환한다."""
