"""
목적: 에이전트 그래프 입출력과 그래프 메타데이터 모델을 정의한다.
설명: 실행 입력/결과 모델과, 빌더가 구성 시점에 기록하는 노드/간선 메타데이터를 제공한다.
디자인 패턴: 데이터 전송 객체(DTO), 그래프-데이터 표현
참조: src/agent_gateway/shared/chat/graph/builder.py, src/agent_gateway/shared/chat/graph/base_agent_graph.py
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from agent_gateway.core.chat.models import ChatMessage

START_NODE = "__start__"
END_NODE = "__end__"

Guard = Callable[[Mapping[str, Any]], bool]
StreamNodeConfig: TypeAlias = Mapping[str, str | Sequence[str]]


@dataclass(frozen=True)
class GuardedEdge:
    """조건부 간선 선언. guard는 상태만 읽는 순수 함수여야 한다."""

    target: str
    label: str
    guard: Guard


@dataclass(frozen=True)
class GraphEdge:
    """빌더가 기록한 간선 메타데이터."""

    source: str
    target: str
    label: str | None = None


@dataclass(frozen=True)
class GraphSpec:
    """다이어그램 렌더링에 쓰이는 그래프 구조 스냅샷."""

    nodes: tuple[str, ...]
    edges: tuple[GraphEdge, ...]
    entry: str = START_NODE
    exits: tuple[str, ...] = field(default_factory=lambda: (END_NODE,))


class AgentRunInput(BaseModel):
    """에이전트 실행 입력 모델."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    session_id: str
    user_text: str
    system_prompt: str
    user_message: ChatMessage
    history: list[ChatMessage] = Field(default_factory=list)
    stream_tokens: bool = False


class AgentRunResult(BaseModel):
    """에이전트 실행 결과 모델.

    Args:
        assistant_message: 종료 노드가 확정한 최종 응답.
        messages: 이번 턴에 생성된 메시지(사용자 메시지 포함).
        moderated: 모더레이션으로 차단되어 종료되었는지 여부.
        iterations: 모델 호출 횟수.
    """

    assistant_message: str
    messages: list[ChatMessage] = Field(default_factory=list)
    moderated: bool = False
    iterations: int = 0
