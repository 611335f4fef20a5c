"""
목적: LangGraph 노드 입력 state를 Mapping 형태로 정규화한다.
설명: TypedDict/Mapping/Pydantic 입력을 얕은 dict로 바꿔 노드와 guard가 같은 방식으로 읽게 한다.
    값은 복사하지 않으므로 ChatMessage 같은 객체가 그대로 유지된다.
디자인 패턴: 어댑터
참조: src/agent_gateway/shared/chat/graph/builder.py, src/agent_gateway/shared/chat/nodes/model_call_node.py
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail


def coerce_state_mapping(state: object) -> dict[str, Any]:
    """
    노드 입력 state를 dict로 정규화한다.

    Raises:
        BaseAppException: 지원하지 않는 state 타입인 경우.
    """

    if isinstance(state, Mapping):
        return {str(key): value for key, value in state.items()}
    if isinstance(state, BaseModel):
        return {name: getattr(state, name) for name in type(state).model_fields}
    detail = ExceptionDetail(
        code="AGENT_NODE_INPUT_INVALID",
        cause=f"state_type={type(state).__name__}",
    )
    raise BaseAppException("노드 입력 state 타입이 올바르지 않습니다.", detail)
