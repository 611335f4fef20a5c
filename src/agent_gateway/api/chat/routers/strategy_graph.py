"""
목적: 에이전트 그래프 다이어그램 라우터를 제공한다.
설명: 구성 시점에 기록된 간선 메타데이터를 mermaid 텍스트로 반환한다.
디자인 패턴: 라우터 패턴
참조: src/agent_gateway/shared/chat/graph/diagram.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from agent_gateway.api.chat.services import get_agent_graph, get_settings
from agent_gateway.api.const import STRATEGY_GRAPH_PATH
from agent_gateway.shared.chat.interface import AgentGraphPort
from agent_gateway.shared.config import GatewaySettings

router = APIRouter()


@router.get(
    STRATEGY_GRAPH_PATH,
    response_class=PlainTextResponse,
    summary="에이전트 그래프를 mermaid로 조회합니다.",
)
def get_strategy_graph(
    graph: AgentGraphPort = Depends(get_agent_graph),
    settings: GatewaySettings = Depends(get_settings),
) -> PlainTextResponse:
    """에이전트 그래프 다이어그램을 반환한다."""

    return PlainTextResponse(
        graph.diagram(),
        headers={"Cache-Control": f"public, max-age={settings.strategy_graph_cache_seconds}"},
    )
