"""
목적: 게이트웨이 API 라우터 집계를 제공한다.
설명: 엔드포인트별 분리 라우터를 HTTP(/api) 라우터와 WebSocket 라우터로 묶는다.
디자인 패턴: 컴포지트 패턴
참조: src/agent_gateway/api/chat/routers/*.py
"""

from __future__ import annotations

from fastapi import APIRouter

from agent_gateway.api.chat.routers.chat import router as chat_router
from agent_gateway.api.chat.routers.strategy_graph import router as strategy_graph_router
from agent_gateway.api.chat.routers.version import router as version_router
from agent_gateway.api.chat.routers.websocket import router as websocket_router
from agent_gateway.api.const import API_PREFIX, CHAT_API_TAG

router = APIRouter(prefix=API_PREFIX, tags=[CHAT_API_TAG])
router.include_router(version_router)
router.include_router(chat_router)
router.include_router(strategy_graph_router)

socket_router = APIRouter(tags=[CHAT_API_TAG])
socket_router.include_router(websocket_router)
