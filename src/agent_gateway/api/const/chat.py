"""
목적: 게이트웨이 API 라우팅 상수를 정의한다.
설명: HTTP/WebSocket 경로, 태그, 세션 헤더 이름을 중앙에서 관리한다.
디자인 패턴: 상수 객체 패턴
참조: src/agent_gateway/api/chat/routers/router.py, src/agent_gateway/api/chat/routers/websocket.py
"""

from __future__ import annotations

# HTTP API 공통 상수
API_PREFIX = "/api"
CHAT_API_TAG = "chat"
VERSION_PATH = "/version"
CHAT_PATH = "/chat"
STRATEGY_GRAPH_PATH = "/koog/strategy/graph"

# WebSocket 상수
WS_CHAT_PATH = "/ws/chat"

# 세션 ID 요청/응답 헤더
SESSION_ID_HEADER = "X-Session-Id"

# 클라이언트 연결 종료 감시
DISCONNECT_POLL_SECONDS = 0.1
CLIENT_CLOSED_REQUEST = 499
