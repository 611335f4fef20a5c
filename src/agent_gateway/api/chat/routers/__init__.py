"""
목적: 게이트웨이 라우터 공개 API를 제공한다.
설명: HTTP 라우터와 WebSocket 라우터를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/api/chat/routers/router.py
"""

from agent_gateway.api.chat.routers.router import router, socket_router

__all__ = ["router", "socket_router"]
