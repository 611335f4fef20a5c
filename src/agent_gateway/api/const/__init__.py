"""
목적: API 상수 공개 API를 제공한다.
설명: 게이트웨이 라우팅 상수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/api/const/chat.py
"""

from agent_gateway.api.const.chat import (
    API_PREFIX,
    CHAT_API_TAG,
    CHAT_PATH,
    CLIENT_CLOSED_REQUEST,
    DISCONNECT_POLL_SECONDS,
    SESSION_ID_HEADER,
    STRATEGY_GRAPH_PATH,
    VERSION_PATH,
    WS_CHAT_PATH,
)

__all__ = [
    "API_PREFIX",
    "CHAT_API_TAG",
    "CHAT_PATH",
    "CLIENT_CLOSED_REQUEST",
    "DISCONNECT_POLL_SECONDS",
    "SESSION_ID_HEADER",
    "STRATEGY_GRAPH_PATH",
    "VERSION_PATH",
    "WS_CHAT_PATH",
]
