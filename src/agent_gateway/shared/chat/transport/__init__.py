"""
목적: 스트리밍 전송 계층 공개 API를 제공한다.
설명: 연결 핸들과 연결 관리자를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/transport/connection_manager.py
"""

from agent_gateway.shared.chat.transport.connection_manager import (
    GOING_AWAY_CODE,
    ConnectionHandle,
    ConnectionManager,
    SocketPort,
)

__all__ = ["ConnectionHandle", "ConnectionManager", "GOING_AWAY_CODE", "SocketPort"]
