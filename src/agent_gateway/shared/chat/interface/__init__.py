"""
목적: 게이트웨이 포트 공개 API를 제공한다.
설명: 실행 계층 Protocol과 스트림 노드 설정 타입을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/interface/ports.py
"""

from agent_gateway.shared.chat.interface.ports import (
    AgentGraphPort,
    ChatModelPort,
    DocumentRetrieverPort,
    ModerationClassifierPort,
    SessionStorePort,
    StreamNodeConfig,
)

__all__ = [
    "AgentGraphPort",
    "ChatModelPort",
    "DocumentRetrieverPort",
    "ModerationClassifierPort",
    "SessionStorePort",
    "StreamNodeConfig",
]
