"""
목적: 세션 저장소 공개 API를 제공한다.
설명: 메모리/파일 세션 저장소를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/chat/memory/session_store.py
"""

from agent_gateway.shared.chat.memory.session_store import FileSessionStore, InMemorySessionStore

__all__ = ["FileSessionStore", "InMemorySessionStore"]
