"""
목적: 런타임 동시성 유틸 공개 API를 제공한다.
설명: 세션 단위 직렬화를 위한 키별 락을 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/runtime/keyed_lock.py
"""

from agent_gateway.shared.runtime.keyed_lock import KeyedAsyncLock

__all__ = ["KeyedAsyncLock"]
