"""
목적: 파일 시스템 엔진 인터페이스 공개 API를 제공한다.
설명: BaseFSEngine을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/integrations/fs/base/engine.py
"""

from agent_gateway.integrations.fs.base.engine import BaseFSEngine

__all__ = ["BaseFSEngine"]
