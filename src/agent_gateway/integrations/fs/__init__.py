"""
목적: 파일 시스템 통합 공개 API를 제공한다.
설명: 엔진 인터페이스와 로컬 구현체를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/integrations/fs/base/engine.py, src/agent_gateway/integrations/fs/engines/local.py
"""

from agent_gateway.integrations.fs.base import BaseFSEngine
from agent_gateway.integrations.fs.engines import LocalFSEngine

__all__ = ["BaseFSEngine", "LocalFSEngine"]
