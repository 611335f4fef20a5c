"""
목적: 파일 시스템 엔진 인터페이스를 제공한다.
설명: 체크포인트/지식 문서 저장에 필요한 원자적 쓰기, 읽기, 목록, 이동, 존재 확인을 정의한다.
디자인 패턴: 전략 패턴
참조: src/agent_gateway/integrations/fs/engines/local.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional


class BaseFSEngine(ABC):
    """파일 시스템 엔진 인터페이스."""

    @property
    @abstractmethod
    def name(self) -> str:
        """엔진 이름을 반환한다."""

    @abstractmethod
    def write_text_atomic(self, path: str, content: str, encoding: str) -> None:
        """파일 전체를 원자적으로 교체 기록한다. 중간 상태의 파일은 남지 않는다."""

    @abstractmethod
    def read_text(self, path: str, encoding: str) -> str:
        """파일에서 텍스트를 읽는다."""

    @abstractmethod
    def list_files(
        self,
        base_dir: str,
        recursive: bool = False,
        suffix: Optional[str] = None,
    ) -> List[str]:
        """파일 목록을 반환한다."""

    @abstractmethod
    def move(self, source: str, target: str) -> None:
        """파일을 이동한다. 대상이 있으면 교체한다."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """경로 존재 여부를 반환한다."""

    @abstractmethod
    def mkdir(self, path: str, exist_ok: bool = True) -> None:
        """디렉터리를 생성한다."""
