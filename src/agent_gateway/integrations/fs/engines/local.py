"""
목적: 로컬 파일 시스템 엔진을 제공한다.
설명: 임시 파일에 쓴 뒤 os.replace로 교체하는 원자적 쓰기와 기본 파일 조회를 표준 라이브러리로 수행한다.
디자인 패턴: 어댑터 패턴
참조: src/agent_gateway/integrations/fs/base/engine.py, src/agent_gateway/shared/chat/memory/session_store.py
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import List, Optional

from agent_gateway.integrations.fs.base.engine import BaseFSEngine


class LocalFSEngine(BaseFSEngine):
    """로컬 파일 시스템 엔진 구현체."""

    @property
    def name(self) -> str:
        return "local"

    def write_text_atomic(self, path: str, content: str, encoding: str) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, "w", encoding=encoding) as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, target)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def read_text(self, path: str, encoding: str) -> str:
        with open(path, "r", encoding=encoding) as handle:
            return handle.read()

    def list_files(
        self,
        base_dir: str,
        recursive: bool = False,
        suffix: Optional[str] = None,
    ) -> List[str]:
        root = Path(base_dir)
        if not root.is_dir():
            return []
        candidates = root.rglob("*") if recursive else root.iterdir()
        results = [
            str(path)
            for path in candidates
            if path.is_file()
            and not path.name.startswith(".")
            and (suffix is None or path.name.endswith(suffix))
        ]
        return sorted(results)

    def move(self, source: str, target: str) -> None:
        os.replace(source, target)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def mkdir(self, path: str, exist_ok: bool = True) -> None:
        os.makedirs(path, exist_ok=exist_ok)
