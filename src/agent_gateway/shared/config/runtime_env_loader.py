"""
목적: 런타임 환경별 `.env` 로딩을 제공한다.
설명: 프로젝트 루트 `.env`를 먼저 로드한 뒤 ENV 값(local/dev/stg/prod)에 맞는 `.env.<env>`를 덧씌운다.
디자인 패턴: 전략 패턴
참조: src/agent_gateway/api/main.py
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from agent_gateway.shared.logging import Logger, create_default_logger


class RuntimeEnvironmentLoader:
    """런타임 환경별 `.env` 로더이다.

    동작 순서:
    1. `<project_root>/.env`가 있으면 로드한다(기존 환경 변수 우선).
    2. `ENV` 값을 정규화한다. 비어 있으면 `local`이다.
    3. `<project_root>/.env.<env>`가 있으면 추가로 로드한다. local이 아니면 파일이 필수다.
    """

    SUPPORTED_ENVS = ("local", "dev", "stg", "prod")
    _ALIASES = {"development": "dev", "staging": "stg", "production": "prod"}

    def __init__(
        self,
        project_root: Optional[Path] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._project_root = Path(project_root or Path.cwd())
        self._logger = logger or create_default_logger("RuntimeEnvironmentLoader")

    @property
    def project_root(self) -> Path:
        return self._project_root

    def load(self) -> str:
        """환경 파일을 로드하고 판별된 환경 이름을 반환한다."""

        root_env = self._project_root / ".env"
        if root_env.exists():
            load_dotenv(dotenv_path=root_env, override=False)
        else:
            self._logger.debug(f"runtime.env.skip: path={root_env}")

        runtime_env = self.resolve(os.getenv("ENV"))
        os.environ["ENV"] = runtime_env

        env_file = self._project_root / f".env.{runtime_env}"
        if env_file.exists():
            load_dotenv(dotenv_path=env_file, override=False)
        elif runtime_env != "local":
            raise FileNotFoundError(f"환경 파일을 찾을 수 없습니다: {env_file}")
        self._logger.info(f"runtime.env.loaded: env={runtime_env}, root={self._project_root}")
        return runtime_env

    @classmethod
    def resolve(cls, raw: Optional[str]) -> str:
        """ENV 원본 값을 지원 환경 이름으로 정규화한다."""

        normalized = (raw or "").strip().lower()
        if not normalized:
            return "local"
        normalized = cls._ALIASES.get(normalized, normalized)
        if normalized not in cls.SUPPORTED_ENVS:
            raise ValueError(
                f"지원하지 않는 ENV 값입니다: {raw}. 허용값: {', '.join(cls.SUPPORTED_ENVS)}"
            )
        return normalized


__all__ = ["RuntimeEnvironmentLoader"]
