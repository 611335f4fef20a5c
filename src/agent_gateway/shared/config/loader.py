"""
목적: 계층형 설정 로더를 제공한다.
설명: 기본값 dict → JSON 파일 → 접두사 환경 변수 → 오버라이드 순서로 병합한다.
디자인 패턴: 빌더 패턴
참조: src/agent_gateway/shared/config/settings.py, src/agent_gateway/shared/const/__init__.py
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from agent_gateway.shared.const import SharedConst
from agent_gateway.shared.logging import Logger, create_default_logger

_NULL_LITERALS = {"null", "none"}
_BOOL_LITERALS = {"true": True, "false": False}


class ConfigLoader:
    """설정 소스를 누적한 뒤 한 번에 병합하는 로더이다.

    Args:
        logger: 주입 가능한 로거.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or create_default_logger("ConfigLoader")
        self._sources: list[Dict[str, Any]] = []

    def add_dict(self, data: Optional[Mapping[str, Any]]) -> "ConfigLoader":
        """딕셔너리 설정을 추가한다."""

        if data:
            self._sources.append(dict(data))
        return self

    def add_json_file(self, path: str | Path | None, required: bool = False) -> "ConfigLoader":
        """JSON 파일 설정을 추가한다. 경로가 비었거나 없으면 required 여부에 따라 처리한다."""

        if not path:
            if required:
                raise ValueError("path는 비어 있을 수 없습니다.")
            return self
        file_path = Path(path)
        if not file_path.exists():
            if required:
                raise FileNotFoundError(str(file_path))
            self._logger.warning(f"config.file.skip: path={file_path}")
            return self
        try:
            payload = json.loads(file_path.read_text(encoding=SharedConst.DEFAULT_ENCODING))
        except json.JSONDecodeError as exc:
            raise ValueError(f"JSON 설정 파일 파싱에 실패했습니다: {file_path}") from exc
        if not isinstance(payload, dict):
            raise ValueError("JSON 설정 파일은 최상위가 객체여야 합니다.")
        self._sources.append(payload)
        return self

    def add_env(
        self,
        prefix: str = SharedConst.ENV_PREFIX,
        delimiter: str = SharedConst.ENV_NESTED_DELIMITER,
    ) -> "ConfigLoader":
        """접두사가 붙은 환경 변수를 소문자 키로 추가한다.

        `GATEWAY_RAG_TOP_K=5`는 `{"rag_top_k": 5}`,
        `GATEWAY_LLM__TEMPERATURE=0.1`은 `{"llm": {"temperature": 0.1}}`가 된다.
        """

        env_data: Dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            parts = [part.lower() for part in key[len(prefix) :].split(delimiter) if part]
            if parts:
                self._assign_nested(env_data, parts, _parse_scalar(value))
        if env_data:
            self._sources.append(env_data)
        return self

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """수집된 설정을 병합해 반환한다."""

        merged: Dict[str, Any] = {}
        for source in [*self._sources, dict(overrides or {})]:
            merged = _deep_merge(merged, source)
        return merged

    def _assign_nested(self, root: Dict[str, Any], keys: list[str], value: Any) -> None:
        current = root
        for part in keys[:-1]:
            child = current.get(part)
            if not isinstance(child, dict):
                child = {}
                current[part] = child
            current = child
        current[keys[-1]] = value


def _deep_merge(base: Dict[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _parse_scalar(raw: str) -> Any:
    lowered = raw.strip().lower()
    if lowered in _BOOL_LITERALS:
        return _BOOL_LITERALS[lowered]
    if lowered in _NULL_LITERALS:
        return None
    for caster in (int, float):
        try:
            return caster(raw)
        except ValueError:
            continue
    if raw[:1] in {"{", "["}:
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw
    return raw


__all__ = ["ConfigLoader"]
