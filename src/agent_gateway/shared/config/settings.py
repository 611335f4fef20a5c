"""
목적: 게이트웨이 런타임 설정 모델을 제공한다.
설명: ConfigLoader로 기본값/JSON/환경 변수를 병합한 결과를 Pydantic 모델로 검증한다.
디자인 패턴: 설정 객체
참조: src/agent_gateway/shared/config/loader.py, src/agent_gateway/api/chat/services/runtime.py
"""

from __future__ import annotations

import os
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from agent_gateway.shared.config.loader import ConfigLoader
from agent_gateway.shared.logging import Logger


class GatewaySettings(BaseModel):
    """게이트웨이 설정 모델."""

    model_config = ConfigDict(extra="ignore")

    session_store: Literal["file", "memory"] = "file"
    session_store_path: str = "./data/sessions"
    knowledge_base_path: str = "./data/knowledge-base"
    rag_top_k: int = Field(default=3, ge=0)
    max_agent_iterations: int = Field(default=100, ge=1)
    tool_concurrency: int = Field(default=8, ge=1)
    ingest_concurrency: int = Field(default=3, ge=1)
    llm_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    moderation_model: str = "omni-moderation-latest"
    strategy_graph_cache_seconds: int = Field(default=3600, ge=0)
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


def load_gateway_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    logger: Optional[Logger] = None,
) -> GatewaySettings:
    """기본값 → GATEWAY_CONFIG_FILE(JSON) → GATEWAY_* 환경 변수 → overrides 순서로 설정을 만든다."""

    loader = ConfigLoader(logger=logger)
    loader.add_dict(GatewaySettings().model_dump())
    loader.add_json_file(os.getenv("GATEWAY_CONFIG_FILE"))
    loader.add_env()
    return GatewaySettings.model_validate(loader.build(overrides))


__all__ = ["GatewaySettings", "load_gateway_settings"]
