"""
목적: 설정 모듈 공개 API를 제공한다.
설명: 설정 병합 로더, 런타임 환경 로더, 게이트웨이 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/shared/config/loader.py, src/agent_gateway/shared/config/runtime_env_loader.py, src/agent_gateway/shared/config/settings.py
"""

from agent_gateway.shared.config.loader import ConfigLoader
from agent_gateway.shared.config.runtime_env_loader import RuntimeEnvironmentLoader
from agent_gateway.shared.config.settings import GatewaySettings, load_gateway_settings

__all__ = [
    "ConfigLoader",
    "GatewaySettings",
    "RuntimeEnvironmentLoader",
    "load_gateway_settings",
]
