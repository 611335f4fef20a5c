"""
목적: API 버전 라우터를 제공한다.
설명: 고정 API 버전 문자열을 text/plain으로 반환한다.
디자인 패턴: 라우터 패턴
참조: src/agent_gateway/core/chat/const/settings.py
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from agent_gateway.api.const import VERSION_PATH
from agent_gateway.core.chat.const import API_VERSION

router = APIRouter()


@router.get(VERSION_PATH, response_class=PlainTextResponse, summary="API 버전을 조회합니다.")
def get_version() -> PlainTextResponse:
    """API 버전을 반환한다."""

    return PlainTextResponse(API_VERSION)
