"""
목적: 어시스턴트 기본 도구를 정의한다.
설명: 주가 조회 도구의 인자 스키마/핸들러와 레지스트리 등록 함수를 제공한다.
디자인 패턴: 모듈 조립
참조: src/agent_gateway/shared/chat/tools/registry.py
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from agent_gateway.shared.chat.tools import ToolRegistry

STOCK_PRICE_TOOL = "stock_price"


class StockPriceArgs(BaseModel):
    """주가 조회 도구 인자."""

    symbol: str = Field(..., min_length=1, description="Ticker symbol, e.g. AAPL")


def stock_price(symbol: str) -> str:
    """Get the current stock price range [high:low] for a ticker symbol."""

    return "[43.32:42.45]"


def register_assistant_tools(registry: ToolRegistry) -> ToolRegistry:
    """어시스턴트 기본 도구를 레지스트리에 등록한다."""

    registry.register(STOCK_PRICE_TOOL, StockPriceArgs, stock_price)
    return registry


__all__ = ["STOCK_PRICE_TOOL", "StockPriceArgs", "register_assistant_tools", "stock_price"]
