"""
목적: 어시스턴트 도구 공개 API를 제공한다.
설명: 기본 도구 정의와 등록 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/agent_gateway/core/chat/tools/assistant_tools.py
"""

from agent_gateway.core.chat.tools.assistant_tools import (
    STOCK_PRICE_TOOL,
    StockPriceArgs,
    register_assistant_tools,
    stock_price,
)

__all__ = ["STOCK_PRICE_TOOL", "StockPriceArgs", "register_assistant_tools", "stock_price"]
