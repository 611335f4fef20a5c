"""
목적: 도구 레지스트리 동작을 검증한다.
설명: 등록/스키마 노출, 인자 검증, 핸들러 실패 분류, 배치 실패 격리를 테스트한다.
디자인 패턴: 레지스트리 단위 테스트
참조: src/agent_gateway/shared/chat/tools/registry.py
"""

from __future__ import annotations

import asyncio

import pytest
from pydantic import BaseModel

from agent_gateway.core.chat.models import ToolCall
from agent_gateway.core.chat.tools import STOCK_PRICE_TOOL, StockPriceArgs, register_assistant_tools
from agent_gateway.shared.chat.tools import ToolRegistry
from agent_gateway.shared.exceptions import ToolError, ToolErrorKind


class _EmptyArgs(BaseModel):
    pass


def test_tool_registry_exposes_function_schema() -> None:
    """등록된 도구는 function calling 스키마로 노출되어야 한다."""

    registry = register_assistant_tools(ToolRegistry())

    [schema] = registry.as_openai_tools()

    assert schema["type"] == "function"
    assert schema["function"]["name"] == STOCK_PRICE_TOOL
    assert "symbol" in schema["function"]["parameters"]["properties"]
    assert schema["function"]["description"].startswith("Get the current stock price")
    assert STOCK_PRICE_TOOL in registry
    assert len(registry) == 1


def test_tool_registry_rejects_duplicate_names() -> None:
    """같은 이름을 두 번 등록하면 실패해야 한다."""

    registry = register_assistant_tools(ToolRegistry())

    with pytest.raises(ValueError):
        registry.register(STOCK_PRICE_TOOL, StockPriceArgs, lambda symbol: symbol)


@pytest.mark.asyncio
async def test_tool_registry_invoke_validates_arguments() -> None:
    """스키마 위반 인자는 InvalidArguments로 분류되어야 한다."""

    registry = register_assistant_tools(ToolRegistry())

    assert await registry.invoke(STOCK_PRICE_TOOL, {"symbol": "AAPL"}) == "[43.32:42.45]"
    with pytest.raises(ToolError) as captured:
        await registry.invoke(STOCK_PRICE_TOOL, {"symbol": ""})

    assert captured.value.kind == ToolErrorKind.INVALID_ARGUMENTS
    assert captured.value.code == "TOOL_INVALID_ARGUMENTS"


@pytest.mark.asyncio
async def test_tool_registry_invoke_classifies_handler_errors() -> None:
    """핸들러 예외는 ExecutionFailed, 미등록 도구는 NotFound로 분류되어야 한다."""

    def explode() -> str:
        raise RuntimeError("the bridge is broken")

    registry = ToolRegistry()
    registry.register("explode", _EmptyArgs, explode)

    with pytest.raises(ToolError) as failed:
        await registry.invoke("explode")
    with pytest.raises(ToolError) as missing:
        await registry.invoke("unknown")

    assert failed.value.kind == ToolErrorKind.EXECUTION_FAILED
    assert "the bridge is broken" in failed.value.describe()
    assert missing.value.kind == ToolErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_tool_registry_batch_isolates_failures_and_keeps_order() -> None:
    """배치의 한 호출이 실패해도 나머지는 완료되고 순서가 유지되어야 한다."""

    async def slow_echo(symbol: str) -> dict[str, str]:
        await asyncio.sleep(0.01)
        return {"symbol": symbol}

    registry = ToolRegistry()
    registry.register("echo", StockPriceArgs, slow_echo)
    calls = [
        ToolCall(id="a", name="echo", arguments={"symbol": "AAPL"}),
        ToolCall(id="b", name="missing"),
        ToolCall(id="c", name="echo", arguments_error="Expecting value: line 1 column 1"),
    ]

    results = await registry.invoke_batch(calls)

    assert [result.id for result in results] == ["a", "b", "c"]
    assert results[0].content == '{"symbol": "AAPL"}'
    assert results[1].error_kind == ToolErrorKind.NOT_FOUND
    assert results[2].error_kind == ToolErrorKind.INVALID_ARGUMENTS
