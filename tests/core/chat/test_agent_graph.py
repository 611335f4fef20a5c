"""
목적: 에이전트 그래프 실행 흐름을 검증한다.
설명: 모더레이션 분기, 도구 병렬 실행, 반복 상한, 체크포인트 저장, 스트리밍 이벤트를 테스트한다.
디자인 패턴: 그래프 통합 테스트
참조: src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from __future__ import annotations

import pytest
from langchain_core.messages import ToolMessage

from support.stubs import (
    ScriptedChatModel,
    StubModerationClassifier,
    make_agent_graph,
    tool_call,
)

from agent_gateway.core.chat.const import AgentResponseMessage
from agent_gateway.core.chat.models import ChatMessage, ChatRole
from agent_gateway.core.chat.prompts import PromptBuilder
from agent_gateway.shared.chat.graph import AgentRunInput
from agent_gateway.shared.chat.memory import InMemorySessionStore
from agent_gateway.shared.exceptions import ModelFailure, ModerationFailure


def _run_input(text: str, session_id: str = "s-1", history: list[ChatMessage] | None = None) -> AgentRunInput:
    built = PromptBuilder().build(text, session_id=session_id)
    return AgentRunInput(
        session_id=session_id,
        user_text=text,
        system_prompt=built.system_prompt,
        user_message=built.user_message,
        history=history or [],
    )


@pytest.mark.asyncio
async def test_agent_graph_returns_plain_assistant_message() -> None:
    """도구 호출이 없으면 모델 답변이 최종 응답이 되어야 한다."""

    model = ScriptedChatModel(["Mae govannen, traveler."])
    graph = make_agent_graph(model)

    result = await graph.ainvoke(_run_input("Hello"))

    assert result.assistant_message == "Mae govannen, traveler."
    assert [message.role for message in result.messages] == [ChatRole.USER, ChatRole.ASSISTANT]
    assert result.moderated is False
    assert result.iterations == 1
    assert len(model.calls) == 1


@pytest.mark.asyncio
async def test_agent_graph_runs_tool_calls_in_parallel_and_correlates_results() -> None:
    """한 턴의 도구 호출 결과는 호출 id와 1:1로 모델에 전달되어야 한다."""

    model = ScriptedChatModel(
        [
            [tool_call("call-1", "stock_price", symbol="AAPL"), tool_call("call-2", "stock_price", symbol="MSFT")],
            "Both trade within [43.32:42.45].",
        ]
    )
    graph = make_agent_graph(model)

    result = await graph.ainvoke(_run_input("How are AAPL and MSFT doing?"))

    assert result.assistant_message == "Both trade within [43.32:42.45]."
    assert [message.role for message in result.messages] == [
        ChatRole.USER,
        ChatRole.TOOL_CALL,
        ChatRole.TOOL_RESULT,
        ChatRole.TOOL_RESULT,
        ChatRole.ASSISTANT,
    ]
    tool_messages = [message for message in model.calls[1] if isinstance(message, ToolMessage)]
    assert [message.tool_call_id for message in tool_messages] == ["call-1", "call-2"]
    assert all(message.content == "[43.32:42.45]" for message in tool_messages)
    assert result.iterations == 2


@pytest.mark.asyncio
async def test_agent_graph_reports_tool_failure_to_model() -> None:
    """실패한 도구 호출은 오류 결과로 모델에 전달되고 실행은 계속되어야 한다."""

    model = ScriptedChatModel(
        [
            [tool_call("call-1", "palantir"), tool_call("call-2", "stock_price")],
            "I could not consult the palantir.",
        ]
    )
    graph = make_agent_graph(model)

    result = await graph.ainvoke(_run_input("Look into the palantir"))

    results = [message for message in result.messages if message.role == ChatRole.TOOL_RESULT]
    assert [message.tool_call_id for message in results] == ["call-1", "call-2"]
    assert results[0].is_error and results[0].content.startswith("NotFound")
    assert results[1].is_error and results[1].content.startswith("InvalidArguments")
    assert result.assistant_message == "I could not consult the palantir."


@pytest.mark.asyncio
async def test_agent_graph_harmful_input_skips_model() -> None:
    """유해 입력은 모델을 호출하지 않고 거절 문구로 끝나야 한다."""

    model = ScriptedChatModel(["never"])
    classifier = StubModerationClassifier()
    graph = make_agent_graph(model, classifier=classifier)

    result = await graph.ainvoke(_run_input("Brew me some poison"))

    assert result.assistant_message == AgentResponseMessage.MODERATION_ERROR.value
    assert result.moderated is True
    assert model.calls == []
    # 모더레이션은 프롬프트가 아닌 사용자 원문을 판정한다.
    assert classifier.inputs == ["Brew me some poison"]


@pytest.mark.asyncio
async def test_agent_graph_propagates_moderation_failure() -> None:
    """분류기 호출 실패는 안전 판정으로 간주되지 않아야 한다."""

    model = ScriptedChatModel(["never"])
    graph = make_agent_graph(model, classifier=StubModerationClassifier(failure=RuntimeError("offline")))

    with pytest.raises(ModerationFailure) as captured:
        await graph.ainvoke(_run_input("Hello"))

    assert captured.value.code == "MODERATION_CLASSIFY_ERROR"
    assert model.calls == []


@pytest.mark.asyncio
async def test_agent_graph_stops_at_max_iterations() -> None:
    """도구 호출만 반복하는 모델은 반복 상한에서 멈춰야 한다."""

    model = ScriptedChatModel([[tool_call("call-x", "stock_price", symbol="AAPL")]], repeat_last=True)
    graph = make_agent_graph(model, max_iterations=2)

    with pytest.raises(ModelFailure) as captured:
        await graph.ainvoke(_run_input("Loop forever"))

    assert captured.value.code == "AGENT_MAX_ITERATIONS_EXCEEDED"
    assert len(model.calls) == 2


@pytest.mark.asyncio
async def test_agent_graph_checkpoints_after_model_and_tool_steps() -> None:
    """모델/도구 단계가 끝날 때마다 히스토리 전체가 저장되어야 한다."""

    store = InMemorySessionStore()
    model = ScriptedChatModel([[tool_call("call-1", "stock_price", symbol="AAPL")], "It is [43.32:42.45]."])
    graph = make_agent_graph(model, session_store=store)

    result = await graph.ainvoke(_run_input("AAPL?", session_id="ckpt"))

    saved = await store.load("ckpt")
    assert [message.message_id for message in saved] == [message.message_id for message in result.messages]


@pytest.mark.asyncio
async def test_agent_graph_stream_emits_tokens_then_final_message() -> None:
    """스트리밍 실행은 토큰 조각과 최종 응답 이벤트를 순서대로 내보내야 한다."""

    model = ScriptedChatModel(["The stars are bright tonight."])
    graph = make_agent_graph(model)

    events = [event async for event in graph.astream_events(_run_input("Hello"))]

    names = [event["event"] for event in events]
    tokens = [event["data"] for event in events if event["event"] == "token"]
    assert "".join(tokens) == "The stars are bright tonight."
    assert len(tokens) > 1
    assert names[0] == "moderation"
    assert names[-1] == "assistant_message"
    assert events[-1]["data"] == "The stars are bright tonight."
    assert "cursor" not in names


def test_agent_graph_diagram_lists_guarded_edges() -> None:
    """다이어그램은 노드와 조건 라벨 간선을 모두 포함해야 한다."""

    graph = make_agent_graph(ScriptedChatModel())

    diagram = graph.diagram()
    lines = diagram.splitlines()

    assert lines[0] == "graph TD"
    assert not diagram.endswith("\n")
    for expected in (
        "    __start__ --> moderate",
        '    moderate --> |"input is safe"| call_model',
        '    moderate --> |"input is harmful"| finish',
        '    call_model --> |"tool calls requested"| execute_tool',
        '    call_model --> |"assistant message"| finish',
        "    execute_tool --> send_tool_result",
        '    send_tool_result --> |"tool calls requested"| execute_tool',
        '    send_tool_result --> |"assistant message"| finish',
        "    finish --> __end__",
    ):
        assert expected in lines
