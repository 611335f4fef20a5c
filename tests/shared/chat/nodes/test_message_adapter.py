"""
목적: 도메인 메시지와 LangChain 메시지 변환을 검증한다.
설명: 결과 없는 도구 호출 묶음 제외, 첨부 렌더링, 응답 텍스트/도구 호출 추출을 테스트한다.
디자인 패턴: 어댑터 단위 테스트
참조: src/agent_gateway/shared/chat/nodes/_message_adapter.py
"""

from __future__ import annotations

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from agent_gateway.core.chat.models import Attachment, ChatMessage, ChatRole, ToolCall
from agent_gateway.shared.chat.nodes._message_adapter import (
    extract_text,
    extract_tool_calls,
    to_langchain_messages,
)


def _tool_call_message(call_id: str) -> ChatMessage:
    return ChatMessage(
        session_id="s-1",
        role=ChatRole.TOOL_CALL,
        tool_calls=[ToolCall(id=call_id, name="stock_price", arguments={"symbol": "AAPL"})],
    )


def test_to_langchain_messages_skips_unanswered_tool_calls() -> None:
    """결과가 없는 도구 호출은 모델 입력에서 빠져야 한다."""

    messages = [
        ChatMessage(session_id="s-1", role=ChatRole.USER, content="AAPL?"),
        _tool_call_message("answered"),
        ChatMessage(session_id="s-1", role=ChatRole.TOOL_RESULT, content="[43.32:42.45]", tool_call_id="answered"),
        _tool_call_message("dangling"),
        ChatMessage(session_id="s-1", role=ChatRole.USER, content="Again?"),
    ]

    converted = to_langchain_messages("system", messages)

    assert [type(message) for message in converted] == [
        SystemMessage,
        HumanMessage,
        AIMessage,
        ToolMessage,
        HumanMessage,
    ]
    assert converted[2].tool_calls[0]["id"] == "answered"
    assert converted[3].tool_call_id == "answered"


def test_to_langchain_messages_marks_error_results_and_renders_attachments() -> None:
    """오류 결과는 error 상태로, 첨부는 텍스트 블록으로 변환되어야 한다."""

    messages = [
        ChatMessage(
            session_id="s-1",
            role=ChatRole.USER,
            content="Read this",
            attachments=[Attachment(file_name="lore.md", content="Old tales.")],
        ),
        _tool_call_message("call-1"),
        ChatMessage(
            session_id="s-1",
            role=ChatRole.TOOL_RESULT,
            content="NotFound: missing",
            tool_call_id="call-1",
            is_error=True,
        ),
    ]

    converted = to_langchain_messages("", messages)

    assert isinstance(converted[0], HumanMessage)
    assert converted[0].content[0] == {"type": "text", "text": "Read this"}
    assert 'file_name="lore.md"' in converted[0].content[1]["text"]
    assert converted[2].status == "error"


def test_extract_helpers_read_text_blocks_and_tool_calls() -> None:
    """응답에서 텍스트와 도구 호출(잘못된 인자 포함)을 꺼내야 한다."""

    message = AIMessage(
        content="",
        tool_calls=[{"id": "call-1", "name": "stock_price", "args": {"symbol": "AAPL"}}],
        invalid_tool_calls=[{"id": "call-2", "name": "stock_price", "args": "{bad", "error": "bad json"}],
    )

    calls = extract_tool_calls(message)

    assert extract_text([{"type": "text", "text": "Hello "}, "friend"]) == "Hello friend"
    assert [call.id for call in calls] == ["call-1", "call-2"]
    assert calls[0].arguments == {"symbol": "AAPL"}
    assert calls[1].arguments_error == "bad json"
