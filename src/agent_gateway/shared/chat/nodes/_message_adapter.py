"""
목적: 도메인 메시지와 LangChain 메시지 사이 변환을 제공한다.
설명: ChatMessage 히스토리를 모델 입력으로 바꾸고, 모델 응답에서 텍스트/도구 호출을 추출한다.
    결과가 모두 갖춰지지 않은 도구 호출 묶음은 모델 입력에서 제외한다(메시지 히스토리만 복원).
디자인 패턴: 어댑터
참조: src/agent_gateway/shared/chat/nodes/model_call_node.py
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)

from agent_gateway.core.chat.models import Attachment, ChatMessage, ChatRole, ToolCall


def to_langchain_messages(
    system_prompt: str,
    messages: Sequence[ChatMessage],
) -> list[BaseMessage]:
    """시스템 프롬프트와 대화 메시지를 모델 입력 메시지 목록으로 변환한다."""

    answered = {
        message.tool_call_id
        for message in messages
        if message.role == ChatRole.TOOL_RESULT and message.tool_call_id
    }
    emitted: set[str] = set()
    converted: list[BaseMessage] = []
    if system_prompt.strip():
        converted.append(SystemMessage(content=system_prompt))

    for message in messages:
        if message.role == ChatRole.SYSTEM:
            converted.append(SystemMessage(content=message.content))
        elif message.role == ChatRole.USER:
            converted.append(HumanMessage(content=_user_content(message)))
        elif message.role == ChatRole.ASSISTANT:
            converted.append(AIMessage(content=message.content))
        elif message.role == ChatRole.TOOL_CALL:
            call_ids = [call.id for call in message.tool_calls]
            if not call_ids or not all(call_id in answered for call_id in call_ids):
                continue
            emitted.update(call_ids)
            converted.append(
                AIMessage(
                    content=message.content,
                    tool_calls=[
                        {"id": call.id, "name": call.name, "args": dict(call.arguments)}
                        for call in message.tool_calls
                    ],
                )
            )
        elif message.role == ChatRole.TOOL_RESULT:
            if message.tool_call_id not in emitted:
                continue
            converted.append(
                ToolMessage(
                    content=message.content,
                    tool_call_id=message.tool_call_id,
                    status="error" if message.is_error else "success",
                )
            )
    return converted


def extract_text(content: Any) -> str:
    """모델 응답 content(str 또는 content block 목록)에서 텍스트만 이어 붙인다."""

    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: list[str] = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and item.get("type") == "text":
                parts.append(str(item.get("text") or ""))
        return "".join(parts)
    return ""


def extract_tool_calls(message: BaseMessage) -> list[ToolCall]:
    """모델 응답에서 도구 호출 목록을 꺼낸다. 인자 파싱에 실패한 호출도 오류 표시와 함께 포함한다."""

    calls: list[ToolCall] = []
    for raw in getattr(message, "tool_calls", None) or []:
        calls.append(
            ToolCall(
                id=str(raw.get("id") or uuid4().hex),
                name=str(raw.get("name") or ""),
                arguments=dict(raw.get("args") or {}),
            )
        )
    for raw in getattr(message, "invalid_tool_calls", None) or []:
        calls.append(
            ToolCall(
                id=str(raw.get("id") or uuid4().hex),
                name=str(raw.get("name") or ""),
                arguments_error=str(raw.get("error") or "tool arguments could not be parsed"),
            )
        )
    return calls


def _user_content(message: ChatMessage) -> str | list[str | dict[str, Any]]:
    if not message.attachments:
        return message.content
    blocks: list[str | dict[str, Any]] = [{"type": "text", "text": message.content}]
    blocks.extend({"type": "text", "text": _render_attachment(item)} for item in message.attachments)
    return blocks


def _render_attachment(attachment: Attachment) -> str:
    return (
        f'<attachment file_name="{attachment.file_name}" format="{attachment.format}" '
        f'mime_type="{attachment.mime_type}">\n{attachment.content}\n</attachment>'
    )


__all__ = ["extract_text", "extract_tool_calls", "to_langchain_messages"]
