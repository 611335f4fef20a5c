"""
목적: 모델 입력 프롬프트를 조립한다.
설명: 시스템 프롬프트와 사용자 원문, 검색 문서 첨부를 묶어 BuiltPrompt로 반환한다.
디자인 패턴: 빌더
참조: src/agent_gateway/core/chat/prompts/system_prompt.py, src/agent_gateway/shared/chat/services/chat_service.py
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from agent_gateway.core.chat.models import Attachment, ChatMessage, ChatRole, RetrievedDocument
from agent_gateway.core.chat.prompts.system_prompt import (
    ATTACHMENT_HINT,
    DEFAULT_ASSISTANT_NAME,
    SYSTEM_PROMPT,
    USER_INPUT_TEMPLATE,
)


@dataclass(frozen=True)
class BuiltPrompt:
    """조립된 프롬프트."""

    system_prompt: str
    user_message: ChatMessage


class PromptBuilder:
    """시스템 프롬프트 + 사용자 메시지 조립기."""

    def __init__(self, assistant_name: str = DEFAULT_ASSISTANT_NAME) -> None:
        self._system_prompt = SYSTEM_PROMPT.format(assistant_name=assistant_name)

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    def build(
        self,
        user_text: str,
        documents: Sequence[RetrievedDocument] = (),
        *,
        session_id: str,
    ) -> BuiltPrompt:
        """사용자 원문과 검색 문서로 BuiltPrompt를 만든다. 문서가 없으면 첨부 안내 문구도 넣지 않는다."""

        lines = [USER_INPUT_TEMPLATE.format(user_input=user_text)]
        attachments = [
            Attachment(
                file_name=document.file_name,
                content=document.content,
                format="md",
                mime_type="text/plain",
            )
            for document in documents
        ]
        if attachments:
            lines.append(ATTACHMENT_HINT)
        user_message = ChatMessage(
            session_id=session_id,
            role=ChatRole.USER,
            content="\n".join(lines),
            attachments=attachments,
            metadata={"raw_text": user_text},
        )
        return BuiltPrompt(system_prompt=self._system_prompt, user_message=user_message)


__all__ = ["BuiltPrompt", "PromptBuilder"]
