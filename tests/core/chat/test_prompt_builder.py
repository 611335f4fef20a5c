"""
목적: 프롬프트 조립기 동작을 검증한다.
설명: 사용자 원문 템플릿, 문서 첨부, 시스템 프롬프트 이름 치환을 테스트한다.
디자인 패턴: 단위 테스트
참조: src/agent_gateway/core/chat/prompts/prompt_builder.py
"""

from __future__ import annotations

from agent_gateway.core.chat.models import ChatRole, RetrievedDocument
from agent_gateway.core.chat.prompts import ATTACHMENT_HINT, PromptBuilder


def test_prompt_builder_wraps_user_text_without_attachments() -> None:
    """문서가 없으면 첨부 안내 없이 사용자 원문만 감싸야 한다."""

    built = PromptBuilder().build("Where is Rivendell?", session_id="s-1")

    assert built.user_message.role == ChatRole.USER
    assert built.user_message.session_id == "s-1"
    assert built.user_message.content == "User's input: ```Where is Rivendell?```."
    assert built.user_message.attachments == []
    assert built.user_message.metadata == {"raw_text": "Where is Rivendell?"}


def test_prompt_builder_attaches_documents_in_order() -> None:
    """검색 문서는 관련도 순서대로 첨부되어야 한다."""

    documents = [
        RetrievedDocument(path="/kb/rivendell.md", file_name="rivendell.md", content="A hidden valley.", score=0.9),
        RetrievedDocument(path="/kb/lorien.md", file_name="lorien.md", content="A golden wood.", score=0.4),
    ]

    built = PromptBuilder().build("Where is Rivendell?", documents, session_id="s-1")

    assert built.user_message.content.endswith(ATTACHMENT_HINT)
    assert [item.file_name for item in built.user_message.attachments] == ["rivendell.md", "lorien.md"]
    assert built.user_message.attachments[0].mime_type == "text/plain"


def test_prompt_builder_renders_assistant_name() -> None:
    """시스템 프롬프트에 어시스턴트 이름이 들어가야 한다."""

    builder = PromptBuilder(assistant_name="Lindir")

    assert "Lindir" in builder.system_prompt
    assert "{assistant_name}" not in builder.system_prompt
