"""
목적: 대화 게이트웨이 실행 서비스를 제공한다.
설명: 세션 ID 해석, 제어 토큰 단락 처리, 히스토리 복원, 관련 문서 검색, 프롬프트 조립, 에이전트 그래프 실행,
    성공 시 히스토리 저장을 결합한다. 에이전트 수준 실패는 고정 사과 문구로 바꿔 반환한다.
디자인 패턴: 서비스 레이어
참조: src/agent_gateway/shared/chat/graph/base_agent_graph.py, src/agent_gateway/core/chat/graphs/agent_graph.py
"""

from __future__ import annotations

import random
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from typing import TYPE_CHECKING

from agent_gateway.core.chat.const import (
    CONTINUE_TOKEN,
    DEFAULT_RAG_TOP_K,
    GREETING_TOKENS,
    GREETINGS,
    AgentResponseMessage,
)
from agent_gateway.core.chat.models import ChatMessage, ChatReply, ModerationVerdict, new_session_id
from agent_gateway.core.chat.prompts import PromptBuilder
from agent_gateway.shared.chat.graph import AgentRunInput
from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail
from agent_gateway.shared.logging import Logger, create_default_logger
from agent_gateway.shared.runtime import KeyedAsyncLock

if TYPE_CHECKING:
    from agent_gateway.shared.chat.interface import (
        AgentGraphPort,
        DocumentRetrieverPort,
        SessionStorePort,
    )

_SYSTEM_ERROR = AgentResponseMessage.SYSTEM_ERROR.value


class ChatGatewayService:
    """
    대화 게이트웨이 서비스.

    Args:
        graph: 에이전트 그래프.
        session_store: 세션 체크포인트 저장소.
        retriever: 관련 문서 검색기. 없으면 첨부 없이 프롬프트를 만든다.
        prompt_builder: 프롬프트 조립기.
        rag_top_k: 프롬프트에 첨부할 최대 문서 수.
        session_locks: 세션별 실행 직렬화 락.
        rng: 인사말 선택에 쓰는 난수 생성기.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        *,
        graph: AgentGraphPort,
        session_store: SessionStorePort,
        retriever: DocumentRetrieverPort | None = None,
        prompt_builder: PromptBuilder | None = None,
        rag_top_k: int = DEFAULT_RAG_TOP_K,
        session_locks: KeyedAsyncLock | None = None,
        rng: random.Random | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._logger = logger or create_default_logger("ChatGatewayService")
        self._graph = graph
        self._session_store = session_store
        self._retriever = retriever
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._rag_top_k = max(0, rag_top_k)
        self._session_locks = session_locks or KeyedAsyncLock()
        self._rng = rng or random.Random()

    @property
    def graph(self) -> AgentGraphPort:
        return self._graph

    def resolve_session_id(self, session_id: str | None) -> str:
        """전달된 세션 ID를 쓰고, 없으면 서버에서 새로 만든다."""

        normalized = str(session_id or "").strip()
        return normalized or new_session_id()

    async def handle(self, message: str, session_id: str | None = None) -> ChatReply:
        """
        입력 메시지 1건을 블로킹 방식으로 처리한다.

        Raises:
            BaseAppException: 메시지가 비어 있는 경우(CHAT_MESSAGE_EMPTY).
        """

        text = self._normalize_message(message)
        resolved = self.resolve_session_id(session_id)
        control = self._control_reply(text)
        if control is not None:
            self._logger.info(f"chat.control: session_id={resolved}, token={text.strip()}")
            return ChatReply(message=control, session_id=resolved)

        async with self._session_locks.acquire(resolved):
            self._logger.info(f"chat.run.start: session_id={resolved}, mode=blocking")
            try:
                run_input = await self._prepare(resolved, text, stream_tokens=False)
                result = await self._graph.ainvoke(run_input)
            except BaseAppException as error:
                self._log_failure(resolved, error)
                return ChatReply(message=_SYSTEM_ERROR, session_id=resolved)
            except Exception as error:  # noqa: BLE001 - 그래프 내부 오류 캡처
                self._log_unexpected(resolved, error)
                return ChatReply(message=_SYSTEM_ERROR, session_id=resolved)

            if not result.moderated:
                await self._persist(resolved, [*run_input.history, *result.messages])
            self._logger.info(
                f"chat.run.done: session_id={resolved}, moderated={result.moderated}, "
                f"iterations={result.iterations}"
            )
            return ChatReply(message=result.assistant_message, session_id=resolved)

    async def stream(self, message: str, session_id: str) -> AsyncIterator[str]:
        """
        입력 메시지 1건을 스트리밍 방식으로 처리해 응답 조각을 순서대로 반환한다.

        토큰이 하나도 생성되지 않은 실행(모더레이션 거절 등)은 최종 응답 전체를 한 조각으로 반환한다.
        실행 중 오류가 나면 마지막 조각으로 고정 사과 문구를 반환한다.
        """

        text = self._normalize_message(message)
        resolved = self.resolve_session_id(session_id)
        control = self._control_reply(text)
        if control is not None:
            self._logger.info(f"chat.control: session_id={resolved}, token={text.strip()}")
            if control:
                yield control
            return

        async with self._session_locks.acquire(resolved):
            self._logger.info(f"chat.run.start: session_id={resolved}, mode=stream")
            produced = False
            moderated = False
            final = ""
            turn_messages: list[ChatMessage] = []
            try:
                run_input = await self._prepare(resolved, text, stream_tokens=True)
                turn_messages.append(run_input.user_message)
                async with aclosing(self._graph.astream_events(run_input)) as events:
                    async for event in events:
                        event_name = event.get("event")
                        data = event.get("data")
                        if event_name == "token":
                            fragment = str(data or "")
                            if fragment:
                                produced = True
                                yield fragment
                        elif event_name == "messages" and isinstance(data, list):
                            turn_messages.extend(item for item in data if isinstance(item, ChatMessage))
                        elif event_name == "moderation" and isinstance(data, ModerationVerdict):
                            moderated = data.is_harmful
                        elif event_name == "assistant_message":
                            final = str(data or "")
                if not final.strip():
                    detail = ExceptionDetail(code="CHAT_STREAM_EMPTY", cause=f"session_id={resolved}")
                    raise BaseAppException("스트리밍 응답이 비어 있습니다.", detail)
            except BaseAppException as error:
                self._log_failure(resolved, error)
                yield _SYSTEM_ERROR
                return
            except Exception as error:  # noqa: BLE001 - 그래프 내부 오류 캡처
                self._log_unexpected(resolved, error)
                yield _SYSTEM_ERROR
                return

            if not produced:
                yield final
            if not moderated:
                await self._persist(resolved, [*run_input.history, *turn_messages])
            self._logger.info(f"chat.run.done: session_id={resolved}, moderated={moderated}, streamed={produced}")

    def close(self) -> None:
        self._logger.info("chat.service.closed")

    async def _prepare(self, session_id: str, text: str, stream_tokens: bool) -> AgentRunInput:
        history = await self._load_history(session_id)
        documents = []
        if self._retriever is not None and self._rag_top_k > 0:
            documents = await self._retriever.most_relevant_documents(text, self._rag_top_k)
        built = self._prompt_builder.build(text, documents, session_id=session_id)
        self._logger.debug(
            f"chat.prompt.built: session_id={session_id}, history={len(history)}, documents={len(documents)}"
        )
        return AgentRunInput(
            session_id=session_id,
            user_text=text,
            system_prompt=built.system_prompt,
            user_message=built.user_message,
            history=history,
            stream_tokens=stream_tokens,
        )

    async def _load_history(self, session_id: str) -> list[ChatMessage]:
        try:
            return list(await self._session_store.load(session_id))
        except BaseAppException as error:
            self._logger.warning(
                f"chat.history.load.failed: session_id={session_id}, code={error.code}, cause={error.detail.cause}"
            )
        except Exception as error:  # noqa: BLE001 - 저장소 구현 오류 캡처
            self._logger.warning(
                f"chat.history.load.failed: session_id={session_id}, error={type(error).__name__}: {error}"
            )
        return []

    async def _persist(self, session_id: str, messages: Sequence[ChatMessage]) -> None:
        try:
            await self._session_store.save(session_id, messages)
        except BaseAppException as error:
            self._logger.warning(
                f"chat.history.save.failed: session_id={session_id}, code={error.code}, cause={error.detail.cause}"
            )
        except Exception as error:  # noqa: BLE001 - 저장소 구현 오류 캡처
            self._logger.warning(
                f"chat.history.save.failed: session_id={session_id}, error={type(error).__name__}: {error}"
            )

    def _control_reply(self, text: str) -> str | None:
        token = text.strip()
        if token in GREETING_TOKENS:
            return self._rng.choice(GREETINGS)
        if token == CONTINUE_TOKEN:
            return ""
        return None

    def _normalize_message(self, message: str) -> str:
        raw = str(message or "")
        if not raw.strip():
            detail = ExceptionDetail(code="CHAT_MESSAGE_EMPTY", cause="message is empty")
            raise BaseAppException("메시지는 비어 있을 수 없습니다.", detail)
        return raw

    def _log_failure(self, session_id: str, error: BaseAppException) -> None:
        self._logger.error(
            f"chat.run.failed: session_id={session_id}, type={type(error).__name__}, "
            f"code={error.code}, cause={error.detail.cause}"
        )

    def _log_unexpected(self, session_id: str, error: Exception) -> None:
        self._logger.error(f"chat.run.failed: session_id={session_id}, error={type(error).__name__}: {error}")


__all__ = ["ChatGatewayService"]
