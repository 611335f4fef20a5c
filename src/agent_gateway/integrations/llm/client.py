"""
목적: LangChain BaseChatModel 기반 LLM 클라이언트를 제공한다.
설명: 기존 메서드(invoke/ainvoke/stream/astream)를 유지하면서 로깅과 예외 처리를 통합한다.
    도구 바인딩은 스키마 변환만 내부 모델에 맡기고 바인딩 대상은 래퍼로 유지해 로깅이 빠지지 않게 한다.
디자인 패턴: 프록시, 데코레이터
참조: src/agent_gateway/shared/logging, src/agent_gateway/shared/exceptions
"""

from __future__ import annotations

import time
from typing import Any, AsyncIterator, Callable, Iterator, Optional, Sequence

from langchain_core.callbacks import (
    AsyncCallbackManagerForLLMRun,
    CallbackManagerForLLMRun,
)
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, BaseMessage, BaseMessageChunk
from langchain_core.outputs import ChatGenerationChunk, ChatResult
from pydantic import ConfigDict, PrivateAttr

from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail, ModelFailure
from agent_gateway.shared.logging import LogContext, Logger, LogLevel, create_default_logger


class LLMClient(BaseChatModel):
    """로깅/예외 처리를 포함한 LLM 클라이언트 래퍼이다."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    _model: BaseChatModel = PrivateAttr()
    _logger: Logger = PrivateAttr()
    _name: str = PrivateAttr()
    _log_payload: bool = PrivateAttr(default=False)
    _context_provider: Optional[Callable[[], LogContext]] = PrivateAttr(default=None)

    def __init__(
        self,
        model: BaseChatModel,
        name: str = "llm-client",
        logger: Optional[Logger] = None,
        log_payload: bool = False,
        context_provider: Optional[Callable[[], LogContext]] = None,
    ) -> None:
        super().__init__()
        self._model = model
        self._name = name
        self._log_payload = log_payload
        self._context_provider = context_provider
        self._logger = logger or create_default_logger(name)

    @property
    def model(self) -> BaseChatModel:
        return self._model

    @property
    def _llm_type(self) -> str:
        base_type = getattr(self._model, "_llm_type", None)
        if base_type:
            return f"logged-{base_type}"
        return "logged-chat-model"

    def bind_tools(
        self,
        tools: Sequence[dict[str, Any] | type | Callable[..., Any] | Any],
        *,
        tool_choice: str | None = None,
        **kwargs: Any,
    ) -> Any:
        """도구 스키마 변환을 내부 모델에 위임하고, 변환된 호출 인자를 래퍼에 바인딩한다."""

        try:
            bound = self._model.bind_tools(tools, tool_choice=tool_choice, **kwargs)
        except NotImplementedError as error:
            raise NotImplementedError("주입된 모델은 bind_tools를 지원하지 않습니다.") from error
        return self.bind(**dict(getattr(bound, "kwargs", {}) or {}))

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: CallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> ChatResult:
        start = time.monotonic()
        self._log_start("invoke", messages, stop, False, kwargs)
        try:
            result = self._model._generate(
                messages,
                stop=stop,
                run_manager=run_manager,
                **kwargs,
            )
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            self._log_error("invoke", error, start)
            detail = ExceptionDetail(code="LLM_INVOKE_ERROR", cause=str(error))
            raise ModelFailure("LLM 호출에 실패했습니다.", detail, error) from error
        self._log_success("invoke", start, result)
        return result

    async def _agenerate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: AsyncCallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> ChatResult:
        start = time.monotonic()
        self._log_start("ainvoke", messages, stop, False, kwargs)
        try:
            result = await self._model._agenerate(
                messages,
                stop=stop,
                run_manager=run_manager,
                **kwargs,
            )
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            self._log_error("ainvoke", error, start)
            detail = ExceptionDetail(code="LLM_AINVOKE_ERROR", cause=str(error))
            raise ModelFailure("LLM 비동기 호출에 실패했습니다.", detail, error) from error
        self._log_success("ainvoke", start, result)
        return result

    def _stream(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: CallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> Iterator[ChatGenerationChunk]:
        start = time.monotonic()
        self._log_start("stream", messages, stop, True, kwargs)
        try:
            for chunk in self._iter_stream_chunks(messages, stop, run_manager, kwargs):
                yield self._to_generation_chunk(chunk)
        except BaseAppException as error:
            self._log_error("stream", error, start)
            raise
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            self._log_error("stream", error, start)
            detail = ExceptionDetail(code="LLM_STREAM_ERROR", cause=str(error))
            raise ModelFailure("LLM 스트리밍 호출에 실패했습니다.", detail, error) from error
        self._log_success("stream", start, None)

    async def _astream(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: AsyncCallbackManagerForLLMRun | None = None,
        **kwargs: Any,
    ) -> AsyncIterator[ChatGenerationChunk]:
        start = time.monotonic()
        self._log_start("astream", messages, stop, True, kwargs)
        try:
            async for chunk in self._aiter_stream_chunks(messages, stop, run_manager, kwargs):
                yield self._to_generation_chunk(chunk)
        except BaseAppException as error:
            self._log_error("astream", error, start)
            raise
        except Exception as error:  # noqa: BLE001 - 외부 라이브러리 오류 캡처
            self._log_error("astream", error, start)
            detail = ExceptionDetail(code="LLM_ASTREAM_ERROR", cause=str(error))
            raise ModelFailure("LLM 비동기 스트리밍 호출에 실패했습니다.", detail, error) from error
        self._log_success("astream", start, None)

    def _iter_stream_chunks(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None,
        run_manager: CallbackManagerForLLMRun | None,
        kwargs: dict[str, Any],
    ) -> Iterator[Any]:
        """내부 모델의 네이티브 스트리밍 구현만 사용한다."""

        stream_impl = getattr(type(self._model), "_stream", None)
        if stream_impl is None or stream_impl is BaseChatModel._stream:
            detail = ExceptionDetail(
                code="LLM_STREAM_NOT_SUPPORTED",
                cause=f"model={type(self._model).__name__}",
            )
            raise ModelFailure("현재 모델은 네이티브 스트리밍을 지원하지 않습니다.", detail)
        yield from self._model._stream(
            messages,
            stop=stop,
            run_manager=run_manager,
            **kwargs,
        )

    async def _aiter_stream_chunks(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None,
        run_manager: AsyncCallbackManagerForLLMRun | None,
        kwargs: dict[str, Any],
    ) -> AsyncIterator[Any]:
        """내부 모델의 네이티브 비동기 스트리밍 구현만 사용한다."""

        astream_impl = getattr(type(self._model), "_astream", None)
        if astream_impl is None or astream_impl is BaseChatModel._astream:
            detail = ExceptionDetail(
                code="LLM_ASTREAM_NOT_SUPPORTED",
                cause=f"model={type(self._model).__name__}",
            )
            raise ModelFailure("현재 모델은 네이티브 비동기 스트리밍을 지원하지 않습니다.", detail)
        async for chunk in self._model._astream(
            messages,
            stop=stop,
            run_manager=run_manager,
            **kwargs,
        ):
            yield chunk

    def _log_start(
        self,
        action: str,
        messages: Sequence[BaseMessage],
        stop: Optional[Sequence[str]],
        stream: bool,
        kwargs: dict,
    ) -> None:
        metadata = self._base_metadata(action)
        metadata.update(
            {
                "message_count": len(messages),
                "stop": bool(stop),
                "stream": stream,
                "kwargs": list(kwargs.keys()),
            }
        )
        if self._log_payload:
            metadata["messages"] = [message.model_dump(mode="json") for message in messages]
        self._safe_log(LogLevel.INFO, f"llm.{action}.start", metadata=metadata)

    def _log_success(self, action: str, start: float, result: Optional[ChatResult]) -> None:
        metadata = self._base_metadata(action)
        metadata.update(
            {
                "duration_ms": int((time.monotonic() - start) * 1000),
                "success": True,
            }
        )
        usage = self._extract_usage_metadata(result)
        if usage:
            metadata["usage_metadata"] = usage
        self._safe_log(LogLevel.INFO, f"llm.{action}.done", metadata=metadata)

    def _log_error(self, action: str, error: Exception, start: float) -> None:
        metadata = self._base_metadata(action)
        metadata.update(
            {
                "duration_ms": int((time.monotonic() - start) * 1000),
                "error_type": type(error).__name__,
                "success": False,
            }
        )
        self._safe_log(LogLevel.ERROR, f"llm.{action}.failed: {error}", metadata=metadata)

    def _base_metadata(self, action: str) -> dict:
        llm_type = getattr(self._model, "_llm_type", None)
        return {
            "action": action,
            "model_name": self._name,
            "llm_type": llm_type,
        }

    def _safe_log(self, level: LogLevel, message: str, metadata: Optional[dict]) -> None:
        """로깅 실패가 본 호출을 깨지 않도록 보호한다."""

        try:
            self._logger.log(level, message, context=self._get_context(), metadata=metadata)
        except Exception:  # noqa: BLE001 - 로깅은 best-effort로 동작해야 한다.
            return

    def _get_context(self) -> Optional[LogContext]:
        if not self._context_provider:
            return None
        try:
            return self._context_provider()
        except Exception:  # noqa: BLE001 - 로깅 실패 방지
            return None

    def _extract_usage_metadata(self, result: Optional[ChatResult]) -> Optional[dict]:
        if result is None:
            return None
        llm_output = getattr(result, "llm_output", None)
        if isinstance(llm_output, dict):
            usage = llm_output.get("usage_metadata")
            if isinstance(usage, dict):
                return usage
        for generation in getattr(result, "generations", []):
            message = getattr(generation, "message", None)
            usage = getattr(message, "usage_metadata", None)
            if isinstance(usage, dict):
                return usage
        return None

    def _to_generation_chunk(self, chunk: Any) -> ChatGenerationChunk:
        """스트리밍 출력 객체를 ChatGenerationChunk로 정규화한다."""

        if isinstance(chunk, ChatGenerationChunk):
            return chunk
        return ChatGenerationChunk(message=self._to_message_chunk(chunk))

    def _to_message_chunk(self, chunk: Any) -> BaseMessageChunk:
        """스트리밍 출력 객체를 BaseMessageChunk로 정규화한다."""

        if isinstance(chunk, BaseMessageChunk):
            return chunk
        if isinstance(chunk, AIMessage):
            return AIMessageChunk(
                content=chunk.content,
                additional_kwargs=chunk.additional_kwargs,
                response_metadata=chunk.response_metadata,
                id=chunk.id,
                tool_calls=chunk.tool_calls,
                invalid_tool_calls=chunk.invalid_tool_calls,
                usage_metadata=chunk.usage_metadata,
            )
        if isinstance(chunk, BaseMessage):
            return AIMessageChunk(content=chunk.content, id=getattr(chunk, "id", None))
        return AIMessageChunk(content=str(chunk))


__all__ = ["LLMClient"]
