"""
목적: 이름 기반 도구 레지스트리를 제공한다.
설명: 스키마(Pydantic 모델)로 인자를 검증한 뒤 동기/비동기 핸들러를 실행하고, 배치 호출은 호출 단위로 실패를 격리해 병렬 실행한다.
디자인 패턴: 레지스트리, 커맨드
참조: src/agent_gateway/shared/chat/nodes/tool_execution_node.py, src/agent_gateway/core/chat/tools/assistant_tools.py
"""

from __future__ import annotations

import asyncio
import inspect
import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from agent_gateway.core.chat.const import DEFAULT_TOOL_CONCURRENCY
from agent_gateway.core.chat.models import ToolCall, ToolResult
from agent_gateway.shared.exceptions import ToolError, ToolErrorKind
from agent_gateway.shared.logging import Logger, create_default_logger

ToolHandler = Callable[..., Any]


@dataclass(frozen=True)
class ToolSpec:
    """등록된 도구 정의."""

    name: str
    description: str
    schema: type[BaseModel]
    handler: ToolHandler

    def as_openai_tool(self) -> dict[str, Any]:
        """function calling 형식의 도구 스키마를 반환한다."""

        parameters = self.schema.model_json_schema()
        parameters.pop("title", None)
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": parameters,
            },
        }


class ToolRegistry:
    """도구 이름 → 스키마/핸들러 레지스트리.

    Args:
        max_concurrency: 프로세스 전체 동시 도구 실행 상한.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        max_concurrency: int = DEFAULT_TOOL_CONCURRENCY,
        logger: Logger | None = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency는 1 이상이어야 합니다.")
        self._tools: dict[str, ToolSpec] = {}
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._logger = logger or create_default_logger("ToolRegistry")

    def register(
        self,
        name: str,
        schema: type[BaseModel],
        handler: ToolHandler,
        description: str = "",
    ) -> ToolSpec:
        """도구를 등록한다. 같은 이름을 두 번 등록하면 ValueError를 던진다."""

        normalized = name.strip()
        if not normalized:
            raise ValueError("도구 이름은 비어 있을 수 없습니다.")
        if normalized in self._tools:
            raise ValueError(f"이미 등록된 도구입니다: {normalized}")
        spec = ToolSpec(
            name=normalized,
            description=description or (inspect.getdoc(handler) or "").strip(),
            schema=schema,
            handler=handler,
        )
        self._tools[normalized] = spec
        return spec

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def as_openai_tools(self) -> list[dict[str, Any]]:
        """모델 바인딩용 도구 스키마 목록을 반환한다."""

        return [spec.as_openai_tool() for spec in self._tools.values()]

    async def invoke(self, name: str, args: Mapping[str, Any] | None = None) -> str:
        """
        도구 1건을 실행한다.

        Raises:
            ToolError: 미등록 도구(NotFound), 스키마 위반(InvalidArguments),
                핸들러 예외(ExecutionFailed).
        """

        spec = self._tools.get(name)
        if spec is None:
            raise ToolError(ToolErrorKind.NOT_FOUND, name, f"등록되지 않은 도구입니다: {name}")
        try:
            validated = spec.schema.model_validate(dict(args or {}))
        except ValidationError as error:
            raise ToolError(
                ToolErrorKind.INVALID_ARGUMENTS,
                name,
                _summarize_validation(error),
                error,
            ) from error

        async with self._semaphore:
            try:
                kwargs = validated.model_dump()
                if inspect.iscoroutinefunction(spec.handler):
                    result = await spec.handler(**kwargs)
                else:
                    # 동기 핸들러는 워커 스레드에서 실행한다.
                    result = await asyncio.to_thread(spec.handler, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception as error:  # noqa: BLE001 - 도구 핸들러 오류 캡처
                raise ToolError(
                    ToolErrorKind.EXECUTION_FAILED,
                    name,
                    f"{type(error).__name__}: {error}",
                    error,
                ) from error
        return _stringify(result)

    async def invoke_batch(self, calls: Sequence[ToolCall]) -> list[ToolResult]:
        """
        한 모델 턴의 도구 호출들을 병렬 실행한다.

        한 호출의 실패는 형제 호출을 중단시키지 않는다. 결과는 호출 순서대로,
        각 호출 id에 대응해 반환된다.
        """

        return list(await asyncio.gather(*(self._invoke_isolated(call) for call in calls)))

    async def _invoke_isolated(self, call: ToolCall) -> ToolResult:
        self._logger.info(f"tool.call.start: id={call.id}, name={call.name}, args={call.arguments}")
        try:
            if call.arguments_error is not None:
                raise ToolError(ToolErrorKind.INVALID_ARGUMENTS, call.name, call.arguments_error)
            content = await self.invoke(call.name, call.arguments)
        except ToolError as error:
            self._logger.warning(
                f"tool.call.failed: id={call.id}, name={call.name}, error={error.describe()}",
                metadata={"code": error.code},
            )
            return ToolResult(
                id=call.id,
                name=call.name,
                error=error.describe(),
                error_kind=error.kind,
            )
        self._logger.info(f"tool.call.done: id={call.id}, name={call.name}")
        return ToolResult(id=call.id, name=call.name, content=content)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools


def _stringify(result: Any) -> str:
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump_json()
    return json.dumps(result, ensure_ascii=False, default=str)


def _summarize_validation(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


__all__ = ["ToolHandler", "ToolRegistry", "ToolSpec"]
