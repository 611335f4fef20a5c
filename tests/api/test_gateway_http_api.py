"""
목적: 게이트웨이 HTTP API를 검증한다.
설명: 버전/대화/그래프 다이어그램/헬스체크 엔드포인트의 응답 형식, 세션 ID 처리, 연결 종료 시 실행 취소를 테스트한다.
디자인 패턴: API 통합 테스트
참조: src/agent_gateway/api/main.py, src/agent_gateway/api/chat/routers/*.py
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
import pytest
from fastapi import Response
from fastapi.testclient import TestClient

from support.stubs import ScriptedChatModel, StubModerationClassifier, make_agent_graph

from agent_gateway.api.chat.models import ChatRequest
from agent_gateway.api.chat.routers.chat import chat as chat_endpoint
from agent_gateway.api.chat.routers.common import run_until_disconnected
from agent_gateway.api.chat.services import get_agent_graph, get_chat_service
from agent_gateway.api.main import app
from agent_gateway.core.chat.const import API_VERSION, AgentResponseMessage
from agent_gateway.shared.chat.memory import InMemorySessionStore
from agent_gateway.shared.chat.services import ChatGatewayService
from agent_gateway.shared.exceptions import BaseAppException, ExceptionDetail


@pytest.fixture
def model() -> ScriptedChatModel:
    return ScriptedChatModel(["Mae govannen, mellon."], repeat_last=True)


@pytest.fixture
def client(model: ScriptedChatModel) -> Iterator[TestClient]:
    """스크립트 모델로 조립한 서비스를 주입한 테스트 클라이언트를 반환한다."""

    graph = make_agent_graph(model)
    service = ChatGatewayService(graph=graph, session_store=InMemorySessionStore())
    app.dependency_overrides[get_chat_service] = lambda: service
    app.dependency_overrides[get_agent_graph] = lambda: graph
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


def test_version_returns_plain_text(client: TestClient) -> None:
    """버전은 text/plain 고정 문자열이어야 한다."""

    response = client.get("/api/version")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == API_VERSION


def test_version_is_identical_across_calls(client: TestClient) -> None:
    """버전 조회는 몇 번을 호출해도 같은 문자열이어야 한다."""

    texts = {client.get("/api/version").text for _ in range(3)}

    assert texts == {API_VERSION}


def test_chat_session_id_restores_previous_turn(
    client: TestClient,
    model: ScriptedChatModel,
) -> None:
    """첫 응답의 sessionId를 다시 보내면 두 번째 모델 입력에 첫 턴이 포함되어야 한다."""

    first = client.post("/api/chat", json={"message": "Who guards the bridge?"})
    session_id = first.json()["sessionId"]

    second = client.post("/api/chat", json={"message": "And after that?", "sessionId": session_id})

    assert second.json()["sessionId"] == session_id
    contents = [str(message.content) for message in model.calls[1]]
    assert len(contents) == len(model.calls[0]) + 2
    assert any("Who guards the bridge?" in content for content in contents[:-1])
    assert "Mae govannen, mellon." in contents
    assert "And after that?" in contents[-1]


def test_chat_returns_answer_and_session_header(client: TestClient) -> None:
    """본문의 sessionId가 응답 본문과 헤더에 그대로 실려야 한다."""

    response = client.post("/api/chat", json={"message": "Hello", "sessionId": "s-http"})

    assert response.status_code == 200
    assert response.json() == {"message": "Mae govannen, mellon.", "sessionId": "s-http"}
    assert response.headers["X-Session-Id"] == "s-http"


def test_chat_prefers_body_session_over_header(client: TestClient) -> None:
    """본문 sessionId가 없으면 헤더를, 둘 다 있으면 본문을 써야 한다."""

    from_header = client.post("/api/chat", json={"message": "Hello"}, headers={"X-Session-Id": "s-header"})
    from_body = client.post(
        "/api/chat",
        json={"message": "Hello", "sessionId": "s-body"},
        headers={"X-Session-Id": "s-header"},
    )

    assert from_header.json()["sessionId"] == "s-header"
    assert from_body.json()["sessionId"] == "s-body"


def test_chat_generates_session_id_when_missing(client: TestClient) -> None:
    """세션 ID가 없으면 서버가 만든 ID가 반환되어야 한다."""

    response = client.post("/api/chat", json={"message": "[START]"})

    session_id = response.json()["sessionId"]
    assert response.status_code == 200
    assert session_id
    assert response.headers["X-Session-Id"] == session_id


def test_chat_rejects_blank_message(client: TestClient) -> None:
    """빈 메시지는 400으로 거절되어야 한다."""

    response = client.post("/api/chat", json={"message": "  "})

    assert response.status_code == 400
    assert response.json()["detail"]["detail"]["code"] == "CHAT_MESSAGE_EMPTY"


def test_chat_returns_apology_on_agent_failure() -> None:
    """에이전트 실패는 200 응답의 고정 사과 문구여야 한다."""

    graph = make_agent_graph(ScriptedChatModel(failure=RuntimeError("offline")))
    app.dependency_overrides[get_chat_service] = lambda: ChatGatewayService(
        graph=graph,
        session_store=InMemorySessionStore(),
    )
    try:
        with TestClient(app) as test_client:
            response = test_client.post("/api/chat", json={"message": "Hello", "sessionId": "s-err"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["message"] == AgentResponseMessage.SYSTEM_ERROR.value


def test_strategy_graph_returns_cacheable_diagram(client: TestClient) -> None:
    """그래프 다이어그램은 캐시 가능한 text/plain이어야 한다."""

    response = client.get("/api/koog/strategy/graph")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["cache-control"].startswith("public, max-age=")
    assert response.text.startswith("graph TD")
    assert '    moderate --> |"input is harmful"| finish' in response.text.splitlines()


def test_health_reports_knowledge_base_status(client: TestClient) -> None:
    """헬스체크는 서버 상태와 지식 베이스 준비 상태를 함께 반환해야 한다."""

    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert set(body["knowledge_base"]) == {"ready", "documents", "files"}


@contextmanager
def _serve(service: ChatGatewayService) -> Iterator[TestClient]:
    app.dependency_overrides[get_chat_service] = lambda: service
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


def test_chat_answers_question_with_model_reply() -> None:
    """모더레이션을 통과한 질문은 모델 답변을 그대로 반환해야 한다."""

    answer = 'It\'s a good question: "To be or not to be, 42?"'
    classifier = StubModerationClassifier()
    graph = make_agent_graph(ScriptedChatModel([answer]), classifier=classifier)
    service = ChatGatewayService(graph=graph, session_store=InMemorySessionStore())

    with _serve(service) as test_client:
        response = test_client.post("/api/chat", json={"message": "To be or not to be, 42?"})

    assert response.status_code == 200
    assert response.json()["message"] == answer
    assert response.json()["sessionId"]
    assert classifier.inputs == ["To be or not to be, 42?"]


def test_chat_returns_apology_when_moderation_service_fails() -> None:
    """모더레이션 API의 HTTP 오류는 모델 호출 없이 200 사과 문구가 되어야 한다."""

    failure = httpx.HTTPStatusError(
        "Service Unavailable",
        request=httpx.Request("POST", "https://api.openai.com/v1/moderations"),
        response=httpx.Response(503),
    )
    model = ScriptedChatModel(["unreachable"])
    graph = make_agent_graph(model, classifier=StubModerationClassifier(failure=failure))
    service = ChatGatewayService(graph=graph, session_store=InMemorySessionStore())

    with _serve(service) as test_client:
        response = test_client.post("/api/chat", json={"message": "Hello", "sessionId": "s-mod"})

    assert response.status_code == 200
    assert response.json() == {"message": AgentResponseMessage.SYSTEM_ERROR.value, "sessionId": "s-mod"}
    assert model.calls == []


class _ClosingClient:
    """지정한 횟수만큼 확인한 뒤부터 연결 종료를 보고하는 요청."""

    def __init__(self, open_checks: int) -> None:
        self._open_checks = open_checks
        self.checks = 0

    async def is_disconnected(self) -> bool:
        self.checks += 1
        return self.checks > self._open_checks


@pytest.mark.asyncio
async def test_chat_cancels_run_when_client_disconnects() -> None:
    """클라이언트가 끊기면 진행 중 모델 호출이 취소되고 아무것도 저장되지 않아야 한다."""

    model = ScriptedChatModel(["Too late."], delay=5.0)
    store = InMemorySessionStore()
    service = ChatGatewayService(graph=make_agent_graph(model, session_store=store), session_store=store)

    response = await chat_endpoint(
        ChatRequest(message="Hello", sessionId="s-gone"),
        _ClosingClient(open_checks=2),
        Response(),
        None,
        service,
    )

    for _ in range(100):
        if model.cancelled:
            break
        await asyncio.sleep(0.01)
    assert response.status_code == 499
    assert model.cancelled
    assert await store.load("s-gone") == []


@pytest.mark.asyncio
async def test_run_until_disconnected_returns_result_while_connected() -> None:
    """연결이 유지되면 작업 결과를 반환하고, 작업 예외는 그대로 전파해야 한다."""

    async def _answer() -> str:
        await asyncio.sleep(0.01)
        return "done"

    async def _reject() -> str:
        raise BaseAppException("rejected", ExceptionDetail(code="CHAT_MESSAGE_EMPTY", cause="empty"))

    client = _ClosingClient(open_checks=1000)

    assert await run_until_disconnected(client, _answer(), poll_interval=0.001) == (True, "done")
    with pytest.raises(BaseAppException):
        await run_until_disconnected(client, _reject(), poll_interval=0.001)
