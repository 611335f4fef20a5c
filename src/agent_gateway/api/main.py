"""
목적: 대화 게이트웨이 FastAPI 앱 엔트리 포인트 제공
설명: 헬스체크, 버전/대화/그래프 HTTP API, /ws/chat WebSocket을 포함한 실행 엔트리이다.
    시작 시 지식 베이스 적재를 백그라운드로 띄우고, 종료 시 열린 연결을 1001로 닫는다.
디자인 패턴: 단일 책임 원칙(SRP)
참조: src/agent_gateway/api/chat/services/runtime.py
"""
import asyncio
import contextlib
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from agent_gateway.shared.config import RuntimeEnvironmentLoader

# 런타임 환경(local/dev/stg/prod)을 판별해 환경 파일을 로드한다.
RUNTIME_ENV = RuntimeEnvironmentLoader().load()

# NOTE:
# .env 로딩 이후에 라우터/서비스를 import해야, import 시점에 생성되는 모델/그래프가
# 최신 환경 변수를 정상적으로 읽을 수 있다.
from agent_gateway.api.chat import router as chat_router
from agent_gateway.api.chat import shutdown_chat_api_service, socket_router
from agent_gateway.api.chat.services import get_knowledge_initializer, get_settings
from agent_gateway.api.health.routers.server import router as health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """시작 시 지식 베이스 적재를 띄우고, 종료 시 연결과 서비스를 정리한다."""
    ingest_task = asyncio.create_task(get_knowledge_initializer().initialize())
    try:
        yield
    finally:
        if not ingest_task.done():
            ingest_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ingest_task
        await shutdown_chat_api_service()


app = FastAPI(lifespan=lifespan)
app.include_router(health_router)
app.include_router(chat_router)
app.include_router(socket_router)


@app.get("/", include_in_schema=False)
def redirect_to_docs():
    """기본 접속 시 문서 페이지로 리다이렉트한다."""
    return RedirectResponse(url="/docs")


def run() -> None:
    """agent-gateway 콘솔 스크립트 진입점."""
    settings = get_settings()
    uvicorn.run("agent_gateway.api.main:app", host=settings.host, port=settings.port)
