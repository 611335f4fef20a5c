"""
목적: 게이트웨이 API 런타임 조립 인스턴스를 제공한다.
설명: 설정/도구/세션 저장소/모델/모더레이션/그래프/지식 베이스/서비스/연결 관리자를 모듈 레벨에서 조립해
    라우터가 바로 사용할 인스턴스를 노출한다.
디자인 패턴: 모듈 조립 + 싱글턴
참조: src/agent_gateway/core/chat/graphs/agent_graph.py, src/agent_gateway/api/main.py
"""

from __future__ import annotations

from agent_gateway.api.chat.services.socket_handler import ChatSocketHandler
from agent_gateway.core.chat.graphs import build_agent_graph
from agent_gateway.core.chat.tools import register_assistant_tools
from agent_gateway.integrations.embedding import create_embeddings
from agent_gateway.integrations.llm import create_chat_model
from agent_gateway.integrations.moderation import OpenAIModerationClassifier
from agent_gateway.shared.chat.graph import BaseAgentGraph
from agent_gateway.shared.chat.memory import FileSessionStore, InMemorySessionStore
from agent_gateway.shared.chat.moderation import ModerationGate
from agent_gateway.shared.chat.rags import EmbeddingDocumentStore, KnowledgeBaseInitializer
from agent_gateway.shared.chat.services import ChatGatewayService
from agent_gateway.shared.chat.tools import ToolRegistry
from agent_gateway.shared.chat.transport import ConnectionManager
from agent_gateway.shared.config import GatewaySettings, load_gateway_settings
from agent_gateway.shared.logging import Logger, create_default_logger

# 1) 설정/로깅

settings: GatewaySettings = load_gateway_settings()
service_logger: Logger = create_default_logger("ChatGatewayService")
graph_logger: Logger = create_default_logger("AgentGraph")
llm_logger: Logger = create_default_logger("ChatLLM")

# 2) 도구/세션 저장소

tool_registry = ToolRegistry(max_concurrency=settings.tool_concurrency)
register_assistant_tools(tool_registry)

# GATEWAY_SESSION_STORE="file"(기본) | "memory"
if settings.session_store == "memory":
    session_store: FileSessionStore | InMemorySessionStore = InMemorySessionStore(logger=service_logger)
else:
    session_store = FileSessionStore(settings.session_store_path, logger=service_logger)

# 3) 모델/모더레이션/그래프

chat_model = create_chat_model(temperature=settings.llm_temperature, logger=llm_logger)
tool_bound_model = chat_model.bind_tools(tool_registry.as_openai_tools())
moderation_gate = ModerationGate(OpenAIModerationClassifier(model=settings.moderation_model))
agent_graph = build_agent_graph(
    model=tool_bound_model,
    moderation_gate=moderation_gate,
    tool_registry=tool_registry,
    session_store=session_store,
    max_iterations=settings.max_agent_iterations,
    logger=graph_logger,
)

# 4) 지식 베이스

document_store = EmbeddingDocumentStore(create_embeddings())
knowledge_initializer = KnowledgeBaseInitializer(
    document_store,
    settings.knowledge_base_path,
    max_concurrency=settings.ingest_concurrency,
)

# 5) 서비스/전송 조립

chat_service = ChatGatewayService(
    graph=agent_graph,
    session_store=session_store,
    retriever=document_store,
    rag_top_k=settings.rag_top_k,
    logger=service_logger,
)
connection_manager = ConnectionManager()
socket_handler = ChatSocketHandler(service=chat_service, manager=connection_manager)

# 6) FastAPI 주입/수명주기 함수
#
# 라우터에서는 FastAPI Depends로 아래 함수만 호출해 의존성을 가져오고,
# 조립/생성 로직은 runtime.py 내부에만 고정한다.


def get_settings() -> GatewaySettings:
    """FastAPI Depends 경유로 게이트웨이 설정을 반환한다."""

    return settings


def get_chat_service() -> ChatGatewayService:
    """FastAPI Depends 경유로 ChatGatewayService 싱글턴을 반환한다."""

    return chat_service


def get_agent_graph() -> BaseAgentGraph:
    """FastAPI Depends 경유로 에이전트 그래프 싱글턴을 반환한다."""

    return agent_graph


def get_socket_handler() -> ChatSocketHandler:
    """FastAPI Depends 경유로 WebSocket 처리기 싱글턴을 반환한다."""

    return socket_handler


def get_knowledge_initializer() -> KnowledgeBaseInitializer:
    """FastAPI Depends 경유로 지식 베이스 적재기 싱글턴을 반환한다."""

    return knowledge_initializer


async def shutdown_chat_api_service() -> None:
    """앱 종료 시 열린 WebSocket을 1001로 닫고 서비스를 정리한다."""

    await connection_manager.shutdown()
    chat_service.close()


__all__ = [
    "agent_graph",
    "chat_service",
    "connection_manager",
    "get_agent_graph",
    "get_chat_service",
    "get_knowledge_initializer",
    "get_settings",
    "get_socket_handler",
    "knowledge_initializer",
    "shutdown_chat_api_service",
]
