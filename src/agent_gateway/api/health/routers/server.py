"""
목적: 헬스체크 라우터 제공
설명: 서버 상태와 지식 베이스 적재 준비 상태를 반환한다
디자인 패턴: 라우터 패턴
참조: src/agent_gateway/api/main.py, src/agent_gateway/shared/chat/rags/initializer.py
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from agent_gateway.api.chat.services import get_knowledge_initializer
from agent_gateway.shared.chat.rags import KnowledgeBaseInitializer

router = APIRouter()


@router.get("/health", summary="서버의 상태를 조회합니다.")
def health_check(initializer: KnowledgeBaseInitializer = Depends(get_knowledge_initializer)):
    """서버의 상태를 확인합니다."""
    return JSONResponse(
        content={"status": "ok", "knowledge_base": initializer.status().to_dict()},
        status_code=status.HTTP_200_OK,
    )
