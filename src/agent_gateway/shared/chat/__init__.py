"""
목적: 대화 공통 계층 패키지.
설명: 그래프/노드/도구/모더레이션/세션 저장소/지식 베이스/서비스/전송 하위 패키지를 묶는다.
    하위 패키지 간 순환 참조를 피하기 위해 여기서는 다시 노출하지 않는다.
디자인 패턴: 패키지 네임스페이스
참조: src/agent_gateway/shared/chat/services/chat_service.py, src/agent_gateway/shared/chat/graph/base_agent_graph.py
"""
