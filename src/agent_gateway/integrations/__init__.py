"""
목적: 외부 시스템 통합 패키지.
설명: LLM/모더레이션/임베딩/파일 시스템 어댑터를 하위 패키지로 제공한다.
디자인 패턴: 패키지 네임스페이스
참조: src/agent_gateway/integrations/llm, src/agent_gateway/integrations/moderation
"""
