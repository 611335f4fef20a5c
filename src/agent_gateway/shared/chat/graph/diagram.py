"""
목적: 그래프 메타데이터를 mermaid 다이어그램 텍스트로 렌더링한다.
설명: 빌더가 기록한 GraphSpec만 읽어 노드 선언과 라벨 간선을 출력한다.
디자인 패턴: 렌더러(순수 함수)
참조: src/agent_gateway/shared/chat/graph/builder.py, src/agent_gateway/api/chat/routers/strategy_graph.py
"""

from __future__ import annotations

from agent_gateway.shared.chat.graph.models import GraphEdge, GraphSpec

_INDENT = "    "


def render_mermaid(spec: GraphSpec) -> str:
    """
    GraphSpec을 mermaid `graph TD` 텍스트로 변환한다.

    출력 형식:
        graph TD
            <node>["<node>"]      (시작, 선언 순서 노드, 종료 순)

            <src> --> |"<label>"| <dst>
            <src> --> <dst>       (라벨 없는 간선)

    마지막 줄 뒤에 개행을 붙이지 않는다.
    """

    lines = ["graph TD"]
    for node in _ordered_nodes(spec):
        lines.append(f'{_INDENT}{node}["{_escape(node)}"]')
    lines.append("")
    for edge in spec.edges:
        lines.append(f"{_INDENT}{_render_edge(edge)}")
    return "\n".join(lines)


def _ordered_nodes(spec: GraphSpec) -> list[str]:
    ordered: list[str] = []
    for node in (spec.entry, *spec.nodes, *spec.exits):
        if node not in ordered:
            ordered.append(node)
    return ordered


def _render_edge(edge: GraphEdge) -> str:
    if edge.label:
        return f'{edge.source} --> |"{_escape(edge.label)}"| {edge.target}'
    return f"{edge.source} --> {edge.target}"


def _escape(text: str) -> str:
    return text.replace('"', "#quot;")


__all__ = ["render_mermaid"]
