"""
목적: 로컬 파일 시스템 엔진 동작을 검증한다.
설명: 원자적 쓰기/읽기, 파일 목록 필터, 디렉터리 생성을 테스트한다.
디자인 패턴: 어댑터 패턴 테스트
참조: src/agent_gateway/integrations/fs/engines/local.py
"""

from __future__ import annotations

from agent_gateway.integrations.fs import LocalFSEngine


def test_local_engine_atomic_write_read(tmp_path):
    """원자적 쓰기는 임시 파일을 남기지 않고 기존 내용을 교체해야 한다."""

    engine = LocalFSEngine()
    target = tmp_path / "nested" / "session.json"

    engine.write_text_atomic(str(target), "first", encoding="utf-8")
    engine.write_text_atomic(str(target), "second", encoding="utf-8")

    assert engine.read_text(str(target), encoding="utf-8") == "second"
    assert [path.name for path in target.parent.iterdir()] == ["session.json"]


def test_local_engine_list_files_filters(tmp_path):
    """숨김 파일과 디렉터리는 제외하고, 접미사/재귀 옵션을 따라야 한다."""

    engine = LocalFSEngine()
    engine.mkdir(str(tmp_path / "sub"))
    (tmp_path / "a.md").write_text("a", encoding="utf-8")
    (tmp_path / "b.txt").write_text("b", encoding="utf-8")
    (tmp_path / ".hidden.md").write_text("h", encoding="utf-8")
    (tmp_path / "sub" / "c.md").write_text("c", encoding="utf-8")

    assert engine.list_files(str(tmp_path)) == [str(tmp_path / "a.md"), str(tmp_path / "b.txt")]
    assert engine.list_files(str(tmp_path), recursive=True, suffix=".md") == [
        str(tmp_path / "a.md"),
        str(tmp_path / "sub" / "c.md"),
    ]
    assert engine.list_files(str(tmp_path / "missing")) == []
    assert engine.exists(str(tmp_path / "sub"))


def test_local_engine_move_replaces_target(tmp_path):
    """이동은 원본을 없애고 기존 대상을 교체해야 한다."""

    engine = LocalFSEngine()
    source = tmp_path / "s-1.json"
    target = tmp_path / "s-1.corrupt"
    source.write_text("new", encoding="utf-8")
    target.write_text("old", encoding="utf-8")

    engine.move(str(source), str(target))

    assert not engine.exists(str(source))
    assert engine.read_text(str(target), encoding="utf-8") == "new"
