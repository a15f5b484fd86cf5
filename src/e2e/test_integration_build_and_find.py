from pathlib import Path
import pytest
from keyfinder.engine import Engine

def _seed(tmp: Path) -> str:
    root = tmp / "project"; root.mkdir()
    (root / "one.json").write_text(
        '{\n  "app": {\n    "title": "Demo",\n    "theme": {"dark": true}\n  }\n}\n',
        encoding="utf-8",
    )
    (root / "sub").mkdir()
    (root / "sub" / "two.json").write_text('{"app": {"title": "Other"}}', encoding="utf-8")
    (root / "broken.json").write_text('{"app": ', encoding="utf-8")
    (root / "notes.txt").write_text('{"app": {"title": "ignored"}}', encoding="utf-8")
    (root / "node_modules").mkdir()
    (root / "node_modules" / "pkg.json").write_text('{"app": {"title": "vendored"}}', encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_build_and_find_across_documents(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine()
    try:
        eng.build(roots=[roots], db_dsn="memory://")
        assert len(eng.corpus) == 2
        rows = eng.find("app.title")
        assert [(r.document_id, r.preview, r.line_no) for r in rows] == [
            ("one.json", 'title: "Demo"', 3),
            ("sub/two.json", 'title: "Other"', 1),
        ]
        assert eng.find("app.theme")[0].preview == "theme: { ... }"
        assert eng.is_full_path("app.theme.dark")
        assert not eng.is_full_path("theme.dark")
        assert eng.suggest("app.th") == ["app.theme", "app.theme.dark"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_document_edits_refresh_suggestions(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine()
    try:
        eng.build(roots=[roots])
        assert eng.suggest("app.") == ["app.theme", "app.theme.dark", "app.title"]
        eng.add_document("extra.json", '{"app": {"version": 2}}')
        assert "app.version" in eng.suggest("app.")
        eng.remove_document("one.json")
        assert eng.suggest("app.") == ["app.title", "app.version"]
        assert [r.document_id for r in eng.find("app.title")] == ["sub/two.json"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_engine_requires_initialization():
    eng = Engine()
    with pytest.raises(RuntimeError):
        eng.find("app.title")
    with pytest.raises(ValueError):
        eng.build(roots=[])

@pytest.mark.e2e
def test_open_starts_with_an_empty_corpus():
    eng = Engine()
    try:
        eng.open()
        assert eng.find("a") == []
        eng.add_document("a.json", '{"a": {"b": [1, 2, 3]}}')
        assert [r.preview for r in eng.find("a.b")] == ["b: [1, 2, 3]"]
    finally:
        eng.shutdown()
