# src/e2e/test_suggest_paths.py

import importlib

import pytest

# keyfinder re-exports the function `suggest`, which shadows the submodule
# attribute, so fetch the module object explicitly.
S = importlib.import_module("keyfinder.suggest")
from keyfinder import SuggestionEngine, load_documents, suggest
from keyfinder.errors import InvalidArgument
from keyfinder.models import Corpus, Document


def _corpus(*texts: str) -> Corpus:
    return load_documents((f"doc{i}.json", t) for i, t in enumerate(texts, 1))


@pytest.fixture
def app_corpus() -> Corpus:
    return _corpus(
        '{"app": {"user": {"name": "x"}, "theme": "dark"}}',
        '{"User": {"id": 1}}',
    )


@pytest.fixture
def count_prefix_scans(monkeypatch):
    """Count how often the corpus is scanned for a prefix set."""
    calls = []
    real = S.collect_paths_for_prefix

    def _counting(corpus, prefix):
        calls.append(prefix)
        return real(corpus, prefix)

    monkeypatch.setattr(S, "collect_paths_for_prefix", _counting)
    return calls


def test_trailing_separator_lists_everything_below():
    corpus = _corpus('{"a": {"b": {"c": 1}}}')
    assert suggest(corpus, "a.") == ["a.b", "a.b.c"]


def test_single_character_never_suggests(app_corpus):
    assert suggest(app_corpus, "a") == []
    assert suggest(app_corpus, "") == []


def test_two_characters_do_not_short_circuit(app_corpus):
    assert suggest(app_corpus, "ap") == ["app", "app.theme", "app.user", "app.user.name"]


def test_keyword_matches_anywhere_case_insensitively(app_corpus):
    assert suggest(app_corpus, "user") == ["User", "User.id", "app.user", "app.user.name"]


def test_prefix_mode_is_case_insensitive(app_corpus):
    assert suggest(app_corpus, "app.U") == ["app.user", "app.user.name"]
    assert suggest(app_corpus, "APP.th") == []  # parent lookup uses exact names


def test_prefix_set_is_computed_once_per_prefix(app_corpus, count_prefix_scans):
    session = SuggestionEngine()
    session.suggest(app_corpus, "app.u")
    session.suggest(app_corpus, "app.us")
    session.suggest(app_corpus, "app.t")
    assert count_prefix_scans == ["app"]
    assert session.cached_prefixes() == ["app"]


def test_unresolvable_prefix_is_cached_as_empty(app_corpus, count_prefix_scans):
    session = SuggestionEngine()
    assert session.suggest(app_corpus, "zz.y") == []
    assert session.suggest(app_corpus, "zz.yy") == []
    assert count_prefix_scans == ["zz"]


def test_narrower_input_filters_the_same_prefix_set(app_corpus):
    session = SuggestionEngine()
    broad = session.suggest(app_corpus, "app.")
    narrow = session.suggest(app_corpus, "app.user")
    assert narrow and set(narrow) <= set(broad)
    assert set(broad) <= session.paths_for_prefix(app_corpus, "app")


def test_corpus_change_invalidates_the_cache():
    corpus = _corpus('{"a": {"b": {"c": 1}}}')
    session = SuggestionEngine()
    assert session.suggest(corpus, "a.") == ["a.b", "a.b.c"]
    corpus.add(Document.from_text("doc2.json", '{"a": {"z": 1}}'))
    assert session.suggest(corpus, "a.") == ["a.b", "a.b.c", "a.z"]


def test_switching_corpus_at_same_generation_invalidates_the_cache():
    old = _corpus('{"a": {"old": 1}}')
    new = _corpus('{"a": {"new": 1}}')
    assert old.generation == new.generation
    session = SuggestionEngine()
    assert session.suggest(old, "a.") == ["a.old"]
    assert session.suggest(new, "a.") == ["a.new"]
    assert session.suggest(new, "ne") == ["a.new"]


def test_explicit_invalidate_clears_every_entry(app_corpus):
    session = SuggestionEngine()
    session.suggest(app_corpus, "app.u")
    session.suggest(app_corpus, "user")
    session.invalidate()
    assert session.cached_prefixes() == []


def test_broken_documents_are_skipped():
    corpus = Corpus()
    corpus.add(Document.from_text("bad.json", '{"a": '))
    corpus.add(Document.from_text("good.json", '{"a": {"b": 1}}'))
    assert suggest(corpus, "a.") == ["a.b"]
    assert suggest(corpus, "ab") == []


def test_none_partial_fails_fast():
    with pytest.raises(InvalidArgument):
        SuggestionEngine().suggest(Corpus(), None)
