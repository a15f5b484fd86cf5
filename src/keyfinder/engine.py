# keyfinder/engine.py
from __future__ import annotations

import os
import logging
from typing import Iterable, List, Optional

from .models import Corpus, Document, SearchResult
from .loader import load_corpus
from .resolver import resolve
from .validator import find_root_anchored_path
from .suggest import SuggestionEngine
from .DB.api import DocumentStore, make_store

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - document storage (CRUD) via a DocumentStore,
      - the search core (resolver / validator),
      - one suggestion session with its prefix cache.

    Public API (used by CLI/Flask):
      * build(roots, ...):       scan -> parse -> attach store
      * add_document / remove_document: edit the corpus, drop cached suggestions
      * find(path):              every location of an exact dotted path
      * is_full_path(candidate): root-anchored validity check
      * suggest(partial):        ranked completions for a partial path
      * shutdown():              close underlying resources
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self._store: Optional[DocumentStore] = None
        self._suggestions = SuggestionEngine()

    # /* ~~~ Load every JSON document under the roots and wire up storage ~~~ */
    def build(
        self,
        roots: Iterable[str],
        *,
        db_dsn: Optional[str] = None,          # "memory://"
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["KEYFINDER_VERBOSE"] = "1"

        roots = list(roots)
        if not roots:
            raise ValueError("build(): at least one root folder is required")

        log.info("Loading corpus from %s", roots)
        corpus: Corpus = load_corpus(roots)

        dsn = db_dsn or "memory://"
        log.info("Initializing document store: %s", dsn)
        self._store = make_store(dsn, corpus=corpus)
        self._suggestions = SuggestionEngine()
        log.info("Engine build() complete: documents=%d", self._store.count())

    # /* ~~~ Start from an empty corpus (documents added one by one) ~~~ */
    def open(self, *, db_dsn: Optional[str] = None) -> None:
        self._store = make_store(db_dsn or "memory://")
        self._suggestions = SuggestionEngine()

    # ------------- corpus edits -------------

    def add_document(self, doc_id: str, text: str) -> None:
        store = self._require_store()
        store.create(Document.from_text(doc_id, text))
        self._suggestions.invalidate()

    def remove_document(self, doc_id: str) -> None:
        store = self._require_store()
        store.delete(doc_id)
        self._suggestions.invalidate()

    @property
    def corpus(self) -> Corpus:
        return self._require_store().corpus()

    # ------------- query -------------

    def find(self, path: str) -> List[SearchResult]:
        return resolve(self.corpus, path)

    def is_full_path(self, candidate: str) -> bool:
        return find_root_anchored_path(self.corpus, candidate) is not None

    def suggest(self, partial: str) -> List[str]:
        return self._suggestions.suggest(self.corpus, partial)

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self._suggestions.invalidate()
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require_store(self) -> DocumentStore:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call build() or open() first.")
        return self._store
