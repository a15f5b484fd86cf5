# keyfinder/DB/memory_store.py
from __future__ import annotations
from typing import Iterable, Iterator, List, Optional
from .api import DocumentStore
from ..models import Corpus, Document


class MemoryStore(DocumentStore):
    """In-memory CRUD over a Corpus; every write bumps the corpus generation."""
    def __init__(self, corpus: Optional[Corpus] = None) -> None:
        self._corpus = corpus if corpus is not None else Corpus()

    # C
    def create(self, doc: Document) -> None:
        self._corpus.add(doc)

    def bulk_create(self, items: Iterable[Document]) -> int:
        n = 0
        for doc in items:
            self._corpus.add(doc); n += 1
        return n

    # R
    def read(self, doc_id: str) -> Document:
        doc = self._corpus.get(doc_id)
        if doc is None:
            raise KeyError(doc_id)
        return doc

    def read_many(self, ids: Iterable[str]) -> Iterator[Document]:
        for doc_id in ids:
            doc = self._corpus.get(doc_id)
            if doc is not None:
                yield doc

    def ids(self) -> List[str]:
        return [doc.doc_id for doc in self._corpus]

    def count(self) -> int:
        return len(self._corpus)

    def corpus(self) -> Corpus:
        return self._corpus

    # U
    def update(self, doc_id: str, *, text: str) -> None:
        self.read(doc_id)
        self._corpus.add(Document.from_text(doc_id, text))

    # D
    def delete(self, doc_id: str) -> None:
        self._corpus.remove(doc_id)

    def close(self) -> None:
        self._corpus.clear()
