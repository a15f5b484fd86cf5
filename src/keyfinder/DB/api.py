# keyfinder/DB/api.py
from __future__ import annotations
from typing import Protocol, Iterable, Iterator, List, Optional

from ..models import Corpus, Document


class DocumentStore(Protocol):
    # Create
    def create(self, doc: Document) -> None: ...
    def bulk_create(self, items: Iterable[Document]) -> int: ...
    # Read
    def read(self, doc_id: str) -> Document: ...
    def read_many(self, ids: Iterable[str]) -> Iterator[Document]: ...
    def ids(self) -> List[str]: ...
    def count(self) -> int: ...
    def corpus(self) -> Corpus: ...
    # Update
    def update(self, doc_id: str, *, text: str) -> None: ...
    # Delete
    def delete(self, doc_id: str) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str, *, corpus: Optional[Corpus] = None) -> DocumentStore:
    """
    Factory:
      - memory:// -> MemoryStore (seeded with corpus when given)
    The corpus is rebuilt from source documents on every run, so there is no
    on-disk store.
    """
    if dsn.startswith("memory://"):
        # Lazy import to avoid a circular import
        from .memory_store import MemoryStore
        return MemoryStore(corpus=corpus)

    raise ValueError(f"Unsupported store DSN: {dsn}")
