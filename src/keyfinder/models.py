# src/keyfinder/models.py
"""
Data models for the key finder.

- JsonObject / JsonArray / JsonScalar: the parsed JSON tree. Each value keeps
  the source offsets it was read from so results can point back at a line.
- JsonProperty: one (name, value, offset) member of an object.
- Document: one JSON source unit, keyed by a document id.
- Corpus: the ordered collection of documents searched by the core.
- SearchResult: the exact result object returned to callers.

These classes do not search anything; they only structure the data so that
resolving, validating and suggesting stay simple and predictable.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from .config import OBJECT_PLACEHOLDER
from .errors import DocumentUnavailable, JsonParseError


@dataclass(slots=True)
class JsonProperty:
    """
    One member of a JSON object.

    Attributes
    ----------
    name : str
        Decoded property name.
    value : JsonValue
        The member's value.
    offset : int
        Character offset of the name token (opening quote) in the source.
    """
    name: str
    value: "JsonValue"
    offset: int


@dataclass(slots=True)
class JsonObject:
    # insertion order of first occurrence; a duplicate key replaces the value
    properties: Dict[str, JsonProperty] = field(default_factory=dict)
    start: int = 0
    end: int = 0

    def get(self, name: str) -> Optional[JsonProperty]:
        return self.properties.get(name)

    def __iter__(self) -> Iterator[JsonProperty]:
        return iter(self.properties.values())

    def __len__(self) -> int:
        return len(self.properties)


@dataclass(slots=True)
class JsonArray:
    items: List["JsonValue"] = field(default_factory=list)
    start: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class JsonScalar:
    """
    A string, number, boolean or null.

    kind is one of "string", "number", "boolean", "null"; value is the decoded
    Python value and text the raw token exactly as written in the source.
    """
    kind: str
    value: Any
    text: str
    start: int = 0
    end: int = 0


JsonValue = Union[JsonObject, JsonArray, JsonScalar]


def _line_starts(text: str) -> List[int]:
    starts = [0]
    for i, ch in enumerate(text):
        if ch == "\n":
            starts.append(i + 1)
    return starts


def _render(value: JsonValue) -> str:
    """Compact text for a value that has no source to slice from."""
    if isinstance(value, JsonScalar):
        return value.text
    if isinstance(value, JsonArray):
        return "[" + ", ".join(_render(item) for item in value.items) + "]"
    return OBJECT_PLACEHOLDER


class Document:
    """
    One JSON source unit.

    A document is either built around an already parsed root, or around raw
    source text that is parsed on first access to ``root``. A document whose
    text does not parse raises DocumentUnavailable from ``root``; callers in
    the search core skip such documents.
    """

    __slots__ = ("doc_id", "source", "_root", "_error", "_line_starts")

    def __init__(self, doc_id: str, root: Optional[JsonValue] = None, source: str = "") -> None:
        self.doc_id = doc_id
        self.source = source
        self._root = root
        self._error: Optional[str] = None
        self._line_starts: Optional[List[int]] = None

    @classmethod
    def from_text(cls, doc_id: str, text: str) -> "Document":
        return cls(doc_id, root=None, source=text)

    @property
    def root(self) -> JsonValue:
        if self._root is None:
            if self._error is not None:
                raise DocumentUnavailable(self.doc_id, self._error)
            from .parser import parse  # parser builds model objects
            try:
                self._root = parse(self.source)
            except JsonParseError as exc:
                self._error = str(exc)
                raise DocumentUnavailable(self.doc_id, self._error) from exc
        return self._root

    def line_of(self, offset: int) -> int:
        """Map a character offset to a 1-based line number."""
        if self._line_starts is None:
            self._line_starts = _line_starts(self.source)
        return bisect.bisect_right(self._line_starts, max(0, offset))

    def text_of(self, value: JsonValue) -> str:
        """Raw source text of a value, as written; rebuilt from the tree when there is no source."""
        if isinstance(value, JsonScalar):
            return value.text
        if self.source:
            return self.source[value.start:value.end]
        return _render(value)

    def __repr__(self) -> str:
        return f"Document({self.doc_id!r})"


@dataclass(slots=True)
class Corpus:
    """
    The documents in scope for one search session.

    Attributes
    ----------
    documents : List[Document]
        Documents in insertion order; this is the iteration order of every
        search.
    generation : int
        Bumped on every change; suggestion caches compare it to know when
        their entries went stale.
    """
    documents: List[Document] = field(default_factory=list)
    generation: int = 0

    def add(self, doc: Document) -> None:
        # re-adding an id replaces the old document in place
        for i, cur in enumerate(self.documents):
            if cur.doc_id == doc.doc_id:
                self.documents[i] = doc
                break
        else:
            self.documents.append(doc)
        self.generation += 1

    def remove(self, doc_id: str) -> bool:
        for i, cur in enumerate(self.documents):
            if cur.doc_id == doc_id:
                del self.documents[i]
                self.generation += 1
                return True
        return False

    def get(self, doc_id: str) -> Optional[Document]:
        for doc in self.documents:
            if doc.doc_id == doc_id:
                return doc
        return None

    def clear(self) -> None:
        self.documents.clear()
        self.generation += 1

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)


@dataclass(frozen=True, slots=True)
class SearchResult:
    """
    One location where a dotted path occurs.

    Attributes
    ----------
    document_id : str
        Id of the document the path was found in.
    path : str
        The fully resolved dotted path.
    preview : str
        "name: value" (value truncated) or "name: { ... }" for objects.
    line_no : int
        1-based line of the property's name token.
    """
    document_id: str
    path: str
    preview: str
    line_no: int
