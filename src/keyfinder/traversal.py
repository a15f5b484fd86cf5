# src/keyfinder/traversal.py
"""
Traversal rules shared by the resolver, the validator and the suggestion engine.

A dotted path is descended one segment at a time, looking only at the direct
children of the current object. Arrays and scalars are dead ends: a path may
end on them but never descend through them.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from .config import PATH_SEPARATOR
from .errors import DOCUMENT_ERRORS, InvalidArgument
from .models import Document, JsonObject, JsonProperty, JsonValue

log = logging.getLogger(__name__)

# (document, its root value) for every document that could be read
Roots = List[Tuple[Document, JsonValue]]


def require(corpus: Optional[Iterable[Document]], text: Optional[str], what: str) -> None:
    """Fail fast on invocations that can never be valid."""
    if corpus is None:
        raise InvalidArgument("corpus must not be None")
    if text is None:
        raise InvalidArgument(f"{what} must not be None")
    if not isinstance(text, str):
        raise InvalidArgument(f"{what} must be a str, got {type(text).__name__}")


def split_path(path: str) -> List[str]:
    # empty segments are kept as literal "" names
    return path.split(PATH_SEPARATOR)


def join_path(current: str, name: str) -> str:
    return name if not current else f"{current}{PATH_SEPARATOR}{name}"


def iter_roots(corpus: Iterable[Document]) -> Iterator[Tuple[Document, JsonValue]]:
    """Yield (document, root); a document that cannot yield its root is skipped."""
    for doc in corpus:
        try:
            root = doc.root
        except DOCUMENT_ERRORS as exc:
            log.warning("Skipping document %s: %s", getattr(doc, "doc_id", doc), exc)
            continue
        yield doc, root


def read_roots(corpus: Iterable[Document]) -> Roots:
    return list(iter_roots(corpus))


def root_property_names(roots: Roots) -> Set[str]:
    """Names of every top-level property across the corpus."""
    names: Set[str] = set()
    for _, root in roots:
        if isinstance(root, JsonObject):
            names.update(root.properties)
    return names


def find_property(value: JsonValue, name: str) -> Optional[JsonProperty]:
    """Look up a direct child by name; non-objects have no children."""
    if not isinstance(value, JsonObject):
        return None
    return value.get(name)


def descend(root: JsonValue, segments: List[str]) -> Optional[Tuple[JsonProperty, str]]:
    """
    Walk segments from the root.

    Returns the terminal property and the path rebuilt from the names walked,
    or None when a segment is missing or a non-terminal segment is not an
    object.
    """
    if not isinstance(root, JsonObject) or not segments:
        return None
    current: JsonValue = root
    path = ""
    prop: Optional[JsonProperty] = None
    last = len(segments) - 1
    for i, part in enumerate(segments):
        prop = find_property(current, part)
        if prop is None:
            log.debug("Segment %r not found under %r", part, path)
            return None
        path = join_path(path, prop.name)
        if i < last:
            if not isinstance(prop.value, JsonObject):
                log.debug("Property %r is not an object, cannot descend", path)
                return None
            current = prop.value
    return prop, path
