# src/keyfinder/resolver.py
from __future__ import annotations

import logging
from typing import Iterable, List

from .config import OBJECT_PLACEHOLDER, PREVIEW_MAX_CHARS
from .models import Document, JsonObject, JsonProperty, SearchResult
from .traversal import descend, read_roots, require, root_property_names, split_path

log = logging.getLogger(__name__)


def build_preview(doc: Document, prop: JsonProperty) -> str:
    """'name: value' with the value's source text cut to PREVIEW_MAX_CHARS; objects collapse to '{ ... }'."""
    if isinstance(prop.value, JsonObject):
        return f"{prop.name}: {OBJECT_PLACEHOLDER}"
    return f"{prop.name}: {doc.text_of(prop.value)[:PREVIEW_MAX_CHARS]}"


def resolve(corpus: Iterable[Document], dotted_path: str) -> List[SearchResult]:
    """
    Find every document where dotted_path exists, starting at the root.

    Each document contributes at most one result; results follow corpus order.
    Unknown or malformed paths give an empty list.
    """
    require(corpus, dotted_path, "dotted_path")
    log.info("Starting search for key: %s", dotted_path)

    segments = split_path(dotted_path)
    roots = read_roots(corpus)

    # corpus-wide short-circuit on the first segment
    if segments[0] not in root_property_names(roots):
        log.debug("First part %r is not a root property in any document", segments[0])
        return []

    results: List[SearchResult] = []
    for doc, root in roots:
        if not isinstance(root, JsonObject):
            log.debug("Root value is not an object in %s", doc.doc_id)
            continue
        hit = descend(root, segments)
        if hit is None:
            continue
        prop, path = hit
        line_no = doc.line_of(prop.offset)
        log.debug("Found exact match: %s in %s at line %d", path, doc.doc_id, line_no)
        results.append(SearchResult(
            document_id=doc.doc_id,
            path=path,
            preview=build_preview(doc, prop),
            line_no=line_no,
        ))

    log.info("Search completed. Found %d matches", len(results))
    return results
