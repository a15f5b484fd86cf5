# src/keyfinder/validator.py
"""
Decide whether an arbitrary string is a real, root-anchored path.

Stricter than resolve(): besides descending every segment from depth 0, the
path rebuilt from the names walked must equal the candidate exactly, which
rejects degenerate inputs such as a leading separator.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .models import Document
from .traversal import descend, read_roots, require, root_property_names, split_path

log = logging.getLogger(__name__)


def find_root_anchored_path(corpus: Iterable[Document], candidate: str) -> Optional[str]:
    """Return candidate when it is a complete path in at least one document, else None."""
    require(corpus, candidate, "candidate")

    segments = split_path(candidate)
    roots = read_roots(corpus)

    if segments[0] not in root_property_names(roots):
        log.debug("First part %r is not a root property in any document", segments[0])
        return None

    for doc, root in roots:
        hit = descend(root, segments)
        if hit is None:
            continue
        _, path = hit
        if path == candidate:
            log.debug("Found valid complete path %r in %s", candidate, doc.doc_id)
            return candidate

    log.debug("No valid complete path found for %r", candidate)
    return None


def is_full_path(corpus: Iterable[Document], candidate: str) -> bool:
    return find_root_anchored_path(corpus, candidate) is not None
