# src/keyfinder/suggest.py
"""
Incremental path suggestions.

Two modes, chosen by whether the partial text contains a separator:

- keyword ("user"):   every complete path in the corpus that contains the
                      keyword anywhere, case-insensitively;
- prefix ("app.us"):  every path below the parent prefix ("app") that starts
                      with the partial text, case-insensitively.

The set of paths below a parent prefix is computed once per session and kept
in a cache, so each keystroke that shares the prefix only filters and sorts.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

from .config import MIN_SUGGEST_CHARS, PATH_SEPARATOR
from .models import Document, JsonObject
from .traversal import find_property, iter_roots, join_path, require, split_path

log = logging.getLogger(__name__)


def _collect_below(obj: JsonObject, current: str, out: Set[str]) -> None:
    """Record the path of every property below obj, at every depth."""
    for prop in obj:
        path = join_path(current, prop.name)
        out.add(path)
        if isinstance(prop.value, JsonObject):
            _collect_below(prop.value, path, out)


def collect_paths_for_prefix(corpus: Iterable[Document], prefix: str) -> Set[str]:
    """All complete paths reachable below prefix, across every document."""
    paths: Set[str] = set()
    parts = split_path(prefix)
    for doc, root in iter_roots(corpus):
        current = root
        path = ""
        for part in parts:
            prop = find_property(current, part)
            if prop is None:
                current = None
                break
            path = join_path(path, prop.name)
            current = prop.value
        if isinstance(current, JsonObject):
            _collect_below(current, path, paths)
    return paths


def collect_all_paths(corpus: Iterable[Document]) -> Set[str]:
    paths: Set[str] = set()
    for _, root in iter_roots(corpus):
        if isinstance(root, JsonObject):
            _collect_below(root, "", paths)
    return paths


class SuggestionEngine:
    """
    Suggestion session with a prefix cache.

    Construct one per interactive session and drop it when the session ends.
    The cache only grows; it is cleared wholesale by invalidate(), or when it is
    handed a different corpus, or the same corpus at a different ``generation``
    than the one it was filled from.
    Not thread-safe: concurrent sessions need their own instance.
    """

    def __init__(self) -> None:
        self._cache: Dict[str, Set[str]] = {}
        self._all_paths: Optional[Set[str]] = None
        self._corpus: Optional[Iterable[Document]] = None
        self._generation: Optional[int] = None

    # ------------- cache -------------

    def invalidate(self) -> None:
        self._cache.clear()
        self._all_paths = None
        self._corpus = None
        self._generation = None
        log.debug("Suggestion cache invalidated")

    def cached_prefixes(self) -> List[str]:
        return sorted(self._cache)

    def _sync(self, corpus: Iterable[Document]) -> None:
        # entries belong to one corpus object at one generation
        generation = getattr(corpus, "generation", None)
        if corpus is not self._corpus or generation != self._generation:
            if self._corpus is not None:
                self.invalidate()
            self._corpus = corpus
            self._generation = generation

    def paths_for_prefix(self, corpus: Iterable[Document], prefix: str) -> Set[str]:
        """Cached prefix set; an unresolvable prefix is cached as empty."""
        self._sync(corpus)
        paths = self._cache.get(prefix)
        if paths is None:
            paths = collect_paths_for_prefix(corpus, prefix)
            self._cache[prefix] = paths
            log.debug("Cached %d paths under %r", len(paths), prefix)
        return paths

    def all_paths(self, corpus: Iterable[Document]) -> Set[str]:
        self._sync(corpus)
        if self._all_paths is None:
            self._all_paths = collect_all_paths(corpus)
            log.debug("Cached %d paths for keyword search", len(self._all_paths))
        return self._all_paths

    # ------------- query -------------

    def suggest(self, corpus: Iterable[Document], partial: str) -> List[str]:
        require(corpus, partial, "partial")
        log.info("Getting suggestions for: %s", partial)

        if len(partial) < MIN_SUGGEST_CHARS:
            log.debug("Partial key too short, returning empty list")
            return []

        needle = partial.casefold()
        if PATH_SEPARATOR in partial:
            parent = partial.rsplit(PATH_SEPARATOR, 1)[0]
            candidates = self.paths_for_prefix(corpus, parent)
            return sorted(p for p in candidates if p.casefold().startswith(needle))

        return sorted(p for p in self.all_paths(corpus) if needle in p.casefold())


def suggest(corpus: Iterable[Document], partial: str) -> List[str]:
    """One-shot suggestions without a session cache."""
    return SuggestionEngine().suggest(corpus, partial)
