from __future__ import annotations
import logging
import os
from typing import Iterable, List, Tuple
from .models import Corpus, Document
from .errors import JsonParseError
from .parser import parse
from .config import ENCODING, EXCLUDE_DIRS, INCLUDE_EXTS

log = logging.getLogger(__name__)

# Progress logging (set KEYFINDER_VERBOSE=1 to enable)
VERBOSE = os.environ.get("KEYFINDER_VERBOSE") == "1"
PROGRESS_EVERY_FILES = 500


def _iter_json_files(roots: Iterable[str]) -> Iterable[Tuple[str, str]]:
    """Yield (root, path) for every *.json file recursively under each root, in a stable order."""
    exts = tuple(e.lower() for e in INCLUDE_EXTS)
    for root in roots:
        root = os.path.abspath(root)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDE_DIRS)
            for fn in sorted(filenames):
                if fn.lower().endswith(exts):
                    yield root, os.path.join(dirpath, fn)


def _rel_to_any_root(path: str, roots_abs: List[str]) -> str:
    """Return the shortest relative path to any of the given absolute roots."""
    best = path
    for r in roots_abs:
        try:
            rel = os.path.relpath(path, r)
            if len(rel) < len(best):
                best = rel
        except ValueError:
            pass
    return best.replace("\\", "/")


def parse_document(doc_id: str, text: str) -> Document:
    """Parse eagerly; raises JsonParseError when text is not valid JSON."""
    return Document(doc_id, root=parse(text), source=text)


def load_documents(items: Iterable[Tuple[str, str]]) -> Corpus:
    """Build a Corpus from (doc_id, text) pairs; documents that do not parse are left out."""
    corpus = Corpus()
    for doc_id, text in items:
        try:
            corpus.add(parse_document(doc_id, text))
        except JsonParseError as exc:
            log.warning("Excluding %s: %s", doc_id, exc)
    return corpus


def load_corpus(roots: List[str]) -> Corpus:
    """
    Scan roots for *.json and build a Corpus.
    Document ids are paths relative to the closest root, with '/' separators.
    """
    corpus = Corpus()
    roots_abs = [os.path.abspath(p) for p in roots]

    file_count = 0
    for _, path in _iter_json_files(roots):
        rel = _rel_to_any_root(path, roots_abs)
        try:
            with open(path, "r", encoding=ENCODING, errors="replace") as f:
                text = f.read()
        except OSError as exc:
            log.warning("Excluding %s: %s", rel, exc)
            continue

        try:
            corpus.add(parse_document(rel, text))
        except JsonParseError as exc:
            log.warning("Excluding %s: %s", rel, exc)
            continue

        file_count += 1
        if VERBOSE and file_count % PROGRESS_EVERY_FILES == 0:
            log.info("[scanned] files=%s", f"{file_count:,}")

    log.info("[done] documents=%s", f"{file_count:,}")
    return corpus
