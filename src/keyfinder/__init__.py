"""
JSON Key Finder

Finds dotted key paths (``root.child.property``) across a collection of JSON
documents and suggests completions while a path is being typed.

The package is split by concern:
- JSON parsing with source offsets (parser, models)
- Corpus loading and storage (loader, DB)
- Path resolution, validation and suggestions (resolver, validator, suggest)
- Orchestration for the CLI and web front ends (engine)

Main Functions:
    load_corpus(roots): Load every *.json file under the given folders
    resolve(corpus, path): Every location where an exact path occurs
    is_full_path(corpus, candidate): Whether a string is a real root-anchored path
    suggest(corpus, partial): Sorted completions for a partial path

Example Usage:
    from keyfinder import load_corpus, resolve, SuggestionEngine

    corpus = load_corpus(["/path/to/project"])
    for hit in resolve(corpus, "app.settings.theme"):
        print(f"{hit.document_id}:{hit.line_no}  {hit.preview}")

    session = SuggestionEngine()
    session.suggest(corpus, "app.se")
"""

# src/keyfinder/__init__.py
from .engine import Engine
from .loader import load_corpus, load_documents
from .models import Corpus, Document, SearchResult
from .resolver import resolve
from .suggest import SuggestionEngine, suggest
from .validator import find_root_anchored_path, is_full_path

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "Corpus",
    "Document",
    "SearchResult",
    "SuggestionEngine",
    "load_corpus",
    "load_documents",
    "resolve",
    "is_full_path",
    "find_root_anchored_path",
    "suggest",
]
