from __future__ import annotations

# separator between path segments: "root.child.property"
PATH_SEPARATOR: str = "."

# suggestions are not offered for a single keystroke
MIN_SUGGEST_CHARS: int = 2

# preview rendering for search results
PREVIEW_MAX_CHARS: int = 50
OBJECT_PLACEHOLDER: str = "{ ... }"

# file types to include
INCLUDE_EXTS = [".json"]

# folders to skip
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}

ENCODING: str = "utf-8"

# parser nesting guard
MAX_DEPTH: int = 256
