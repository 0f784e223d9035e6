# src/dircontents/core/ignore.py
import sys
from pathlib import Path
from typing import Iterable, List, Optional

import pathspec


def load_ignore_patterns(ignore_file: Path) -> List[str]:
    """
    Reads gitignore-style patterns from an ignore file.
    A missing or unreadable file yields no patterns and a warning.
    """
    if not ignore_file.is_file():
        print(f"Warning: Ignore file '{ignore_file}' not found, no patterns loaded.", file=sys.stderr)
        return []

    try:
        with open(ignore_file, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Warning: Could not read ignore file '{ignore_file}': {e}", file=sys.stderr)
        return []

    return [line for line in lines if line.strip() and not line.lstrip().startswith("#")]


def compile_ignore_spec(patterns: Iterable[str]) -> Optional[pathspec.PathSpec]:
    """
    Builds a PathSpec from the patterns, or None when there is nothing to match.
    Unparsable rules are reported and dropped as a whole.
    """
    lines = list(patterns)
    if not lines:
        return None

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except Exception as e:
        print(f"Warning: Error parsing ignore rules: {e}", file=sys.stderr)
        return None
