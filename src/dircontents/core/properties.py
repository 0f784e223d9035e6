# src/dircontents/core/properties.py
import sys
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List

from dircontents.config import DEFAULT_MAX_FILE_SIZE, PROPERTY_KEYS
from dircontents.models import ExclusionConfig


def _logical_lines(lines: Iterable[str]) -> List[str]:
    """Joins backslash-continued lines, dropping blanks and comments."""
    result = []
    pending = ""
    for raw in lines:
        line = raw.strip() if not pending else raw.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue

        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue

        result.append(pending + line)
        pending = ""

    if pending:
        result.append(pending)
    return result


def parse_properties(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parses properties-file text into a dict.
    Keys end at the first unescaped '=', ':' or whitespace.
    """
    props: Dict[str, str] = {}
    for line in _logical_lines(lines):
        key_end = len(line)
        for i, ch in enumerate(line):
            if ch in "=: \t" and (i == 0 or line[i - 1] != "\\"):
                key_end = i
                break

        key = line[:key_end].replace("\\", "")
        rest = line[key_end:].lstrip()
        if rest[:1] in ("=", ":"):
            rest = rest[1:].lstrip()
        props[key] = rest
    return props


def split_values(raw: str) -> FrozenSet[str]:
    """Comma-separated values, trimmed, empties dropped."""
    return frozenset(value.strip() for value in raw.split(",") if value.strip())


def config_from_properties(props: Dict[str, str]) -> ExclusionConfig:
    max_file_size = DEFAULT_MAX_FILE_SIZE
    raw_size = props.get(PROPERTY_KEYS["max_file_size"])
    if raw_size is not None:
        try:
            max_file_size = int(raw_size.strip())
            if max_file_size < 0:
                raise ValueError("size must not be negative")
        except ValueError as e:
            print(
                f"Warning: Invalid {PROPERTY_KEYS['max_file_size']} '{raw_size}' ({e}), "
                f"using default {DEFAULT_MAX_FILE_SIZE}.",
                file=sys.stderr,
            )
            max_file_size = DEFAULT_MAX_FILE_SIZE

    return ExclusionConfig(
        max_file_size=max_file_size,
        excluded_dirs=split_values(props.get(PROPERTY_KEYS["excluded_dirs"], "")),
        excluded_extensions=split_values(props.get(PROPERTY_KEYS["excluded_extensions"], "")),
        excluded_files=split_values(props.get(PROPERTY_KEYS["excluded_files"], "")),
    )


def load_properties(properties_file: Path) -> ExclusionConfig:
    """
    Loads an ExclusionConfig from a properties file.
    Any problem with the file falls back to defaults; the run always proceeds.
    """
    if not properties_file.is_file():
        print("Properties file not found. Using default values.")
        return ExclusionConfig()

    try:
        with open(properties_file, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Warning: Could not read properties file '{properties_file}': {e}", file=sys.stderr)
        return ExclusionConfig()

    return config_from_properties(parse_properties(lines))
