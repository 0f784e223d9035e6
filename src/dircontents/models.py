# src/dircontents/models.py
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Iterable, Tuple

from dircontents.config import DEFAULT_MAX_FILE_SIZE


@dataclass(frozen=True)
class ExclusionConfig:
    """Immutable exclusion settings shared by every walk of one run."""
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    excluded_dirs: FrozenSet[str] = field(default_factory=frozenset)
    excluded_extensions: FrozenSet[str] = field(default_factory=frozenset)
    excluded_files: FrozenSet[str] = field(default_factory=frozenset)
    ignore_patterns: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any iterable from callers, store frozen copies
        object.__setattr__(self, "excluded_dirs", frozenset(self.excluded_dirs))
        object.__setattr__(self, "excluded_extensions", frozenset(self.excluded_extensions))
        object.__setattr__(self, "excluded_files", frozenset(self.excluded_files))
        object.__setattr__(self, "ignore_patterns", tuple(self.ignore_patterns))

    def with_excluded_files(self, names: Iterable[str]) -> "ExclusionConfig":
        return replace(self, excluded_files=self.excluded_files | frozenset(names))


@dataclass(frozen=True)
class TraversalFrame:
    """One pending directory on the walk stack."""
    rel_path: str
    abs_dir: Path


class EntryKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"
    EXCLUDED_DIR = "excluded_dir"
    EXCLUDED_FILE = "excluded_file"
    PERMISSION_DENIED = "permission_denied"


@dataclass(frozen=True)
class WalkEntry:
    kind: EntryKind
    rel_path: str
    abs_path: Path


@dataclass(frozen=True)
class FileRecord:
    rel_path: str
    abs_path: Path
    size_bytes: int
    is_binary: bool
