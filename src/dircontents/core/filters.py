# src/dircontents/core/filters.py
from pathlib import PurePosixPath
from typing import Optional

from dircontents.core.ignore import compile_ignore_spec
from dircontents.models import ExclusionConfig


def file_extension(name: str) -> Optional[str]:
    """Text after the last '.', or None for no extension or a trailing dot."""
    dot = name.rfind(".")
    if dot == -1 or dot == len(name) - 1:
        return None
    return name[dot + 1:]


class ExclusionFilter:
    """Name-based exclusion predicates driven by an ExclusionConfig."""

    def __init__(self, config: ExclusionConfig):
        self.config = config
        self._spec = compile_ignore_spec(config.ignore_patterns)

    def should_exclude_dir(self, name: str) -> bool:
        return name in self.config.excluded_dirs

    def is_ignored_dir(self, rel_path: str) -> bool:
        """True when an ignore pattern drops the directory, line included."""
        if self._spec is None or not rel_path:
            return False
        return self._spec.match_file(rel_path + "/")

    def should_exclude_file(self, rel_path: str) -> bool:
        name = PurePosixPath(rel_path).name
        if name in self.config.excluded_files:
            return True

        ext = file_extension(name)
        if ext is not None and ext in self.config.excluded_extensions:
            return True

        if self._spec is not None:
            return self._spec.match_file(rel_path)
        return False
