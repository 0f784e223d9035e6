# src/dircontents/core/walker.py
import os
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from dircontents.core.filters import ExclusionFilter
from dircontents.models import EntryKind, ExclusionConfig, TraversalFrame, WalkEntry


def printable_name(name: str) -> str:
    """Undecodable bytes in a filename become U+FFFD so the report stays valid UTF-8."""
    return os.fsencode(name).decode("utf-8", "replace")


def join_rel(parent: str, name: str) -> str:
    name = printable_name(name)
    return f"{parent}/{name}" if parent else name


def display_rel(rel_path: str) -> str:
    """Root-relative path as printed; the root itself shows as '.'."""
    return rel_path or "."


class TreeWalker:
    """
    Explicit-stack traversal of a single root.

    Iterating yields WalkEntry values: each directory's children in sorted
    relative-path order, then its subdirectories expanded in the same order.
    The walker can be iterated any number of times; each pass re-lists the
    filesystem.
    """

    def __init__(self, root: Union[str, Path], config: ExclusionConfig):
        self.root = Path(root)
        self.config = config
        self.exclusion = ExclusionFilter(config)

    def __iter__(self) -> Iterator[WalkEntry]:
        return self.walk()

    def _list_children(self, frame: TraversalFrame) -> List[os.DirEntry]:
        with os.scandir(frame.abs_dir) as it:
            children = list(it)
        children.sort(key=lambda entry: join_rel(frame.rel_path, entry.name))
        return children

    def walk(self) -> Iterator[WalkEntry]:
        stack: List[TraversalFrame] = [TraversalFrame(rel_path="", abs_dir=self.root)]

        while stack:
            frame = stack.pop()
            # Checked as each directory is entered; the root is never tested
            if frame.rel_path and self.exclusion.should_exclude_dir(frame.abs_dir.name):
                yield WalkEntry(EntryKind.EXCLUDED_DIR, frame.rel_path, frame.abs_dir)
                continue

            try:
                children = self._list_children(frame)
            except PermissionError:
                yield WalkEntry(EntryKind.PERMISSION_DENIED, frame.rel_path, frame.abs_dir)
                continue
            except OSError as e:
                # Root listing failures belong to produce_report
                if not frame.rel_path:
                    raise
                print(f"Warning: Skipping directory {frame.rel_path} ({e})", file=sys.stderr)
                continue

            subdirs: List[TraversalFrame] = []
            for child in children:
                rel_path = join_rel(frame.rel_path, child.name)
                abs_path = Path(child.path)

                try:
                    is_dir = child.is_dir()
                except OSError:
                    # Reported by the packer when it fails to stat the file
                    is_dir = False

                if is_dir:
                    if self.exclusion.is_ignored_dir(rel_path):
                        yield WalkEntry(EntryKind.EXCLUDED_DIR, rel_path, abs_path)
                        continue
                    yield WalkEntry(EntryKind.DIRECTORY, rel_path, abs_path)
                    subdirs.append(TraversalFrame(rel_path=rel_path, abs_dir=abs_path))
                elif self.exclusion.should_exclude_file(rel_path):
                    yield WalkEntry(EntryKind.EXCLUDED_FILE, rel_path, abs_path)
                else:
                    yield WalkEntry(EntryKind.FILE, rel_path, abs_path)

            # Reversed so the smallest path is popped first
            stack.extend(reversed(subdirs))


def render_structure(entries: Iterable[WalkEntry]) -> str:
    lines = []
    for entry in entries:
        if entry.kind is EntryKind.DIRECTORY:
            lines.append(f"{entry.rel_path}/\n")
        elif entry.kind is EntryKind.FILE:
            lines.append(f"{entry.rel_path}\n")
        elif entry.kind is EntryKind.PERMISSION_DENIED:
            lines.append(f"{display_rel(entry.rel_path)}: Permission denied\n")
    return "".join(lines)


def walk_structure(root: Union[str, Path], config: ExclusionConfig) -> str:
    """Structure lines for one root, without the section title."""
    return render_structure(TreeWalker(root, config))
