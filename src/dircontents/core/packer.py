# src/dircontents/core/packer.py
from pathlib import Path
from typing import Iterable, Union

from dircontents.config import SEPARATOR
from dircontents.core.sniffer import is_binary
from dircontents.core.walker import TreeWalker, display_rel
from dircontents.models import EntryKind, ExclusionConfig, FileRecord, WalkEntry

MEBIBYTE = 1024 * 1024


def format_mebibytes(size_bytes: int) -> str:
    return f"{size_bytes / MEBIBYTE:.2f} MB"


class ContentPacker:
    """Turns included files into content blocks separated by SEPARATOR lines."""

    def __init__(self, config: ExclusionConfig):
        self.config = config

    def _block_header(self, rel_path: str) -> str:
        return f"{SEPARATOR}\nFile: {rel_path}\n{SEPARATOR}\n"

    def _block_body(self, abs_path: Path, rel_path: str) -> str:
        try:
            size = abs_path.stat().st_size
            if size > self.config.max_file_size:
                return (
                    f"Content: Skipped (file size: {format_mebibytes(size)}, "
                    f"max allowed: {format_mebibytes(self.config.max_file_size)})\n\n"
                )

            record = FileRecord(rel_path, abs_path, size, is_binary(abs_path))
            if record.is_binary:
                return "Content: Skipped binary file\n\n"

            content = record.abs_path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return f"Content: Skipped due to error: {e}\n\n"

        return f"Content:\n{content}\n\n"

    def format_block(self, entry: WalkEntry) -> str:
        """Content block for a FILE entry, placeholder for a denied directory."""
        if entry.kind is EntryKind.PERMISSION_DENIED:
            return f"{display_rel(entry.rel_path)}: Permission denied\n\n"
        if entry.kind is EntryKind.FILE:
            return self._block_header(entry.rel_path) + self._block_body(entry.abs_path, entry.rel_path)
        return ""

    def pack(self, entries: Iterable[WalkEntry]) -> str:
        return "".join(self.format_block(entry) for entry in entries)


def pack_contents(root: Union[str, Path], config: ExclusionConfig) -> str:
    """Content blocks for one root, in walk order."""
    return ContentPacker(config).pack(TreeWalker(root, config))
