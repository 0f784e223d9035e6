# src/dircontents/core/sniffer.py
from pathlib import Path

from dircontents.config import BINARY_SAMPLE_SIZE


def is_binary(path: Path, sample_size: int = BINARY_SAMPLE_SIZE) -> bool:
    """
    Reads the leading bytes and reports binary if any of them is NUL.
    An empty file is text. OSError propagates when the file cannot be opened.
    """
    with path.open("rb") as f:
        chunk = f.read(sample_size)
    return b"\0" in chunk
