# src/dircontents/core/report.py
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from dircontents.core.packer import ContentPacker
from dircontents.core.walker import TreeWalker, render_structure
from dircontents.models import ExclusionConfig

BANNER = "=" * 64

HEADER_TEMPLATE = """{banner}
DIRCONTENTS OUTPUT FILE
{banner}

This file was generated by dircontents on: {timestamp}

Processed roots:
{roots}

Purpose:
--------
This file contains a packed representation of the entire repository's contents.
It is designed to be easily consumable by AI systems for analysis, code review,
or other automated processes.

File Format:
------------
The content is organized as follows:
1. This header section
2. Multiple file entries, each consisting of:
   a. A separator line (================)
   b. The file path (File: path/to/file)
   c. Another separator line
   d. The full contents of the file
   e. A blank line

Usage Guidelines:
-----------------
1. This file should be treated as read-only. Any changes should be made to the
   original repository files, not this packed version.
2. When processing this file, use the separators and "File:" markers to
   distinguish between different files in the repository.
3. Be aware that this file may contain sensitive information. Handle it with
   the same level of security as you would the original repository.

Notes:
------
- Some files may have been excluded based on dircontents's configuration.
- Binary files are not included in this packed representation.


{banner}
Repository Files
{banner}

"""

INSTRUCTION_STEPS = [
    "Read the README file to gain an overview of the project, its goals, and any setup instructions.",
    "Examine the directory structure to understand how the files and directories are organized.",
    "Identify the main entry point of the application (e.g., main.py, app.py, index.js) "
    "and start analyzing the code flow from there.",
    "Study the dependencies and libraries used in the project to understand the external tools "
    "and frameworks being utilized.",
    "Analyze the core functionality of the project by examining the key modules, classes, and functions.",
    "Look for any configuration files (e.g., config.py, .env) to understand how the project is "
    "configured and what settings are available.",
    "Investigate any tests or test directories to see how the project ensures code quality "
    "and handles different scenarios.",
    "Review any documentation or inline comments to gather insights into the codebase "
    "and its intended behavior.",
    "Identify any potential areas for improvement, optimization, or further exploration "
    "based on your analysis.",
    "Provide a summary of your findings, including the project's purpose, key features, "
    "and any notable observations or recommendations.",
]


def root_name(root: Path) -> str:
    """Final segment of the resolved root, falling back to the full path for '/'."""
    resolved = root.resolve()
    return resolved.name or str(resolved)


def render_header(roots: Sequence[Path], generated_at: datetime) -> str:
    return HEADER_TEMPLATE.format(
        banner=BANNER,
        timestamp=generated_at.isoformat(),
        roots="\n".join(f"- {root}" for root in roots),
    )


def render_instructions(roots: Sequence[Path]) -> str:
    names = ", ".join(root_name(root) for root in roots)
    noun = "directory" if len(roots) == 1 else "directories"
    lines = [
        f"Prompt: Analyze the {names} {noun} to understand its structure, purpose, and functionality. "
        "Follow these steps to study the contents:\n\n"
    ]
    for i, step in enumerate(INSTRUCTION_STEPS, start=1):
        lines.append(f"{i}. {step}\n\n")
    lines.append("Use the files and contents provided below to complete this analysis:\n\n")
    return "".join(lines)


def validate_root(root: Path) -> bool:
    """Reports and rejects roots that are missing, not directories, or unreadable."""
    if not root.exists():
        print(f"Error: Root '{root}' does not exist, skipping.", file=sys.stderr)
        return False
    if not root.is_dir():
        print(f"Error: Root '{root}' is not a directory, skipping.", file=sys.stderr)
        return False
    if not os.access(root, os.R_OK | os.X_OK):
        print(f"Error: Root '{root}' is not readable, skipping.", file=sys.stderr)
        return False
    return True


def render_root_section(root: Path, config: ExclusionConfig) -> str:
    """
    Structure and content sections for one root, from a single listing.
    OSError propagates if the root itself cannot be listed.
    """
    entries = list(TreeWalker(root, config))
    structure = render_structure(entries)
    contents = ContentPacker(config).pack(entries)
    return f"Directory Structure: {root_name(root)}\n{structure}\n\n{contents}"


def produce_report(
    roots: Sequence[Union[str, Path]],
    config: ExclusionConfig,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Packs every root, in the given order, into one report.

    Invalid or vanished roots are skipped with a diagnostic. Returns an empty
    string when no root could be processed; the header and instructions are
    only emitted when at least one section exists.
    """
    processed: List[Path] = []
    sections: List[str] = []

    for raw_root in roots:
        root = Path(raw_root)
        if not validate_root(root):
            continue
        try:
            sections.append(render_root_section(root, config))
        except OSError as e:
            print(f"Error: Could not process root '{root}': {e}", file=sys.stderr)
            continue
        processed.append(root)

    if not processed:
        return ""

    if generated_at is None:
        generated_at = datetime.now(timezone.utc)

    return render_header(processed, generated_at) + render_instructions(processed) + "".join(sections)
