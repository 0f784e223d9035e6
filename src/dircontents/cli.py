# src/dircontents/cli.py
import sys
import argparse
import os
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

# Module imports
from dircontents.config import DEFAULT_PROPERTIES_FILE, OUTPUT_SUFFIX
from dircontents.core.ignore import load_ignore_patterns
from dircontents.core.properties import load_properties
from dircontents.core.report import produce_report, root_name
from dircontents.utils.tokenizer import Tokenizer

def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Pack one or more directory trees (structure and file contents) into a single text file."
    )
    parser.add_argument(
        "roots",
        type=str,
        nargs="*",
        default=[os.getcwd()],
        help="Root directories, processed in the given order (default: current directory)",
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        default=DEFAULT_PROPERTIES_FILE,
        help=f"Properties file with exclusion settings (default: {DEFAULT_PROPERTIES_FILE})",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output filename, relative to the first root (default: {folder_name}_contents.txt)",
    )
    parser.add_argument("--ignore-file", type=str, default=None, help="Extra gitignore-style ignore file")
    parser.add_argument("-y", "--yes", action="store_true", help="Overwrite an existing output file without asking")
    return parser

def get_default_output_name(root_dir: Path) -> str:
    """Generates a dynamic filename based on the directory name."""
    safe_name = root_name(root_dir).strip("/\\").replace(" ", "_") or "project"
    return f"{safe_name}{OUTPUT_SUFFIX}"

def confirm_overwrite(output_file: Path) -> bool:
    choice = input(f"> '{output_file}' already exists. Overwrite? (y/N): ").strip().lower()
    return choice == "y"

def main(argv: Optional[List[str]] = None):
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args(argv)

        roots = [Path(r).resolve() for r in args.roots]
        valid_roots = [r for r in roots if r.is_dir()]
        if not valid_roots:
            print("Error: None of the specified roots is an existing directory.", file=sys.stderr)
            sys.exit(1)

        first_root = valid_roots[0]
        output_file_name = args.output or get_default_output_name(first_root)
        output_file = first_root / output_file_name

        # 2. Configuration
        config = load_properties(Path(args.config))
        if args.ignore_file:
            config = replace(config, ignore_patterns=load_ignore_patterns(Path(args.ignore_file)))
        # Never pack a previous run's artifact
        config = config.with_excluded_files([output_file.name])

        print(f"--- dircontents ---")
        for root in roots:
            print(f"Root:     {root}")
        print(f"Output:   {output_file}")
        print(f"Max size: {config.max_file_size} bytes")

        if output_file.exists() and not args.yes:
            if not confirm_overwrite(output_file):
                print("Cancelled. Existing file left untouched.")
                return

        # 3. Packing (invalid roots are reported and skipped by the engine)
        report = produce_report(roots, config)
        if not report:
            print("Error: No root could be processed.", file=sys.stderr)
            sys.exit(1)

        # 4. Output (the previous artifact is only replaced once the new one is on disk)
        data = report.encode("utf-8", errors="replace")
        tmp_file = output_file.with_name(output_file.name + ".tmp")
        try:
            with open(tmp_file, "wb") as f:
                f.write(data)
            os.replace(tmp_file, output_file)
        except OSError as e:
            print(f"Error writing file: {e}", file=sys.stderr)
            if tmp_file.exists():
                tmp_file.unlink()
            sys.exit(1)

        print(f"\nDirectory contents saved to '{output_file}'.")
        print(f"Estimated tokens: {Tokenizer.count(report)}")

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
