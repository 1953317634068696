"""
cli_entry.py - CLI Entry Point

Subcommands:
- scan: list the files a rename would work on
- replace: find/replace rename
- sequence: sequential numbering rename
- recover: finish renames left at temporary names
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core import (
    FindReplaceParams, IterationParams, RenamePreview, RenameParams,
    RenameToolError, RenameFailedError, scan_directory, plan_previews,
    execute_renames, find_denied, recover_temp_files, PLACEHOLDER,
)

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 20


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="file-rename-plus",
        description="Batch Rename Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List files
  python main.py --cli scan ./photos

  # String replacement
  python main.py --cli replace ./photos --find "IMG" --replace "pic"

  # Regex replacement with a group reference
  python main.py --cli replace ./photos --regex --find "(\\d+)_draft" --replace "final_\\1"

  # Sequential naming
  python main.py --cli sequence ./photos --template "photo_{n}" --start 1 --padding 3
"""
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # scan subcommand
    scan_parser = subparsers.add_parser("scan", help="List files")
    scan_parser.add_argument("directory", type=str, help="Directory (or single file)")

    # replace subcommand
    replace_parser = subparsers.add_parser("replace", help="Find/replace rename")
    replace_parser.add_argument("directory", type=str, help="Directory (or single file)")
    replace_parser.add_argument("--find", "-f", type=str, required=True, help="Text or pattern to find")
    replace_parser.add_argument("--replace", "-r", type=str, default="", help="Replacement string")
    replace_parser.add_argument("--regex", "-e", action="store_true", help="Treat --find as a regular expression")
    replace_parser.add_argument("--case-sensitive", "-c", action="store_true", help="Case-sensitive")
    replace_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    replace_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # sequence subcommand
    seq_parser = subparsers.add_parser("sequence", help="Sequential naming")
    seq_parser.add_argument("directory", type=str, help="Target directory")
    seq_parser.add_argument("--template", "-t", type=str, default=PLACEHOLDER,
                            help=f"Name template containing {PLACEHOLDER}")
    seq_parser.add_argument("--start", type=int, default=1, help="Starting number")
    seq_parser.add_argument("--padding", type=int, default=3, help="Zero-padding digits")
    seq_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    seq_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    # recover subcommand
    recover_parser = subparsers.add_parser("recover", help="Finish interrupted renames")
    recover_parser.add_argument("directory", type=str, help="Directory")
    recover_parser.add_argument("--force", "-f", action="store_true",
                                help="Also recover files of processes that are still running")

    return parser


def print_previews(previews: List[RenamePreview]) -> None:
    """Print a preview table"""
    print(f"Will perform {len(previews)} rename operations:")
    print("-" * 80)
    for p in previews[:PREVIEW_LIMIT]:
        mark = " [CONFLICT]" if p.has_conflict else ""
        print(f"  {p.original_name:<40} -> {p.new_name}{mark}")
    if len(previews) > PREVIEW_LIMIT:
        print(f"  ... and {len(previews) - PREVIEW_LIMIT} more operations")
    print("-" * 80)


def run_rename(directory: Path, params: RenameParams, dry_run: bool, yes: bool) -> int:
    """Scan, preview, confirm and execute"""
    files = scan_directory(directory)
    if not files:
        print("No files found")
        return 0
    print(f"Found {len(files)} files")

    previews = plan_previews(files, params)
    if not previews:
        print("No files need renaming")
        return 0

    print()
    print_previews(previews)

    conflicts = sum(1 for p in previews if p.has_conflict)
    if conflicts:
        print(f"\nError: {conflicts} file(s) would get the same name, nothing renamed")
        return 1

    if dry_run:
        print("\n[Preview mode] Will not actually execute")
        return 0

    denied = find_denied(previews)
    if denied is not None:
        print(f"Error: Access denied: {denied}")
        return 1

    if not yes:
        confirm = input("\nConfirm execution? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    print("\nExecuting...")
    try:
        count = execute_renames(previews)
    except RenameFailedError as e:
        print(f"Error: {e}")
        if e.stranded:
            print("Files left with temporary names:")
            for path in e.stranded:
                print(f"  {path}")
            print(f"Run 'recover {directory}' to finish them.")
        return 1

    print(f"Renamed {count} file(s)")
    return 0


def cmd_scan(args) -> int:
    """Handle scan command"""
    files = scan_directory(Path(args.directory))
    if not files:
        print("No files found")
        return 0

    print(f"Found {len(files)} files:")
    print("-" * 80)
    for f in files:
        print(f"  {f.name}")
    print("-" * 80)
    return 0


def cmd_replace(args) -> int:
    """Handle replace command"""
    params = FindReplaceParams(
        pattern=args.find,
        replacement=args.replace,
        use_regex=args.regex,
        case_sensitive=args.case_sensitive,
    )
    return run_rename(Path(args.directory), params, args.dry_run, args.yes)


def cmd_sequence(args) -> int:
    """Handle sequence command"""
    params = IterationParams(
        template=args.template,
        start_number=args.start,
        padding=args.padding,
    )
    return run_rename(Path(args.directory), params, args.dry_run, args.yes)


def cmd_recover(args) -> int:
    """Handle recover command"""
    directory = Path(args.directory).resolve()
    if not directory.is_dir():
        print(f"Error: Directory does not exist: {directory}")
        return 1
    count = recover_temp_files(directory, include_live=args.force)
    print(f"Recovered {count} file(s)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    handlers = {
        "scan": cmd_scan,
        "replace": cmd_replace,
        "sequence": cmd_sequence,
        "recover": cmd_recover,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (RenameToolError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
