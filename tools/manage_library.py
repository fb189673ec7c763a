"""Headless maintenance for the game library (no GUI needed).

Usage:
    python -m tools.manage_library list [--data-dir DIR] [--alpha]
    python -m tools.manage_library migrate [--data-dir DIR]
    python -m tools.manage_library import <file> [<file> ...] [--data-dir DIR]

``import`` registers every file with its default name and start folder,
exactly as a drag-and-drop import does when each dialog is accepted
unchanged. Icons are not touched; the GUI builds them on next start.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from launcher.config import DEFAULT_DATA_DIR
from launcher.core.identifiers import IdAllocator
from launcher.core.importer import BulkImporter
from launcher.core.migration import Migrator
from launcher.core.projection import SortMode, project, use_system_collation
from launcher.data.game_library import GameLibrary
from launcher.errors import LauncherError
from launcher.logger import setup_logger


def _cmd_list(library: GameLibrary, args: argparse.Namespace) -> int:
    mode = SortMode.ALPHABETICAL if args.alpha else SortMode.INSERTION
    for entry in project(library.all(), mode):
        ident = str(entry.id) if entry.is_identified else "(no id)"
        print(f"{ident}  {entry.display_name}  →  {entry.executable_path}")
    print(f"{library.count} game(s)")
    return 0


def _cmd_migrate(library: GameLibrary, args: argparse.Namespace) -> int:
    result = Migrator(IdAllocator()).migrate(library)
    if result.migrated:
        print(f"Assigned ids to {result.changed} game(s)")
    else:
        print("Nothing to migrate")
    return 0


def _cmd_import(library: GameLibrary, args: argparse.Namespace) -> int:
    importer = BulkImporter(library)
    report = importer.run(args.files, confirm=lambda entry: entry)
    for result in report.results:
        suffix = f": {result.error}" if result.error else ""
        print(f"  [{result.status}] {result.path}{suffix}")
    return 1 if report.failed else 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect and maintain the game library.")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f"Library directory (default: {DEFAULT_DATA_DIR})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Print registered games")
    p_list.add_argument("--alpha", action="store_true", help="Sort by name")
    p_list.set_defaults(func=_cmd_list)

    p_migrate = sub.add_parser("migrate", help="Assign ids to legacy entries")
    p_migrate.set_defaults(func=_cmd_migrate)

    p_import = sub.add_parser("import", help="Register executables")
    p_import.add_argument("files", nargs="+", help="Executables to add")
    p_import.set_defaults(func=_cmd_import)

    args = parser.parse_args()
    setup_logger(level="WARNING")
    use_system_collation()

    library = GameLibrary(args.data_dir)
    try:
        library.load()
        return args.func(library, args)
    except LauncherError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
