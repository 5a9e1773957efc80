"""
Command-line interface for snapshot maintenance.

Commands: normalize tool output, list stored snapshots, remove leftover diff
files, and manage the configuration file.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import ConfigManager
from .discovery import find_repo_root
from .normalizer import PathNormalizer
from .storage import SnapshotStore

logger = logging.getLogger(__name__)


def _set_log_level(level: int) -> None:
    package_logger = logging.getLogger("toolsnap")
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)


class SnapshotCLI:
    """Command-line interface for snapshot maintenance."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_manager = ConfigManager(config_path)
        self.config = self.config_manager.get_config()

    def run(self, args: Optional[list[str]] = None) -> int:
        """Run the CLI with given arguments."""
        parser = self._create_parser()
        parsed_args = parser.parse_args(args)

        if parsed_args.config:
            self.config_manager = ConfigManager(parsed_args.config)
            self.config = self.config_manager.get_config()
        if parsed_args.verbose:
            self.config.verbose = True
            _set_log_level(logging.DEBUG)
        if parsed_args.quiet:
            self.config.quiet = True
            _set_log_level(logging.WARNING)

        if not hasattr(parsed_args, "func"):
            parser.print_help()
            return 1

        try:
            return parsed_args.func(parsed_args)
        except KeyboardInterrupt:
            logger.info("\nInterrupted by user")
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            if self.config.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="toolsnap",
            description="Snapshot maintenance for tool integration tests",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument("--config", "-c", type=Path, help="Configuration file path")

        parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

        parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        # Normalize command
        normalize_parser = subparsers.add_parser(
            "normalize", help="Normalize tool output paths and print the result"
        )
        normalize_parser.add_argument(
            "file", type=Path, nargs="?", help="File to normalize (default: stdin)"
        )
        normalize_parser.add_argument(
            "--toolchain-root", help="Toolchain root to replace instead of querying it"
        )
        normalize_parser.set_defaults(func=self._normalize_command)

        # List command
        list_parser = subparsers.add_parser("list", help="List stored snapshots")
        list_parser.add_argument("--language", help="Only list snapshots for this language")
        list_parser.add_argument("--tool", help="Only list snapshots for this tool")
        list_parser.add_argument("--root", type=Path, help="Repository root (default: discovered)")
        list_parser.set_defaults(func=self._list_command)

        # Clean command
        clean_parser = subparsers.add_parser("clean", help="Remove leftover .snap.diff files")
        clean_parser.add_argument("--root", type=Path, help="Repository root (default: discovered)")
        clean_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be deleted without actually deleting",
        )
        clean_parser.set_defaults(func=self._clean_command)

        # Config command
        config_parser = subparsers.add_parser("config", help="Configuration management")
        config_parser.add_argument(
            "--init", action="store_true", help="Initialize default configuration file"
        )
        config_parser.add_argument("--show", action="store_true", help="Show current configuration")
        config_parser.set_defaults(func=self._config_command)

        return parser

    def _get_store(self, root: Optional[Path]) -> SnapshotStore:
        repo_root = root or find_repo_root(marker=self.config.root_marker)
        return SnapshotStore(self.config.get_snapshot_root(repo_root))

    def _normalize_command(self, args) -> int:
        """Handle the normalize command."""
        if args.file:
            text = args.file.read_text(encoding="utf-8")
        else:
            text = sys.stdin.read()

        normalizer = PathNormalizer.from_config(self.config, toolchain_root=args.toolchain_root)
        sys.stdout.write(normalizer.normalize(text))
        return 0

    def _list_command(self, args) -> int:
        """Handle the list command."""
        store = self._get_store(args.root)
        snapshots = store.list_snapshots(language=args.language, tool=args.tool)

        logger.info(f"Found {len(snapshots)} snapshots in {store.snapshot_root}:")
        for path in snapshots:
            logger.info(f"  {path.relative_to(store.snapshot_root).as_posix()}")

        return 0

    def _clean_command(self, args) -> int:
        """Handle the clean command."""
        store = self._get_store(args.root)
        diffs = store.list_diffs()

        if not diffs:
            logger.info(f"No diff files under {store.snapshot_root}")
            return 0

        for path in diffs:
            if args.dry_run:
                logger.info(f"Would delete {path}")
            else:
                path.unlink()
                logger.info(f"Deleted {path}")

        if args.dry_run:
            logger.info(f"Dry run - {len(diffs)} diff files would be deleted")
        else:
            logger.info(f"Deleted {len(diffs)} diff files")
        return 0

    def _config_command(self, args) -> int:
        """Handle the config command."""
        if args.init:
            self.config_manager.create_default_config()
            return 0

        if args.show:
            logger.info("Current configuration:")
            for key, value in self.config.to_dict().items():
                logger.info(f"  {key}: {value}")
            return 0

        logger.info("Use --init to create default config or --show to display current config")
        return 0


def main():
    """Main entry point for the CLI."""
    cli = SnapshotCLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
