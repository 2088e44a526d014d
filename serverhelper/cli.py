"""Command-line front door for serverhelper.

Parses options, merges them with the persisted config, and launches the
interactive dashboard.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .runtime import run_dashboard
from .runtime.config import (
    load_backup_dir,
    load_log_level,
    load_theme_name,
    save_backup_dir,
    save_theme_name,
)
from .ui_theme import available_theme_names

LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR")


def _log_level(value: str) -> str:
    """argparse type for case-insensitive logging level names."""
    level = value.strip().upper()
    if level not in LOG_LEVEL_CHOICES:
        raise argparse.ArgumentTypeError(f"invalid log level: {value!r}")
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="serverhelper",
        description="Interactive dashboard for Windows Server maintenance tasks.",
    )
    parser.add_argument(
        "--backup-dir",
        default=None,
        help="Directory for role backups and the restore file browser (default: Documents/ServerBackups).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=None,
        help=f"Log file verbosity ({', '.join(LOG_LEVEL_CHOICES)}).",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Remember --backup-dir and --theme in the config file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the dashboard.

    Explicit options win over the config file. The dashboard needs a real
    terminal on stdin and exits with a message otherwise.
    """
    args = build_parser().parse_args(argv)

    if args.backup_dir is not None:
        backup_dir = Path(args.backup_dir).expanduser()
        if backup_dir.exists() and not backup_dir.is_dir():
            raise SystemExit(f"Not a directory: {backup_dir}")
    else:
        backup_dir = load_backup_dir()
    theme_name = args.theme if args.theme is not None else load_theme_name()
    log_level = args.log_level if args.log_level is not None else load_log_level()

    if args.save:
        if args.backup_dir is not None:
            save_backup_dir(backup_dir)
        if args.theme is not None:
            save_theme_name(args.theme)

    if not os.isatty(sys.stdin.fileno()):
        raise SystemExit("serverhelper needs an interactive terminal.")

    run_dashboard(backup_dir, theme_name=theme_name, no_color=args.no_color, log_level=log_level)


if __name__ == "__main__":
    main()
