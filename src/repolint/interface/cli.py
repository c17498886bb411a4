"""Command-line surface — flags are parsed into :class:`Settings` overrides."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, TextIO

from repolint.domain.entities import LintWarning
from repolint.infrastructure.config import TOKEN_FILE, Settings, load_settings


def _add_bool_flag(parser: argparse.ArgumentParser, name: str, help_text: str) -> None:
    parser.add_argument(
        f"--{name}",
        dest=name.replace("-", "_"),
        action=argparse.BooleanOptionalAction,
        default=None,
        help=help_text,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repolint",
        description="Report hygiene issues across the repositories of a GitHub account.",
    )
    parser.add_argument("--user", dest="account", help="GitHub user/organization name")
    parser.add_argument("--min-stars", dest="min_stars", type=int, help="skip repos with fewer stars")
    _add_bool_flag(parser, "skip-forks", "skip forked repositories (default: on)")
    _add_bool_flag(parser, "skip-archived", "skip archived repositories (default: on)")
    _add_bool_flag(parser, "skip-inactive", "skip repositories without recent pushes (default: on)")
    _add_bool_flag(parser, "skip-vendor", "ignore vendor/third-party directories (default: on)")
    parser.add_argument(
        "--inactivity-months",
        dest="inactivity_months",
        type=int,
        help="months without a push before a repository counts as inactive",
    )
    parser.add_argument(
        "--disable",
        dest="disabled_checkers",
        help="comma-separated list of checker names to disable",
    )
    parser.add_argument(
        "--token-file",
        dest="token_file",
        type=Path,
        default=TOKEN_FILE,
        help="file holding the API token when TOKEN is unset (default: ./token)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        default=None,
        help="turn on debug output",
    )
    return parser


def parse_settings(argv: Sequence[str] | None = None) -> Settings:
    """Parse *argv* and merge it over environment configuration."""
    args = vars(build_parser().parse_args(argv))
    token_file = args.pop("token_file")
    return load_settings(token_file=token_file, **args)


def print_warning(warning: LintWarning, stream: TextIO | None = None) -> None:
    """Write one warning line to stdout (or *stream*)."""
    print(warning, file=stream if stream is not None else sys.stdout, flush=True)
