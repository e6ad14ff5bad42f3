"""
Publish Markdown files to WordPress.

Fetches a manifest of Markdown documents, converts Markdown content into HTML, and invokes WordPress REST API
endpoints to create or update pages.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

import argparse
import logging
import os.path
import sys
import typing
from collections.abc import Sequence
from io import StringIO
from pathlib import Path
from typing import Any

from . import __version__
from .environment import ConfigError, SynchronizationError, load_configuration
from .extra import override


class Arguments(argparse.Namespace):
    config: Path
    fingerprint_file: Path | None
    timeout: float | None
    loglevel: str


class TimeoutAction(argparse.Action):
    """Accept a positive number of seconds."""

    @override
    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: None | str | Sequence[Any],
        option_string: str | None = None,
    ) -> None:
        try:
            seconds = float(typing.cast(str, values))
        except ValueError:
            raise argparse.ArgumentError(self, f'Could not parse argument "{values}". It should be a number of seconds.') from None
        if not seconds > 0:
            raise argparse.ArgumentError(self, f"Timeout must be positive, got: {values}")
        setattr(namespace, self.dest, seconds)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.prog = os.path.basename(os.path.dirname(__file__))
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        default=Path("md2wp.json"),
        help="Path to JSON configuration file (default: 'md2wp.json').",
    )
    parser.add_argument(
        "--fingerprint-file",
        dest="fingerprint_file",
        type=Path,
        help="File to keep content fingerprints in between runs (default: 'md2wp-hash.txt' next to the configuration file).",
    )
    parser.add_argument(
        "--timeout",
        action=TimeoutAction,
        help="Timeout for a single HTTP request in seconds (default: 30).",
    )
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=[
            logging.getLevelName(level).lower()
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARN,
                logging.ERROR,
                logging.CRITICAL,
            )
        ],
        default=logging.getLevelName(logging.INFO),
        help="Use this option to set the log verbosity.",
    )
    return parser


def get_help() -> str:
    parser = get_parser()
    with StringIO() as buf:
        parser.print_help(file=buf)
        return buf.getvalue()


def main(argv: list[str] | None = None) -> None:
    parser = get_parser()
    args = Arguments()
    parser.parse_args(argv, namespace=args)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
    )

    try:
        config = load_configuration(args.config, fingerprint_path=args.fingerprint_file, timeout=args.timeout)
    except ConfigError as e:
        logging.error("Error: %s", e)
        sys.exit(1)

    from .application import Application

    try:
        Application(config).run()
    except SynchronizationError as e:
        logging.error("Error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
