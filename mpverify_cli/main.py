"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m mpverify_cli single <payload.json> [--algorithm A] [--json] [--trace]
    python -m mpverify_cli multi <payload.json> [--algorithm A] [--json] [--trace]
    python -m mpverify_cli combine <a> <b> [--ordered] [--algorithm A]

Environment Variables:
    MPVERIFY_HASH_ALGORITHM     Default hash algorithm (sha256, keccak256)
    MPVERIFY_MAX_PROOF_LENGTH   Proof element ceiling (0 = unlimited)
    MPVERIFY_MAX_LEAVES         Leaf count ceiling (0 = unlimited)
    MPVERIFY_LOG_LEVEL          Log level (default: WARNING)
    MPVERIFY_LOG_FILE           Optional log file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from mpverify import __version__
from mpverify.config.runtime import VerifierConfig
from mpverify.crypto.hashing import HASH_ALGORITHMS
from mpverify.schemas.errors import VerifierException
from mpverify_cli.commands import verify
from mpverify_cli.commands.verify import EXIT_RUNTIME_ERROR


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_check_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "payload",
        type=str,
        help="Path to the JSON proof document",
    )
    parser.add_argument(
        "--algorithm", "-a",
        type=str,
        choices=sorted(HASH_ALGORITHMS),
        default=None,
        help="Hash algorithm (overrides payload and config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output result as JSON",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        default=False,
        help="Print every merge step",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Re-raise unexpected errors with a traceback",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mpverify",
        description="Verify Merkle proofs and multiproofs against a known root.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (.json, .yaml or .yml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    single_parser = subparsers.add_parser(
        "single",
        help="Verify a single-leaf proof",
        description="Rebuild the root from one leaf and its sibling path.",
    )
    _add_check_arguments(single_parser)

    multi_parser = subparsers.add_parser(
        "multi",
        help="Verify a multiproof",
        description="Rebuild the root from several leaves, a sibling pool and routing flags.",
    )
    _add_check_arguments(multi_parser)

    combine_parser = subparsers.add_parser(
        "combine",
        help="Hash two digests together",
    )
    combine_parser.add_argument("a", type=str, help="First digest (0x hex)")
    combine_parser.add_argument("b", type=str, help="Second digest (0x hex)")
    combine_parser.add_argument(
        "--ordered",
        action="store_true",
        default=False,
        help="Sort the digests before hashing (commutative)",
    )
    combine_parser.add_argument(
        "--algorithm", "-a",
        type=str,
        choices=sorted(HASH_ALGORITHMS),
        default=None,
        help="Hash algorithm (overrides config)",
    )

    return parser


def load_config(config_path: Path | None) -> VerifierConfig:
    """Load configuration from file and/or environment. Env wins."""
    if config_path is None:
        return VerifierConfig.from_env()
    return VerifierConfig.from_file(config_path).with_env_overrides()


COMMANDS = {
    "single": verify.single_cmd,
    "multi": verify.multi_cmd,
    "combine": verify.combine_cmd,
}


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, ValueError, VerifierException) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(args.log_level or config.log_level, config.log_file)

    return COMMANDS[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
