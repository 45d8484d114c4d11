"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    sumtree build <values> [--out PATH] [--json]
    sumtree prove <values> (--index N | --all) [--out PATH]
    sumtree verify <proof> --root PATH [--json]
    sumtree config --init|--show [--path PATH]

Environment Variables:
    SUMTREE_LOG_LEVEL           Log level (default: INFO)
    SUMTREE_LOG_FILE            Optional log file
    SUMTREE_PROOF_WORKERS       Threads for batch proving/verifying (default: 4)
    SUMTREE_OUTPUT_FORMAT       human | json (default: human)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from sumtree.config import get_default_config_template, load_config, set_default_config
from sumtree.schemas.errors import SumTreeException
from sumtree_cli.commands import build, prove, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sumtree",
        description="Merkle sum tree CLI - Build root commitments, generate and verify allotment proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./sumtree.json or ~/.config/sumtree/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree and print its root commitment",
        description="Build a Merkle sum tree over a value file (count must be a power of two).",
    )
    build_parser.add_argument(
        "values",
        type=str,
        help="Value file: JSON array of integers or one integer per line",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the root commitment JSON to this path",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate exclusive allotment proofs",
        description="Generate a proof for one leaf position, or for every leaf with --all.",
    )
    prove_parser.add_argument(
        "values",
        type=str,
        help="Value file the tree is built from",
    )
    target = prove_parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--index", "-i",
        type=int,
        help="0-based leaf position to prove",
    )
    target.add_argument(
        "--all",
        action="store_true",
        default=False,
        help="Prove every leaf (writes a JSON list)",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output path for proof JSON (default: stdout)",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify proofs against a root commitment",
        description="Verify one proof or a JSON list of proofs. Exit code 2 if any is invalid.",
    )
    verify_parser.add_argument(
        "proof",
        type=str,
        help="Proof JSON file (single proof or list)",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        required=True,
        help="Root commitment JSON file",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="sumtree.json",
        help="Path for config file (default: sumtree.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (SUMTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: sumtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    set_default_config(config)
    args.cli_config = config
    if getattr(args, "json", False) is None:
        args.json = config.output_format == "json"

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except SumTreeException as e:
        if args.debug:
            traceback.print_exc()
        if getattr(args, "json", False):
            print(e.to_error_model().model_dump_json(indent=2))
        else:
            print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
