"""
Command-line interface for the subbuild build helper.

Stdout belongs to the host build's directive protocol and the relayed
stdout of the build tool, so the helper's own logging goes to stderr.
"""

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import List, Optional

from ..config import set_config_path
from ..orchestration import build_program
from ..validation import BuildHelperError, ValidationError, handle_cli_error

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Build one program and exit non-zero if the build fails.

    Raises:
        SystemExit: With code 1 on any fatal build or configuration error.
    """
    parser = argparse.ArgumentParser(
        prog="subbuild",
        description="Build an external program and relay its output to the host build.",
    )
    parser.add_argument(
        "program_path",
        help="Program directory, relative to the anchor root or absolute.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="TOML configuration file overriding the built-in defaults.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log helper activity at DEBUG level on stderr.",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    if args.config is not None:
        set_config_path(args.config)

    try:
        outcome = build_program(args.program_path)
    except (BuildHelperError, ValidationError, FileNotFoundError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="building program",
            exit_code=1,
            include_traceback=args.verbose,
            logger=logger,
        )
        return

    logger.debug(f"Build outcome: {outcome}")


if __name__ == "__main__":
    main_cli()
