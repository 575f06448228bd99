"""Main entry point for the class-version extractor."""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from .application import OutputError, ReflectionExtractor, write_output
from .frontends import create_declaration_source
from .infrastructure.config import FRONTENDS, STDOUT_TARGET, Config
from .infrastructure.logging import LoggerSetup, ProgressTracker, get_logger, log_timing

EXTRA_ARGS_SEPARATOR = "--"
EXTRA_ARG_OPTION = "--extra-arg"


def split_extra_args(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split the command line at the first '--'.

    Everything after the separator is passed to the compiler for every source,
    like a fixed compilation database.
    """
    argv = list(argv)
    if EXTRA_ARGS_SEPARATOR not in argv:
        return argv, []
    index = argv.index(EXTRA_ARGS_SEPARATOR)
    return argv[:index], argv[index + 1 :]


def fold_extra_arg_values(argv: Sequence[str]) -> list[str]:
    """Join each '--extra-arg VALUE' pair into '--extra-arg=VALUE'.

    Compiler flags start with a dash, which argparse would otherwise take
    for an option of its own.
    """
    folded: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == EXTRA_ARG_OPTION:
            value = next(args, None)
            if value is not None:
                arg = f"{EXTRA_ARG_OPTION}={value}"
        folded.append(arg)
    return folded


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    if argv is None:
        argv = sys.argv[1:]
    own_args, trailing_args = split_extra_args(argv)
    own_args = fold_extra_arg_values(own_args)

    parser = argparse.ArgumentParser(
        prog="class-version",
        description="Extract class/struct names and data-member types into a "
        "nested, near-JSON reflection database",
        epilog="""
Examples:
  # Dump every record declared in a source file to stdout
  class-version src/player.cpp -- -std=c++17 -Iinclude

  # Use compile_commands.json from a build directory and keep only game types
  class-version -p build -m game:: src/player.cpp src/world.cpp -o classes.json

  # Read record layouts from the DWARF info of a debug build
  class-version --frontend dwarf build/game.elf -m Player
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "sources",
        type=Path,
        nargs="*",
        metavar="SOURCE",
        help="Source files to parse (ELF files with --frontend dwarf)",
    )
    parser.add_argument(
        "-o",
        dest="output",
        metavar="filename",
        default=None,
        help=f"Specify output filename ('{STDOUT_TARGET}' for stdout, the default)",
    )
    parser.add_argument(
        "-m",
        dest="match",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Only record classes whose qualified name contains PATTERN (repeatable)",
    )
    parser.add_argument(
        "-p",
        dest="build_path",
        type=Path,
        metavar="BUILD_PATH",
        help="Directory containing compile_commands.json",
    )
    parser.add_argument(
        EXTRA_ARG_OPTION,
        dest="extra_args",
        action="append",
        default=[],
        metavar="ARG",
        help="Additional compiler argument (repeatable; '--extra-arg=-DX' and '--extra-arg -DX' both work)",
    )
    parser.add_argument(
        "--frontend",
        choices=FRONTENDS,
        default=None,
        help="Declaration front end (default: clang)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Also write a timestamped debug log into this directory",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output with debug logs",
    )

    args = parser.parse_args(own_args)
    args.extra_args = list(args.extra_args) + trailing_args
    return args


@log_timing
def run(config: Config) -> int:
    """Parse, traverse, serialize and write. Returns the process exit status."""
    logger = get_logger(__name__)

    progress = ProgressTracker(logger)
    extractor = ReflectionExtractor(config.match_patterns, progress=progress)

    try:
        source = create_declaration_source(config, progress)
    except ValueError as e:
        logger.error(str(e))
        return 1

    with source:
        extractor.extract(source)
    extractor.report()

    document = extractor.render(indent=0)

    try:
        write_output(document, config.output)
    except OutputError as e:
        logger.error(str(e))
        return 1

    return 0


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main entry point for reflection database extraction."""
    args = parse_args(argv)

    try:
        config = Config.from_args(
            sources=args.sources,
            output=args.output,
            match_patterns=args.match,
            frontend=args.frontend,
            build_path=args.build_path,
            extra_args=args.extra_args,
            verbose=args.verbose,
            log_dir=args.log_dir,
        )
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    LoggerSetup.initialize(config.log_dir, verbose=config.verbose)
    logger = get_logger(__name__)

    logger.debug(f"Sources: {[str(s) for s in config.sources]}")
    logger.debug(f"Output: {config.output}")
    logger.debug(f"Match patterns: {config.match_patterns or 'all'}")

    sys.exit(run(config))


if __name__ == "__main__":
    main()
