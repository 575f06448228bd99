#!/usr/bin/env python3

"""Per-source compiler arguments from a compilation database."""

import os
from collections.abc import Sequence
from pathlib import Path

from clang.cindex import CompilationDatabase, CompilationDatabaseError

from ...infrastructure.logging import get_logger

logger = get_logger(__name__)

# Driver flags that make no sense when libclang parses a single file
_DROPPED_FLAGS = frozenset({"-c", "-S", "-E", "-MD", "-MMD", "-MP"})
_DROPPED_FLAGS_WITH_VALUE = frozenset({"-o", "-MF", "-MT", "-MQ"})


def strip_compile_command(arguments: Sequence[str], filename: str, directory: str = "") -> list[str]:
    """Turn a recorded compiler invocation into libclang parse arguments.

    Drops the compiler executable, output and dependency-file flags, and the
    source path itself.

    Args:
        arguments: Full command line as recorded in compile_commands.json
        filename: Source file the command compiles
        directory: Working directory of the command

    Returns:
        Arguments suitable for Index.parse
    """
    source = os.path.normpath(os.path.join(directory, filename))
    result: list[str] = []
    skip_next = False

    for arg in list(arguments)[1:]:
        if skip_next:
            skip_next = False
            continue
        if arg in _DROPPED_FLAGS_WITH_VALUE:
            skip_next = True
            continue
        if arg in _DROPPED_FLAGS or arg == "--":
            continue
        if arg.startswith("-o") and len(arg) > 2:
            continue
        if os.path.normpath(os.path.join(directory, arg)) == source:
            continue
        result.append(arg)

    return result


class CompileArguments:
    """Resolves the arguments libclang should use for each source file.

    With a build path, arguments come from its compile_commands.json and the
    command's working directory is preserved. Extra arguments are always
    appended last.
    """

    def __init__(self, build_path: Path | None = None, extra_args: Sequence[str] = ()):
        """Load the compilation database, if any.

        Args:
            build_path: Directory containing compile_commands.json
            extra_args: Arguments appended to every command

        Raises:
            ValueError: If build_path holds no loadable compilation database
        """
        self.build_path = build_path
        self.extra_args = list(extra_args)
        self._database: CompilationDatabase | None = None

        if build_path is not None:
            try:
                self._database = CompilationDatabase.fromDirectory(str(build_path))
            except CompilationDatabaseError as e:
                raise ValueError(
                    f"Error while trying to load a compilation database from {build_path}: {e}"
                ) from e
            logger.info(f"Loaded compilation database from {build_path}")

    def arguments_for(self, source: Path) -> list[str]:
        """Return the parse arguments for one source file."""
        arguments: list[str] = []

        if self._database is not None:
            commands = self._database.getCompileCommands(str(source.resolve()))
            if commands:
                command = next(iter(commands))
                arguments = strip_compile_command(
                    list(command.arguments), command.filename, command.directory
                )
                if command.directory:
                    arguments.append(f"-working-directory={command.directory}")
            else:
                logger.warning(f"No compile command for {source}; using extra arguments only")

        return arguments + self.extra_args
