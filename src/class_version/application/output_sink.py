#!/usr/bin/env python3

"""Output target handling: standard output or a named file."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from ..infrastructure.config import STDOUT_TARGET
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


class OutputError(Exception):
    """The output file could not be opened or written."""

    def __init__(self, target: str, reason: str = ""):
        self.target = target
        message = f"Failed to open output file {target} for writing."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


@contextmanager
def open_output(target: str) -> Iterator[TextIO]:
    """Open the output stream named by ``target``.

    ``"-"`` yields standard output, which is left open. Any other value is a
    file path opened for writing, truncating existing content.

    Raises:
        OutputError: If the file cannot be opened
    """
    if target == STDOUT_TARGET:
        yield sys.stdout
        sys.stdout.flush()
        return

    try:
        stream = open(target, "w", encoding="utf-8")
    except OSError as e:
        raise OutputError(target, e.strerror or str(e)) from e

    with stream:
        yield stream


def write_output(text: str, target: str) -> None:
    """Write a finished document.

    Standard output gets a closing newline; files receive the text as is.

    Args:
        text: Serialized document
        target: "-" for standard output, otherwise a file path

    Raises:
        OutputError: If the file cannot be opened or written
    """
    with open_output(target) as out:
        try:
            out.write(text)
            if target == STDOUT_TARGET:
                out.write("\n")
        except OSError as e:
            raise OutputError(target, e.strerror or str(e)) from e

    if target != STDOUT_TARGET:
        logger.info(f"Wrote {len(text)} characters to {target}")
