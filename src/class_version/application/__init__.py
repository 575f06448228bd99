#!/usr/bin/env python3

"""Application layer: orchestration of a full extraction run."""

from .extractors import ReflectionExtractor
from .output_sink import OutputError, open_output, write_output

__all__ = [
    "OutputError",
    "ReflectionExtractor",
    "open_output",
    "write_output",
]
