#!/usr/bin/env python3

"""Domain models for the class-version extractor."""

from . import reflection

__all__ = [
    "reflection",
]
