#!/usr/bin/env python3

"""Domain services layer."""

from . import filtering, serialization, traversal

__all__ = [
    "filtering",
    "serialization",
    "traversal",
]
