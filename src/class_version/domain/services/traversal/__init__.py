#!/usr/bin/env python3

"""Traversal of declaration-visit events into the reflection database."""

from .declaration_source import DeclarationSource
from .traversal_adapter import TraversalAdapter

__all__ = [
    "DeclarationSource",
    "TraversalAdapter",
]
