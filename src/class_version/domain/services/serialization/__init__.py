#!/usr/bin/env python3

"""Text serialization of the reflection database."""

from .database_serializer import INDENT_STEP, DatabaseSerializer, serialize

__all__ = [
    "DatabaseSerializer",
    "INDENT_STEP",
    "serialize",
]
