#!/usr/bin/env python3

"""Domain layer containing the reflection model and the extraction services."""

from . import models, services

__all__ = [
    "models",
    "services",
]
