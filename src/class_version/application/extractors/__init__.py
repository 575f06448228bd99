"""Extraction orchestrators."""

from .reflection_extractor import ReflectionExtractor

__all__ = ["ReflectionExtractor"]
