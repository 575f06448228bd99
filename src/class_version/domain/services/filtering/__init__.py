#!/usr/bin/env python3

"""Qualified-name filtering."""

from .name_filter import should_include

__all__ = ["should_include"]
