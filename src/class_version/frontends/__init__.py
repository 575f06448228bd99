#!/usr/bin/env python3

"""Concrete declaration sources.

Each front end adapts an external syntax-tree or debug-info provider to the
DeclarationSource interface.
"""

from .factory import create_declaration_source

__all__ = ["create_declaration_source"]
