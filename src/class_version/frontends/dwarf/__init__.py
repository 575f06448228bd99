#!/usr/bin/env python3

"""pyelftools front end reading record layouts from DWARF debug info."""

from .dwarf_source import DwarfDeclarationSource
from .tag_constants import RECORD_TAGS, SCOPE_TAGS
from .type_resolver import DwarfTypeResolver

__all__ = [
    "DwarfDeclarationSource",
    "DwarfTypeResolver",
    "RECORD_TAGS",
    "SCOPE_TAGS",
]
