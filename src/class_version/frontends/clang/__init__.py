#!/usr/bin/env python3

"""libclang front end."""

from .clang_source import RECORD_KINDS, ClangDeclarationSource, configure_libclang, qualified_name
from .compilation_database import CompileArguments, strip_compile_command

__all__ = [
    "ClangDeclarationSource",
    "CompileArguments",
    "RECORD_KINDS",
    "configure_libclang",
    "qualified_name",
    "strip_compile_command",
]
