#!/usr/bin/env python3

"""Declaration source backed by the libclang Python bindings.

Every translation unit is walked in preorder, the way a recursive AST visitor
visits record declarations: classes, structs, unions and class templates,
including those coming from headers, nested types and function-local types.
"""

from collections.abc import Iterator, Sequence
from pathlib import Path

from clang.cindex import (
    Config as LibclangConfig,
    Cursor,
    CursorKind,
    Diagnostic,
    Index,
    TranslationUnit,
    TranslationUnitLoadError,
)

from ...domain.models.reflection import DeclarationEvent, MemberDeclaration
from ...domain.services.traversal import DeclarationSource
from ...infrastructure.logging import ProgressTracker, get_logger
from .compilation_database import CompileArguments

logger = get_logger(__name__)

RECORD_KINDS = frozenset(
    {
        CursorKind.CLASS_DECL,
        CursorKind.STRUCT_DECL,
        CursorKind.UNION_DECL,
        CursorKind.CLASS_TEMPLATE,
        CursorKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION,
    }
)

# Scopes printed with their parameter list, e.g. 'f(int)::Local'
FUNCTION_KINDS = frozenset(
    {
        CursorKind.FUNCTION_DECL,
        CursorKind.CXX_METHOD,
        CursorKind.CONSTRUCTOR,
        CursorKind.DESTRUCTOR,
        CursorKind.CONVERSION_FUNCTION,
        CursorKind.FUNCTION_TEMPLATE,
    }
)

ANONYMOUS_NAMESPACE = "(anonymous namespace)"
ANONYMOUS_SCOPE = "(anonymous)"


def configure_libclang(library_file: str = "", library_path: str = "") -> None:
    """Point clang.cindex at a specific libclang before first use."""
    if LibclangConfig.loaded:
        return
    if library_file:
        LibclangConfig.set_library_file(library_file)
        logger.debug(f"Using libclang library file {library_file}")
    elif library_path:
        LibclangConfig.set_library_path(library_path)
        logger.debug(f"Using libclang from {library_path}")


def _scope_spelling(cursor: Cursor) -> str:
    if cursor.kind in FUNCTION_KINDS:
        return cursor.displayname or cursor.spelling
    if cursor.spelling:
        return cursor.spelling
    if cursor.kind == CursorKind.NAMESPACE:
        return ANONYMOUS_NAMESPACE
    return ANONYMOUS_SCOPE


def qualified_name(cursor: Cursor) -> str:
    """Build 'outer::inner::name' from the cursor's semantic parents."""
    parts = [cursor.spelling or ANONYMOUS_SCOPE]
    parent = cursor.semantic_parent

    while parent is not None and parent.kind != CursorKind.TRANSLATION_UNIT:
        parts.append(_scope_spelling(parent))
        parent = parent.semantic_parent

    return "::".join(reversed(parts))


class ClangDeclarationSource(DeclarationSource):
    """Parses C/C++ sources with libclang and reports their record declarations."""

    def __init__(
        self,
        sources: Sequence[Path],
        arguments: CompileArguments | None = None,
        progress: ProgressTracker | None = None,
        include_forward_declarations: bool = True,
        skip_function_bodies: bool = False,
    ):
        """Initialize the source.

        Args:
            sources: Source files, one translation unit each
            arguments: Resolver for per-file compiler arguments
            progress: Optional tracker for unit and declaration counts
            include_forward_declarations: Also report declarations without a body
            skip_function_bodies: Parse faster but miss function-local types
        """
        self.sources = list(sources)
        self.arguments = arguments or CompileArguments()
        self.progress = progress
        self.include_forward_declarations = include_forward_declarations
        self.parse_options = (
            TranslationUnit.PARSE_SKIP_FUNCTION_BODIES if skip_function_bodies else 0
        )
        self.index: Index | None = None

    def __enter__(self) -> "ClangDeclarationSource":
        self.index = Index.create()
        logger.debug("libclang index created")
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: Exception | None, exc_tb: object | None
    ) -> None:
        self.index = None

    def iter_declarations(self) -> Iterator[DeclarationEvent]:
        for source in self.sources:
            translation_unit = self._parse(source)
            if translation_unit is None:
                continue

            if self.progress is None:
                yield from self.iter_translation_unit(translation_unit)
                continue

            with self.progress.track_unit(str(source)):
                for event in self.iter_translation_unit(translation_unit):
                    self.progress.count_declaration()
                    yield event

    def _parse(self, source: Path) -> TranslationUnit | None:
        if self.index is None:
            self.index = Index.create()
        args = self.arguments.arguments_for(source)
        logger.debug(f"Parsing {source} with arguments {args}")

        try:
            translation_unit = self.index.parse(str(source), args=args, options=self.parse_options)
        except TranslationUnitLoadError as e:
            if self.progress is not None:
                self.progress.mark_unit_failed(str(source), str(e))
            else:
                logger.warning(f"Skipping {source}: {e}")
            return None

        for diagnostic in translation_unit.diagnostics:
            if diagnostic.severity >= Diagnostic.Error:
                logger.warning(f"{source}: {diagnostic.location.line}: {diagnostic.spelling}")

        return translation_unit

    def iter_translation_unit(self, translation_unit: TranslationUnit) -> Iterator[DeclarationEvent]:
        """Yield an event for every record declaration in one translation unit."""
        for cursor in translation_unit.cursor.walk_preorder():
            if cursor.kind not in RECORD_KINDS:
                continue
            if not self.include_forward_declarations and not cursor.is_definition():
                continue
            yield self.build_event(cursor)

    def build_event(self, cursor: Cursor) -> DeclarationEvent:
        """Describe one record cursor and its direct fields."""
        members = tuple(
            MemberDeclaration(type_text=child.type.spelling, qualified_name=qualified_name(child))
            for child in cursor.get_children()
            if child.kind == CursorKind.FIELD_DECL
        )
        return DeclarationEvent(qualified_name=qualified_name(cursor), members=members)
