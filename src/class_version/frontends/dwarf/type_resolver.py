#!/usr/bin/env python3

"""Type and scope name rendering for DWARF DIEs.

Types are printed the way clang prints them so both front ends produce
comparable documents: 'int *', 'const char *', 'int *const', 'int[4][2]',
'ns::Foo &', 'void (*)(int, float)'.
"""

from elftools.common.exceptions import DWARFError
from elftools.dwarf.die import DIE

from ...infrastructure.logging import get_logger
from .tag_constants import (
    ANONYMOUS_NAMESPACE,
    ANONYMOUS_SCOPE,
    ELABORATED_KEYWORDS,
    NAMED_TYPE_TAGS,
    SCOPE_TAGS,
)

logger = get_logger(__name__)

UNKNOWN_TYPE = "unknown_type"


def die_name(die: DIE) -> str | None:
    """Return the DW_AT_name of a DIE as text, if present."""
    name_attr = die.attributes.get("DW_AT_name")
    if not name_attr:
        return None
    if isinstance(name_attr.value, bytes):
        return name_attr.value.decode("utf-8", errors="replace")
    return str(name_attr.value)


class DwarfTypeResolver:
    """Renders member types and scope names from DWARF DIEs.

    Rendered types are cached by DIE offset; one resolver serves one DWARF
    info object.
    """

    def __init__(self) -> None:
        self._type_cache: dict[int, str] = {}

    def resolve_type_name(self, die: DIE, type_attr_name: str = "DW_AT_type") -> str:
        """Render the type referenced by ``type_attr_name`` on ``die``.

        Args:
            die: DIE carrying the type reference (member, parameter, modifier)
            type_attr_name: Attribute holding the reference

        Returns:
            Printed type; 'void' when the reference is absent
        """
        if type_attr_name not in die.attributes:
            return "void"

        try:
            type_die = die.get_DIE_from_attribute(type_attr_name)
        except (DWARFError, KeyError, ValueError) as e:
            logger.warning(f"Failed to resolve type reference for {die.tag} at 0x{die.offset:x}: {e}")
            return UNKNOWN_TYPE

        if type_die is None:
            return UNKNOWN_TYPE
        return self.render_type(type_die)

    def render_type(self, type_die: DIE) -> str:
        """Render a type DIE, using the offset cache."""
        cached = self._type_cache.get(type_die.offset)
        if cached is not None:
            return cached

        rendered = self._render_uncached(type_die)
        self._type_cache[type_die.offset] = rendered
        return rendered

    def _render_uncached(self, type_die: DIE) -> str:
        tag = type_die.tag

        if tag in NAMED_TYPE_TAGS:
            if die_name(self._declaration_of(type_die)) is None and tag in ELABORATED_KEYWORDS:
                return f"{ELABORATED_KEYWORDS[tag]} {self.qualified_name(type_die)}"
            return self.qualified_name(type_die)

        if tag == "DW_TAG_pointer_type":
            if "DW_AT_type" not in type_die.attributes:
                return "void *"
            pointee = type_die.get_DIE_from_attribute("DW_AT_type")
            if pointee.tag == "DW_TAG_subroutine_type":
                return self._render_function(pointee, "(*)")
            return self._append_declarator(self.render_type(pointee), "*")

        if tag == "DW_TAG_reference_type":
            return self._append_declarator(self.resolve_type_name(type_die), "&")

        if tag == "DW_TAG_rvalue_reference_type":
            return self._append_declarator(self.resolve_type_name(type_die), "&&")

        if tag in ("DW_TAG_const_type", "DW_TAG_volatile_type", "DW_TAG_restrict_type"):
            return self._render_qualified(type_die)

        if tag == "DW_TAG_array_type":
            return self._render_array(type_die)

        if tag == "DW_TAG_subroutine_type":
            return self._render_function(type_die, "")

        if tag == "DW_TAG_ptr_to_member_type":
            containing = type_die.get_DIE_from_attribute("DW_AT_containing_type")
            return f"{self.resolve_type_name(type_die)} {self.qualified_name(containing)}::*"

        name = die_name(type_die)
        if name:
            return name

        logger.debug(f"Unnamed type with tag: {tag}")
        return str(tag).replace("DW_TAG_", "")

    @staticmethod
    def _append_declarator(base: str, declarator: str) -> str:
        if base.endswith(("*", "&")):
            return f"{base}{declarator}"
        return f"{base} {declarator}"

    def _render_qualified(self, type_die: DIE) -> str:
        qualifier = {
            "DW_TAG_const_type": "const",
            "DW_TAG_volatile_type": "volatile",
            "DW_TAG_restrict_type": "restrict",
        }[type_die.tag]

        inner = self.resolve_type_name(type_die)
        # Qualifiers on a pointer bind to the pointer: 'int *const'
        if inner.endswith(("*", "&")):
            return f"{inner}{qualifier}"
        return f"{qualifier} {inner}"

    def _render_array(self, array_die: DIE) -> str:
        element = self.resolve_type_name(array_die)
        dimensions = []

        for child in array_die.iter_children():
            if child.tag != "DW_TAG_subrange_type":
                continue
            count_attr = child.attributes.get("DW_AT_count")
            upper_attr = child.attributes.get("DW_AT_upper_bound")
            if count_attr is not None and isinstance(count_attr.value, int):
                dimensions.append(f"[{count_attr.value}]")
            elif upper_attr is not None and isinstance(upper_attr.value, int):
                dimensions.append(f"[{upper_attr.value + 1}]")
            else:
                dimensions.append("[]")

        return f"{element}{''.join(dimensions) or '[]'}"

    def _render_function(self, subroutine_die: DIE, declarator: str) -> str:
        return_type = self.resolve_type_name(subroutine_die)
        params = self.parameter_list(subroutine_die)
        if declarator:
            return f"{return_type} {declarator}({params})"
        return f"{return_type} ({params})"

    def parameter_list(self, die: DIE) -> str:
        """Render the non-artificial formal parameters of a function-like DIE."""
        params = []
        for child in die.iter_children():
            if child.tag == "DW_TAG_formal_parameter":
                if child.attributes.get("DW_AT_artificial") is not None:
                    continue
                params.append(self.resolve_type_name(child))
            elif child.tag == "DW_TAG_unspecified_parameters":
                params.append("...")
        return ", ".join(params)

    def scope_spelling(self, die: DIE) -> str:
        """Render one scope level: a name, 'f(int)', or an anonymous marker."""
        if die.tag == "DW_TAG_subprogram":
            return f"{self._subprogram_name(die)}({self.parameter_list(die)})"

        name = die_name(die)
        if name:
            return name
        if die.tag == "DW_TAG_namespace":
            return ANONYMOUS_NAMESPACE
        return ANONYMOUS_SCOPE

    def _subprogram_name(self, die: DIE) -> str:
        return die_name(die) or die_name(self._declaration_of(die)) or ANONYMOUS_SCOPE

    @staticmethod
    def _declaration_of(die: DIE) -> DIE:
        """Follow DW_AT_abstract_origin / DW_AT_specification to the in-class declaration."""
        seen = {die.offset}
        while True:
            attr = next(
                (a for a in ("DW_AT_specification", "DW_AT_abstract_origin") if a in die.attributes),
                None,
            )
            if attr is None:
                return die
            origin = die.get_DIE_from_attribute(attr)
            if origin.offset in seen:
                return origin
            seen.add(origin.offset)
            die = origin

    def enclosing_scopes(self, die: DIE) -> list[str]:
        """Return the scope spellings around ``die``, outermost first.

        Out-of-line definitions of functions and nested records live at
        compile-unit level in DWARF; their class and namespace scopes are taken
        from the declaration they point to.
        """
        scopes: list[str] = []

        parent = die.get_parent()
        while parent is not None and parent.tag != "DW_TAG_compile_unit":
            if parent.tag in SCOPE_TAGS:
                declaration = self._declaration_of(parent)
                # Function scopes keep the definition's own parameter list
                scope = parent if parent.tag == "DW_TAG_subprogram" else declaration
                scopes.append(self.scope_spelling(scope))
                if declaration is not parent:
                    scopes.extend(reversed(self.enclosing_scopes(declaration)))
                    break
            parent = parent.get_parent()

        scopes.reverse()
        return scopes

    def qualified_name(self, die: DIE) -> str:
        """Build 'outer::inner::name' from the DIE's enclosing scopes.

        A record defined out of line ('struct Outer::Inner { ... };') is named
        after the in-class declaration its DW_AT_specification points to.
        """
        if die.tag != "DW_TAG_subprogram":
            die = self._declaration_of(die)
        own = self.scope_spelling(die) if die.tag in SCOPE_TAGS else die_name(die) or ANONYMOUS_SCOPE
        return "::".join([*self.enclosing_scopes(die), own])
