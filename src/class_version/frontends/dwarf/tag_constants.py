#!/usr/bin/env python3

"""DWARF tag categories used by the declaration walk."""

# Type declarations reported as class records
RECORD_TAGS = frozenset(
    {
        "DW_TAG_class_type",
        "DW_TAG_structure_type",
        "DW_TAG_union_type",
    }
)

# Named scopes that prefix qualified names
SCOPE_TAGS = frozenset(
    {
        "DW_TAG_namespace",
        "DW_TAG_class_type",
        "DW_TAG_structure_type",
        "DW_TAG_union_type",
        "DW_TAG_subprogram",
    }
)

# Named types printed by their (qualified) name
NAMED_TYPE_TAGS = frozenset(
    {
        "DW_TAG_base_type",
        "DW_TAG_class_type",
        "DW_TAG_structure_type",
        "DW_TAG_union_type",
        "DW_TAG_enumeration_type",
        "DW_TAG_typedef",
        "DW_TAG_unspecified_type",
    }
)

# Elaborated keyword clang prints for unnamed records and enums
ELABORATED_KEYWORDS = {
    "DW_TAG_class_type": "class",
    "DW_TAG_structure_type": "struct",
    "DW_TAG_union_type": "union",
    "DW_TAG_enumeration_type": "enum",
}

ANONYMOUS_NAMESPACE = "(anonymous namespace)"
ANONYMOUS_SCOPE = "(anonymous)"
