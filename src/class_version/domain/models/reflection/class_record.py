#!/usr/bin/env python3

"""Class record model for the reflection database."""

from dataclasses import dataclass, field

from .field import Field


@dataclass
class ClassRecord:
    """A class, struct or union observed during traversal.

    Fields keep source declaration order. Records with the same name are
    never merged.
    """

    name: str
    fields: list[Field] = field(default_factory=list)

    def add_field(self, type_text: str, name: str) -> Field:
        """Append a field and return it."""
        new_field = Field(type=type_text, name=name)
        self.fields.append(new_field)
        return new_field
