#!/usr/bin/env python3

"""Root accumulator of the reflection database."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from .class_record import ClassRecord


@dataclass
class Database:
    """Ordered collection of class records, in traversal-visit order."""

    classes: list[ClassRecord] = field(default_factory=list)

    def add_class(self, name: str) -> ClassRecord:
        """Append a new, empty class record and return it."""
        record = ClassRecord(name=name)
        self.classes.append(record)
        return record

    def __len__(self) -> int:
        return len(self.classes)

    def __iter__(self) -> Iterator[ClassRecord]:
        return iter(self.classes)

    @property
    def field_count(self) -> int:
        """Total number of fields across all records."""
        return sum(len(record.fields) for record in self.classes)
