#!/usr/bin/env python3

"""Populates a Database from declaration-visit events."""

from collections.abc import Iterable, Sequence

from ....infrastructure.logging import get_logger
from ...models.reflection import Database, DeclarationEvent
from ..filtering import should_include

logger = get_logger(__name__)


class TraversalAdapter:
    """Applies the name filter to each event and records the survivors.

    The adapter is the only writer of the database it is given. It appends and
    never reorders, merges or deduplicates: a declaration visited twice
    becomes two independent records.
    """

    def __init__(self, database: Database, patterns: Sequence[str] = ()):
        """Initialize adapter.

        Args:
            database: Accumulator to append to
            patterns: Qualified-name substrings; empty keeps every declaration
        """
        self.database = database
        self.patterns = tuple(patterns)
        self.visited_count = 0
        self.skipped_count = 0

    def visit(self, event: DeclarationEvent) -> bool:
        """Record one declaration if it passes the name filter.

        Args:
            event: Declaration-visit event

        Returns:
            True if a class record was appended
        """
        self.visited_count += 1

        if not should_include(event.qualified_name, self.patterns):
            self.skipped_count += 1
            return False

        record = self.database.add_class(event.qualified_name)
        for member in event.members:
            record.add_field(member.type_text, member.qualified_name)

        logger.debug(f"Recorded {record.name} with {len(record.fields)} fields")
        return True

    def traverse(self, events: Iterable[DeclarationEvent]) -> Database:
        """Visit every event in order.

        Args:
            events: Declaration-visit events, typically from a DeclarationSource

        Returns:
            The database passed to the constructor
        """
        for event in events:
            self.visit(event)
        return self.database
