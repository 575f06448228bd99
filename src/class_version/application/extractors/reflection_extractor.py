#!/usr/bin/env python3

"""Reflection database extraction orchestrator (Application Layer).

Wires the modular components together for one run:
- DeclarationSource: produces declaration-visit events
- TraversalAdapter: filters events and fills the Database
- DatabaseSerializer: renders the finished Database
"""

from collections.abc import Sequence

from ...domain.models.reflection import Database
from ...domain.services.serialization import DatabaseSerializer
from ...domain.services.traversal import DeclarationSource, TraversalAdapter
from ...infrastructure.logging import ProgressTracker, get_logger, log_timing

logger = get_logger(__name__)


class ReflectionExtractor:
    """Owns the Database of one run and drives traversal then serialization.

    Traversal may be run several times (e.g. for several sources); records
    accumulate in the same Database and are never merged.
    """

    def __init__(
        self,
        patterns: Sequence[str] = (),
        progress: ProgressTracker | None = None,
        serializer: DatabaseSerializer | None = None,
    ):
        """Initialize extractor.

        Args:
            patterns: Qualified-name substrings to keep; empty keeps everything
            progress: Tracker shared with the declaration source
            serializer: Serializer to render the database with
        """
        self.database = Database()
        self.adapter = TraversalAdapter(self.database, patterns)
        self.progress = progress or ProgressTracker(logger)
        self.serializer = serializer or DatabaseSerializer()

    @log_timing
    def extract(self, source: DeclarationSource) -> Database:
        """Consume every declaration of an opened source.

        Args:
            source: Declaration source, already entered as a context manager

        Returns:
            The accumulated database
        """
        with self.progress.track_operation("traversal"):
            self.adapter.traverse(source.iter_declarations())

        logger.info(
            f"Visited {self.adapter.visited_count} declarations, "
            f"recorded {len(self.database)} classes with {self.database.field_count} fields"
        )
        if self.adapter.patterns:
            logger.debug(
                f"{self.adapter.skipped_count} declarations did not match {list(self.adapter.patterns)}"
            )
        return self.database

    def render(self, indent: int = 0) -> str:
        """Serialize the accumulated database."""
        with self.progress.track_operation("serialization"):
            return self.serializer.serialize(self.database, indent)

    def report(self) -> None:
        """Log the end-of-run summary."""
        self.progress.report_summary(recorded=len(self.database))
