#!/usr/bin/env python3

"""Progress tracking for declaration extraction runs."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from time import time


class ProgressTracker:
    """
    Track and report extraction progress.

    Counts translation units and declaration-visit events, times nested
    operations and logs a one-line summary at the end of a run.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.start_time = time()
        self.unit_count = 0
        self.failed_unit_count = 0
        self.declaration_count = 0
        self.operation_stack: list[tuple[str, float]] = []

    @contextmanager
    def track_operation(self, operation_name: str) -> Iterator[None]:
        """Time one phase of a run (traversal, serialization).

        Phases may nest; get_current_context() shows the open ones.
        """
        self.operation_stack.append((operation_name, time()))
        context = self.get_current_context()
        self.logger.debug(f"[{context}] started")

        try:
            yield
        except Exception as e:
            self.logger.error(f"[{context}] aborted after {self._elapsed_since_push():.3f}s: {e}")
            raise
        else:
            self.logger.debug(f"[{context}] done in {self._elapsed_since_push():.3f}s")
        finally:
            self.operation_stack.pop()

    def _elapsed_since_push(self) -> float:
        return time() - self.operation_stack[-1][1]

    @contextmanager
    def track_unit(self, unit_name: str) -> Iterator[None]:
        """Count one translation unit and log how many declarations it produced.

        ``unit_name`` is a source path or a compilation unit label.
        """
        self.unit_count += 1
        unit_start = time()
        initial_declarations = self.declaration_count

        self.logger.debug(f"Processing unit #{self.unit_count}: {unit_name}")

        try:
            yield
        except Exception as e:
            elapsed = time() - unit_start
            self.logger.error(f"Unit #{self.unit_count} ({unit_name}) failed after {elapsed:.3f}s: {e}")
            raise

        elapsed = time() - unit_start
        visited = self.declaration_count - initial_declarations
        self.logger.debug(
            f"Unit #{self.unit_count} completed in {elapsed:.3f}s ({visited} declarations visited)"
        )

    def count_declaration(self) -> None:
        """Increment the declaration counter."""
        self.declaration_count += 1

    def mark_unit_failed(self, unit_name: str, reason: str) -> None:
        """Record a unit the front end could not deliver."""
        self.failed_unit_count += 1
        self.logger.warning(f"Skipping {unit_name}: {reason}")

    def report_summary(self, recorded: int | None = None) -> None:
        """Report final processing statistics.

        Args:
            recorded: Number of class records kept after filtering, if known
        """
        total_time = time() - self.start_time
        rate = self.declaration_count / total_time if total_time > 0 else 0

        kept = f", {recorded} recorded" if recorded is not None else ""
        failed = f", {self.failed_unit_count} skipped" if self.failed_unit_count else ""
        self.logger.info(
            f"Processing complete: {self.unit_count} units{failed}, "
            f"{self.declaration_count} declarations{kept} in {total_time:.2f}s "
            f"({rate:.1f} declarations/s)"
        )

    def get_current_context(self) -> str:
        """
        Get current operation context for logging.

        Returns:
            String describing current operation stack
        """
        if not self.operation_stack:
            return "idle"

        return " -> ".join(op[0] for op in self.operation_stack)
