#!/usr/bin/env python3

"""Abstract provider of declaration-visit events.

Any concrete front end (libclang, DWARF, a test fixture) is adapted to this
interface; the traversal adapter depends on nothing else.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from ...models.reflection import DeclarationEvent


class DeclarationSource(ABC):
    """Produces one DeclarationEvent per visited type declaration.

    Sources are context managers so they can own native resources (an index,
    open files) for the duration of a run.
    """

    def __enter__(self) -> "DeclarationSource":
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: Exception | None, exc_tb: object | None
    ) -> None:
        return None

    @abstractmethod
    def iter_declarations(self) -> Iterator[DeclarationEvent]:
        """Yield declaration-visit events in source order.

        Returns:
            Iterator of events; exhausted once every unit has been walked
        """
