#!/usr/bin/env python3

"""Declaration-visit events produced by the front ends."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MemberDeclaration:
    """A direct non-static data member as reported by a front end."""

    type_text: str
    qualified_name: str


@dataclass(frozen=True)
class DeclarationEvent:
    """One type declaration and its direct data members, in source order.

    Base-class members, static members and methods are never part of an event.
    """

    qualified_name: str
    members: tuple[MemberDeclaration, ...] = field(default_factory=tuple)
