#!/usr/bin/env python3

"""Field model for the reflection database."""

from dataclasses import dataclass


@dataclass
class Field:
    """One non-static data member of a class record."""

    type: str
    """Printed member type, kept verbatim"""

    name: str
    """Qualified member name (e.g. 'ns::Foo::x'); serialized as 'variable'"""
