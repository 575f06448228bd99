#!/usr/bin/env python3

"""Reflection database models."""

from .class_record import ClassRecord
from .database import Database
from .declaration_event import DeclarationEvent, MemberDeclaration
from .field import Field

__all__ = [
    "ClassRecord",
    "Database",
    "DeclarationEvent",
    "Field",
    "MemberDeclaration",
]
