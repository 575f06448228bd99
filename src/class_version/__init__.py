"""class-version - reflection database extraction for C/C++ record types."""

from .application import ReflectionExtractor
from .domain.models.reflection import ClassRecord, Database, DeclarationEvent, Field, MemberDeclaration
from .domain.services.filtering import should_include
from .domain.services.serialization import DatabaseSerializer, serialize
from .domain.services.traversal import DeclarationSource, TraversalAdapter
from .infrastructure.config import Config

__version__ = "0.1.0"

__all__ = [
    "ClassRecord",
    "Config",
    "Database",
    "DatabaseSerializer",
    "DeclarationEvent",
    "DeclarationSource",
    "Field",
    "MemberDeclaration",
    "ReflectionExtractor",
    "TraversalAdapter",
    "serialize",
    "should_include",
]
