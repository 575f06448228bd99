"""Pytest configuration and shared fixtures."""

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from class_version.domain.models.reflection import Database, DeclarationEvent, MemberDeclaration
from class_version.domain.services.traversal import DeclarationSource
from class_version.infrastructure.logging import LoggerSetup


class ListDeclarationSource(DeclarationSource):
    """Declaration source replaying a fixed list of events."""

    def __init__(self, events: list[DeclarationEvent]):
        self.events = list(events)
        self.entered = False
        self.exited = False

    def __enter__(self) -> "ListDeclarationSource":
        self.entered = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.exited = True

    def iter_declarations(self) -> Iterator[DeclarationEvent]:
        yield from self.events


def make_event(name: str, *members: tuple[str, str]) -> DeclarationEvent:
    """Build an event from (type, member name) pairs."""
    return DeclarationEvent(
        qualified_name=name,
        members=tuple(MemberDeclaration(type_text=t, qualified_name=n) for t, n in members),
    )


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Leave no handlers behind between tests."""
    yield
    LoggerSetup.reset()


@pytest.fixture
def event() -> Callable[..., DeclarationEvent]:
    """Factory for declaration events."""
    return make_event


@pytest.fixture
def list_source() -> Callable[[list[DeclarationEvent]], ListDeclarationSource]:
    """Factory for in-memory declaration sources."""
    return ListDeclarationSource


@pytest.fixture
def sample_events() -> list[DeclarationEvent]:
    """Events resembling a small C++ translation unit."""
    return [
        make_event("Foo", ("int", "Foo::x")),
        make_event("game::Player", ("std::string", "game::Player::name"), ("float", "game::Player::hp")),
        make_event("game::Player::Stats"),
        make_event("Bar", ("const char *", "Bar::label")),
    ]


@pytest.fixture
def sample_database() -> Database:
    """Database with one populated and one empty record."""
    database = Database()
    foo = database.add_class("Foo")
    foo.add_field("int", "Foo::x")
    foo.add_field("double", "Foo::y")
    database.add_class("Bar")
    return database
