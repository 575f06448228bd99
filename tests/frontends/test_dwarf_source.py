"""Tests for the DWARF declaration source and type resolver."""

import itertools
from pathlib import Path
from unittest.mock import Mock

import pytest
from elftools.common.exceptions import DWARFError

from class_version.frontends.dwarf import DwarfDeclarationSource, DwarfTypeResolver
from class_version.infrastructure.logging import ProgressTracker, get_logger

_offsets = itertools.count(0x100, 0x10)


class FakeDIE:
    """Just enough of elftools' DIE for the resolver and the source."""

    def __init__(self, tag, name=None, parent=None, **attrs):
        self.tag = tag
        self.offset = next(_offsets)
        self.attributes = {}
        self._refs = {}
        self._children = []
        self._parent = parent
        if name is not None:
            self.attributes["DW_AT_name"] = Mock(value=name.encode("utf-8"))
        for attr, value in attrs.items():
            self.attributes[attr] = Mock(value=value)
        if parent is not None:
            parent._children.append(self)

    def ref(self, attr, target):
        self.attributes[attr] = Mock(value=target.offset)
        self._refs[attr] = target
        return self

    def iter_children(self):
        return iter(self._children)

    def get_parent(self):
        return self._parent

    def get_DIE_from_attribute(self, attr):
        return self._refs[attr]

    def is_null(self):
        return False

    def walk(self):
        yield self
        for child in self._children:
            yield from child.walk()


@pytest.fixture
def cu_die():
    return FakeDIE("DW_TAG_compile_unit", "game.cpp")


@pytest.fixture
def int_type(cu_die):
    return FakeDIE("DW_TAG_base_type", "int", cu_die)


@pytest.fixture
def resolver():
    return DwarfTypeResolver()


def member_of(parent, name, type_die, **attrs):
    return FakeDIE("DW_TAG_member", name, parent, **attrs).ref("DW_AT_type", type_die)


def make_cu(top_die):
    cu = Mock()
    cu.cu_offset = 0
    cu.get_top_DIE.return_value = top_die
    cu.iter_DIEs.side_effect = lambda: top_die.walk()
    return cu


@pytest.mark.unit
def test_base_and_pointer_types(resolver, cu_die, int_type) -> None:
    char_type = FakeDIE("DW_TAG_base_type", "char", cu_die)
    const_char = FakeDIE("DW_TAG_const_type", parent=cu_die).ref("DW_AT_type", char_type)
    ptr_const_char = FakeDIE("DW_TAG_pointer_type", parent=cu_die).ref("DW_AT_type", const_char)
    int_ptr = FakeDIE("DW_TAG_pointer_type", parent=cu_die).ref("DW_AT_type", int_type)
    const_int_ptr = FakeDIE("DW_TAG_const_type", parent=cu_die).ref("DW_AT_type", int_ptr)
    int_ptr_ptr = FakeDIE("DW_TAG_pointer_type", parent=cu_die).ref("DW_AT_type", int_ptr)
    void_ptr = FakeDIE("DW_TAG_pointer_type", parent=cu_die)

    assert resolver.render_type(int_type) == "int"
    assert resolver.render_type(ptr_const_char) == "const char *"
    assert resolver.render_type(const_int_ptr) == "int *const"
    assert resolver.render_type(int_ptr_ptr) == "int **"
    assert resolver.render_type(void_ptr) == "void *"


@pytest.mark.unit
def test_reference_array_and_function_pointer(resolver, cu_die, int_type) -> None:
    ns = FakeDIE("DW_TAG_namespace", "ns", cu_die)
    foo = FakeDIE("DW_TAG_structure_type", "Foo", ns)
    foo_ref = FakeDIE("DW_TAG_reference_type", parent=cu_die).ref("DW_AT_type", foo)

    matrix = FakeDIE("DW_TAG_array_type", parent=cu_die).ref("DW_AT_type", int_type)
    FakeDIE("DW_TAG_subrange_type", parent=matrix, DW_AT_upper_bound=3)
    FakeDIE("DW_TAG_subrange_type", parent=matrix, DW_AT_count=2)

    float_type = FakeDIE("DW_TAG_base_type", "float", cu_die)
    callback = FakeDIE("DW_TAG_subroutine_type", parent=cu_die)
    FakeDIE("DW_TAG_formal_parameter", parent=callback).ref("DW_AT_type", int_type)
    FakeDIE("DW_TAG_formal_parameter", parent=callback).ref("DW_AT_type", float_type)
    callback_ptr = FakeDIE("DW_TAG_pointer_type", parent=cu_die).ref("DW_AT_type", callback)

    assert resolver.render_type(foo) == "ns::Foo"
    assert resolver.render_type(foo_ref) == "ns::Foo &"
    assert resolver.render_type(matrix) == "int[4][2]"
    assert resolver.render_type(callback_ptr) == "void (*)(int, float)"


@pytest.mark.unit
def test_unnamed_record_type_gets_elaborated_keyword(resolver, cu_die) -> None:
    holder = FakeDIE("DW_TAG_structure_type", "Holder", cu_die)
    unnamed = FakeDIE("DW_TAG_union_type", parent=holder)

    assert resolver.render_type(unnamed) == "union Holder::(anonymous)"


@pytest.mark.unit
def test_missing_type_attribute_is_void(resolver, cu_die) -> None:
    member = FakeDIE("DW_TAG_member", "m", cu_die)

    assert resolver.resolve_type_name(member) == "void"


@pytest.mark.unit
def test_rendered_types_are_cached_by_offset(resolver, int_type) -> None:
    resolver.render_type(int_type)
    int_type.attributes["DW_AT_name"] = Mock(value=b"renamed")

    assert resolver.render_type(int_type) == "int"
    assert DwarfTypeResolver().render_type(int_type) == "renamed"


@pytest.mark.unit
def test_qualified_names_of_nested_scopes(resolver, cu_die) -> None:
    anonymous_ns = FakeDIE("DW_TAG_namespace", parent=cu_die)
    outer = FakeDIE("DW_TAG_class_type", "Outer", anonymous_ns)
    inner = FakeDIE("DW_TAG_structure_type", "Inner", outer)

    assert resolver.qualified_name(inner) == "(anonymous namespace)::Outer::Inner"


@pytest.mark.unit
def test_local_type_in_out_of_line_method(resolver, cu_die, int_type) -> None:
    ns = FakeDIE("DW_TAG_namespace", "ns", cu_die)
    foo = FakeDIE("DW_TAG_class_type", "Foo", ns)
    declaration = FakeDIE("DW_TAG_subprogram", "tick", foo, DW_AT_declaration=True)

    definition = FakeDIE("DW_TAG_subprogram", parent=cu_die).ref("DW_AT_specification", declaration)
    FakeDIE("DW_TAG_formal_parameter", "this", definition, DW_AT_artificial=True).ref("DW_AT_type", int_type)
    FakeDIE("DW_TAG_formal_parameter", "dt", definition).ref("DW_AT_type", int_type)
    block = FakeDIE("DW_TAG_lexical_block", parent=definition)
    local = FakeDIE("DW_TAG_structure_type", "Scratch", block)

    assert resolver.qualified_name(local) == "ns::Foo::tick(int)::Scratch"


@pytest.mark.unit
def test_out_of_line_nested_record_takes_declaration_name(resolver, cu_die, int_type) -> None:
    ns = FakeDIE("DW_TAG_namespace", "ns", cu_die)
    outer = FakeDIE("DW_TAG_structure_type", "Outer", ns)
    declaration = FakeDIE("DW_TAG_structure_type", "Inner", outer, DW_AT_declaration=True)

    definition = FakeDIE("DW_TAG_structure_type", parent=cu_die).ref("DW_AT_specification", declaration)
    member_of(definition, "x", int_type)
    deep = FakeDIE("DW_TAG_union_type", "Deep", definition)
    holder = FakeDIE("DW_TAG_pointer_type", parent=cu_die).ref("DW_AT_type", definition)

    event = DwarfDeclarationSource([]).build_event(definition, resolver)

    assert event.qualified_name == "ns::Outer::Inner"
    assert [(m.type_text, m.qualified_name) for m in event.members] == [("int", "ns::Outer::Inner::x")]
    assert resolver.qualified_name(deep) == "ns::Outer::Inner::Deep"
    assert resolver.render_type(holder) == "ns::Outer::Inner *"


@pytest.mark.unit
def test_build_event_keeps_direct_non_static_members(resolver, cu_die, int_type) -> None:
    base = FakeDIE("DW_TAG_class_type", "Base", cu_die)
    player = FakeDIE("DW_TAG_class_type", "Player", cu_die)
    FakeDIE("DW_TAG_inheritance", parent=player).ref("DW_AT_type", base)
    member_of(player, "hp", int_type, DW_AT_data_member_location=0)
    member_of(player, "count", int_type, DW_AT_external=True, DW_AT_declaration=True)
    FakeDIE("DW_TAG_subprogram", "update", player)
    member_of(player, None, FakeDIE("DW_TAG_union_type", parent=player))

    event = DwarfDeclarationSource([]).build_event(player, resolver)

    assert event.qualified_name == "Player"
    assert [(m.type_text, m.qualified_name) for m in event.members] == [
        ("int", "Player::hp"),
        ("union Player::(anonymous)", "Player::(anonymous)"),
    ]


@pytest.mark.unit
def test_iter_compile_unit_visits_records_in_die_order(resolver, cu_die, int_type) -> None:
    ns = FakeDIE("DW_TAG_namespace", "ns", cu_die)
    foo = FakeDIE("DW_TAG_structure_type", "Foo", ns)
    member_of(foo, "x", int_type)
    FakeDIE("DW_TAG_union_type", "Bits", foo)
    FakeDIE("DW_TAG_structure_type", "Fwd", cu_die, DW_AT_declaration=True)
    FakeDIE("DW_TAG_enumeration_type", "Color", cu_die)

    names = [e.qualified_name for e in DwarfDeclarationSource([]).iter_compile_unit(make_cu(cu_die), resolver)]
    assert names == ["ns::Foo", "ns::Foo::Bits", "Fwd"]

    source = DwarfDeclarationSource([], include_forward_declarations=False)
    names = [e.qualified_name for e in source.iter_compile_unit(make_cu(cu_die), resolver)]
    assert names == ["ns::Foo", "ns::Foo::Bits"]


@pytest.mark.unit
def test_iter_dwarf_info_tracks_units_and_skips_broken_ones(cu_die) -> None:
    FakeDIE("DW_TAG_structure_type", "A", cu_die)
    broken = Mock()
    broken.cu_offset = 0x40
    broken.get_top_DIE.return_value = FakeDIE("DW_TAG_compile_unit", "broken.cpp")
    broken.iter_DIEs.side_effect = DWARFError("bad abbreviation")

    dwarf_info = Mock()
    dwarf_info.iter_CUs.return_value = [broken, make_cu(cu_die)]
    progress = ProgressTracker(get_logger("test"))

    events = list(DwarfDeclarationSource([], progress=progress).iter_dwarf_info(dwarf_info))

    assert [e.qualified_name for e in events] == ["A"]
    assert progress.failed_unit_count == 1
    assert progress.unit_count == 1
    assert progress.declaration_count == 1


@pytest.mark.unit
def test_non_elf_input_is_skipped(tmp_path: Path, caplog) -> None:
    bogus = tmp_path / "not_an_elf.o"
    bogus.write_bytes(b"definitely not an ELF file")

    with caplog.at_level("WARNING"), DwarfDeclarationSource([bogus]) as source:
        events = list(source.iter_declarations())

    assert events == []
    assert "not a readable ELF file" in caplog.text
