#!/usr/bin/env python3

"""Declaration source backed by DWARF debug information.

Each compilation unit of each ELF file is treated as one translation unit.
Class, struct and union DIEs are reported in DIE order together with their
direct non-static DW_TAG_member children.
"""

from collections.abc import Iterator, Sequence
from pathlib import Path

from elftools.common.exceptions import DWARFError, ELFError, ELFParseError
from elftools.dwarf.compileunit import CompileUnit
from elftools.dwarf.die import DIE
from elftools.dwarf.dwarfinfo import DWARFInfo
from elftools.elf.elffile import ELFFile

from ...domain.models.reflection import DeclarationEvent, MemberDeclaration
from ...domain.services.traversal import DeclarationSource
from ...infrastructure.logging import ProgressTracker, get_logger
from .tag_constants import ANONYMOUS_SCOPE, RECORD_TAGS
from .type_resolver import DwarfTypeResolver, die_name

logger = get_logger(__name__)


def is_static_member(member_die: DIE) -> bool:
    """DWARF 4 encodes static data members as external member declarations."""
    attributes = member_die.attributes
    return "DW_AT_external" in attributes and "DW_AT_declaration" in attributes


def compile_unit_label(cu: CompileUnit) -> str:
    """Name a compilation unit for log messages."""
    name = die_name(cu.get_top_DIE())
    return name if name else f"CU at 0x{cu.cu_offset:x}"


class DwarfDeclarationSource(DeclarationSource):
    """Reports record declarations found in the DWARF info of ELF files."""

    def __init__(
        self,
        elf_paths: Sequence[Path],
        progress: ProgressTracker | None = None,
        include_forward_declarations: bool = True,
    ):
        """Initialize the source.

        Args:
            elf_paths: ELF files carrying DWARF info
            progress: Optional tracker for unit and declaration counts
            include_forward_declarations: Also report DW_AT_declaration records
        """
        self.elf_paths = list(elf_paths)
        self.progress = progress
        self.include_forward_declarations = include_forward_declarations

    def iter_declarations(self) -> Iterator[DeclarationEvent]:
        for elf_path in self.elf_paths:
            logger.debug(f"Opening ELF file: {elf_path}")
            with open(elf_path, "rb") as stream:
                try:
                    elf_file = ELFFile(stream)
                except (ELFError, ELFParseError) as e:
                    self._skip(str(elf_path), f"not a readable ELF file ({e})")
                    continue

                if not elf_file.has_dwarf_info():
                    self._skip(str(elf_path), "no DWARF info")
                    continue

                yield from self.iter_dwarf_info(elf_file.get_dwarf_info())

    def iter_dwarf_info(self, dwarf_info: DWARFInfo) -> Iterator[DeclarationEvent]:
        """Yield events for every compilation unit of one DWARF info object."""
        resolver = DwarfTypeResolver()

        try:
            for cu in dwarf_info.iter_CUs():
                yield from self._iter_unit(cu, resolver)
        except (DWARFError, ELFParseError) as e:
            self._skip("remaining compilation units", f"DWARF decoding failed ({e})")

    def _iter_unit(self, cu: CompileUnit, resolver: DwarfTypeResolver) -> Iterator[DeclarationEvent]:
        label = compile_unit_label(cu)
        try:
            events = list(self.iter_compile_unit(cu, resolver))
        except (DWARFError, ELFParseError) as e:
            self._skip(label, f"DWARF decoding failed ({e})")
            return

        if self.progress is None:
            yield from events
            return

        with self.progress.track_unit(label):
            for event in events:
                self.progress.count_declaration()
                yield event

    def iter_compile_unit(
        self, cu: CompileUnit, resolver: DwarfTypeResolver
    ) -> Iterator[DeclarationEvent]:
        """Yield an event for every record DIE in one compilation unit."""
        die: DIE
        for die in cu.iter_DIEs():
            if die.is_null() or die.tag not in RECORD_TAGS:
                continue
            if not self.include_forward_declarations and "DW_AT_declaration" in die.attributes:
                continue
            yield self.build_event(die, resolver)

    def build_event(self, record_die: DIE, resolver: DwarfTypeResolver) -> DeclarationEvent:
        """Describe one record DIE and its direct non-static data members."""
        record_name = resolver.qualified_name(record_die)

        members = []
        for child in record_die.iter_children():
            if child.tag != "DW_TAG_member" or is_static_member(child):
                continue
            member_name = die_name(child) or ANONYMOUS_SCOPE
            members.append(
                MemberDeclaration(
                    type_text=resolver.resolve_type_name(child),
                    qualified_name=f"{record_name}::{member_name}",
                )
            )

        return DeclarationEvent(qualified_name=record_name, members=tuple(members))

    def _skip(self, unit: str, reason: str) -> None:
        if self.progress is not None:
            self.progress.mark_unit_failed(unit, reason)
        else:
            logger.warning(f"Skipping {unit}: {reason}")
