#!/usr/bin/env python3

"""Near-JSON rendering of the reflection database.

The layout is consumed by tools that match on it textually, so indentation,
line breaks and comma placement are part of the format. The document opens
with a newline before the top-level bracket:

    [
        {
            "name": "Foo",
            "fields":
            [
                {
                    "type" : "int",
                    "variable": "Foo::x"
                }
            ]
        },
        {
            "name": "Bar",
            "fields": []
        }
    ]

String values are written verbatim; quotes and backslashes are not escaped.
"""

from typing import TextIO

from ....infrastructure.logging import get_logger, log_timing
from ...models.reflection import ClassRecord, Database, Field

logger = get_logger(__name__)

INDENT_STEP = 4


class DatabaseSerializer:
    """Renders a Database, its records and their fields as nested blocks.

    Each nesting level adds INDENT_STEP spaces: records sit one step inside
    the top-level brackets, record entries one step inside the record brace,
    field blocks two steps inside the record brace.
    """

    def __init__(self, indent_step: int = INDENT_STEP) -> None:
        self.indent_step = indent_step

    @log_timing
    def serialize(self, database: Database, indent: int = 0) -> str:
        """Render the whole database.

        Args:
            database: Database to render
            indent: Base indentation, in spaces, of the enclosing brackets

        Returns:
            Document text starting with a newline before the opening bracket,
            without a trailing newline
        """
        pad = " " * indent

        if not database.classes:
            return f"\n{pad}[\n{pad}]"

        blocks = [
            self.serialize_class(record, indent + self.indent_step)
            for record in database.classes
        ]
        logger.debug(f"Serialized {len(blocks)} class records")
        return f"\n{pad}[\n" + ",\n".join(blocks) + f"\n{pad}]"

    def serialize_class(self, record: ClassRecord, indent: int) -> str:
        """Render one record block whose braces sit at ``indent`` spaces."""
        pad = " " * indent
        entry_pad = " " * (indent + self.indent_step)

        parts = [f"{pad}{{\n", f'{entry_pad}"name": "{record.name}",\n']
        if not record.fields:
            parts.append(f'{entry_pad}"fields": []')
        else:
            field_indent = indent + 2 * self.indent_step
            field_blocks = [self.serialize_field(fld, field_indent) for fld in record.fields]
            parts.append(f'{entry_pad}"fields":\n{entry_pad}[\n')
            parts.append(",\n".join(field_blocks))
            parts.append(f"\n{entry_pad}]")
        parts.append(f"\n{pad}}}")
        return "".join(parts)

    def serialize_field(self, fld: Field, indent: int) -> str:
        """Render one field block whose braces sit at ``indent`` spaces."""
        pad = " " * indent
        entry_pad = " " * (indent + self.indent_step)
        return (
            f"{pad}{{\n"
            f'{entry_pad}"type" : "{fld.type}",\n'
            f'{entry_pad}"variable": "{fld.name}"\n'
            f"{pad}}}"
        )

    def dump(self, database: Database, out: TextIO, indent: int = 0) -> TextIO:
        """Write the rendered database to a character stream.

        Args:
            database: Database to render
            out: Writable text stream
            indent: Base indentation in spaces

        Returns:
            The stream, for chaining
        """
        out.write(self.serialize(database, indent))
        return out


def serialize(database: Database, indent: int = 0) -> str:
    """Render ``database`` with the default indentation step."""
    return DatabaseSerializer().serialize(database, indent)
