"""Text layout of flattened schemas.

A flattened schema is a list of per-type sections. Each section starts with
``MSG: pkg/Type`` followed by that type's definition; sections are separated
by a line of 80 ``=`` characters::

    MSG: builtin_interfaces/Time
    int32 sec
    uint32 nanosec
    ================================================================================
    MSG: std_msgs/Header
    builtin_interfaces/Time stamp
    string frame_id
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..exceptions import MalformedDefinition

SECTION_DELIMITER = "=" * 80
SECTION_HEADER_PREFIX = "MSG: "

_SEPARATOR = f"\n{SECTION_DELIMITER}\n"


def format_section(full_name: str, raw_text: str) -> str:
    return f"{SECTION_HEADER_PREFIX}{full_name}\n{raw_text}"


def join_sections(sections: Iterable[Tuple[str, str]]) -> str:
    """Build a schema document from ``(full_name, raw_text)`` pairs, in order."""
    return _SEPARATOR.join(format_section(name, text) for name, text in sections)


def split_sections(text: str) -> List[Tuple[str, str]]:
    """Split a schema document back into ``(full_name, raw_text)`` pairs.

    Raises:
        MalformedDefinition: If a section does not start with a header line.
    """
    sections: List[Tuple[str, str]] = []
    for index, chunk in enumerate(text.split(_SEPARATOR)):
        header, _, body = chunk.partition("\n")
        if not header.startswith(SECTION_HEADER_PREFIX):
            raise MalformedDefinition(
                f"Section {index} of flattened schema has no '{SECTION_HEADER_PREFIX.strip()}' header: {header!r}"
            )
        sections.append((header[len(SECTION_HEADER_PREFIX):].strip(), body))
    return sections
