# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Parser for ROS 2 ``.msg`` interface definitions."""

import logging
import re
from typing import Dict, List, Optional, Tuple

from ..exceptions import MalformedDefinition
from ..models.descriptors import ArrayKind, ArraySpec, FieldDescriptor, FieldType, TypeDescriptor
from ..models.type_reference import TypeReference
from ..utils.primitive_types import (
    is_primitive_type,
    is_string_type,
    looks_like_primitive_keyword,
    split_bounded_string,
)

logger = logging.getLogger(__name__)

# lower snake case, no "__", no trailing "_"
FIELD_NAME_RE = re.compile(r"^[a-z](?:[a-z0-9]|_(?!_))*$")
CONSTANT_NAME_RE = re.compile(r"^[A-Z][A-Z0-9_]*$")

_CONSTANT_LINE_RE = re.compile(r"^(\S+)\s+([A-Za-z_][A-Za-z0-9_]*)\s*=(.*)$")


# a quote opens a literal only at the start of a value token
_QUOTE_OPENERS = " \t=[,"


def strip_comment(text: str) -> str:
    """Drop a trailing ``#`` comment, ignoring ``#`` inside quoted literals.

    An apostrophe inside a word, as in ``it's``, is plain text.
    """
    quote: Optional[str] = None
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"') and (i == 0 or text[i - 1] in _QUOTE_OPENERS):
            quote = ch
        elif ch == "#":
            return text[:i]
        i += 1
    return text


class DefinitionParser:
    """Turns the raw text of one message definition into a TypeDescriptor."""

    def parse(self, type_ref: TypeReference, raw_text: str) -> TypeDescriptor:
        """Parse *raw_text* as the definition of *type_ref*.

        Bare type names resolve to the package of *type_ref*.

        Raises:
            MalformedDefinition: If the text violates the .msg grammar.
        """
        fields: List[FieldDescriptor] = []
        constants: List[FieldDescriptor] = []
        seen: Dict[str, int] = {}

        for line_no, raw_line in enumerate(raw_text.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            constant_match = _CONSTANT_LINE_RE.match(line)
            if constant_match:
                entry = self._parse_constant(type_ref, constant_match, line_no)
                target = constants
            else:
                entry = self._parse_field(type_ref, line, line_no)
                target = fields

            if entry.name in seen:
                raise MalformedDefinition(
                    f"Duplicate field name '{entry.name}' (first declared on line {seen[entry.name]})",
                    type_ref,
                    line_no,
                )
            seen[entry.name] = line_no
            target.append(entry)

        self._check_bound_constants(type_ref, fields, constants)

        logger.debug(f"Parsed {type_ref}: {len(fields)} field(s), {len(constants)} constant(s)")
        return TypeDescriptor(
            ref=type_ref,
            fields=tuple(fields),
            constants=tuple(constants),
            raw_text=raw_text,
        )

    def _parse_field(self, type_ref: TypeReference, line: str, line_no: int) -> FieldDescriptor:
        body = strip_comment(line).strip()
        tokens = body.split(None, 2)
        if len(tokens) < 2:
            raise MalformedDefinition(
                f"Expected '<type> <name>' but got '{body}'", type_ref, line_no
            )

        type_token, name = tokens[0], tokens[1]
        default = tokens[2].strip() if len(tokens) == 3 else None

        field_type, array = self._parse_type_token(type_ref, type_token, line_no)

        if not FIELD_NAME_RE.match(name) or name.endswith("_"):
            raise MalformedDefinition(f"Illegal field name '{name}'", type_ref, line_no)

        if default is not None:
            if not field_type.is_primitive:
                raise MalformedDefinition(
                    f"Field '{name}' of message type {field_type} cannot have a default value",
                    type_ref,
                    line_no,
                )
            if array is not None and not (default.startswith("[") and default.endswith("]")):
                raise MalformedDefinition(
                    f"Default value of array field '{name}' must be a bracketed list, got '{default}'",
                    type_ref,
                    line_no,
                )

        return FieldDescriptor(
            name=name,
            type=field_type,
            array=array,
            default=default,
            line=line_no,
        )

    def _parse_constant(self, type_ref: TypeReference, match: "re.Match[str]", line_no: int) -> FieldDescriptor:
        type_token, name, value_text = match.group(1), match.group(2), match.group(3)

        field_type, array = self._parse_type_token(type_ref, type_token, line_no)
        if not field_type.is_primitive or array is not None:
            raise MalformedDefinition(
                f"Constant '{name}' must have a primitive non-array type, got '{type_token}'",
                type_ref,
                line_no,
            )
        if not CONSTANT_NAME_RE.match(name):
            raise MalformedDefinition(f"Illegal constant name '{name}'", type_ref, line_no)

        # string constants take the rest of the line verbatim, '#' included
        if is_string_type(field_type.primitive):
            value = value_text.strip()
        else:
            value = strip_comment(value_text).strip()
        if not value:
            raise MalformedDefinition(f"Constant '{name}' has no value", type_ref, line_no)

        return FieldDescriptor(
            name=name,
            type=field_type,
            constant_value=value,
            line=line_no,
        )

    def _parse_type_token(
        self, type_ref: TypeReference, token: str, line_no: int
    ) -> Tuple[FieldType, Optional[ArraySpec]]:
        base = token
        array: Optional[ArraySpec] = None

        if "[" in token or "]" in token:
            lb = token.find("[")
            if lb <= 0 or not token.endswith("]") or token.count("[") != 1 or token.count("]") != 1:
                raise MalformedDefinition(f"Unterminated array bound in '{token}'", type_ref, line_no)
            base = token[:lb]
            array = self._parse_array_suffix(type_ref, token, token[lb + 1:-1].strip(), line_no)

        try:
            primitive, string_bound = split_bounded_string(base)
        except ValueError as exc:
            raise MalformedDefinition(str(exc), type_ref, line_no) from exc

        if is_primitive_type(primitive):
            return FieldType(primitive=primitive, string_bound=string_bound), array

        if looks_like_primitive_keyword(base):
            raise MalformedDefinition(f"Unknown primitive type '{base}'", type_ref, line_no)

        try:
            reference = TypeReference.parse(base, current_package=type_ref.package)
        except MalformedDefinition as exc:
            raise MalformedDefinition(str(exc), type_ref, line_no) from exc
        return FieldType(reference=reference), array

    def _parse_array_suffix(
        self, type_ref: TypeReference, token: str, inner: str, line_no: int
    ) -> ArraySpec:
        if not inner:
            return ArraySpec(ArrayKind.UNBOUNDED)

        kind = ArrayKind.FIXED
        if inner.startswith("<="):
            kind = ArrayKind.BOUNDED
            inner = inner[2:].strip()

        if inner.isdigit() and int(inner) > 0:
            return ArraySpec(kind, size=int(inner))
        if CONSTANT_NAME_RE.match(inner):
            return ArraySpec(kind, size_constant=inner)

        raise MalformedDefinition(f"Invalid array bound '{inner}' in '{token}'", type_ref, line_no)

    def _check_bound_constants(
        self,
        type_ref: TypeReference,
        fields: List[FieldDescriptor],
        constants: List[FieldDescriptor],
    ) -> None:
        declared = {c.name for c in constants}
        for f in fields:
            if f.array is not None and f.array.size_constant and f.array.size_constant not in declared:
                raise MalformedDefinition(
                    f"Array bound of '{f.name}' names undeclared constant '{f.array.size_constant}'",
                    type_ref,
                    f.line,
                )


# Global parser instance
definition_parser = DefinitionParser()


def parse_definition(type_ref: TypeReference, raw_text: str) -> TypeDescriptor:
    return definition_parser.parse(type_ref, raw_text)
