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

"""Parsed representation of a single message definition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .type_reference import TypeReference


class ArrayKind(str, Enum):
    FIXED = "fixed"
    BOUNDED = "bounded"
    UNBOUNDED = "unbounded"


@dataclass(frozen=True)
class ArraySpec:
    kind: ArrayKind
    size: Optional[int] = None
    # Set when the bound names a constant of the same message instead of a literal.
    size_constant: Optional[str] = None

    def __str__(self) -> str:
        bound = str(self.size) if self.size is not None else (self.size_constant or "")
        if self.kind == ArrayKind.UNBOUNDED:
            return "[]"
        if self.kind == ArrayKind.BOUNDED:
            return f"[<={bound}]"
        return f"[{bound}]"


@dataclass(frozen=True)
class FieldType:
    """Element type of a field: a primitive keyword or a nested message."""

    primitive: Optional[str] = None
    string_bound: Optional[int] = None
    reference: Optional[TypeReference] = None

    @property
    def is_primitive(self) -> bool:
        return self.reference is None

    def __str__(self) -> str:
        if self.reference is not None:
            return self.reference.full_name
        if self.string_bound is not None:
            return f"{self.primitive}<={self.string_bound}"
        return self.primitive or ""


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: FieldType
    array: Optional[ArraySpec] = None
    default: Optional[str] = None
    constant_value: Optional[str] = None
    line: Optional[int] = None

    @property
    def is_constant(self) -> bool:
        return self.constant_value is not None

    @property
    def is_array(self) -> bool:
        return self.array is not None


@dataclass(frozen=True)
class TypeDescriptor:
    """A parsed message type.

    ``fields`` keeps declaration order and excludes constants, which live in
    ``constants``. ``raw_text`` is the definition exactly as the locator
    supplied it.
    """

    ref: TypeReference
    fields: Tuple[FieldDescriptor, ...]
    constants: Tuple[FieldDescriptor, ...]
    raw_text: str

    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)
