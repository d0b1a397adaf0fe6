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

"""Namespace-qualified identifiers for message interface types.

A reference is written either as ``pkg/Type`` or as ``pkg/msg/Type``. The
short form is what appears in flattened schema headers; the long form is the
ROS 2 interface name used by ``ros2 interface`` and the ament index.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from ..exceptions import MalformedDefinition

MSG_NAMESPACE = "msg"

PACKAGE_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*$")
TYPE_NAME_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")


@dataclass(frozen=True, order=True)
class TypeReference:
    """A ``(package, name)`` pair, ordered lexicographically."""

    package: str
    name: str

    def __post_init__(self) -> None:
        if not PACKAGE_NAME_RE.match(self.package):
            raise MalformedDefinition(f"Illegal package name '{self.package}'")
        if not TYPE_NAME_RE.match(self.name):
            raise MalformedDefinition(f"Illegal type name '{self.name}' in package '{self.package}'")

    @property
    def full_name(self) -> str:
        return f"{self.package}/{self.name}"

    @property
    def interface_name(self) -> str:
        return f"{self.package}/{MSG_NAMESPACE}/{self.name}"

    def __str__(self) -> str:
        return self.full_name

    @classmethod
    def parse(cls, text: str, current_package: Optional[str] = None) -> "TypeReference":
        """Parse ``pkg/Type``, ``pkg/msg/Type`` or, with *current_package*, a bare ``Type``.

        Raises:
            MalformedDefinition: If the text is not a valid reference.
        """
        if not isinstance(text, str):
            raise MalformedDefinition(
                f"Type reference must be a string, got {type(text).__name__}: {text!r}"
            )

        segments = text.strip().split("/")
        if len(segments) == 1 and current_package is not None:
            return cls(current_package, segments[0])
        if len(segments) == 2:
            return cls(segments[0], segments[1])
        if len(segments) == 3 and segments[1] == MSG_NAMESPACE:
            return cls(segments[0], segments[2])

        raise MalformedDefinition(
            f"Invalid type reference '{text}'. Expected 'pkg/Type' or 'pkg/msg/Type'."
        )

    @classmethod
    def coerce(cls, value: Union[str, "TypeReference"]) -> "TypeReference":
        if isinstance(value, TypeReference):
            return value
        return cls.parse(value)
