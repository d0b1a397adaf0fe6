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

"""Custom exceptions for the ROS 2 schema resolver."""

from typing import TYPE_CHECKING, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .models.type_reference import TypeReference


class SchemaResolverError(Exception):
    """Base exception for schema resolution errors.

    Every error carries the type reference it concerns (when one is known) so
    callers can tell a broken root from a broken dependency.
    """

    def __init__(self, message: str, type_ref: Optional["TypeReference"] = None):
        super().__init__(message)
        self.type_ref = type_ref


class MalformedDefinition(SchemaResolverError):
    """Exception raised when a definition violates the .msg grammar."""

    def __init__(
        self,
        message: str,
        type_ref: Optional["TypeReference"] = None,
        line: Optional[int] = None,
    ):
        location = ""
        if type_ref is not None:
            location = f" (type={type_ref}"
            if line is not None:
                location += f", line={line}"
            location += ")"
        super().__init__(f"{message}{location}", type_ref)
        self.line = line


class UnknownType(SchemaResolverError):
    """Exception raised when no source is available for a type."""

    def __init__(self, type_ref: "TypeReference", detail: str = ""):
        message = f"Definition not found for: {type_ref}"
        if detail:
            message += f" ({detail})"
        super().__init__(message, type_ref)


class CyclicDependency(SchemaResolverError):
    """Exception raised when a type transitively depends on itself."""

    def __init__(self, cycle: Sequence["TypeReference"]):
        self.cycle: Tuple["TypeReference", ...] = tuple(cycle)
        loop = " -> ".join(str(ref) for ref in self.cycle + self.cycle[:1])
        super().__init__(f"Cyclic dependency detected: {loop}", self.cycle[0])


class LocatorFailure(SchemaResolverError):
    """Exception raised for I/O or lookup infrastructure errors."""
    pass


class BundleFormatError(LocatorFailure):
    """Exception raised when a schema bundle file cannot be used."""
    pass


class FormatVersionError(BundleFormatError):
    """Exception raised when a bundle's format version is incompatible."""
    pass
