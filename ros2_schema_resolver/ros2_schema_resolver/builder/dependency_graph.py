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

"""Dependency edges between message types."""

from typing import Dict, FrozenSet, List

from ..models.descriptors import TypeDescriptor
from ..models.type_reference import TypeReference


def edges_for(descriptor: TypeDescriptor) -> FrozenSet[TypeReference]:
    """Return the message types *descriptor* references through its fields.

    Primitive fields, arrays of primitives and constants contribute nothing;
    an array of messages contributes its element type. A self-reference is
    returned like any other edge.
    """
    return frozenset(
        f.type.reference for f in descriptor.fields if f.type.reference is not None
    )


class DependencyGraph:
    """Node set of type references with a "references" edge relation."""

    def __init__(self):
        self._edges: Dict[TypeReference, FrozenSet[TypeReference]] = {}

    def add(self, descriptor: TypeDescriptor) -> FrozenSet[TypeReference]:
        edges = edges_for(descriptor)
        self._edges[descriptor.ref] = edges
        return edges

    def dependencies(self, ref: TypeReference) -> List[TypeReference]:
        """Dependencies of *ref* in lexicographic order."""
        return sorted(self._edges.get(ref, frozenset()))

    def __len__(self) -> int:
        return len(self._edges)
