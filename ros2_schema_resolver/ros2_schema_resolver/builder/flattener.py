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

"""Ordered traversal and assembly of flattened schemas.

The traversal is a depth-first walk over an explicit stack with three marks
per type (unvisited, visiting, done). A type is emitted once all of its
dependencies are done, so the output lists dependencies before dependents and
the root last. Sibling dependencies are visited in lexicographic order of
their full names, which makes the output a pure function of the graph.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterator, List, Tuple

from ..exceptions import CyclicDependency, SchemaResolverError
from ..file_io.schema_text import join_sections
from ..models.descriptors import TypeDescriptor
from ..models.resolved_schema import ResolvedSchema
from ..models.type_reference import TypeReference
from .dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)

LookupFn = Callable[[TypeReference], TypeDescriptor]


class _Mark(Enum):
    VISITING = 1
    DONE = 2


def resolve_order(root: TypeReference, lookup: LookupFn) -> Tuple[List[TypeDescriptor], DependencyGraph]:
    """Return every type reachable from *root*, dependencies first.

    Raises:
        CyclicDependency: With the cycle as found on the active path.
        UnknownType, MalformedDefinition, LocatorFailure: From *lookup*,
            unchanged, for whichever type failed.
    """
    graph = DependencyGraph()
    descriptors: Dict[TypeReference, TypeDescriptor] = {}
    marks: Dict[TypeReference, _Mark] = {}
    path: List[TypeReference] = []
    stack: List[Tuple[TypeReference, Iterator[TypeReference]]] = []
    ordered: List[TypeDescriptor] = []

    def enter(ref: TypeReference) -> None:
        try:
            descriptor = lookup(ref)
        except SchemaResolverError as exc:
            required_by = " <- ".join(str(r) for r in reversed(path)) or "(root)"
            logger.error(f"Failed to resolve {ref} required by {required_by}: {exc}")
            raise
        descriptors[ref] = descriptor
        graph.add(descriptor)
        marks[ref] = _Mark.VISITING
        path.append(ref)
        stack.append((ref, iter(graph.dependencies(ref))))

    enter(root)
    while stack:
        ref, pending = stack[-1]
        dep = next(pending, None)

        if dep is None:
            stack.pop()
            path.pop()
            marks[ref] = _Mark.DONE
            ordered.append(descriptors[ref])
            continue

        mark = marks.get(dep)
        if mark is _Mark.DONE:
            continue
        if mark is _Mark.VISITING:
            cycle = path[path.index(dep):]
            logger.error(f"Cycle while flattening {root}: {[str(r) for r in cycle]}")
            raise CyclicDependency(cycle)
        enter(dep)

    return ordered, graph


def flatten(root: TypeReference, lookup: LookupFn) -> ResolvedSchema:
    """Flatten *root* and everything it references into one schema document."""
    ordered, _ = resolve_order(root, lookup)
    text = join_sections((d.ref.full_name, d.raw_text) for d in ordered)
    schema = ResolvedSchema(
        root=root,
        text=text,
        types=tuple(d.ref for d in ordered),
    )
    logger.debug(f"Flattened {root}: {len(ordered)} type(s), fingerprint={schema.fingerprint[:12]}")
    return schema
