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

"""Public entry point: cached flattening of message types.

Resolvers are ordinary objects, so tests and embedders can build independent
ones with their own locator. ``get_global_resolver()`` returns a shared
instance configured from the environment.
"""

import logging
import threading
from typing import Dict, Optional, Union

from ..builder.flattener import flatten as flatten_type
from ..builder.type_registry import TypeRegistry
from ..exceptions import LocatorFailure, SchemaResolverError
from ..file_io.locator import Locator
from ..models.resolved_schema import ResolvedSchema
from ..models.type_reference import TypeReference
from ..parsers.definition_parser import DefinitionParser
from ..resolver_config import ResolverConfig
from ..utils.single_flight import SingleFlightCache

logger = logging.getLogger(__name__)


class CentralSchemaResolver:
    """Memoizes flattened schemas keyed by root type.

    At most one flattening runs per root at a time; concurrent callers for the
    same root share its result. Failures are not cached.
    """

    def __init__(self, locator: Locator, parser: Optional[DefinitionParser] = None):
        self.locator = locator
        self.registry = TypeRegistry(locator, parser)
        self._schemas: SingleFlightCache[TypeReference, ResolvedSchema] = SingleFlightCache("schema_cache")

    def flatten(self, type_ref: Union[str, TypeReference]) -> ResolvedSchema:
        """Return the flattened schema of *type_ref*.

        Raises:
            MalformedDefinition, UnknownType, CyclicDependency, LocatorFailure:
                For the root or whichever dependency failed.
        """
        root = TypeReference.coerce(type_ref)
        cached = self._schemas.get(root)
        if cached is not None:
            logger.debug(f"Schema cache hit: {root}")
            return cached
        return self._schemas.get_or_compute(root, self._flatten_uncached)

    def resolve(self, type_ref: Union[str, TypeReference]) -> str:
        """Raw definition text of a single type, as supplied by the locator."""
        return self.registry.lookup(type_ref).raw_text

    def raw_definitions(self) -> Dict[str, str]:
        """Raw text of every type the locator can enumerate, keyed by interface name."""
        return {
            ref.interface_name: self.resolve(ref)
            for ref in self.locator.available_types()
        }

    def flatten_all(self) -> Dict[str, ResolvedSchema]:
        """Flatten every type the locator can enumerate; fails on the first error."""
        out: Dict[str, ResolvedSchema] = {}
        for ref in self.locator.available_types():
            out[ref.interface_name] = self.flatten(ref)
        logger.info(f"Flattened {len(out)} type(s)")
        return out

    def _flatten_uncached(self, root: TypeReference) -> ResolvedSchema:
        try:
            schema = flatten_type(root, self.registry.lookup)
        except SchemaResolverError as exc:
            logger.error(f"Failed to flatten {root}: {exc}")
            raise
        logger.info(f"Flattened {root} ({len(schema.types)} type(s))")
        return schema


_GLOBAL_RESOLVER: Optional[CentralSchemaResolver] = None
_GLOBAL_LOCK = threading.Lock()


def get_global_resolver() -> CentralSchemaResolver:
    """Return the process-wide resolver, creating it on first use.

    The resolver is configured with ``ResolverConfig.from_env()``. A failed
    initialisation is not stored, so a later call tries again.

    Raises:
        LocatorFailure: If no definition source is configured or the
            configured sources contain no message definitions.
    """
    global _GLOBAL_RESOLVER
    resolver = _GLOBAL_RESOLVER
    if resolver is not None:
        return resolver

    with _GLOBAL_LOCK:
        if _GLOBAL_RESOLVER is None:
            locator = ResolverConfig.from_env().build_locator()
            if not locator.available_types():
                raise LocatorFailure("No .msg definitions found in the configured sources")
            _GLOBAL_RESOLVER = CentralSchemaResolver(locator)
            logger.debug(f"Initialised global resolver with {type(locator).__name__}")
        return _GLOBAL_RESOLVER


def set_global_resolver(resolver: Optional[CentralSchemaResolver]) -> None:
    global _GLOBAL_RESOLVER
    with _GLOBAL_LOCK:
        _GLOBAL_RESOLVER = resolver


def reset_global_resolver() -> None:
    """Drop the process-wide resolver. Useful for testing."""
    set_global_resolver(None)


def flatten(type_ref: Union[str, TypeReference]) -> ResolvedSchema:
    """Flatten *type_ref* with the process-wide resolver."""
    return get_global_resolver().flatten(type_ref)
