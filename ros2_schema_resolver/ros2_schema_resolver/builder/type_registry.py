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

import logging
from typing import List, Optional, Union

from ..exceptions import LocatorFailure, SchemaResolverError
from ..file_io.locator import Locator
from ..models.descriptors import TypeDescriptor
from ..models.type_reference import TypeReference
from ..parsers.definition_parser import DefinitionParser, definition_parser
from ..utils.single_flight import SingleFlightCache

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Lazily populated mapping from type reference to parsed descriptor.

    Unresolved lookups go to the locator; every reference is fetched and
    parsed at most once, even under concurrent demand.
    """

    def __init__(self, locator: Locator, parser: Optional[DefinitionParser] = None):
        self.locator = locator
        self.parser = parser or definition_parser
        self._descriptors: SingleFlightCache[TypeReference, TypeDescriptor] = SingleFlightCache("type_registry")

    def lookup(self, type_ref: Union[str, TypeReference]) -> TypeDescriptor:
        """Get the descriptor for *type_ref*, loading it on first use.

        Raises:
            UnknownType: If the locator has no source for the reference.
            MalformedDefinition: If the source does not parse.
            LocatorFailure: If the locator itself fails.
        """
        return self._descriptors.get_or_compute(TypeReference.coerce(type_ref), self._load)

    def get(self, type_ref: Union[str, TypeReference], default=None) -> Optional[TypeDescriptor]:
        """Get an already loaded descriptor without touching the locator."""
        descriptor = self._descriptors.get(TypeReference.coerce(type_ref))
        return descriptor if descriptor is not None else default

    def __contains__(self, type_ref: Union[str, TypeReference]) -> bool:
        return self.get(type_ref) is not None

    def __len__(self) -> int:
        return len(self._descriptors)

    def loaded_types(self) -> List[TypeReference]:
        return sorted(self._descriptors.completed_keys())

    def _load(self, type_ref: TypeReference) -> TypeDescriptor:
        logger.debug(f"Loading definition from locator: {type_ref}")
        try:
            raw_text = self.locator.resolve_source(type_ref)
        except SchemaResolverError:
            raise
        except Exception as exc:
            raise LocatorFailure(f"Locator failed for {type_ref}: {exc}", type_ref) from exc

        return self.parser.parse(type_ref, raw_text)
