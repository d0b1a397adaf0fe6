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

"""Sources of raw message definition text."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, Union

from ..exceptions import UnknownType
from ..models.type_reference import TypeReference

logger = logging.getLogger(__name__)


class Locator(ABC):
    """Supplies the raw definition text for a type reference."""

    @abstractmethod
    def resolve_source(self, type_ref: TypeReference) -> str:
        """Return the definition text of *type_ref*.

        Raises:
            UnknownType: If no definition exists for the reference.
        """

    def available_types(self) -> List[TypeReference]:
        """All references this locator can resolve, sorted. Empty if it cannot enumerate."""
        return []


class DictLocator(Locator):
    """Locator backed by an in-memory mapping of type name to definition text."""

    def __init__(self, definitions: Mapping[Union[str, TypeReference], str]):
        self._definitions: Dict[TypeReference, str] = {
            TypeReference.coerce(name): text for name, text in definitions.items()
        }

    def resolve_source(self, type_ref: TypeReference) -> str:
        try:
            return self._definitions[type_ref]
        except KeyError:
            raise UnknownType(type_ref) from None

    def available_types(self) -> List[TypeReference]:
        return sorted(self._definitions)


class ChainLocator(Locator):
    """Consults locators in order; only UnknownType falls through to the next."""

    def __init__(self, locators: Iterable[Locator]):
        self.locators = list(locators)

    def resolve_source(self, type_ref: TypeReference) -> str:
        for locator in self.locators:
            try:
                return locator.resolve_source(type_ref)
            except UnknownType:
                logger.debug(f"{type(locator).__name__} has no definition for {type_ref}")
                continue
        raise UnknownType(type_ref, f"searched {len(self.locators)} locator(s)")

    def available_types(self) -> List[TypeReference]:
        found = set()
        for locator in self.locators:
            found.update(locator.available_types())
        return sorted(found)
