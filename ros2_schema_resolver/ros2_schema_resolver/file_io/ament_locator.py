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

"""Locator for .msg files installed under ament prefixes.

Installed packages keep their message definitions in
``<prefix>/share/<package>/msg/<Type>.msg``. Prefixes are searched in
``AMENT_PREFIX_PATH`` order; when two prefixes provide the same type, the
earlier one wins, matching how ament overlays shadow underlays.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..exceptions import LocatorFailure, MalformedDefinition, UnknownType
from ..models.type_reference import TypeReference
from .locator import Locator

logger = logging.getLogger(__name__)

AMENT_PREFIX_PATH = "AMENT_PREFIX_PATH"


class AmentPrefixLocator(Locator):

    def __init__(self, prefixes: Iterable[Union[str, Path]] = ()):
        self._paths: Dict[TypeReference, Path] = {}
        self.prefixes: List[Path] = []
        for prefix in prefixes:
            self.register_prefix(prefix)

    @classmethod
    def from_env(cls, value: Optional[str] = None) -> "AmentPrefixLocator":
        """Create a locator from ``AMENT_PREFIX_PATH`` (or *value*, if given).

        Raises:
            LocatorFailure: If the variable is not set.
        """
        if value is None:
            value = os.environ.get(AMENT_PREFIX_PATH)
        if not value:
            raise LocatorFailure(f"{AMENT_PREFIX_PATH} is not set")
        return cls(p for p in value.split(os.pathsep) if p)

    def register_prefix(self, prefix: Union[str, Path]) -> None:
        prefix = Path(prefix)
        self.prefixes.append(prefix)
        share_dir = prefix / "share"
        if not share_dir.is_dir():
            logger.debug(f"Skipping prefix without share directory: {prefix}")
            return

        for package_dir in sorted(p for p in share_dir.iterdir() if p.is_dir()):
            msg_dir = package_dir / "msg"
            if msg_dir.is_dir():
                self.register_msg_dir(package_dir.name, msg_dir)

    def register_msg_dir(self, package: str, path: Union[str, Path]) -> None:
        """Index every ``*.msg`` file in *path* as ``package/msg/<stem>``."""
        for msg_file in sorted(Path(path).glob("*.msg")):
            try:
                ref = TypeReference(package, msg_file.stem)
            except MalformedDefinition as exc:
                logger.warning(f"Ignoring {msg_file}: {exc}")
                continue

            existing = self._paths.get(ref)
            if existing is not None:
                logger.debug(f"{ref} at {msg_file} is shadowed by {existing}")
                continue
            self._paths[ref] = msg_file

    def path_for(self, type_ref: TypeReference) -> Optional[Path]:
        return self._paths.get(type_ref)

    def resolve_source(self, type_ref: TypeReference) -> str:
        path = self._paths.get(type_ref)
        if path is None:
            raise UnknownType(type_ref, f"no {type_ref.name}.msg under {len(self.prefixes)} ament prefix(es)")
        logger.debug(f"Reading {type_ref} from {path}")
        return path.read_text(encoding="utf-8")

    def available_types(self) -> List[TypeReference]:
        return sorted(self._paths)
