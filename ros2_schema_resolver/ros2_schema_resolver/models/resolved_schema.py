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

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Tuple

from .type_reference import TypeReference

SCHEMA_ENCODING = "ros2msg"


def compute_fingerprint(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class ResolvedSchema:
    """Flattened, self-contained schema for one root type.

    ``encoding`` names the payload encoding the schema describes. The section
    order of ``text`` (dependencies first, root last, every section headed)
    differs from the MCAP ``ros2msg`` schema layout.
    """

    root: TypeReference
    text: str
    types: Tuple[TypeReference, ...]
    fingerprint: str = field(default="")
    encoding: str = SCHEMA_ENCODING

    def __post_init__(self) -> None:
        if not self.fingerprint:
            # frozen dataclass: bypass __setattr__ for the derived value
            object.__setattr__(self, "fingerprint", compute_fingerprint(self.text))

    @property
    def name(self) -> str:
        """Schema name handed to a container writer alongside ``text``."""
        return self.root.full_name

    def __str__(self) -> str:
        return self.text
