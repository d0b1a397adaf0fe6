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

"""Locator backed by a YAML bundle of message definitions.

A bundle embeds definitions so no ROS installation is needed::

    ros2_schema_bundle_format: 0.1.0
    definitions:
      builtin_interfaces/msg/Time: |
        int32 sec
        uint32 nanosec

The format version is ``MAJOR.MINOR.PATCH``. A bundle is rejected when its
major differs from :data:`BUNDLE_FORMAT_VERSION` and read with a warning when
its minor is newer.
"""

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from .. import BUNDLE_FORMAT_VERSION
from ..exceptions import BundleFormatError, FormatVersionError, UnknownType
from ..models.type_reference import TypeReference
from .locator import DictLocator

logger = logging.getLogger(__name__)

BUNDLE_FORMAT_KEY = "ros2_schema_bundle_format"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")
_SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schema"


def _split_version(raw: str) -> Tuple[int, int, int]:
    match = _VERSION_RE.match(raw.strip())
    if match is None:
        raise FormatVersionError(
            f"Invalid {BUNDLE_FORMAT_KEY} '{raw}'. Expected 'MAJOR.MINOR.PATCH' (e.g. '{BUNDLE_FORMAT_VERSION}')."
        )
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def check_bundle_version(raw_version: Any, source: str = "<string>") -> Tuple[int, int, int]:
    """Return the declared bundle version as ``(major, minor, patch)``.

    Raises:
        FormatVersionError: If the version is missing, unparsable or of another major.
    """
    if raw_version is None:
        raise FormatVersionError(
            f"Bundle {source} has no '{BUNDLE_FORMAT_KEY}' field. "
            f"Add '{BUNDLE_FORMAT_KEY}: {BUNDLE_FORMAT_VERSION}'."
        )

    declared = _split_version(str(raw_version))
    supported = _split_version(BUNDLE_FORMAT_VERSION)
    if declared[0] != supported[0]:
        raise FormatVersionError(
            f"Bundle {source} declares format {raw_version}, "
            f"but only major version {supported[0]} is readable (supported: {BUNDLE_FORMAT_VERSION})."
        )
    if declared[1] > supported[1]:
        logger.warning(
            f"Bundle format version {raw_version} in {source} is newer than the supported "
            f"{BUNDLE_FORMAT_VERSION}. Unknown keys are ignored."
        )
    return declared


@lru_cache(maxsize=None)
def bundle_schema() -> dict:
    """JSON Schema of the bundle layout shipped with this release."""
    schema_path = _SCHEMA_DIR / BUNDLE_FORMAT_VERSION / "bundle.json"
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_bundle(data: Any, source: str = "<string>") -> Dict[str, str]:
    """Check a loaded bundle and return its ``definitions`` mapping.

    Raises:
        FormatVersionError: If the declared format version is incompatible.
        BundleFormatError: If the bundle does not match the bundle schema.
    """
    if not isinstance(data, dict):
        raise BundleFormatError(f"Bundle {source} must be a mapping, got {type(data).__name__}")

    check_bundle_version(data.get(BUNDLE_FORMAT_KEY), source)
    try:
        jsonschema.validate(instance=data, schema=bundle_schema())
    except ValidationError as e:
        path = "/" + "/".join(str(p) for p in e.absolute_path) if e.absolute_path else ""
        raise BundleFormatError(f"Invalid bundle {source}: {e.message} (yaml_path={path or '/'})") from e

    return data["definitions"]


class BundleLocator(DictLocator):

    def __init__(self, definitions: Dict[Union[str, TypeReference], str], source: str = "<memory>"):
        super().__init__(definitions)
        self.source = source

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "BundleLocator":
        """Load a bundle from a YAML file.

        Raises:
            BundleFormatError: If the file cannot be read, parsed or validated.
        """
        path = Path(file_path)
        if not path.is_file():
            raise BundleFormatError(f"Bundle file not found: {path}")

        logger.debug(f"Loading schema bundle: {path}")
        try:
            with open(path, "r", encoding="utf-8") as stream:
                data = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise BundleFormatError(f"Failed to parse YAML bundle {path}: {exc}") from exc
        except OSError as exc:
            raise BundleFormatError(f"Failed to read bundle {path}: {exc}") from exc

        definitions = validate_bundle(data, str(path))
        logger.info(f"Loaded {len(definitions)} definition(s) from bundle {path}")
        return cls(definitions, source=str(path))

    @classmethod
    def from_string(cls, content: str) -> "BundleLocator":
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise BundleFormatError(f"Failed to parse YAML bundle content: {exc}") from exc
        return cls(validate_bundle(data))

    def resolve_source(self, type_ref: TypeReference) -> str:
        try:
            return super().resolve_source(type_ref)
        except UnknownType:
            raise UnknownType(type_ref, f"not in bundle {self.source}") from None


def dump_bundle(definitions: Dict[Union[str, TypeReference], str]) -> str:
    """Serialise definitions as a bundle document that ``from_string`` accepts."""
    data = {
        BUNDLE_FORMAT_KEY: BUNDLE_FORMAT_VERSION,
        "definitions": {
            TypeReference.coerce(name).interface_name: text
            for name, text in sorted(definitions.items(), key=lambda item: str(TypeReference.coerce(item[0])))
        },
    }
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
