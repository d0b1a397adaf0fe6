"""File I/O related utilities.

This package groups the locators that read message definitions and the
text layout of flattened schema documents.
"""

from .locator import Locator, DictLocator, ChainLocator
from .ament_locator import AmentPrefixLocator, AMENT_PREFIX_PATH
from .bundle_locator import BundleLocator, check_bundle_version, validate_bundle, dump_bundle
from .schema_text import (
    SECTION_DELIMITER,
    SECTION_HEADER_PREFIX,
    format_section,
    join_sections,
    split_sections,
)

__all__ = [
    "Locator",
    "DictLocator",
    "ChainLocator",
    "AmentPrefixLocator",
    "AMENT_PREFIX_PATH",
    "BundleLocator",
    "check_bundle_version",
    "validate_bundle",
    "dump_bundle",
    "SECTION_DELIMITER",
    "SECTION_HEADER_PREFIX",
    "format_section",
    "join_sections",
    "split_sections",
]
