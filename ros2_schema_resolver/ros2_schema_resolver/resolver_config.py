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

"""Configuration management for the schema resolver."""

import os
import logging
from dataclasses import dataclass
from typing import List

from .exceptions import LocatorFailure
from .file_io.ament_locator import AMENT_PREFIX_PATH, AmentPrefixLocator
from .file_io.bundle_locator import BundleLocator
from .file_io.locator import ChainLocator, Locator
from .utils.logging_utils import configure_split_stream_logging

LOGGER_NAME = "ros2_schema_resolver"


@dataclass
class ResolverConfig:
    """Configuration for the process-wide resolver."""
    log_level: str = "INFO"
    print_level: str = "ERROR"

    # sources
    bundle_file: str = ""
    ament_prefix_path: str = ""

    @classmethod
    def from_env(cls) -> 'ResolverConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('ROS2_SCHEMA_RESOLVER_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('ROS2_SCHEMA_RESOLVER_PRINT_LEVEL', 'ERROR'),
            bundle_file=os.getenv('ROS2_SCHEMA_RESOLVER_BUNDLE', ''),
            ament_prefix_path=os.getenv(AMENT_PREFIX_PATH, ''),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging for this package based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name=LOGGER_NAME,
        )

    def build_locator(self) -> Locator:
        """Bundle first (when configured), then the ament prefixes.

        Raises:
            LocatorFailure: If neither source is configured.
        """
        locators: List[Locator] = []
        if self.bundle_file:
            locators.append(BundleLocator.from_file(self.bundle_file))
        if self.ament_prefix_path:
            locators.append(AmentPrefixLocator.from_env(self.ament_prefix_path))

        if not locators:
            raise LocatorFailure(
                f"No definition source configured: set {AMENT_PREFIX_PATH} "
                "or ROS2_SCHEMA_RESOLVER_BUNDLE"
            )
        if len(locators) == 1:
            return locators[0]
        return ChainLocator(locators)
