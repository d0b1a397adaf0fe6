"""Shared fixtures for the schema resolver tests.

Fixtures available to all tests:
  * counting_locator(definitions) - DictLocator that counts resolve_source calls
  * tf_definitions                 - the tf2_msgs/TFMessage dependency tree
  * diamond_definitions            - A -> (B, C) -> D
  * write_msg_tree(prefix, {...})  - write .msg files under <prefix>/share
"""

from __future__ import annotations

import threading
from collections import Counter
from pathlib import Path
from typing import Dict

import pytest

from ros2_schema_resolver import DictLocator, TypeReference, reset_global_resolver


class CountingLocator(DictLocator):
    """DictLocator that records how often each type was requested."""

    def __init__(self, definitions, delay_event: threading.Event = None):
        super().__init__(definitions)
        self.calls: Counter = Counter()
        self._lock = threading.Lock()
        self.delay_event = delay_event

    def resolve_source(self, type_ref: TypeReference) -> str:
        with self._lock:
            self.calls[type_ref] += 1
        if self.delay_event is not None:
            self.delay_event.wait(timeout=5)
        return super().resolve_source(type_ref)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


@pytest.fixture
def counting_locator():
    return CountingLocator


# ---------------------------------------------------------------------------
# Definition sets
# ---------------------------------------------------------------------------

TIME_MSG = """\
# This message communicates ROS Time.

# The seconds component, valid over all int32 values.
int32 sec

# The nanoseconds component.
uint32 nanosec"""

HEADER_MSG = """\
# Standard metadata for higher-level stamped data types.
builtin_interfaces/Time stamp

# Transform frame with which this data is associated.
string frame_id"""

VECTOR3_MSG = """\
# This represents a vector in free space.
float64 x
float64 y
float64 z"""

QUATERNION_MSG = """\
# This represents an orientation in free space in quaternion form.

float64 x 0
float64 y 0
float64 z 0
float64 w 1"""

TRANSFORM_MSG = """\
# This represents the transform between two coordinate frames in free space.

Vector3 translation
Quaternion rotation"""

TRANSFORM_STAMPED_MSG = """\
# The frame id in the header is used as the reference frame of this transform.
std_msgs/Header header

# The frame id of the child frame to which this transform points.
string child_frame_id

Transform transform"""

TF_MESSAGE_MSG = "geometry_msgs/TransformStamped[] transforms"


@pytest.fixture
def tf_definitions() -> Dict[str, str]:
    return {
        "builtin_interfaces/msg/Time": TIME_MSG,
        "std_msgs/msg/Header": HEADER_MSG,
        "geometry_msgs/msg/Vector3": VECTOR3_MSG,
        "geometry_msgs/msg/Quaternion": QUATERNION_MSG,
        "geometry_msgs/msg/Transform": TRANSFORM_MSG,
        "geometry_msgs/msg/TransformStamped": TRANSFORM_STAMPED_MSG,
        "tf2_msgs/msg/TFMessage": TF_MESSAGE_MSG,
    }


@pytest.fixture
def diamond_definitions() -> Dict[str, str]:
    return {
        "pkg/A": "C c\nB b",
        "pkg/B": "D d\nint32 b_value",
        "pkg/C": "D[] ds\nstring c_name",
        "pkg/D": "float64 value",
    }


@pytest.fixture
def write_msg_tree():
    def _write(prefix: Path, packages: Dict[str, Dict[str, str]]) -> Path:
        for package, messages in packages.items():
            msg_dir = prefix / "share" / package / "msg"
            msg_dir.mkdir(parents=True, exist_ok=True)
            for name, text in messages.items():
                (msg_dir / f"{name}.msg").write_text(text, encoding="utf-8")
        return prefix
    return _write


@pytest.fixture(autouse=True)
def _isolate_global_resolver():
    reset_global_resolver()
    yield
    reset_global_resolver()
