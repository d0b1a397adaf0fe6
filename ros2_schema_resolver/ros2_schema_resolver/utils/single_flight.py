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

"""Insert-once cache that runs at most one computation per key at a time."""

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Dict, Generic, Hashable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SingleFlightCache(Generic[K, V]):
    """Map from key to a single-assignment Future.

    The first caller for a key computes the value inline; concurrent callers
    for the same key wait on the same Future. The lock is held only while a
    Future is created or discarded. A failed computation is removed again so
    the next call retries it.
    """

    def __init__(self, name: str = "cache"):
        self.name = name
        self._entries: Dict[K, "Future[V]"] = {}
        self._lock = threading.Lock()

    def get_or_compute(self, key: K, compute: Callable[[K], V]) -> V:
        future = self._entries.get(key)
        owner = False
        if future is None:
            with self._lock:
                future = self._entries.get(key)
                if future is None:
                    future = Future()
                    self._entries[key] = future
                    owner = True

        if not owner:
            if not future.done():
                logger.debug(f"[{self.name}] waiting for in-flight computation of {key}")
            return future.result()

        logger.debug(f"[{self.name}] miss: computing {key}")
        try:
            value = compute(key)
        except BaseException as exc:
            with self._lock:
                if self._entries.get(key) is future:
                    del self._entries[key]
            future.set_exception(exc)
            raise
        future.set_result(value)
        return value

    def get(self, key: K) -> Optional[V]:
        """Return the completed value for *key*, or None."""
        future = self._entries.get(key)
        if future is None or not future.done() or future.exception() is not None:
            return None
        return future.result()

    def __len__(self) -> int:
        return len(self.completed_keys())

    def completed_keys(self) -> List[K]:
        with self._lock:
            futures = list(self._entries.items())
        return [key for key, future in futures if future.done() and future.exception() is None]
