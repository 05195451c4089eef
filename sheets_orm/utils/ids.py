# sheets_orm/utils/ids.py
"""Primary key generators."""

import itertools
import random
import string
import threading
import time
from typing import Optional, Protocol, runtime_checkable

_BASE36 = string.digits + string.ascii_lowercase


@runtime_checkable
class IdGenerator(Protocol):
    """Anything with a ``next()`` method returning a fresh identifier."""

    def next(self) -> str:
        ...


class TimestampIdGenerator:
    """Epoch milliseconds followed by a random base-36 suffix."""

    def __init__(self, suffix_length: int = 7, rng: Optional[random.Random] = None):
        self.suffix_length = suffix_length
        self._rng = rng or random.Random()

    def next(self) -> str:
        millis = int(time.time() * 1000)
        suffix = "".join(self._rng.choice(_BASE36) for _ in range(self.suffix_length))
        return f"{millis}{suffix}"


class SequentialIdGenerator:
    """Deterministic ids: prefix + 1, 2, 3, ..."""

    def __init__(self, start: int = 1, prefix: str = ""):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self.prefix}{value}"
