# -*- coding: utf-8 -*-
"""Load id generation.

Load-creating functions take an ``IdGenerator`` so callers (and tests)
control identity explicitly. Generated ids are never reused by a generator.
"""

from __future__ import annotations

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def next_id(self) -> str:
        ...


class UuidIdGenerator:
    def __init__(self, prefix: str = "load"):
        self.prefix = prefix

    def next_id(self) -> str:
        return f"{self.prefix}_{uuid.uuid4().hex[:12]}"


class SequentialIdGenerator:
    """Deterministic ids: ``load_1``, ``load_2``..."""

    def __init__(self, prefix: str = "load", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"
