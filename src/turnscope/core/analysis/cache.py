"""
Result cache for the analytics engine.

Entries are keyed by a composite fingerprint of everything a result
depends on (reveal cursor, time window, transcript version, relevant
config fields, enabled speakers). A changed input simply produces a
different key; nothing has to be invalidated by hand.

Callers always receive a deep copy, so mutating a returned result never
reaches the stored entry or later requests.
"""

from __future__ import annotations

import copy
from collections import OrderedDict
from typing import Any, Callable, Hashable

DEFAULT_MAX_ENTRIES = 64


class ResultCache:
    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.max_entries = max_entries
        self._entries: "OrderedDict[Hashable, Any]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            return copy.deepcopy(self._entries[key])

        self.misses += 1
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return copy.deepcopy(value)

    def clear(self) -> None:
        self._entries.clear()
