"""In-process LRU cache of comparison results.

Comparisons are pure functions of (technology id sequence, constraints,
catalog contents), so a result can be reused until the catalog changes.
The id sequence is part of the key as-is: [1, 2] and [2, 1] produce
different radar slot orders and are cached separately.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Optional, Sequence

from .core.models import ComparisonResult, UserConstraints

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 128


def comparison_cache_key(technology_ids: Sequence[int], constraints: Optional[UserConstraints]) -> str:
    constraints = constraints or UserConstraints.empty()
    ids = ",".join(str(tech_id) for tech_id in technology_ids)
    return f"{ids}:{constraints.cache_key()}"


class ComparisonCache:
    """Bounded least-recently-used map of cache key -> ComparisonResult.

    A capacity of 0 disables caching: ``put`` becomes a no-op.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        self._max_entries = max(0, max_entries)
        self._entries: OrderedDict[str, ComparisonResult] = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str) -> Optional[ComparisonResult]:
        result = self._entries.get(key)
        if result is not None:
            self._entries.move_to_end(key)
        return result

    def put(self, key: str, result: ComparisonResult) -> None:
        if self._max_entries == 0:
            return
        self._entries[key] = result
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached comparison %s", evicted)

    def clear(self) -> None:
        if self._entries:
            logger.info("Clearing %d cached comparisons", len(self._entries))
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
