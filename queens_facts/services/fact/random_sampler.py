from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from queens_facts.repositories.fact_repo import FactRepository

DELEGATED = "delegated"
IN_PROCESS = "in_process"
STRATEGIES = (DELEGATED, IN_PROCESS)


class RandomSampler:
    """
    Picks random facts.

    - delegated : store RPC, n rows, uniformity owned by the database
    - in_process: uniform sample without replacement over rows already fetched

    Sample sizes above the available rows are clamped, never padded.
    """

    def __init__(self, fact_repo: FactRepository, strategy: str = IN_PROCESS, rng: Optional[random.Random] = None):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown random strategy: {strategy}")
        self.fact_repo = fact_repo
        self.strategy = strategy
        self.rng = rng or random.Random()

    def from_store(self, limit: Optional[int]) -> List[Dict[str, Any]]:
        return self.fact_repo.random_rows(limit or 1)

    def from_rows(self, rows: List[Dict[str, Any]], limit: Optional[int]) -> List[Dict[str, Any]]:
        if not rows:
            return []
        if not limit:
            return [self.rng.choice(rows)]
        return self.rng.sample(rows, min(limit, len(rows)))
