from __future__ import annotations

import logging
from typing import Any, Dict, List

from queens_facts.core.config import Settings, settings as default_settings
from queens_facts.core.errors import NotFoundError
from queens_facts.repositories.fact_repo import FactRepository
from queens_facts.services.fact.fact_models import FactFilter
from queens_facts.services.fact.filter_resolver import FilterResolver
from queens_facts.services.fact.random_sampler import DELEGATED, RandomSampler

logger = logging.getLogger("queens_facts.facts")


class FactQueryService:
    """
    Fact lookup path: resolve text filters -> query store -> sample.

    Every call is independent; the only shared thing is the sb handle.
    """

    def __init__(self, sb, config: Settings | None = None, sampler: RandomSampler | None = None):
        config = config or default_settings
        self.fact_repo = FactRepository(
            sb,
            table=config.FACTS_TABLE,
            random_rpc=config.RANDOM_FACTS_RPC,
        )
        self.resolver = FilterResolver(self.fact_repo, cutoff=config.FUZZY_CUTOFF)
        self.sampler = sampler or RandomSampler(self.fact_repo, strategy=config.RANDOM_STRATEGY)

    # ==========================================================
    # BY ID
    # ==========================================================
    def get_by_id(self, fact_id: int) -> List[Dict[str, Any]]:
        rows = self.fact_repo.get_by_id(fact_id)
        if not rows:
            raise NotFoundError("Not found")
        return rows

    # ==========================================================
    # FILTERED (+ optional random)
    # ==========================================================
    def find(self, flt: FactFilter) -> List[Dict[str, Any]]:
        # 1) resolve free text BEFORE touching the facts query
        neighborhood = self.resolver.resolve("neighborhood", flt.neighborhood)
        category = self.resolver.resolve("category", flt.category)

        # 2) plain listing
        if not flt.random:
            return self.fact_repo.list_filtered(
                neighborhood=neighborhood,
                category=category,
                zipcode=flt.zipcode,
                limit=flt.limit,
            )

        # 3) random, store-side only when nothing needs filtering
        if self.sampler.strategy == DELEGATED and not flt.has_filters:
            return self.sampler.from_store(flt.limit)

        rows = self.fact_repo.list_filtered(
            neighborhood=neighborhood,
            category=category,
            zipcode=flt.zipcode,
        )
        picked = self.sampler.from_rows(rows, flt.limit)
        logger.debug("random pick %d of %d rows", len(picked), len(rows))
        return picked

    def list_all(self) -> List[Dict[str, Any]]:
        return self.fact_repo.list_all()
