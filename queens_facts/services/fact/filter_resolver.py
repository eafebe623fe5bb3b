from __future__ import annotations

import logging
from typing import Optional

from queens_facts.core.errors import NotFoundError
from queens_facts.repositories.fact_repo import FactRepository
from queens_facts.services.fact.fuzzy_matcher import DEFAULT_CUTOFF, fuzzy_match

logger = logging.getLogger("queens_facts.filter")

# column -> client message on no-match
RESOLVABLE_FIELDS = {
    "neighborhood": "No close neighborhood match found",
    "category": "No close category match found",
}


class FilterResolver:
    """
    Free text -> exact stored value.

    Candidates are the distinct values of the column, fetched per call.
    Unresolved text never reaches the facts query.
    """

    def __init__(self, fact_repo: FactRepository, cutoff: int = DEFAULT_CUTOFF):
        self.fact_repo = fact_repo
        self.cutoff = cutoff

    def resolve(self, field: str, text: Optional[str]) -> Optional[str]:
        if field not in RESOLVABLE_FIELDS:
            raise ValueError(f"Field is not fuzzy-resolvable: {field}")

        if not text or not text.strip():
            return None

        candidates = self.fact_repo.list_distinct(field)
        match = fuzzy_match(text, candidates, cutoff=self.cutoff)
        if match is None:
            logger.info("no %s match for %r among %d candidates", field, text, len(candidates))
            raise NotFoundError(RESOLVABLE_FIELDS[field])

        logger.debug("resolved %s %r -> %r", field, text, match)
        return match
