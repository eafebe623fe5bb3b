# queens_facts/repositories/fact_repo.py

from typing import Any, Dict, List, Optional

from queens_facts.repositories.base import BaseRepository


class FactRepository(BaseRepository):
    """
    Read-only access to the neighborhood facts table.

    Contract:
    - fact_id is NOT guaranteed unique -> get_by_id returns a list
    - every filter is exact-match, combined with AND
    """

    TABLE = "neighborhood_fun_facts"
    RANDOM_RPC = "random_facts"

    def __init__(self, sb, table: Optional[str] = None, random_rpc: Optional[str] = None):
        super().__init__(sb)
        if table:
            self.TABLE = table
        if random_rpc:
            self.RANDOM_RPC = random_rpc

    # -------------------------------------------------
    # Read – by identifier
    # -------------------------------------------------
    def get_by_id(self, fact_id: int) -> List[Dict[str, Any]]:
        return self._run(
            self.sb
            .table(self.TABLE)
            .select("*")
            .eq("fact_id", fact_id)
        )

    # -------------------------------------------------
    # Read – filtered
    # -------------------------------------------------
    def list_filtered(
        self,
        *,
        neighborhood: Optional[str] = None,
        category: Optional[str] = None,
        zipcode: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = self.sb.table(self.TABLE).select("*")

        if neighborhood:
            query = query.eq("neighborhood", neighborhood)
        if category:
            query = query.eq("category", category)
        if zipcode:
            query = query.eq("zipcode", zipcode)
        if limit:
            query = query.limit(limit)

        return self._run(query)

    def list_all(self) -> List[Dict[str, Any]]:
        return self._run(self.sb.table(self.TABLE).select("*"))

    # -------------------------------------------------
    # Read – fuzzy match candidates
    # -------------------------------------------------
    def list_distinct(self, column: str) -> List[str]:
        """
        Distinct non-empty values of one column, first-seen order.
        Fetched fresh on every call (no cache).
        """
        rows = self._run(self.sb.table(self.TABLE).select(column))
        values = (r.get(column) for r in rows)
        return list(dict.fromkeys(v for v in values if v))

    # -------------------------------------------------
    # Read – server-side random (RPC)
    # -------------------------------------------------
    def random_rows(self, n: int) -> List[Dict[str, Any]]:
        return self._run(self.sb.rpc(self.RANDOM_RPC, {"n": n}))
