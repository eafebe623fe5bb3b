from typing import Optional

from queens_facts.repositories.base import BaseRepository
from queens_facts.core.errors import AuditWriteError


class AuditRepository(BaseRepository):
    """
    Append-only audit tables. Write-only: nothing here is read back by the API.

    - TABLE           : page / UI events (POST /api/audit)
    - ENDPOINT_TABLE  : one row per inbound HTTP request
    created_at is filled by the column default (now()).
    """

    TABLE = "queens_facts_audit"
    ENDPOINT_TABLE = "endpoint_audit"

    def __init__(self, sb, table: Optional[str] = None, endpoint_table: Optional[str] = None):
        super().__init__(sb)
        if table:
            self.TABLE = table
        if endpoint_table:
            self.ENDPOINT_TABLE = endpoint_table

    # -------------------------
    # Write – UI event
    # -------------------------
    def insert_event(self, row: dict) -> None:
        self._insert(self.TABLE, row)

    # -------------------------
    # Write – endpoint request
    # -------------------------
    def insert_endpoint_request(self, row: dict) -> None:
        self._insert(self.ENDPOINT_TABLE, row)

    def _insert(self, table: str, row: dict) -> None:
        try:
            self.sb.table(table).insert([self._encode(row)]).execute()
        except Exception as e:
            raise AuditWriteError(
                getattr(e, "message", None) or str(e) or e.__class__.__name__
            ) from e
