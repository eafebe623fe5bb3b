from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Fact(BaseModel):
    """
    1 row from neighborhood_fun_facts (owned by the store, read-only here)
    """
    model_config = ConfigDict(extra="allow")

    fact_id: Optional[int] = None
    fact_text: Optional[str] = None
    neighborhood: Optional[str] = None
    category: Optional[str] = None
    zipcode: Optional[str] = None
    created_at: Optional[datetime] = None


class FactFilter(BaseModel):
    neighborhood: Optional[str] = Field(default=None, examples=["astorya"])
    category: Optional[str] = Field(default=None, examples=["foood"])
    zipcode: Optional[str] = Field(default=None, examples=["11101"])
    random: bool = False
    limit: Optional[int] = Field(default=None, ge=1, le=100)

    @property
    def has_filters(self) -> bool:
        return bool(self.neighborhood or self.category or self.zipcode)
