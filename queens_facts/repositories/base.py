from abc import ABC
from typing import Any, List

from fastapi.encoders import jsonable_encoder

from queens_facts.core.errors import UpstreamError


class BaseRepository(ABC):
    def __init__(self, sb):
        self.sb = sb

    def _encode(self, payload: dict) -> dict:
        """
        Ensure Supabase never receives datetime / Decimal / UUID / Pydantic models
        """
        return jsonable_encoder(payload)

    def _run(self, query) -> List[Any]:
        """
        Execute a built query and return its rows.
        Any client/transport failure becomes UpstreamError with the store message.
        """
        try:
            res = query.execute()
        except Exception as e:
            raise UpstreamError(_store_message(e)) from e
        return res.data or []


def _store_message(exc: Exception) -> str:
    # postgrest APIError carries .message; httpx errors only str()
    msg = getattr(exc, "message", None)
    if isinstance(msg, str) and msg:
        return msg
    return str(exc) or exc.__class__.__name__
