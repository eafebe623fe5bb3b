from typing import Optional

from pydantic import BaseModel

UNKNOWN = "Unknown"


class AuditEventRequest(BaseModel):
    """Body of POST /api/audit. Every field optional."""
    event_type: Optional[str] = None
    path: Optional[str] = None


class AuditRecord(BaseModel):
    ip_address: str = UNKNOWN
    path: str = "/"
    event_type: str = "home_page_visit"
    user_agent: str = UNKNOWN
    country: str = UNKNOWN
    city: str = UNKNOWN
    region: str = UNKNOWN


class EndpointAuditRecord(BaseModel):
    request_type: str
    endpoint_request: str
    ip_address: str = UNKNOWN
