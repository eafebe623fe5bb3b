from __future__ import annotations

import logging
from typing import Mapping, Optional

from queens_facts.core.config import Settings, settings as default_settings
from queens_facts.core.errors import AuditWriteError
from queens_facts.repositories.audit_repo import AuditRepository
from queens_facts.services.audit.audit_models import (
    UNKNOWN,
    AuditEventRequest,
    AuditRecord,
    EndpointAuditRecord,
)

logger = logging.getLogger("queens_facts.audit")

DEFAULT_EVENT_TYPE = "home_page_visit"
DEFAULT_PATH = "/"


def client_ip(headers: Mapping[str, str], fallback: Optional[str] = None) -> str:
    """x-forwarded-for (first hop) -> x-real-ip -> fallback -> "Unknown"."""
    forwarded = headers.get("x-forwarded-for") or ""
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    return headers.get("x-real-ip") or fallback or UNKNOWN


def build_audit_record(headers: Mapping[str, str], body: Optional[AuditEventRequest] = None) -> AuditRecord:
    body = body or AuditEventRequest()
    return AuditRecord(
        ip_address=client_ip(headers),
        path=body.path or DEFAULT_PATH,
        event_type=body.event_type or DEFAULT_EVENT_TYPE,
        user_agent=headers.get("user-agent") or UNKNOWN,
        country=headers.get("x-vercel-ip-country") or UNKNOWN,
        city=headers.get("x-vercel-ip-city") or UNKNOWN,
        region=headers.get("x-vercel-ip-country-region") or UNKNOWN,
    )


class AuditService:
    """
    Audit sink.

    Outside production nothing is written: one log line replaces the insert.
    """

    def __init__(self, sb, config: Settings | None = None):
        self.config = config or default_settings
        self.audit_repo = AuditRepository(
            sb,
            table=self.config.AUDIT_TABLE,
            endpoint_table=self.config.ENDPOINT_AUDIT_TABLE,
        )

    def record_visit(self, record: AuditRecord) -> None:
        """Raises AuditWriteError; the caller decides what the client sees."""
        if not self.config.is_production:
            logger.info(
                "audit (dev mode, not inserted) event_type=%s path=%s ip=%s ua=%s",
                record.event_type,
                record.path,
                record.ip_address,
                record.user_agent,
            )
            return
        self.audit_repo.insert_event(record.model_dump())

    def record_endpoint(self, record: EndpointAuditRecord) -> None:
        """Best-effort: never raises."""
        if not self.config.is_production:
            logger.info(
                "endpoint audit (dev mode, not inserted) %s %s from %s",
                record.request_type,
                record.endpoint_request,
                record.ip_address,
            )
            return
        try:
            self.audit_repo.insert_endpoint_request(record.model_dump())
        except AuditWriteError as e:
            logger.error("endpoint_audit insert failed: %s", e.message)
        except Exception:
            logger.exception("endpoint audit error")
