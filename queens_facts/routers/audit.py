import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from queens_facts.core.errors import AuditWriteError
from queens_facts.services.audit.audit_models import AuditEventRequest
from queens_facts.services.audit.audit_service import AuditService, build_audit_record

router = APIRouter()
logger = logging.getLogger("queens_facts.audit")


async def _read_body(request: Request) -> AuditEventRequest:
    # missing / malformed body -> defaults
    try:
        body = await request.json()
    except ValueError:
        return AuditEventRequest()
    if not isinstance(body, dict):
        return AuditEventRequest()
    try:
        return AuditEventRequest.model_validate(body)
    except ValidationError:
        return AuditEventRequest()


@router.post("/audit", summary="Record a UI event")
async def post_audit(request: Request):
    try:
        body = await _read_body(request)
        record = build_audit_record(request.headers, body)
        service = AuditService(request.state.sb, config=request.app.state.settings)
        await run_in_threadpool(service.record_visit, record)
    except AuditWriteError as e:
        logger.error("audit insert error: %s", e.message)
        return JSONResponse({"success": False, "error": e.message}, status_code=500)
    except Exception:
        logger.exception("audit API error")
        return JSONResponse(
            {"success": False, "error": "Internal Server Error"},
            status_code=500,
        )

    return {"success": True}
