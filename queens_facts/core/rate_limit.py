from __future__ import annotations

from fastapi import Request, Response
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from queens_facts.core.config import Settings, settings as default_settings
from queens_facts.core.errors import RateLimitError

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
API_SCOPE = "api"


def build_limiter(config: Settings | None = None) -> Limiter:
    """Fixed-window counter per client address, in-memory storage."""
    config = config or default_settings
    return Limiter(
        key_func=get_remote_address,
        default_limits=[config.RATE_LIMIT],
        storage_uri="memory://",
        strategy="fixed-window",
        enabled=config.RATE_LIMIT_ENABLED,
    )


def enforce_rate_limit(request: Request, response: Response) -> None:
    """
    Router dependency for /api routes.
    One shared window per client address across every /api endpoint.
    """
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return

    item = parse(request.app.state.settings.RATE_LIMIT)
    key = get_remote_address(request)
    allowed = limiter.limiter.hit(item, API_SCOPE, key)

    reset_time, remaining = limiter.limiter.get_window_stats(item, API_SCOPE, key)
    headers = {
        "X-RateLimit-Limit": str(item.amount),
        "X-RateLimit-Remaining": str(max(remaining, 0)),
        "X-RateLimit-Reset": str(int(reset_time)),
    }
    if not allowed:
        raise RateLimitError(RATE_LIMIT_MESSAGE, headers=headers)
    response.headers.update(headers)
