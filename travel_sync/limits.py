# travel_sync/limits.py

import math
import re
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from travel_sync.config import API_RATE_LIMIT, RATE_LIMITS_ENABLED, SYNC_RATE_LIMIT

API_LIMIT_MESSAGE = "Too many requests, please try again later."
SYNC_LIMIT_MESSAGE = "Too many sync requests."

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    enabled=RATE_LIMITS_ENABLED,
)

_SYNC_PATH = re.compile(r"^/api/sync/[^/]+/?$")

# scope, limit, message
SYNC_LIMIT = ("sync", parse(SYNC_RATE_LIMIT), SYNC_LIMIT_MESSAGE)
API_LIMIT = ("api", parse(API_RATE_LIMIT), API_LIMIT_MESSAGE)


def limit_for(request: Request):
    path = request.url.path
    if request.method in ("GET", "POST") and _SYNC_PATH.match(path):
        return SYNC_LIMIT
    if request.method == "GET" and path == "/api/admin/stats":
        return API_LIMIT
    return None


async def rate_limits(request: Request, call_next):
    """
    Count the request against its route's budget before routing.

    Runs ahead of id and body validation, so rejected requests still
    spend budget. Responses carry RateLimit-* headers.
    """
    matched = limit_for(request)
    if matched is None or not limiter.enabled:
        return await call_next(request)

    scope, item, message = matched
    key = get_remote_address(request)
    allowed = limiter.limiter.hit(item, scope, key)
    reset_at, remaining = limiter.limiter.get_window_stats(item, scope, key)

    headers = {
        "RateLimit-Limit": str(item.amount),
        "RateLimit-Remaining": str(max(0, remaining)),
        "RateLimit-Reset": str(max(0, math.ceil(reset_at - time.time()))),
    }

    if not allowed:
        headers["Retry-After"] = headers["RateLimit-Reset"]
        return JSONResponse(status_code=429, content={"error": message}, headers=headers)

    response = await call_next(request)
    response.headers.update(headers)
    return response
