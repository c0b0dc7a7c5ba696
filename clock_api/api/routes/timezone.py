from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import PlainTextResponse

from clock_api.core.rate_limit import enforce_rate_limit, rate_limit_headers
from clock_api.schemas.time import SimpleTimeResponse, TimezoneResponse
from clock_api.services.time_service import (
    build_full_payload,
    build_simple_payload,
    render_text,
)

router = APIRouter(tags=["Time"])

CACHE_CONTROL = "public, max-age=1"

CORS_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@router.get(
    "/pakistan-timezone",
    response_model=Union[TimezoneResponse, SimpleTimeResponse],
    dependencies=[Depends(enforce_rate_limit)],
    responses={200: {"content": {"text/plain": {}}}},
)
async def pakistan_timezone(
    request: Request,
    response: Response,
    format: str = Query(
        "json", description="Response format: 'json' or 'text'."
    ),
    simple: str | None = Query(
        None, description="Exactly 'true' returns the compact JSON shape."
    ),
) -> TimezoneResponse | SimpleTimeResponse | PlainTextResponse:
    """Current time in Pakistan Standard Time.

    ``simple=true`` takes precedence over ``format``; any other ``simple``
    value is ignored. Unknown formats fall back to the full JSON document.
    """
    if simple == "true":
        response.headers["Cache-Control"] = CACHE_CONTROL
        return SimpleTimeResponse(**build_simple_payload())

    if format == "text":
        headers = {"Cache-Control": CACHE_CONTROL}
        headers.update(rate_limit_headers(getattr(request.state, "rate_limit", None)))
        return PlainTextResponse(render_text(), headers=headers)

    response.headers["Cache-Control"] = CACHE_CONTROL
    return TimezoneResponse(**build_full_payload())


@router.options("/pakistan-timezone", include_in_schema=False)
async def pakistan_timezone_preflight() -> Response:
    return Response(status_code=200, headers=CORS_PREFLIGHT_HEADERS)
