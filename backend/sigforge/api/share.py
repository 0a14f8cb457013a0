"""GET /{text} — short share links redirect to the builder with `text` filled in."""

from __future__ import annotations

from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/{text}", include_in_schema=False)
async def share(text: str, request: Request) -> RedirectResponse:
    params = [(k, v) for k, v in request.query_params.multi_items() if k != "text"]
    if text:
        # Path text always wins over a `text` query parameter
        params.insert(0, ("text", text))
    return RedirectResponse(url=f"/?{urlencode(params)}", status_code=308)
