"""
Response rendering shared by the collection routes.

GET requests carrying a `callback` parameter are answered as JSONP so the
API can be consumed from a <script> tag; everything else is plain JSON.
"""

from __future__ import annotations

import json
import re
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse

_CALLBACK_RE = re.compile(r"^[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*$")


def jsonp_callback(request: Request) -> str | None:
    """Valid JSONP callback name of a GET request, if any."""
    if request.method != "GET":
        return None
    callback = request.query_params.get("callback")
    if callback and _CALLBACK_RE.match(callback):
        return callback
    return None


def render(
    request: Request,
    data: Any,
    *,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> Response:
    callback = jsonp_callback(request)
    if callback is None:
        return JSONResponse(content=data, status_code=status_code, headers=headers)

    payload = json.dumps(data, ensure_ascii=False)
    return Response(
        content=f"/**/ typeof {callback} === 'function' && {callback}({payload});",
        status_code=status_code,
        headers=headers,
        media_type="text/javascript",
    )


def not_found(request: Request) -> Response:
    """Lookup misses carry no payload: 404 with an empty object."""
    return render(request, {}, status_code=404)
