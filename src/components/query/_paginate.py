"""
Pagination engine.

Three mutually exclusive modes, chosen by which parameters are present:
    _page (+_limit)        page numbers with navigation links
    _end (+_offset)        slice(offset, end)
    _limit (+_offset)      slice(offset, offset + limit)

Priority is page > end > limit. Whenever any of them is present the total
number of matching records (before slicing) is reported.
"""

from __future__ import annotations

import math
import re
from urllib.parse import urlsplit, urlunsplit

from src.domain.entities import Record

from .models import (
    EndSliceRequest,
    LimitSliceRequest,
    PageInfo,
    PageRequest,
    PaginationRequest,
    PaginationResult,
)

DEFAULT_PAGE_LIMIT = 10

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_PAGE_PARAM_RE = re.compile(r"(^|&)(_page=)[^&]*")


def parse_int(raw: str | None) -> int | None:
    """Lenient integer parse: leading digits only ("12abc" -> 12)."""
    if raw is None:
        return None
    match = _LEADING_INT_RE.match(raw)
    if not match:
        return None
    return int(match.group(1))


def parse_pagination(
    *,
    page: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
    end: str | None = None,
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> PaginationRequest | None:
    """Pick the active pagination mode from raw parameter values."""
    if page:
        page_number = parse_int(page)
        if page_number is None or page_number < 1:
            page_number = 1
        page_limit = parse_int(limit)
        if page_limit is None or page_limit < 1:
            page_limit = default_limit
        return PageRequest(page=page_number, limit=page_limit)

    start = parse_int(offset) or 0

    if end:
        return EndSliceRequest(offset=start, end=parse_int(end))

    if limit:
        return LimitSliceRequest(offset=start, limit=parse_int(limit))

    return None


def get_page(records: list[Record], page: int, limit: int) -> PageInfo:
    """
    Slice one page and work out its neighbours.

    No navigation is produced for an empty page. first/last/current are only
    set when the page does not already contain every record.
    """
    start = (page - 1) * limit
    stop = page * limit
    items = records[start:stop]

    if not items:
        return PageInfo(items=items)

    prev_page = page - 1 if page > 1 else None
    next_page = page + 1 if stop < len(records) else None

    if len(items) == len(records):
        return PageInfo(items=items, prev=prev_page, next=next_page)

    return PageInfo(
        items=items,
        current=page,
        first=1,
        prev=prev_page,
        next=next_page,
        last=math.ceil(len(records) / limit),
    )


def rewrite_page(url: str, page: int) -> str:
    """Return `url` with its `_page` query parameter set to `page`."""
    parts = urlsplit(url)
    if _PAGE_PARAM_RE.search(parts.query):
        query = _PAGE_PARAM_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}{page}", parts.query)
    elif parts.query:
        query = f"{parts.query}&_page={page}"
    else:
        query = f"_page={page}"
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def build_links(url: str, info: PageInfo) -> dict[str, str]:
    links: dict[str, str] = {}
    for rel in ("first", "prev", "next", "last"):
        target = getattr(info, rel)
        if target:
            links[rel] = rewrite_page(url, target)
    return links


def format_link_header(links: dict[str, str]) -> str:
    """RFC 8288 Link header value."""
    return ", ".join(f'<{target}>; rel="{rel}"' for rel, target in links.items())


def paginate(
    records: list[Record],
    request: PaginationRequest | None,
    url: str = "",
) -> PaginationResult:
    if request is None:
        return PaginationResult(items=records)

    total = len(records)

    if isinstance(request, PageRequest):
        info = get_page(records, request.page, request.limit)
        return PaginationResult(
            items=info.items,
            total_count=total,
            links=build_links(url, info),
        )

    if isinstance(request, EndSliceRequest):
        if request.end is None:
            return PaginationResult(items=[], total_count=total)
        return PaginationResult(items=records[request.offset : request.end], total_count=total)

    assert isinstance(request, LimitSliceRequest)
    if request.limit is None:
        return PaginationResult(items=[], total_count=total)
    stop = request.offset + request.limit
    return PaginationResult(items=records[request.offset : stop], total_count=total)
