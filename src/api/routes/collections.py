"""
Collection API Routes.

    GET    /{name}        list (search, filter, sort, paginate, project, relations)
    POST   /{name}        create
    GET    /{name}/{id}   show (with _embed/_expand)
    PUT    /{name}/{id}   replace
    PATCH  /{name}/{id}   merge
    DELETE /{name}/{id}   delete + cascade

Unknown collections and ids answer 404 with an empty object.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response

from src.adapters.memory_store import InMemoryCollectionStore
from src.api.deps import get_rules, get_store, require_writable
from src.api.render import not_found, render
from src.components.mutation import (
    CreateRecordInput,
    DeleteRecordInput,
    UpdateRecordInput,
    run_create,
    run_delete,
    run_update,
)
from src.components.query import (
    ListRecordsInput,
    ShowRecordInput,
    format_link_header,
    run_list,
    run_show,
)
from src.core.ports.store import CollectionNotFoundError, DuplicateIdError
from src.rules.models import Rules

router = APIRouter()

TOTAL_COUNT_HEADER = "X-Total-Count"


def _query_params(request: Request) -> tuple[tuple[str, str], ...]:
    return tuple(request.query_params.multi_items())


def _pagination_headers(total_count: int | None, links: dict[str, str]) -> dict[str, str]:
    if total_count is None:
        return {}

    headers = {TOTAL_COUNT_HEADER: str(total_count)}
    exposed = [TOTAL_COUNT_HEADER]
    if links:
        headers["Link"] = format_link_header(links)
        exposed.append("Link")
    headers["Access-Control-Expose-Headers"] = ", ".join(exposed)
    return headers


# --- Routes ---


@router.get("/{name}")
def list_records(
    name: str,
    request: Request,
    store: InMemoryCollectionStore = Depends(get_store),
    rules: Rules = Depends(get_rules),
) -> Response:
    """List a collection."""
    result = run_list(
        ListRecordsInput(collection=name, params=_query_params(request), url=str(request.url)),
        store=store,
        rules=rules,
    )
    if not result.found:
        return not_found(request)

    return render(
        request,
        result.records,
        headers=_pagination_headers(result.total_count, result.links),
    )


@router.post("/{name}", dependencies=[Depends(require_writable)])
def create_record(
    name: str,
    request: Request,
    body: dict[str, Any] = Body(...),
    store: InMemoryCollectionStore = Depends(get_store),
) -> Response:
    """Create a record; the store assigns the id."""
    if not store.has_collection(name):
        return not_found(request)

    try:
        result = run_create(CreateRecordInput(collection=name, body=body), store=store)
    except DuplicateIdError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except CollectionNotFoundError:
        return not_found(request)

    return render(request, result.record, status_code=201)


@router.get("/{name}/{record_id}")
def show_record(
    name: str,
    record_id: str,
    request: Request,
    store: InMemoryCollectionStore = Depends(get_store),
    rules: Rules = Depends(get_rules),
) -> Response:
    """Get one record."""
    result = run_show(
        ShowRecordInput(collection=name, record_id=record_id, params=_query_params(request)),
        store=store,
        rules=rules,
    )
    if result.record is None:
        return not_found(request)
    return render(request, result.record)


def _update(
    name: str,
    record_id: str,
    request: Request,
    body: dict[str, Any],
    store: InMemoryCollectionStore,
    *,
    partial: bool,
) -> Response:
    result = run_update(
        UpdateRecordInput(collection=name, record_id=record_id, body=body, partial=partial),
        store=store,
    )
    if result.record is None:
        return not_found(request)
    return render(request, result.record)


@router.put("/{name}/{record_id}", dependencies=[Depends(require_writable)])
def replace_record(
    name: str,
    record_id: str,
    request: Request,
    body: dict[str, Any] = Body(...),
    store: InMemoryCollectionStore = Depends(get_store),
) -> Response:
    """Replace a record's body (id is kept)."""
    return _update(name, record_id, request, body, store, partial=False)


@router.patch("/{name}/{record_id}", dependencies=[Depends(require_writable)])
def patch_record(
    name: str,
    record_id: str,
    request: Request,
    body: dict[str, Any] = Body(...),
    store: InMemoryCollectionStore = Depends(get_store),
) -> Response:
    """Merge fields onto a record."""
    return _update(name, record_id, request, body, store, partial=True)


@router.delete("/{name}/{record_id}", dependencies=[Depends(require_writable)])
def delete_record(
    name: str,
    record_id: str,
    request: Request,
    store: InMemoryCollectionStore = Depends(get_store),
) -> Response:
    """Delete a record and every record left dangling by it."""
    result = run_delete(DeleteRecordInput(collection=name, record_id=record_id), store=store)
    if result.removed is None:
        return not_found(request)
    return render(request, {})
