"""
Query component - list and show records of a collection.

List pipeline, applied in this order:
    1. parse parameters, strip control keys, drop unknown keys
    2. full-text search (_q)
    3. filter predicates (field shortcuts and _filter)
    4. sort (_sort)
    5. paginate (_page > _end > _limit)
    6. project (_fields)
    7. deep-copy and resolve relations (_embed, _expand)

Each stage is a pure function over a list of records; the store is only
read at the start and during relation resolution.
"""

from __future__ import annotations

from src.components.relations import ResolveRelationsInput, run_resolve

from ._filter import apply_filters
from ._paginate import DEFAULT_PAGE_LIMIT, paginate
from ._params import parse_list_query, split_values
from ._project import apply_projection
from ._search import apply_search
from ._sort import apply_sort
from .models import (
    ListQuery,
    ListRecordsInput,
    ListRecordsOutput,
    PaginationResult,
    ShowRecordInput,
    ShowRecordOutput,
)
from .ports import QueryRulesPort, QueryStorePort


def _default_limit(rules: QueryRulesPort | None) -> int:
    if rules is None:
        return DEFAULT_PAGE_LIMIT
    return rules.get_default_page_limit()


def _fk_suffix(rules: QueryRulesPort | None) -> str:
    if rules is None:
        return "Id"
    return rules.get_foreign_key_suffix()


def execute_query(records: list, query: ListQuery, url: str = "") -> PaginationResult:
    """Run search, filter, sort, pagination and projection over `records`."""
    result = apply_search(records, query.search)
    result = apply_filters(result, query.predicates)
    result = apply_sort(result, query.sort)
    page = paginate(result, query.pagination, url)
    return PaginationResult(
        items=apply_projection(page.items, query.fields),
        total_count=page.total_count,
        links=page.links,
    )


# --- Component Entry Points ---


def run_list(
    inp: ListRecordsInput,
    *,
    store: QueryStorePort,
    rules: QueryRulesPort | None = None,
) -> ListRecordsOutput:
    """
    List records of a collection.

    Args:
        inp: Collection name, raw query parameters and request URL.
        store: Store port.
        rules: Optional rules port for page size and foreign key suffix.

    Returns:
        ListRecordsOutput with records, total count and page links;
        found=False when the collection does not exist.
    """
    records = store.get_collection(inp.collection)
    if records is None:
        return ListRecordsOutput(found=False)

    query = parse_list_query(inp.params, records, default_limit=_default_limit(rules))
    page = execute_query(records, query, inp.url)

    resolved = run_resolve(
        ResolveRelationsInput(
            collection=inp.collection,
            records=page.items,
            embed=query.embed,
            expand=query.expand,
            foreign_key_suffix=_fk_suffix(rules),
        ),
        store=store,
    )

    return ListRecordsOutput(
        records=resolved.records,
        total_count=page.total_count,
        links=page.links,
    )


def run_show(
    inp: ShowRecordInput,
    *,
    store: QueryStorePort,
    rules: QueryRulesPort | None = None,
) -> ShowRecordOutput:
    """
    Fetch one record by id, with optional _embed/_expand.

    Returns:
        ShowRecordOutput; record is None when the collection or id is unknown.
    """
    record = store.get_by_id(inp.collection, inp.record_id)
    if record is None:
        return ShowRecordOutput()

    resolved = run_resolve(
        ResolveRelationsInput(
            collection=inp.collection,
            records=[record],
            embed=split_values(inp.params, "_embed"),
            expand=split_values(inp.params, "_expand"),
            foreign_key_suffix=_fk_suffix(rules),
        ),
        store=store,
    )
    return ShowRecordOutput(record=resolved.records[0])
