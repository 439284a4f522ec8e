"""
Query component - search, filter, sort, paginate and project collections.
"""

from ._filter import (
    apply_filters,
    build_predicates,
    matches_predicate,
    parse_clause,
    parse_filter_expression,
    tokenize_clause,
)
from ._paginate import (
    DEFAULT_PAGE_LIMIT,
    format_link_header,
    get_page,
    paginate,
    parse_int,
    parse_pagination,
    rewrite_page,
)
from ._params import CONTROL_PARAMS, PASS_THROUGH_PARAMS, parse_list_query
from ._project import apply_projection, parse_fields
from ._search import apply_search, deep_contains
from ._sort import apply_sort, parse_sort
from .component import execute_query, run_list, run_show
from .models import (
    EndSliceRequest,
    FilterPredicate,
    LimitSliceRequest,
    ListQuery,
    ListRecordsInput,
    ListRecordsOutput,
    Operator,
    PageInfo,
    PageRequest,
    PaginationResult,
    ShowRecordInput,
    ShowRecordOutput,
    SortDirection,
    SortSpec,
)
from .ports import QueryRulesPort, QueryStorePort

__all__ = [
    # Entry points
    "run_list",
    "run_show",
    "execute_query",
    # Input models
    "ListRecordsInput",
    "ShowRecordInput",
    # Output models
    "ListRecordsOutput",
    "ShowRecordOutput",
    "PaginationResult",
    "PageInfo",
    # Query models
    "ListQuery",
    "FilterPredicate",
    "Operator",
    "SortSpec",
    "SortDirection",
    "PageRequest",
    "EndSliceRequest",
    "LimitSliceRequest",
    # Ports
    "QueryStorePort",
    "QueryRulesPort",
    # Pipeline stages
    "CONTROL_PARAMS",
    "PASS_THROUGH_PARAMS",
    "DEFAULT_PAGE_LIMIT",
    "apply_filters",
    "apply_projection",
    "apply_search",
    "apply_sort",
    "build_predicates",
    "deep_contains",
    "format_link_header",
    "get_page",
    "matches_predicate",
    "paginate",
    "parse_clause",
    "parse_fields",
    "parse_filter_expression",
    "parse_int",
    "parse_list_query",
    "parse_pagination",
    "parse_sort",
    "rewrite_page",
    "tokenize_clause",
]
