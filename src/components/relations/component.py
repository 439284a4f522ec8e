"""
Relations component - embed child collections and expand parent records.

Shell Layer - copies records before handing them to the pure resolver.
"""

from __future__ import annotations

import copy

from ._impl import resolve
from .models import ResolveRelationsInput, ResolveRelationsOutput
from .ports import RelatedStorePort


def run_resolve(
    inp: ResolveRelationsInput,
    *,
    store: RelatedStorePort,
) -> ResolveRelationsOutput:
    """
    Attach related records to each record of a result set.

    Args:
        inp: Records, their collection and the embed/expand directives.
        store: Store port used to look up related collections.

    Returns:
        ResolveRelationsOutput with deep-copied, resolved records.
    """
    resolved = [
        resolve(
            copy.deepcopy(record),
            inp.collection,
            store,
            embed=inp.embed,
            expand=inp.expand,
            foreign_key_suffix=inp.foreign_key_suffix,
        )
        for record in inp.records
    ]
    return ResolveRelationsOutput(records=resolved)
