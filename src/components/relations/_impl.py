"""
Relationship resolution by foreign-key convention.

Embed (one-to-many): `GET /posts?_embed=comments` attaches, to each post,
the comments whose `postId` equals the post id.

Expand (many-to-one): `GET /comments?_expand=post` attaches, to each
comment, the post whose id equals the comment's `postId`.

Invariants:
- Only the record passed in is modified; callers hand in copies
- A relation naming a collection that does not exist is skipped
- An expand with no matching record leaves the key absent
- Scalar entries (lists of strings or numbers) pass through untouched
"""

from __future__ import annotations

from collections.abc import Mapping

from src.domain.entities import Record
from src.domain.naming import foreign_key, pluralize
from src.domain.values import strict_equal

from .ports import RelatedStorePort


def embed_children(
    record: Record,
    collection: str,
    children: tuple[str, ...],
    store: RelatedStorePort,
    foreign_key_suffix: str = "Id",
) -> Record:
    """Attach child collections that reference `record` under their own names."""
    key = foreign_key(collection, foreign_key_suffix)
    parent_id = record.get("id")

    for child in children:
        if not store.has_collection(child):
            continue
        # Without an id nothing can reference the record
        if parent_id is None:
            record[child] = []
            continue
        record[child] = store.filter(
            child,
            lambda c: isinstance(c, Mapping) and key in c and strict_equal(c[key], parent_id),
        )
    return record


def expand_parents(
    record: Record,
    stems: tuple[str, ...],
    store: RelatedStorePort,
    foreign_key_suffix: str = "Id",
) -> Record:
    """Attach the records that `record` references, under the singular stem."""
    for stem in stems:
        target = pluralize(stem)
        if not store.has_collection(target):
            continue
        reference = record.get(f"{stem}{foreign_key_suffix}")
        if reference is None:
            continue
        parent = store.get_by_id(target, reference)
        if parent is not None:
            record[stem] = parent
    return record


def resolve(
    record: Record,
    collection: str,
    store: RelatedStorePort,
    *,
    embed: tuple[str, ...] = (),
    expand: tuple[str, ...] = (),
    foreign_key_suffix: str = "Id",
) -> Record:
    if not isinstance(record, Mapping):
        return record
    if embed:
        embed_children(record, collection, embed, store, foreign_key_suffix)
    if expand:
        expand_parents(record, expand, store, foreign_key_suffix)
    return record
