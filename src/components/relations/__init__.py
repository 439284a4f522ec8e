"""
Relations component - embed/expand related records by foreign-key convention.
"""

from ._impl import embed_children, expand_parents, resolve
from .component import run_resolve
from .models import ResolveRelationsInput, ResolveRelationsOutput
from .ports import RelatedStorePort

__all__ = [
    # Entry points
    "run_resolve",
    # Models
    "ResolveRelationsInput",
    "ResolveRelationsOutput",
    # Ports
    "RelatedStorePort",
    # _impl re-exports
    "embed_children",
    "expand_parents",
    "resolve",
]
