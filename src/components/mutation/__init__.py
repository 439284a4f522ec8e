"""
Mutation component - record writes and cascade delete.
"""

from ._impl import cascade_remove, coerce_body
from .component import run_create, run_delete, run_update
from .models import (
    CreateRecordInput,
    DeleteRecordInput,
    DeleteRecordOutput,
    RecordOutput,
    UpdateRecordInput,
)
from .ports import MutationStorePort

__all__ = [
    # Entry points
    "run_create",
    "run_delete",
    "run_update",
    # Input models
    "CreateRecordInput",
    "DeleteRecordInput",
    "UpdateRecordInput",
    # Output models
    "DeleteRecordOutput",
    "RecordOutput",
    # Ports
    "MutationStorePort",
    # _impl re-exports
    "cascade_remove",
    "coerce_body",
]
