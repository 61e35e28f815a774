"""
Python client for the inventory API.

Public API:
- ClientConfig: Connection settings and environment presets
- InventoryClient / ApiResult: One call per REST route
- KanbanBoard: Column grouping with optimistic moves and deletes
- build_category_breakdown: Analytics rows
"""

from .config import ClientConfig
from .api import ApiResult, InventoryClient
from .optimistic import ActionState, InvalidTransitionError, OptimisticAction
from .board import BatchResult, Column, KanbanBoard
from .dashboard import CategoryShare, build_category_breakdown

__all__ = [
    "ClientConfig",
    "ApiResult",
    "InventoryClient",
    "ActionState",
    "InvalidTransitionError",
    "OptimisticAction",
    "BatchResult",
    "Column",
    "KanbanBoard",
    "CategoryShare",
    "build_category_breakdown",
]
