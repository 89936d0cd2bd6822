"""
Dice Pool Interface.

Boundary between the engine and its collaborators: pydantic models for
snapshots and pool state, and the command controller used by the UI layer.
"""

from src.interface.controller import PoolController
from src.interface.models import (
    ControllerResponse,
    DieModel,
    PoolModel,
    SnapshotModel,
    TypeResultModel,
)

__all__ = [
    "ControllerResponse",
    "DieModel",
    "PoolController",
    "PoolModel",
    "SnapshotModel",
    "TypeResultModel",
]
