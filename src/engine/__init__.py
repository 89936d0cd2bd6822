"""
Dice Pool Engine.

Pure Python pool and roll-resolution logic with zero UI dependencies.
Handles pool composition, rolling, selective rerolls and removals.
"""

from src.engine.base import (
    DiceType,
    Die,
    PoolEntry,
    PoolState,
    Snapshot,
    TypeResult,
)
from src.engine.dice_pool import DicePoolEngine
from src.engine.events import EventPayload, PoolEvent
from src.engine.random_source import (
    RandomSource,
    ScriptedRandomSource,
    SystemRandomSource,
)
from src.engine.resolution import RollResolver

__all__ = [
    # Data Classes
    "Die",
    "PoolEntry",
    "PoolState",
    "Snapshot",
    "TypeResult",
    "EventPayload",
    # Enums
    "DiceType",
    "PoolEvent",
    # Random sources
    "RandomSource",
    "ScriptedRandomSource",
    "SystemRandomSource",
    # Engines
    "RollResolver",
    "DicePoolEngine",
]
