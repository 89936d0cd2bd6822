"""
Dice Pool - Engine Event Definitions

Event types and payloads delivered to collaborators (renderers, UI) after
each engine operation.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from src.engine.base import DiceType, Snapshot


class PoolEvent(Enum):
    """Events emitted by the dice pool engine."""

    DICE_ADDED = auto()
    DICE_REMOVED = auto()
    TYPE_RESET = auto()
    POOL_RESET = auto()
    ROLL_STARTED = auto()
    DICE_ROLLED = auto()
    DICE_REROLLED = auto()
    DICE_DISCARDED = auto()
    SELECTION_CHANGED = auto()


# Events whose payload carries a snapshot
SNAPSHOT_EVENTS = frozenset({
    PoolEvent.DICE_ROLLED,
    PoolEvent.DICE_REROLLED,
    PoolEvent.DICE_DISCARDED,
})


@dataclass
class EventPayload:
    """Wrapper for engine event data."""

    event: PoolEvent
    pool: dict[DiceType, int] = field(default_factory=dict)
    snapshot: Snapshot | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def total_dice(self) -> int:
        """Loaded dice at the time of the event."""
        return sum(self.pool.values())
