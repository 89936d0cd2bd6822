"""
Dice Pool - Roll Statistics

Summary statistics and notation formatting for rolled dice.
"""

from dataclasses import dataclass
from typing import Sequence

from src.engine.base import DiceType, Snapshot


@dataclass(frozen=True)
class RollStatistics:
    """
    Summary of a set of face values.

    Attributes:
        sum: Sum of the values
        average: Arithmetic mean
        minimum: Lowest value
        maximum: Highest value
        median: Middle value (mean of the two middle values for even counts)
        count: Number of values
    """
    sum: int
    average: float
    minimum: int
    maximum: int
    median: float
    count: int


def calculate_stats(values: Sequence[int]) -> RollStatistics | None:
    """Return statistics for ``values``, or None when there are none."""
    if not values:
        return None

    ordered = sorted(values)
    count = len(ordered)
    total = sum(ordered)
    middle = count // 2
    if count % 2 == 0:
        median = (ordered[middle - 1] + ordered[middle]) / 2
    else:
        median = float(ordered[middle])

    return RollStatistics(
        sum=total,
        average=total / count,
        minimum=ordered[0],
        maximum=ordered[-1],
        median=median,
        count=count,
    )


def snapshot_stats(
    snapshot: Snapshot,
    dice_type: DiceType | None = None,
) -> RollStatistics | None:
    """
    Statistics over the live (non-removed) dice of a snapshot.

    Args:
        snapshot: Snapshot to summarise
        dice_type: Restrict to one type (None = all types)
    """
    values = [
        die.value for die in snapshot.live_dice
        if dice_type is None or die.dice_type is dice_type
    ]
    return calculate_stats(values)


def format_dice_notation(count: int, sides: int, modifier: int = 0) -> str:
    """Format dice notation, e.g. ``2d6+3`` or ``1d20-1``."""
    notation = f"{count}d{sides}"
    if modifier > 0:
        notation += f"+{modifier}"
    elif modifier < 0:
        notation += f"{modifier}"
    return notation
