"""
Dice Pool - Engine Base Classes

This module defines the foundational data structures and enums used throughout
the engine. All classes are immutable (frozen dataclasses): every transition
returns a new instance, and the engine keeps only the latest version.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Mapping


class DiceType(Enum):
    """Polyhedral dice supported by the pool. The value is the side count."""
    D2 = 2
    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20
    D100 = 100

    @property
    def sides(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        """Lowercase label used by collaborators, e.g. ``"d6"``."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "DiceType | None":
        """
        Convert an external label into a DiceType.

        Args:
            label: Exact label such as ``"d20"``

        Returns:
            The matching DiceType, or None for unknown labels
        """
        return next((t for t in cls if t.label == label), None)

    @classmethod
    def ordered(cls) -> tuple["DiceType", ...]:
        """All dice types in declaration order."""
        return tuple(cls)


@dataclass(frozen=True)
class Die:
    """
    One rolled die with identity, selection and removal state.

    Attributes:
        id: Identifier unique for the lifetime of the pool
        dice_type: Type of the die
        value: Face value, between 1 and the side count
        selected: Transient selection flag
        removed: Terminal flag; a removed die never changes again
    """
    id: str
    dice_type: DiceType
    value: int
    selected: bool = False
    removed: bool = False

    def __post_init__(self) -> None:
        """Validate the face value against the side count."""
        if not (1 <= self.value <= self.dice_type.sides):
            raise ValueError(
                f"Invalid die value {self.value} for {self.dice_type.name}. "
                f"Must be between 1 and {self.dice_type.sides}."
            )

    def rerolled(self, value: int) -> "Die":
        """New die with a fresh value and the selection cleared."""
        if self.removed:
            return self
        return replace(self, value=value, selected=False)

    def with_selected(self, selected: bool) -> "Die":
        if self.removed:
            return self
        return replace(self, selected=selected)

    def as_removed(self) -> "Die":
        if self.removed:
            return self
        return replace(self, selected=False, removed=True)


@dataclass(frozen=True)
class PoolEntry:
    """
    Loaded count and latest results for one dice type.

    ``results`` keeps removed dice (flagged ``removed``) so identity survives
    until the next roll of this type replaces them.
    """
    dice_type: DiceType
    count: int = 0
    results: tuple[Die, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"Dice count cannot be negative, got {self.count}.")

    @property
    def live_dice(self) -> tuple[Die, ...]:
        """Dice from the last roll that have not been removed."""
        return tuple(die for die in self.results if not die.removed)

    @property
    def total(self) -> int:
        return sum(die.value for die in self.live_dice)

    @property
    def live_count(self) -> int:
        return len(self.live_dice)


@dataclass(frozen=True)
class PoolState:
    """
    Complete state of a dice pool.

    Attributes:
        entries: One PoolEntry per DiceType, in declaration order
        selection: Ids of dice marked for reroll or removal (may be stale)
        next_id: Next value of the monotonic die id counter
    """
    entries: tuple[PoolEntry, ...]
    selection: frozenset[str] = field(default_factory=frozenset)
    next_id: int = 1

    @classmethod
    def empty(cls) -> "PoolState":
        """A pool with every type present and nothing loaded."""
        return cls(entries=tuple(PoolEntry(dice_type=t) for t in DiceType))

    def entry(self, dice_type: DiceType) -> PoolEntry:
        for entry in self.entries:
            if entry.dice_type is dice_type:
                return entry
        raise KeyError(dice_type)

    def with_entry(self, new_entry: PoolEntry) -> "PoolState":
        """Return a new state with the entry for ``new_entry.dice_type`` replaced."""
        entries = tuple(
            new_entry if entry.dice_type is new_entry.dice_type else entry
            for entry in self.entries
        )
        return replace(self, entries=entries)

    def find_die(self, die_id: str) -> Die | None:
        return next((die for die in self.iter_dice() if die.id == die_id), None)

    def iter_dice(self) -> Iterator[Die]:
        for entry in self.entries:
            yield from entry.results

    @property
    def counts(self) -> dict[DiceType, int]:
        """Loaded count per type, in declaration order."""
        return {entry.dice_type: entry.count for entry in self.entries}

    @property
    def total_dice_count(self) -> int:
        return sum(entry.count for entry in self.entries)

    @property
    def selected_count(self) -> int:
        return len(self.selection)


@dataclass(frozen=True)
class TypeResult:
    """
    Per-type section of a snapshot.

    Attributes:
        dice_type: Type summarised
        rolls: Every die of the latest roll, removed ones included
        total: Sum of the values of non-removed dice
        count: Number of non-removed dice
    """
    dice_type: DiceType
    rolls: tuple[Die, ...]
    total: int
    count: int

    @classmethod
    def from_entry(cls, entry: PoolEntry) -> "TypeResult":
        return cls(
            dice_type=entry.dice_type,
            rolls=entry.results,
            total=entry.total,
            count=entry.live_count,
        )


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable result of a roll, reroll or removal.

    Attributes:
        results: Per-type results, in DiceType declaration order
        grand_total: Sum of every per-type total
        timestamp: Milliseconds since the epoch when the snapshot was taken
    """
    results: tuple[TypeResult, ...]
    grand_total: int
    timestamp: int

    @property
    def by_type(self) -> Mapping[DiceType, TypeResult]:
        return {result.dice_type: result for result in self.results}

    def get(self, dice_type: DiceType) -> TypeResult | None:
        return self.by_type.get(dice_type)

    @property
    def all_dice(self) -> tuple[Die, ...]:
        return tuple(die for result in self.results for die in result.rolls)

    @property
    def live_dice(self) -> tuple[Die, ...]:
        return tuple(die for die in self.all_dice if not die.removed)

    def __str__(self) -> str:
        if not self.results:
            return "No dice rolled."
        lines = [f"Grand Total: {self.grand_total}"]
        for result in self.results:
            if result.count > 0:
                lines.append(
                    f"  - {result.count}{result.dice_type.label} total: {result.total}"
                )
        return "\n".join(lines)
