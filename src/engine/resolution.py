"""
Dice Pool - Roll Resolution

Pool mutation, roll, reroll and removal rules.

Every method is a pure function: it takes a PoolState (and, for draws, a
RandomSource) and returns a new PoolState, plus a Snapshot for operations
that produce results. Nothing is stored on the class.

Rules:
    - Rolling replaces the results of every type with a loaded count;
      types with no loaded dice keep their previous results.
    - Rerolling draws new values for selected, non-removed dice only.
    - Removing flags selected dice as removed; the loaded count is untouched.
    - Reroll and removal clear the whole selection, stale ids included.
    - A removed die never changes again.
"""

from dataclasses import replace
from typing import Iterable

from src.engine.base import (
    DiceType,
    Die,
    PoolEntry,
    PoolState,
    Snapshot,
    TypeResult,
)
from src.engine.random_source import RandomSource


class RollResolver:
    """
    Stateless rules engine for the dice pool.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    ID_SEPARATOR = "-"

    # === Pool composition ===

    @classmethod
    def add_dice(cls, state: PoolState, dice_type: DiceType, n: int = 1) -> PoolState:
        """Load ``n`` more dice of a type. Negative ``n`` is ignored."""
        if n <= 0:
            return state
        entry = state.entry(dice_type)
        return state.with_entry(replace(entry, count=entry.count + n))

    @classmethod
    def remove_dice(cls, state: PoolState, dice_type: DiceType, n: int = 1) -> PoolState:
        """Unload up to ``n`` dice of a type, never going below zero."""
        if n <= 0:
            return state
        entry = state.entry(dice_type)
        return state.with_entry(replace(entry, count=max(0, entry.count - n)))

    @classmethod
    def reset_dice(cls, state: PoolState, dice_type: DiceType) -> PoolState:
        """
        Clear the count and results of one type.

        The selection is left alone; ids that pointed at the cleared results
        become stale and are tolerated by later operations.
        """
        return state.with_entry(PoolEntry(dice_type=dice_type))

    @classmethod
    def reset_all(cls, state: PoolState) -> PoolState:
        """Clear every type and the selection. The id counter keeps running."""
        return replace(PoolState.empty(), next_id=state.next_id)

    # === Rolling ===

    @classmethod
    def make_id(cls, dice_type: DiceType, serial: int) -> str:
        return f"{dice_type.label}{cls.ID_SEPARATOR}{serial}"

    @classmethod
    def roll_die(cls, dice_type: DiceType, rng: RandomSource) -> int:
        """Draw one uniform value in [1, sides]."""
        return rng.randint(1, dice_type.sides)

    @classmethod
    def roll_all(
        cls,
        state: PoolState,
        rng: RandomSource,
        timestamp: int,
    ) -> tuple[PoolState, Snapshot]:
        """
        Roll every loaded die.

        Args:
            state: Current pool state
            rng: Source for the draws
            timestamp: Snapshot timestamp in milliseconds

        Returns:
            Tuple of (new_state, snapshot). The snapshot only covers types
            with a loaded count. The selection is not cleared.
        """
        next_id = state.next_id
        rolled_types = []

        for entry in state.entries:
            if entry.count <= 0:
                continue
            dice = []
            for _ in range(entry.count):
                dice.append(Die(
                    id=cls.make_id(entry.dice_type, next_id),
                    dice_type=entry.dice_type,
                    value=cls.roll_die(entry.dice_type, rng),
                ))
                next_id += 1
            state = state.with_entry(replace(entry, results=tuple(dice)))
            rolled_types.append(entry.dice_type)

        state = replace(state, next_id=next_id)
        return state, cls.build_snapshot(state, rolled_types, timestamp)

    @classmethod
    def reroll_selected(
        cls,
        state: PoolState,
        rng: RandomSource,
        timestamp: int,
    ) -> tuple[PoolState, Snapshot]:
        """
        Reroll every selected, non-removed die and clear the selection.

        Returns:
            Tuple of (new_state, snapshot) covering every type with results
        """
        for entry in state.entries:
            if not entry.results:
                continue
            results = tuple(
                die.rerolled(cls.roll_die(die.dice_type, rng))
                if die.id in state.selection and not die.removed
                else die
                for die in entry.results
            )
            state = state.with_entry(replace(entry, results=results))

        state = replace(state, selection=frozenset())
        return state, cls.build_snapshot(state, cls._types_with_results(state), timestamp)

    @classmethod
    def remove_selected(
        cls,
        state: PoolState,
        timestamp: int,
    ) -> tuple[PoolState, Snapshot]:
        """
        Flag every selected die as removed and clear the selection.

        Loaded counts are unchanged: they describe the next full roll,
        not the dice still live from the last one.

        Returns:
            Tuple of (new_state, snapshot) covering every type with results
        """
        for entry in state.entries:
            if not entry.results:
                continue
            results = tuple(
                die.as_removed() if die.id in state.selection else die
                for die in entry.results
            )
            state = state.with_entry(replace(entry, results=results))

        state = replace(state, selection=frozenset())
        return state, cls.build_snapshot(state, cls._types_with_results(state), timestamp)

    # === Selection ===

    @classmethod
    def toggle_selection(cls, state: PoolState, die_id: str) -> PoolState:
        """
        Flip membership of ``die_id`` in the selection.

        The matching die's ``selected`` flag follows the new membership.
        Unknown ids still toggle membership; ids of removed dice are ignored.
        """
        die = state.find_die(die_id)
        if die is not None and die.removed:
            return state

        if die_id in state.selection:
            selection = state.selection - {die_id}
        else:
            selection = state.selection | {die_id}
        state = replace(state, selection=selection)

        if die is None:
            return state

        entry = state.entry(die.dice_type)
        is_selected = die_id in selection
        results = tuple(
            d.with_selected(is_selected) if d.id == die_id else d
            for d in entry.results
        )
        return state.with_entry(replace(entry, results=results))

    # === Snapshots ===

    @classmethod
    def build_snapshot(
        cls,
        state: PoolState,
        dice_types: Iterable[DiceType],
        timestamp: int,
    ) -> Snapshot:
        """Summarise the given types, in declaration order."""
        wanted = set(dice_types)
        results = tuple(
            TypeResult.from_entry(entry)
            for entry in state.entries
            if entry.dice_type in wanted
        )
        return Snapshot(
            results=results,
            grand_total=sum(result.total for result in results),
            timestamp=timestamp,
        )

    @classmethod
    def _types_with_results(cls, state: PoolState) -> list[DiceType]:
        return [entry.dice_type for entry in state.entries if entry.results]
