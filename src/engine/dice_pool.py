"""
Dice Pool - Pool Engine

Stateful facade over RollResolver. Owns the current PoolState, the random
source and the clock, and notifies subscribed collaborators after every
operation.

Every public method is a total function: unknown dice types and stale die
ids are logged and ignored, never raised. The engine is not thread safe;
callers must serialize access to one instance.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable

from src.engine.base import DiceType, PoolState, Snapshot
from src.engine.events import EventPayload, PoolEvent
from src.engine.random_source import RandomSource, SystemRandomSource
from src.engine.resolution import RollResolver

if TYPE_CHECKING:
    from src.config.settings import Settings

logger = logging.getLogger(__name__)

Listener = Callable[[EventPayload], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


class DicePoolEngine:
    """Dice pool with roll, reroll and removal operations.

    Args:
        rng: Source for all die draws. Defaults to an unseeded system source.
        clock: Returns the current time in milliseconds, used for snapshots.
    """

    # Side count reported for unknown types
    DEFAULT_SIDES = 6

    def __init__(
        self,
        rng: RandomSource | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._rng = rng if rng is not None else SystemRandomSource()
        self._clock = clock if clock is not None else _now_ms
        self._state = PoolState.empty()
        self._last_snapshot: Snapshot | None = None
        self._listeners: list[Listener] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> DicePoolEngine:
        """Build an engine seeded from ``settings.random_seed``."""
        return cls(rng=SystemRandomSource(settings.random_seed))

    # === Collaborators ===

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked synchronously after each operation."""
        if listener in self._listeners:
            logger.warning("Listener %r already subscribed", listener)
            return
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(
        self,
        event: PoolEvent,
        snapshot: Snapshot | None = None,
        **data: Any,
    ) -> None:
        payload = EventPayload(
            event=event,
            pool=self._state.counts,
            snapshot=snapshot,
            data=data,
        )
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener failed while handling %s", event.name)

    # === Accessors ===

    @property
    def state(self) -> PoolState:
        """Current immutable pool state."""
        return self._state

    @property
    def last_snapshot(self) -> Snapshot | None:
        """Snapshot returned by the most recent roll, reroll or removal."""
        return self._last_snapshot

    def get_dice_pool(self) -> dict[DiceType, int]:
        """Loaded count per type, in declaration order."""
        return self._state.counts

    def get_dice_types(self) -> tuple[DiceType, ...]:
        return DiceType.ordered()

    def get_dice_sides(self, dice_type: DiceType | str) -> int:
        resolved = self._resolve_type(dice_type)
        return resolved.sides if resolved is not None else self.DEFAULT_SIDES

    def get_total_dice_count(self) -> int:
        """Loaded dice across all types, rolled or not."""
        return self._state.total_dice_count

    def get_selected_dice_count(self) -> int:
        """Size of the selection, stale ids included."""
        return self._state.selected_count

    def _resolve_type(self, dice_type: DiceType | str) -> DiceType | None:
        if isinstance(dice_type, DiceType):
            return dice_type
        resolved = DiceType.from_label(dice_type)
        if resolved is None:
            logger.debug("Ignoring unknown dice type %r", dice_type)
        return resolved

    # === Pool composition ===

    def add_dice(self, dice_type: DiceType | str, n: int = 1) -> int:
        """
        Load ``n`` more dice of a type.

        Returns:
            The new loaded count, or 0 for an unknown type
        """
        resolved = self._resolve_type(dice_type)
        if resolved is None:
            return 0
        before = self._state
        self._state = RollResolver.add_dice(before, resolved, n)
        count = self._state.entry(resolved).count
        if self._state is not before:
            self._emit(PoolEvent.DICE_ADDED, dice_type=resolved, count=count)
        return count

    def remove_dice(self, dice_type: DiceType | str, n: int = 1) -> int:
        """
        Unload up to ``n`` dice of a type, stopping at zero.

        Returns:
            The new loaded count, or 0 for an unknown type
        """
        resolved = self._resolve_type(dice_type)
        if resolved is None:
            return 0
        before = self._state
        self._state = RollResolver.remove_dice(before, resolved, n)
        count = self._state.entry(resolved).count
        if self._state is not before:
            self._emit(PoolEvent.DICE_REMOVED, dice_type=resolved, count=count)
        return count

    def reset_dice(self, dice_type: DiceType | str) -> int:
        """Clear one type's count and results. Always returns 0."""
        resolved = self._resolve_type(dice_type)
        if resolved is None:
            return 0
        self._state = RollResolver.reset_dice(self._state, resolved)
        self._emit(PoolEvent.TYPE_RESET, dice_type=resolved)
        return 0

    def reset_all_dice(self) -> None:
        """Clear every type and the selection."""
        self._state = RollResolver.reset_all(self._state)
        self._last_snapshot = None
        logger.debug("Dice pool reset")
        self._emit(PoolEvent.POOL_RESET)

    # === Rolling ===

    def roll_all(self) -> Snapshot:
        """Roll every loaded die, replacing the previous results of those types."""
        self._emit(PoolEvent.ROLL_STARTED)
        self._state, snapshot = RollResolver.roll_all(
            self._state, self._rng, self._clock()
        )
        self._last_snapshot = snapshot
        logger.info(
            "Rolled %d dice across %d types, grand total %d",
            len(snapshot.all_dice), len(snapshot.results), snapshot.grand_total,
        )
        self._emit(PoolEvent.DICE_ROLLED, snapshot)
        return snapshot

    def reroll_selected_dice(self) -> Snapshot:
        """Reroll the selected dice and clear the selection."""
        selected = self._state.selection
        self._state, snapshot = RollResolver.reroll_selected(
            self._state, self._rng, self._clock()
        )
        self._last_snapshot = snapshot
        logger.info(
            "Rerolled %d selected ids, grand total %d",
            len(selected), snapshot.grand_total,
        )
        self._emit(PoolEvent.DICE_REROLLED, snapshot, die_ids=sorted(selected))
        return snapshot

    def remove_selected_dice(self) -> Snapshot:
        """Discard the selected dice from the results and clear the selection."""
        selected = self._state.selection
        self._state, snapshot = RollResolver.remove_selected(
            self._state, self._clock()
        )
        self._last_snapshot = snapshot
        logger.info(
            "Removed %d selected ids, grand total %d",
            len(selected), snapshot.grand_total,
        )
        self._emit(PoolEvent.DICE_DISCARDED, snapshot, die_ids=sorted(selected))
        return snapshot

    # === Selection ===

    def toggle_dice_selection(self, die_id: str) -> bool:
        """
        Flip the selection of a die.

        Returns:
            True if ``die_id`` is selected after the call
        """
        if self._state.find_die(die_id) is None:
            logger.debug("Toggling selection of stale die id %r", die_id)
        self._state = RollResolver.toggle_selection(self._state, die_id)
        selected = die_id in self._state.selection
        self._emit(PoolEvent.SELECTION_CHANGED, die_id=die_id, selected=selected)
        return selected
