"""
Dice Pool - Pool Controller

Command handler for the interaction layer. Converts raw UI input (dice
labels, die ids) into engine calls, validates it, and packages the result
as a ControllerResponse ready to render. Holds no state besides the engine.
"""

from __future__ import annotations

import logging

from src.config.settings import Settings, get_settings
from src.engine.base import Snapshot
from src.engine.dice_pool import DicePoolEngine
from src.engine.validators import parse_dice_type, validate_dice_count
from src.interface.models import ControllerResponse, PoolModel, SnapshotModel

logger = logging.getLogger(__name__)

MSG_NOTHING_TO_ROLL = "Please select some dice to roll!"
MSG_NOTHING_TO_REROLL = "Please select dice to reroll"
MSG_NOTHING_TO_REMOVE = "Please select dice to remove"
MSG_CLEARED = "All dice cleared"
MSG_REROLLED = "Selected dice rerolled"
MSG_REMOVED = "Selected dice removed"


class PoolController:
    """Handles interaction commands against a DicePoolEngine.

    Args:
        engine: Engine to drive. Built from settings when omitted.
        settings: Source of the per-type dice limit.
    """

    def __init__(
        self,
        engine: DicePoolEngine | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._engine = engine or DicePoolEngine.from_settings(self._settings)

    @property
    def engine(self) -> DicePoolEngine:
        return self._engine

    def _respond(
        self,
        ok: bool = True,
        message: str | None = None,
        snapshot: Snapshot | None = None,
    ) -> ControllerResponse:
        return ControllerResponse(
            ok=ok,
            message=message,
            snapshot=SnapshotModel.from_snapshot(snapshot) if snapshot is not None else None,
            pool=PoolModel.from_state(self._engine.state),
            selected_count=self._engine.get_selected_dice_count(),
        )

    def pool(self) -> ControllerResponse:
        """Current pool, with the last snapshot if any."""
        return self._respond(snapshot=self._engine.last_snapshot)

    def add(self, label: str, n: int = 1) -> ControllerResponse:
        """Load ``n`` dice of the labelled type, within the per-type limit."""
        try:
            dice_type = parse_dice_type(label)
            validate_dice_count(n, max_count=None)
            current = self._engine.get_dice_pool()[dice_type]
            validate_dice_count(current + n, self._settings.max_dice_per_type)
        except ValueError as exc:
            logger.info("Rejected add of %r x%r: %s", label, n, exc)
            return self._respond(ok=False, message=str(exc))

        self._engine.add_dice(dice_type, n)
        return self._respond()

    def remove(self, label: str, n: int = 1) -> ControllerResponse:
        try:
            dice_type = parse_dice_type(label)
            validate_dice_count(n, max_count=None)
        except ValueError as exc:
            return self._respond(ok=False, message=str(exc))

        self._engine.remove_dice(dice_type, n)
        return self._respond()

    def reset(self, label: str) -> ControllerResponse:
        try:
            dice_type = parse_dice_type(label)
        except ValueError as exc:
            return self._respond(ok=False, message=str(exc))

        self._engine.reset_dice(dice_type)
        return self._respond()

    def clear_all(self) -> ControllerResponse:
        self._engine.reset_all_dice()
        return self._respond(message=MSG_CLEARED)

    def roll(self) -> ControllerResponse:
        if self._engine.get_total_dice_count() == 0:
            return self._respond(ok=False, message=MSG_NOTHING_TO_ROLL)
        return self._respond(snapshot=self._engine.roll_all())

    def toggle(self, die_id: str) -> ControllerResponse:
        selected = self._engine.toggle_dice_selection(die_id)
        return self._respond(message=f"{die_id} {'selected' if selected else 'deselected'}")

    def reroll_selected(self) -> ControllerResponse:
        if self._engine.get_selected_dice_count() == 0:
            return self._respond(ok=False, message=MSG_NOTHING_TO_REROLL)
        return self._respond(
            message=MSG_REROLLED, snapshot=self._engine.reroll_selected_dice()
        )

    def remove_selected(self) -> ControllerResponse:
        if self._engine.get_selected_dice_count() == 0:
            return self._respond(ok=False, message=MSG_NOTHING_TO_REMOVE)
        return self._respond(
            message=MSG_REMOVED, snapshot=self._engine.remove_selected_dice()
        )
