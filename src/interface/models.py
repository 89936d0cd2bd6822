"""
Dice Pool - Boundary Models

Pydantic models describing what collaborators receive from the engine.
Field aliases follow the camelCase snapshot schema consumed by renderers.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.engine.base import Die, PoolState, Snapshot, TypeResult


class DieModel(BaseModel):
    """One die as seen by a renderer."""

    id: str
    value: int = Field(ge=1)
    selected: bool = False
    removed: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_die(cls, die: Die) -> "DieModel":
        return cls(id=die.id, value=die.value, selected=die.selected, removed=die.removed)


class TypeResultModel(BaseModel):
    """Rolls and totals for one dice type."""

    rolls: list[DieModel] = Field(default_factory=list)
    total: int = 0
    count: int = 0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_result(cls, result: TypeResult) -> "TypeResultModel":
        return cls(
            rolls=[DieModel.from_die(die) for die in result.rolls],
            total=result.total,
            count=result.count,
        )


class SnapshotModel(BaseModel):
    """Mirrors an engine Snapshot, keyed by dice label."""

    by_type: dict[str, TypeResultModel] = Field(default_factory=dict, alias="byType")
    grand_total: int = Field(default=0, alias="grandTotal")
    timestamp: int

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "SnapshotModel":
        return cls(
            by_type={
                result.dice_type.label: TypeResultModel.from_result(result)
                for result in snapshot.results
            },
            grand_total=snapshot.grand_total,
            timestamp=snapshot.timestamp,
        )


class PoolModel(BaseModel):
    """Loaded dice counts per label."""

    counts: dict[str, int] = Field(default_factory=dict)
    total: int = 0
    selected: int = 0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_state(cls, state: PoolState) -> "PoolModel":
        return cls(
            counts={t.label: count for t, count in state.counts.items()},
            total=state.total_dice_count,
            selected=state.selected_count,
        )


class ControllerResponse(BaseModel):
    """Outcome of a controller command."""

    ok: bool = True
    message: str | None = None
    snapshot: SnapshotModel | None = None
    pool: PoolModel
    selected_count: int = Field(default=0, alias="selectedCount")

    model_config = ConfigDict(populate_by_name=True)
