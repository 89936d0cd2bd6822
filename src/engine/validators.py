"""
Dice Pool - Input Validation Utilities

Validation for input arriving from outside the engine (UI payloads, saved
configurations). The engine itself never validates upper bounds; callers run
these first. All validators either return validated data or raise
descriptive ValueError exceptions.
"""

from typing import Any, Mapping

from src.engine.base import DiceType

DEFAULT_MAX_DICE_PER_TYPE = 100


def parse_dice_type(label: Any) -> DiceType:
    """
    Convert an external label into a DiceType.

    Args:
        label: Label such as "d6"

    Returns:
        The matching DiceType

    Raises:
        ValueError: If the label is not a known dice type
    """
    dice_type = DiceType.from_label(label)
    if dice_type is None:
        valid = ", ".join(t.label for t in DiceType)
        raise ValueError(f"Invalid dice type: {label!r}. Must be one of {valid}.")
    return dice_type


def validate_dice_count(
    count: int,
    max_count: int | None = DEFAULT_MAX_DICE_PER_TYPE,
) -> int:
    """
    Validate a number of dice for one type.

    Args:
        count: Number of dice
        max_count: Maximum allowed (None = no limit)

    Returns:
        Validated count

    Raises:
        ValueError: If count is not a non-negative integer within the limit
    """
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"Dice count must be an integer, got {type(count).__name__}.")

    if count < 0:
        raise ValueError(f"Dice count cannot be negative, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"Too many dice: maximum {max_count} per type, got {count}.")

    return count


def validate_pool_config(
    config: Mapping[str, Any],
    max_per_type: int | None = DEFAULT_MAX_DICE_PER_TYPE,
) -> dict[DiceType, int]:
    """
    Validate a pool configuration.

    Accepts ``{"d6": {"count": 2}}`` or the shorthand ``{"d6": 2}``.
    Every problem is collected before raising.

    Args:
        config: Mapping of dice label to count data
        max_per_type: Maximum dice allowed per type (None = no limit)

    Returns:
        Validated counts keyed by DiceType, in declaration order

    Raises:
        ValueError: Listing every invalid entry
    """
    if not isinstance(config, Mapping):
        raise ValueError("Invalid configuration object.")

    errors: list[str] = []
    counts: dict[DiceType, int] = {}

    for label, dice_data in config.items():
        dice_type = DiceType.from_label(label)
        if dice_type is None:
            errors.append(f"Invalid dice type: {label}")

        if isinstance(dice_data, Mapping):
            raw_count = dice_data.get("count")
        elif isinstance(dice_data, int) and not isinstance(dice_data, bool):
            raw_count = dice_data
        else:
            errors.append(f"Invalid data for {label}")
            continue

        try:
            count = validate_dice_count(raw_count, max_per_type)
        except ValueError as exc:
            errors.append(f"{label}: {exc}")
            continue

        if dice_type is not None:
            counts[dice_type] = count

    if errors:
        raise ValueError("; ".join(errors))

    return {t: counts[t] for t in DiceType if t in counts}
