"""
Dice Pool - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from src.config.settings import Settings
from src.engine.base import DiceType
from src.engine.dice_pool import DicePoolEngine
from src.engine.random_source import ScriptedRandomSource, SystemRandomSource


FIXED_TIMESTAMP = 1_700_000_000_000


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def fixed_clock():
    """Clock returning a constant millisecond timestamp."""
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def make_engine(fixed_clock):
    """
    Factory for engines driven by a scripted random source.

    Usage:
        engine = make_engine([3, 5, 17])
    """
    def _make(values=()):
        return DicePoolEngine(rng=ScriptedRandomSource(values), clock=fixed_clock)
    return _make


@pytest.fixture
def seeded_engine(fixed_clock):
    """Engine with a seeded system random source, for property-style tests."""
    return DicePoolEngine(rng=SystemRandomSource(seed=1234), clock=fixed_clock)


@pytest.fixture
def settings():
    """Settings that ignore the environment and any .env file."""
    return Settings(_env_file=None, max_dice_per_type=10, random_seed=42)


# =============================================================================
# DICE TYPE TEST DATA
# =============================================================================

@pytest.fixture
def expected_sides() -> dict[DiceType, int]:
    """Side count for every supported dice type."""
    return {
        DiceType.D2: 2,
        DiceType.D4: 4,
        DiceType.D6: 6,
        DiceType.D8: 8,
        DiceType.D10: 10,
        DiceType.D12: 12,
        DiceType.D20: 20,
        DiceType.D100: 100,
    }
