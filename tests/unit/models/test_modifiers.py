"""Tests for stat modifiers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tactics_core.models import StatModifier, StatType


def make_modifier(duration: int) -> StatModifier:
    return StatModifier(
        id="haste-1",
        stat=StatType.SPEED,
        value=3,
        duration=duration,
        source="haste",
        source_name="Haste",
    )


class TestStatModifier:
    """Tests for StatModifier."""

    def test_default_is_permanent(self) -> None:
        """Duration defaults to -1."""
        modifier = StatModifier(id="m", stat=StatType.SPEED, value=1)
        assert modifier.duration == -1
        assert modifier.is_permanent

    def test_duration_below_permanent_rejected(self) -> None:
        """Durations below -1 are invalid."""
        with pytest.raises(ValidationError):
            make_modifier(-2)

    def test_tick_counts_down(self) -> None:
        """A two-turn modifier expires on the second tick."""
        modifier = make_modifier(2)

        assert modifier.tick() is False
        assert modifier.duration == 1
        assert modifier.tick() is True
        assert modifier.duration == 0

    def test_permanent_never_ticks(self) -> None:
        """Permanent modifiers never decay."""
        modifier = make_modifier(-1)
        for _ in range(5):
            assert modifier.tick() is False
        assert modifier.duration == -1

    def test_expired_does_not_tick_again(self) -> None:
        """A modifier at zero stays at zero."""
        modifier = make_modifier(1)
        modifier.tick()
        assert modifier.tick() is False
        assert modifier.duration == 0
        assert modifier.is_expired

    def test_camel_case_round_trip(self) -> None:
        """Modifiers dump and load with camelCase keys."""
        modifier = make_modifier(3)
        dumped = modifier.model_dump(mode="json", by_alias=True)

        assert dumped["sourceName"] == "Haste"
        assert dumped["stat"] == "speed"
        assert StatModifier.model_validate(dumped) == modifier
