"""Ability values and the immutable ability snapshot.

The snapshot is the one consistent view of a character's abilities that the
caller gathers before resolution. Conditions are evaluated against its
current values; the engine never re-fetches or mutates it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lifequest.models.enums import CoreStat


class AbilityValue(BaseModel):
    """A single named ability.

    Attributes:
        base_value: Permanent value, changed only on level-up.
        current_value: Base plus all standing modifiers.
        core_stat: Core stat category the ability belongs to.
        initial_value: Value at character creation, used for core stat deltas.
        times_used_this_level: Usage counter maintained by the caller.
        total_times_used: Lifetime usage counter maintained by the caller.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_value: int
    current_value: int
    core_stat: CoreStat
    initial_value: int | None = None
    times_used_this_level: int = Field(default=0, ge=0)
    total_times_used: int = Field(default=0, ge=0)

    @property
    def delta_from_initial(self) -> int:
        """Difference between current and initial value (0 if unknown)."""
        if self.initial_value is None:
            return 0
        return self.current_value - self.initial_value


class AbilitySnapshot(BaseModel):
    """Immutable mapping of ability name to value.

    Name lookups through ``find`` are case-insensitive, which is what the
    condition evaluator needs. Effect targets are matched by exact name.

    Example:
        >>> snapshot = AbilitySnapshot.from_values(
        ...     {"creation": (3, 3, "mind"), "drive": (1, 1, "soul")}
        ... )
        >>> snapshot.find("DRIVE").current_value
        1
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    abilities: dict[str, AbilityValue] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_unique_names(self) -> "AbilitySnapshot":
        """Ensure names stay unique when compared case-insensitively."""
        lowered = [name.lower() for name in self.abilities]
        if len(lowered) != len(set(lowered)):
            msg = "Ability names must be unique (case-insensitive)"
            raise ValueError(msg)
        return self

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> AbilitySnapshot:
        """Build a snapshot from storage rows.

        Args:
            records: Rows carrying ``ability_name``, ``base_value``,
                ``current_value`` and ``core_stat``.

        Returns:
            A new snapshot.
        """
        abilities: dict[str, AbilityValue] = {}
        for record in records:
            data = dict(record)
            name = data.pop("ability_name")
            fields = {k: v for k, v in data.items() if k in AbilityValue.model_fields}
            abilities[name] = AbilityValue(**fields)
        return cls(abilities=abilities)

    @classmethod
    def from_values(
        cls, values: Mapping[str, tuple[int, int, str | CoreStat]]
    ) -> AbilitySnapshot:
        """Build a snapshot from ``name -> (base, current, core_stat)`` tuples."""
        return cls(
            abilities={
                name: AbilityValue(
                    base_value=base, current_value=current, core_stat=CoreStat(core)
                )
                for name, (base, current, core) in values.items()
            }
        )

    def names(self) -> Iterator[str]:
        """Iterate over ability names in insertion order."""
        return iter(self.abilities)

    def __len__(self) -> int:
        return len(self.abilities)

    def __contains__(self, name: object) -> bool:
        return name in self.abilities

    def get(self, name: str) -> AbilityValue | None:
        """Exact-name lookup."""
        return self.abilities.get(name)

    def find(self, name: str) -> AbilityValue | None:
        """Case-insensitive lookup.

        Args:
            name: Ability name in any case.

        Returns:
            The ability value, or None if no ability matches.
        """
        exact = self.abilities.get(name)
        if exact is not None:
            return exact
        lowered = name.lower()
        for ability_name, value in self.abilities.items():
            if ability_name.lower() == lowered:
                return value
        return None

    def core_stat_of(self, name: str) -> CoreStat | None:
        """Get the core stat an ability belongs to, or None if unknown."""
        ability = self.abilities.get(name)
        return ability.core_stat if ability else None

    def names_in(self, core_stats: Iterable[CoreStat]) -> list[str]:
        """List ability names that belong to any of the given core stats."""
        wanted = set(core_stats)
        return [name for name, value in self.abilities.items() if value.core_stat in wanted]

    def base_view(self) -> AbilitySnapshot:
        """Get a snapshot whose current values are reset to base values."""
        return AbilitySnapshot(
            abilities={
                name: value.model_copy(update={"current_value": value.base_value})
                for name, value in self.abilities.items()
            }
        )

    def with_current_values(self, current: Mapping[str, int]) -> AbilitySnapshot:
        """Get a copy with the given current values replaced."""
        return AbilitySnapshot(
            abilities={
                name: (
                    value.model_copy(update={"current_value": current[name]})
                    if name in current
                    else value
                )
                for name, value in self.abilities.items()
            }
        )


__all__ = [
    "AbilityValue",
    "AbilitySnapshot",
]
