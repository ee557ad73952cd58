"""Tests for the explicit recomputation pass."""

from __future__ import annotations

from lifequest.engine.recalculation import (
    evaluate_trait_is_active,
    passive_breakdown,
    recalculate,
)
from lifequest.models import (
    AbilitySnapshot,
    BreakdownEntry,
    ItemRecord,
    TraitRecord,
    UnifiedEffectRecord,
)


def _trait(condition: str, *, is_active: bool = False, applies_to: list[str] | None = None) -> TraitRecord:
    return TraitRecord.model_validate(
        {
            "id": "t-night-owl",
            "trait_name": "NIGHT OWL",
            "trait_type": "passive",
            "is_active": is_active,
            "mechanical_effect": [
                {
                    "type": "stat_modifier",
                    "applies_to": applies_to or [],
                    "stat_modifiers": [{"stat": "research", "modifier": 1}],
                    "condition": condition,
                }
            ],
        }
    )


class TestEvaluateTraitIsActive:
    """Tests for evaluate_trait_is_active."""

    def test_any_effect_true(self, snapshot: AbilitySnapshot) -> None:
        """Test one holding condition is enough."""
        trait = TraitRecord.model_validate(
            {
                "id": "t-1",
                "trait_name": "MIXED",
                "mechanical_effect": [
                    {"type": "advantage", "condition": "drive > 5"},
                    {"type": "advantage", "condition": "drive > 0"},
                ],
            }
        )
        assert evaluate_trait_is_active(trait, snapshot) is True

    def test_all_false(self, snapshot: AbilitySnapshot) -> None:
        """Test a trait whose conditions all fail is inactive."""
        assert evaluate_trait_is_active(_trait("drive > 5"), snapshot) is False

    def test_no_effects(self, snapshot: AbilitySnapshot) -> None:
        """Test a trait without effects is inactive."""
        trait = TraitRecord(id="t-1", trait_name="EMPTY")
        assert evaluate_trait_is_active(trait, snapshot) is False


class TestPassiveBreakdown:
    """Tests for passive_breakdown."""

    def test_trait_and_item_rows(self, snapshot: AbilitySnapshot) -> None:
        """Test standing modifiers from traits and equipped items."""
        item = ItemRecord.model_validate(
            {
                "id": "i-1",
                "item_name": "Reading Glasses",
                "item_type": "comfort",
                "passive_effect": [
                    {
                        "type": "stat_modifier",
                        "applies_to": ["passive"],
                        "stat_modifiers": [{"stat": "research", "modifier": 2}],
                    }
                ],
            }
        )

        rows = passive_breakdown("research", snapshot, [_trait("always", is_active=True)], [item])

        assert rows == [
            BreakdownEntry(source="NIGHT OWL (passive)", value=1),
            BreakdownEntry(source="Reading Glasses (comfort)", value=2),
        ]

    def test_roll_only_contexts_excluded(self, snapshot: AbilitySnapshot) -> None:
        """Test modifiers restricted to roll contexts are not standing modifiers."""
        trait = _trait("always", is_active=True, applies_to=["ability_checks"])
        assert passive_breakdown("research", snapshot, [trait]) == []

    def test_unified_uses_base_values(self, make_snapshot) -> None:
        """Test unified conditions ignore boosted current values."""
        boosted = make_snapshot(drive=5)
        record = UnifiedEffectRecord.model_validate(
            {
                "id": "u-1",
                "name": "Momentum",
                "condition": "drive > 3",
                "passive_modifiers": [{"ability": "research", "value": 2}],
            }
        )

        assert passive_breakdown("research", boosted, unified_effects=[record]) == []

    def test_unified_rows(self, snapshot: AbilitySnapshot) -> None:
        """Test unified passive modifiers for the ability, skipping zero values."""
        record = UnifiedEffectRecord.model_validate(
            {
                "id": "u-1",
                "name": "Momentum",
                "passive_modifiers": [
                    {"ability": "research", "value": 2},
                    {"ability": "research", "value": 0},
                    {"ability": "creation", "value": 4},
                ],
            }
        )

        rows = passive_breakdown("research", snapshot, unified_effects=[record])

        assert rows == [BreakdownEntry(source="Momentum", value=2)]


class TestRecalculate:
    """Tests for recalculate."""

    def test_refreshes_flags_and_values(self, snapshot: AbilitySnapshot) -> None:
        """Test one pass updates trait flags and current values together."""
        trait = _trait("drive > 0", is_active=False)

        result = recalculate(snapshot, traits=[trait])

        assert result.traits[0].is_active is True
        assert result.changed_traits == ("t-night-owl",)
        assert result.abilities.abilities["research"].current_value == 3
        assert result.changed_abilities == ("research",)

    def test_resets_to_base(self, make_snapshot) -> None:
        """Test stale current values fall back to base when nothing applies."""
        stale = make_snapshot(research=9)

        result = recalculate(stale)

        assert result.abilities.abilities["research"].current_value == 2
        assert result.changed_abilities == ("research",)

    def test_inputs_untouched(self, snapshot: AbilitySnapshot) -> None:
        """Test the incoming snapshot and traits are not mutated."""
        trait = _trait("drive > 0", is_active=False)

        recalculate(snapshot, traits=[trait])

        assert trait.is_active is False
        assert snapshot.abilities["research"].current_value == 2

    def test_unequipped_items_ignored(self, snapshot: AbilitySnapshot) -> None:
        """Test only equipped items contribute."""
        item = ItemRecord.model_validate(
            {
                "id": "i-1",
                "item_name": "Spare Glasses",
                "is_equipped": False,
                "passive_effect": [
                    {"type": "stat_modifier", "stat_modifiers": [{"stat": "research", "modifier": 2}]}
                ],
            }
        )

        result = recalculate(snapshot, items=[item])

        assert result.changed_abilities == ()
