"""Tests for effect filtering."""

from __future__ import annotations

from lifequest.engine.filtering import context_allows, filter_effects, targets_ability
from lifequest.engine.normalizer import normalize
from lifequest.models import (
    AbilitySnapshot,
    CoreStat,
    CurrentTags,
    DayState,
    DayStateRecord,
    EffectContext,
    EffectSources,
    ItemRecord,
    TemporaryEffectRecord,
    TraitRecord,
    UnifiedEffectRecord,
)


class TestFilterEffects:
    """Tests for filter_effects."""

    def test_condition_true(self, artist_sources: EffectSources, snapshot: AbilitySnapshot) -> None:
        """Test a trait effect passes when its condition holds."""
        effects = normalize(artist_sources, snapshot)
        kept = filter_effects(effects, "creation", EffectContext.ABILITY_CHECK, snapshot)
        assert [e.id for e in kept] == ["trait-artist-0"]

    def test_condition_false(self, artist_sources: EffectSources, make_snapshot) -> None:
        """Test the per-effect condition is checked even for an active trait."""
        drained = make_snapshot(drive=0)
        effects = normalize(artist_sources, drained)
        assert filter_effects(effects, "creation", EffectContext.ABILITY_CHECK, drained) == []

    def test_other_ability(self, artist_sources: EffectSources, snapshot: AbilitySnapshot) -> None:
        """Test effects aimed at another ability are dropped."""
        effects = normalize(artist_sources, snapshot)
        assert filter_effects(effects, "research", EffectContext.ABILITY_CHECK, snapshot) == []

    def test_context_mismatch(self, library_card: ItemRecord, snapshot: AbilitySnapshot) -> None:
        """Test an effect restricted to ability checks is dropped for saving throws."""
        effects = normalize(EffectSources(items=[library_card]), snapshot)

        assert filter_effects(effects, "research", EffectContext.SAVING_THROW, snapshot) == []
        assert len(filter_effects(effects, "research", "ability_checks", snapshot)) == 1

    def test_day_state_by_core_stat(self, snapshot: AbilitySnapshot) -> None:
        """Test day-state effects target abilities through their core stat."""
        sources = EffectSources(
            day_state=DayStateRecord(state=DayState.DIFFICULT, affected_core_stats=[CoreStat.MIND])
        )
        effects = normalize(sources, snapshot)

        assert len(filter_effects(effects, "research", EffectContext.ABILITY_CHECK, snapshot)) == 1
        assert filter_effects(effects, "endurance", EffectContext.ABILITY_CHECK, snapshot) == []
        assert filter_effects(effects, "research", EffectContext.ATTACK, snapshot) == []

    def test_order_preserved(
        self,
        artist_trait: TraitRecord,
        snapshot: AbilitySnapshot,
    ) -> None:
        """Test survivors keep normalization order."""
        sources = EffectSources(
            traits=[artist_trait],
            temporary_effects=[
                TemporaryEffectRecord(
                    id="c-1",
                    effect_name="Deadline",
                    effect_type="disadvantage",
                    affected_stats=["creation"],
                )
            ],
            day_state=DayStateRecord(state=DayState.INSPIRATION, selected_core_stat=CoreStat.MIND),
            unified_effects=[
                UnifiedEffectRecord(id="u-1", name="Focus", active_modifiers=[{"type": "bonus", "value": 1}])
            ],
        )
        effects = normalize(sources, snapshot)

        kept = filter_effects(effects, "creation", EffectContext.ABILITY_CHECK, snapshot)

        assert [e.id for e in kept] == [
            "trait-artist-0",
            "c-1",
            "day-state-inspiration",
            "u-1-active-bonus-0",
        ]

    def test_unified_scoped_by_expression(self, snapshot: AbilitySnapshot) -> None:
        """Test an untargeted effect is kept only for rolls its expression matches."""
        record = UnifiedEffectRecord.model_validate(
            {
                "id": "u-library",
                "name": "Library focus",
                "context_expression": {"tag": {"category": "ability", "value": "research"}},
                "active_modifiers": [{"type": "advantage", "value": 2}],
            }
        )
        effects = normalize(EffectSources(unified_effects=[record]), snapshot)
        research = CurrentTags(roll_type="ability_check", ability="research", core_stat="mind")
        creation = CurrentTags(roll_type="ability_check", ability="creation", core_stat="mind")

        kept = filter_effects(effects, "research", EffectContext.ABILITY_CHECK, snapshot, research)
        dropped = filter_effects(effects, "creation", EffectContext.ABILITY_CHECK, snapshot, creation)

        assert [e.id for e in kept] == ["u-library-active-advantage-0"]
        assert dropped == []

    def test_unified_default_tags(self, snapshot: AbilitySnapshot) -> None:
        """Test without tags an untargeted effect is matched on the ability name alone."""
        record = UnifiedEffectRecord.model_validate(
            {
                "id": "u-library",
                "name": "Library focus",
                "context_expression": {"tag": {"category": "ability", "value": "research"}},
                "active_modifiers": [{"type": "bonus", "value": 1}],
            }
        )
        effects = normalize(EffectSources(unified_effects=[record]), snapshot)

        assert len(filter_effects(effects, "research", EffectContext.ABILITY_CHECK, snapshot)) == 1
        assert filter_effects(effects, "creation", EffectContext.ABILITY_CHECK, snapshot) == []


class TestPredicates:
    """Tests for the individual filter predicates."""

    def test_context_allows_wildcard(self, artist_sources: EffectSources, snapshot: AbilitySnapshot) -> None:
        """Test an empty applies_to allows every context."""
        (effect,) = normalize(artist_sources, snapshot)
        for context in EffectContext:
            assert context_allows(effect, context)

    def test_legacy_flag_with_no_targets(self, snapshot: AbilitySnapshot) -> None:
        """Test a legacy flag effect with an empty target list targets nothing."""
        trait = TraitRecord.model_validate(
            {"id": "t-1", "trait_name": "VAGUE", "mechanical_effect": [{"type": "advantage"}]}
        )
        (effect,) = normalize(EffectSources(traits=[trait]), snapshot)
        assert not targets_ability(effect, "creation", snapshot)

    def test_custom_targets(self, snapshot: AbilitySnapshot) -> None:
        """Test custom effects target through either list."""
        record = TemporaryEffectRecord(
            id="c-1",
            effect_name="Mentor",
            stat_modifiers=[{"stat": "empathy", "modifier": 1}],
            affected_stats=["research"],
        )
        (effect,) = normalize(EffectSources(temporary_effects=[record]), snapshot)

        assert targets_ability(effect, "research", snapshot)
        assert targets_ability(effect, "empathy", snapshot)
        assert not targets_ability(effect, "creation", snapshot)
