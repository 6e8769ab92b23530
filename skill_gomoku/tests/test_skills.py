"""
Tests for the skill catalog and per-color ledger.
"""

import pytest

from ..engine_core.skills import (
    SKILLS,
    SKILL_MAP,
    USED_SENTINEL,
    EffectType,
    SkillLedger,
    catalog,
    get_skill,
)


class TestCatalog:
    """Tests for the fixed catalog contract."""

    def test_ids_in_order(self):
        assert [s.id for s in SKILLS] == [
            "flying-sand",
            "calm-water",
            "yale-ya",
            "capture",
            "rewind",
            "reset-board",
            "restore",
            "see-you-again",
        ]

    def test_cooldown_lengths(self):
        assert [s.cooldown for s in SKILLS] == [2, 4, 5, 6, 7, 15, 10, 20]

    def test_effect_parameters(self):
        assert get_skill("flying-sand").param("count") == 1
        assert get_skill("yale-ya").param("count") == 2
        assert get_skill("calm-water").param("turns") == 1
        assert get_skill("rewind").param("steps") == 1
        assert get_skill("see-you-again").effect is EffectType.REMOVE_ALL_OPPONENT

    def test_unknown_skill(self):
        assert get_skill("fireball") is None

    def test_map_is_read_only(self):
        with pytest.raises(TypeError):
            SKILL_MAP["fireball"] = SKILLS[0]

    def test_catalog_listing_shape(self):
        """Listing exposes id, name, description, cooldown, type, payload."""
        listing = catalog()

        assert len(listing) == 8
        assert listing[0] == {
            "id": "flying-sand",
            "name": "飞沙走石",
            "description": "移除敌方1颗棋子",
            "cooldown": 2,
            "type": "remove-opponent",
            "payload": {"count": 1},
        }
        assert "payload" not in listing[5]

    def test_catalog_listing_is_a_copy(self):
        listing = catalog()
        listing[0]["payload"]["count"] = 99

        assert get_skill("flying-sand").param("count") == 1


class TestSkillLedger:
    """Tests for used-skill tracking and cooldowns."""

    def test_fresh_ledger_is_ready(self):
        ledger = SkillLedger()

        assert list(ledger.cooldowns) == [s.id for s in SKILLS]
        assert all(ledger.is_available(s.id) for s in SKILLS)

    def test_mark_used_pins_sentinel(self):
        ledger = SkillLedger()
        ledger.mark_used("capture")

        assert ledger.is_used("capture")
        assert ledger.remaining("capture") == USED_SENTINEL
        assert not ledger.is_available("capture")

    def test_tick_decrements_by_one(self):
        ledger = SkillLedger()
        ledger.cooldowns["calm-water"] = 2
        ledger.cooldowns["restore"] = 1

        ledger.tick()

        assert ledger.remaining("calm-water") == 1
        assert ledger.remaining("restore") == 0

    def test_tick_never_goes_below_zero(self):
        ledger = SkillLedger()
        for _ in range(3):
            ledger.tick()

        assert all(value == 0 for value in ledger.cooldowns.values())

    def test_tick_leaves_used_skills_alone(self):
        ledger = SkillLedger()
        ledger.mark_used("rewind")
        ledger.tick()

        assert ledger.remaining("rewind") == USED_SENTINEL

    def test_cooling_skill_is_unavailable(self):
        ledger = SkillLedger()
        ledger.cooldowns["yale-ya"] = 3

        assert not ledger.is_available("yale-ya")

    def test_reset_cooldowns_keeps_used_skills_spent(self):
        """Unused skills go back to ready; used ones stay disabled."""
        ledger = SkillLedger()
        ledger.mark_used("flying-sand")
        ledger.cooldowns["calm-water"] = 4

        ledger.reset_cooldowns()

        assert ledger.remaining("flying-sand") == USED_SENTINEL
        assert ledger.remaining("calm-water") == 0
        assert ledger.is_used("flying-sand")

    def test_copy_is_independent(self):
        ledger = SkillLedger()
        clone = ledger.copy()
        clone.mark_used("capture")

        assert not ledger.is_used("capture")
        assert ledger.remaining("capture") == 0
