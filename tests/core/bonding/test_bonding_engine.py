"""BondingEngine 테스트 — 모듈 없이 호스트 + 엔진만"""

import pytest

from restraint_bond.core.bonding import engine as engine_module
from restraint_bond.core.bonding.engine import NOTIFY_DURATION, BondingEngine
from restraint_bond.core.errors import ConsistencyFault
from restraint_bond.core.host import COLOR_PINK
from restraint_bond.core.item.models import Wearable
from restraint_bond.core.text import TextKeys


@pytest.fixture()
def engine(host, config, texts) -> BondingEngine:
    return BondingEngine(host, config, texts)


class TestEligibility:
    def test_item_without_variant(self, engine):
        assert engine.process_item(Wearable(name="LeatherCuffs")) is None

    def test_new_restraint_grace_period(self, engine, host, variants):
        template = variants.get("LeatherCuffs_Evasion01")
        template.bond.is_new_restraint = True
        template.bond.has_new_lock = True
        host.add_restraint("LeatherCuffs_Evasion01")

        assert engine.run() == []
        assert template.bond.is_new_restraint is False
        assert template.bond.has_new_lock is False
        assert template.bond.bond_level is None

        results = engine.run()
        assert [r.bond_level for r in results] == [1]

    def test_settled_callback(self, host, config, texts, variants):
        settled = []
        engine = BondingEngine(host, config, texts, on_settled=settled.append)
        variants.get("SteelCuffs_Accuracy01").bond.is_new_restraint = True
        host.add_restraint("SteelCuffs_Accuracy01")

        engine.run()
        assert [i.inventory_variant for i in settled] == ["SteelCuffs_Accuracy01"]

        engine.run()
        assert len(settled) == 1

    def test_armor_excluded(self, engine, host, variants):
        host.add_restraint("MageArmor_Ward01")
        assert engine.run() == []
        assert variants.get("MageArmor_Ward01").bond.bond_level is None
        assert host.notifications == []


class TestBonding:
    def test_monotonic_levels(self, engine, host, variants):
        host.add_restraint("SteelCuffs_Accuracy01")
        levels = [engine.run()[0].bond_level for _ in range(5)]
        assert levels == [1, 2, 3, 4, 5]
        assert variants.get("SteelCuffs_Accuracy01").bond.bond_level == 5

    def test_power_written_to_template(self, engine, host, variants):
        host.add_restraint("SteelCuffs_Accuracy01")
        for _ in range(3):
            engine.run()
        template = variants.get("SteelCuffs_Accuracy01")
        assert template.events[0].base_power == 10
        assert template.events[0].power == pytest.approx(12.25043)

    def test_icon_effect_untouched(self, engine, host):
        item = host.add_restraint("LeatherCuffs_Evasion01")
        engine.run()
        assert item.events[0].power == pytest.approx(0.107)
        assert item.events[1].power == 0.1
        assert item.events[2].power == pytest.approx(0.107)

    def test_notification(self, engine, host):
        host.add_restraint("LeatherCuffs_Evasion01")
        result = engine.run()[0]

        assert result.text_key == TextKeys.POWERUP_1ST
        note = host.notifications[-1]
        assert note.text == "Your Nimble Leather Cuffs seems to have grown fond of you."
        assert note.color == COLOR_PINK
        assert note.duration == NOTIFY_DURATION

    def test_lock_urge(self, engine, host):
        host.add_restraint("LeatherCuffs_Evasion01")
        results = [engine.run()[0] for _ in range(5)]
        assert [r.lock_urged for r in results] == [False] * 4 + [True]
        assert host.notifications[-1].text == (
            "You feel a strange urge to lock your Nimble Leather Cuffs."
        )

    def test_no_lock_urge_when_not_lockable(self, engine, host):
        host.add_restraint("RopeHarness_Stamina01")
        results = [engine.run()[0] for _ in range(6)]
        assert not any(r.lock_urged for r in results)

    def test_no_lock_urge_when_locked(self, engine, host):
        item = host.add_restraint("LeatherCuffs_Evasion01")
        host.lock(item, "Red")
        results = [engine.run()[0] for _ in range(6)]
        assert not any(r.lock_urged for r in results)
        assert results[-1].lock_level == 6

    def test_bond_level_unset_is_fault(self, engine, host, monkeypatch):
        monkeypatch.setattr(engine_module, "advance_bond", lambda item, config: None)
        host.add_restraint("LeatherCuffs_Evasion01")
        with pytest.raises(ConsistencyFault):
            engine.run()
