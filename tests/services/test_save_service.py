"""SaveService 테스트 — 인메모리 SQLite 세이브/로드"""

import pytest

from restraint_bond.core.hooks import HookRegistry
from restraint_bond.core.item.registry import VariantRegistry
from restraint_bond.db.models import SaveStateModel, VariantTemplateModel
from restraint_bond.main import DATA_DIR
from restraint_bond.services.dungeon_host import DungeonHost
from restraint_bond.services.save_service import SaveService

CUFFS = "LeatherCuffs_Evasion01"


@pytest.fixture()
def save_service(db_session, manager, host, bonding) -> SaveService:
    return SaveService(db=db_session, event_bus=manager.event_bus, host=host)


def _fresh_host(restraints, variants_path) -> DungeonHost:
    variants = VariantRegistry()
    variants.load_from_json(variants_path)
    return DungeonHost(restraints, variants, hooks=HookRegistry())


class TestSave:
    def test_save_all(self, save_service, db_session, host):
        assert save_service.save_all() == 6
        assert db_session.query(VariantTemplateModel).count() == 6
        state = db_session.get(SaveStateModel, "default")
        assert state.current_floor == host.current_floor

    def test_bond_fields_persisted(self, save_service, db_session, host):
        item = host.add_restraint(CUFFS)
        host.advance_level()
        host.advance_level()
        host.lock(item, "Red")
        save_service.save_all()

        row = db_session.get(VariantTemplateModel, CUFFS)
        assert row.bond_level == 1
        assert row.has_new_lock is True
        assert row.events[0]["base_power"] == pytest.approx(0.1)
        assert row.events[0]["power"] == pytest.approx(0.107)
        assert row.events[1]["base_power"] is None

    def test_update_existing_row(self, save_service, db_session, host):
        host.add_restraint(CUFFS)
        save_service.save_all()
        host.advance_level()
        host.advance_level()
        save_service.save_all()
        assert db_session.get(VariantTemplateModel, CUFFS).bond_level == 1


class TestDirtyTracking:
    def test_events_mark_dirty(self, save_service, host):
        assert save_service.dirty_variants == set()
        host.add_restraint(CUFFS)
        assert save_service.dirty_variants == {CUFFS}

    def test_flush_saves_only_dirty(self, save_service, db_session, host):
        host.add_restraint(CUFFS)
        assert save_service.flush() == 1
        assert db_session.query(VariantTemplateModel).count() == 1
        assert save_service.dirty_variants == set()

    def test_settled_marks_cleared_on_flush(self, save_service, db_session, host):
        item = host.add_restraint(CUFFS)
        host.lock(item, "Red")
        save_service.save_all()
        row = db_session.get(VariantTemplateModel, CUFFS)
        assert row.is_new_restraint is True
        assert row.has_new_lock is True

        host.advance_level()
        assert save_service.dirty_variants == {CUFFS}
        assert save_service.flush() == 1

        db_session.refresh(row)
        assert row.is_new_restraint is False
        assert row.has_new_lock is False

    def test_rename_marks_dirty(self, save_service, bonding, host):
        item = host.add_restraint(CUFFS)
        for _ in range(4):
            host.advance_level()
        save_service.flush()

        bonding.begin_rename(item)
        bonding.set_rename_text("Spot")
        bonding.commit_rename(item)
        assert save_service.dirty_variants == {CUFFS}


class TestLoad:
    def test_round_trip(
        self, save_service, manager, bonding, host, restraints, db_session
    ):
        item = host.add_restraint(CUFFS)
        for _ in range(4):
            host.advance_level()
        bonding.begin_rename(item)
        bonding.set_rename_text("Spot")
        bonding.commit_rename(item)
        save_service.save_all()

        other = _fresh_host(restraints, DATA_DIR / "variants.json")
        loader = SaveService(db=db_session, event_bus=manager.event_bus, host=other)
        assert loader.load() == 6

        template = other.variants.get(CUFFS)
        assert template.bond.bond_level == 3
        assert template.bond.true_name == "Spot"
        assert template.events[0].base_power == pytest.approx(0.1)
        assert template.events[0].power == pytest.approx(0.1 * 1.07**3)
        assert other.current_floor == 5
        assert other.highest_floor == 5

    def test_load_empty(self, save_service):
        assert save_service.load() == 0
