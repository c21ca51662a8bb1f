"""Shadow Store repair/commit 테스트"""

from restraint_bond.core.item.models import (
    BondData,
    Effect,
    VariantTemplate,
    Wearable,
)
from restraint_bond.core.shadow import clone_bond_data, commit, repair


def _template() -> VariantTemplate:
    return VariantTemplate(
        variant_id="v1",
        template="LeatherCuffs",
        events=[
            Effect("Evasion", "tick", power=0.107, base_power=0.1),
            Effect("Evasion", "icon", power=0.1),
        ],
        bond=BondData(bond_level=1, lock_level=2, true_name="Spot"),
    )


def _lookup_for(template: VariantTemplate):
    def lookup(item: Wearable):
        return template if item.inventory_variant == template.variant_id else None

    return lookup


class TestRepair:
    def test_copies_bond_and_powers(self):
        template = _template()
        item = template.instantiate()
        item.events[0].power = 0.1  # 호스트가 오래된 수치를 들고 있다고 가정

        assert repair(item, _lookup_for(template)) is True
        assert item.bond == template.bond
        assert item.events[0].base_power == 0.1
        assert item.events[0].power == 0.107

    def test_effects_without_base_power_untouched(self):
        template = _template()
        item = template.instantiate()
        item.events[1].power = 0.5
        repair(item, _lookup_for(template))
        assert item.events[1].power == 0.5
        assert item.events[1].base_power is None

    def test_no_aliasing(self):
        template = _template()
        item = template.instantiate()
        repair(item, _lookup_for(template))
        item.bond.bond_level = 99
        assert template.bond.bond_level == 1

    def test_missing_template(self):
        item = Wearable(name="LeatherCuffs", inventory_variant="unknown")
        assert repair(item, _lookup_for(_template())) is False
        assert item.bond == BondData()

    def test_destination_with_fewer_events(self):
        template = _template()
        item = Wearable(name="LeatherCuffs", inventory_variant="v1")
        repair(item, _lookup_for(template))
        assert item.bond.true_name == "Spot"
        assert item.events == []


class TestCommit:
    def test_writes_back_to_template(self):
        template = _template()
        item = template.instantiate()
        repair(item, _lookup_for(template))

        def rename(i: Wearable) -> None:
            i.bond.true_name = "Rex"

        commit(item, rename, _lookup_for(template))
        assert template.bond.true_name == "Rex"
        assert item.bond.true_name == "Rex"
        assert template.bond is not item.bond

    def test_unrepaired_instance_does_not_wipe_template(self):
        template = _template()
        fresh = template.instantiate().recreate()
        assert fresh.bond == BondData()

        def lock_fresh(i: Wearable) -> None:
            i.bond.has_new_lock = True

        commit(fresh, lock_fresh, _lookup_for(template))
        assert template.bond.bond_level == 1
        assert template.bond.lock_level == 2
        assert template.bond.true_name == "Spot"
        assert template.bond.has_new_lock is True
        assert template.events[0].power == 0.107

    def test_missing_template_keeps_instance_change(self):
        item = Wearable(name="LeatherCuffs", inventory_variant="gone")

        def mark(i: Wearable) -> None:
            i.bond.is_new_restraint = True

        result = commit(item, mark, _lookup_for(_template()))
        assert result is item
        assert item.bond.is_new_restraint is True

    def test_round_trip_through_recreate(self):
        """commit → 호스트가 객체 교체 → repair 하면 같은 필드"""
        template = _template()
        lookup = _lookup_for(template)
        item = template.instantiate()
        repair(item, lookup)

        def level_up(i: Wearable) -> None:
            i.bond.bond_level = 2
            i.events[0].power = 0.1145

        commit(item, level_up, lookup)
        fresh = item.recreate()
        assert fresh.bond == BondData()

        repair(fresh, lookup)
        assert fresh.bond == item.bond
        assert fresh.events[0].power == 0.1145
        assert fresh.events[0].base_power == 0.1


class TestCloneBondData:
    def test_clone_between_instances(self):
        src = Wearable(
            name="a",
            inventory_variant="v1",
            bond=BondData(is_new_restraint=True, has_new_lock=True),
        )
        dest = Wearable(name="a", inventory_variant="v1")
        clone_bond_data(src, dest)
        assert dest.bond.is_new_restraint is True
        assert dest.bond.has_new_lock is True
