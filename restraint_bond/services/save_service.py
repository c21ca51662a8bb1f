"""세이브 Service — 레퍼런스 호스트의 세이브/로드 (SQLAlchemy)

모드 필드는 variant 템플릿에 붙어 있으므로 템플릿을 저장하면 함께 저장된다.
EventBus로 유대 변화를 구독해 바뀐 variant만 dirty로 표시하고 flush()에서 저장.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from restraint_bond.core.event_bus import EventBus, GameEvent
from restraint_bond.core.event_types import EventTypes
from restraint_bond.core.item.models import BondData, VariantTemplate
from restraint_bond.core.item.registry import (
    VariantRegistry,
    effect_from_dict,
    effect_to_dict,
)
from restraint_bond.core.logging import get_logger
from restraint_bond.db.models import SaveStateModel, VariantTemplateModel
from restraint_bond.services.dungeon_host import DungeonHost

logger = get_logger(__name__)

DEFAULT_SLOT = "default"

_DIRTY_EVENTS = (
    EventTypes.RESTRAINT_MARKED_NEW,
    EventTypes.RESTRAINT_SETTLED,
    EventTypes.BOND_LEVEL_UP,
    EventTypes.LOCK_APPLIED,
    EventTypes.ITEM_RENAMED,
)


class SaveService:
    """variant 템플릿 + 층 카운터 저장/로드"""

    def __init__(
        self,
        db: Session,
        event_bus: EventBus,
        host: DungeonHost,
        slot: str = DEFAULT_SLOT,
    ):
        self._db = db
        self._bus = event_bus
        self._host = host
        self._slot = slot
        self._dirty: set[str] = set()
        self._register_event_handlers()

    def _register_event_handlers(self) -> None:
        """EventBus 구독"""
        for event_type in _DIRTY_EVENTS:
            self._bus.subscribe(event_type, self._on_variant_changed)

    def _on_variant_changed(self, event: GameEvent) -> None:
        variant_id = event.data.get("variant_id")
        if variant_id:
            self._dirty.add(variant_id)

    @property
    def dirty_variants(self) -> set[str]:
        return set(self._dirty)

    # === 저장 ===

    def save_all(self) -> int:
        """모든 템플릿 + 층 카운터 저장. 반환: 저장한 템플릿 수."""
        templates = self._host.variants.get_all()
        for template in templates:
            self._upsert_template(template)
        self._upsert_state()
        self._db.commit()
        self._dirty.clear()
        logger.info("Saved %d variant templates (slot=%s)", len(templates), self._slot)
        return len(templates)

    def flush(self) -> int:
        """dirty variant만 저장. 반환: 저장한 템플릿 수."""
        count = 0
        for variant_id in sorted(self._dirty):
            template = self._host.variants.get(variant_id)
            if template is None:
                logger.warning("Dirty variant vanished: %s", variant_id)
                continue
            self._upsert_template(template)
            count += 1
        self._upsert_state()
        self._db.commit()
        self._dirty.clear()
        logger.debug("Flushed %d dirty variants", count)
        return count

    def _upsert_template(self, template: VariantTemplate) -> None:
        orm = self._db.get(VariantTemplateModel, template.variant_id)
        if orm is None:
            self._db.add(self._template_to_orm(template))
            return
        fresh = self._template_to_orm(template)
        orm.template = fresh.template
        orm.display_name = fresh.display_name
        orm.events = fresh.events
        orm.is_new_restraint = fresh.is_new_restraint
        orm.bond_level = fresh.bond_level
        orm.lock_level = fresh.lock_level
        orm.has_new_lock = fresh.has_new_lock
        orm.true_name = fresh.true_name
        orm.updated_at = datetime.utcnow()

    def _upsert_state(self) -> None:
        state = self._db.get(SaveStateModel, self._slot)
        if state is None:
            state = SaveStateModel(slot=self._slot)
            self._db.add(state)
        state.current_floor = self._host.current_floor
        state.highest_floor = self._host.highest_floor
        state.updated_at = datetime.utcnow()

    # === 로드 ===

    def load(self) -> int:
        """DB → 호스트. 템플릿은 덮어쓰기 등록. 반환: 로드한 템플릿 수."""
        rows = self._db.query(VariantTemplateModel).all()
        registry: VariantRegistry = self._host.variants
        for row in rows:
            registry.register(self._orm_to_template(row))

        state = self._db.get(SaveStateModel, self._slot)
        if state is not None:
            self._host.restore_floors(state.current_floor, state.highest_floor)

        logger.info("Loaded %d variant templates (slot=%s)", len(rows), self._slot)
        return len(rows)

    # === 변환 ===

    def _template_to_orm(self, core: VariantTemplate) -> VariantTemplateModel:
        """Core → ORM"""
        return VariantTemplateModel(
            variant_id=core.variant_id,
            template=core.template,
            display_name=core.display_name,
            events=[effect_to_dict(e) for e in core.events],
            is_new_restraint=core.bond.is_new_restraint,
            bond_level=core.bond.bond_level,
            lock_level=core.bond.lock_level,
            has_new_lock=core.bond.has_new_lock,
            true_name=core.bond.true_name,
        )

    def _orm_to_template(self, orm: VariantTemplateModel) -> VariantTemplate:
        """ORM → Core"""
        return VariantTemplate(
            variant_id=orm.variant_id,
            template=orm.template,
            display_name=orm.display_name or "",
            events=[effect_from_dict(e) for e in orm.events or []],
            bond=BondData(
                is_new_restraint=bool(orm.is_new_restraint),
                bond_level=orm.bond_level,
                lock_level=orm.lock_level or 0,
                has_new_lock=bool(orm.has_new_lock),
                true_name=orm.true_name,
            ),
        )
