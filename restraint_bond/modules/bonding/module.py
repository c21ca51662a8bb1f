"""BondingModule — GameModule 인터페이스

코어(유대 엔진, shadow store, 이름 변경, 제거 거부)를
호스트 확장 지점에 연결하는 조립 계층.

담당:
- post_apply / inventory_add 알림 → 새 장착 표시 + repair
- advance_level 감싸기 → 새 층이면 유대 패스
- lock / lock_click 감싸기 → 새 자물쇠 표시, 셀프 잠금 메시지
- struggle / remove_magic_lock_click 감싸기 → 제거 거부
- item_name / item_name_string 감싸기 → true_name 우선
- 이름 변경 인벤토리 액션 + 입력창

의존성: [] (단독 모듈)
"""

import logging
from typing import Any, List, Optional

from restraint_bond.core.bonding.config import BondConfig
from restraint_bond.core.bonding.engine import BondingEngine, BondResult
from restraint_bond.core.bonding.flavor import select_self_lock_key
from restraint_bond.core.errors import ConsistencyFault
from restraint_bond.core.event_bus import EventBus, GameEvent
from restraint_bond.core.event_types import EventTypes
from restraint_bond.core.floor import FloorTransitionDetector
from restraint_bond.core.hooks import HookPoints, HookRegistry, Operation
from restraint_bond.core.host import (
    COLOR_PINK,
    NOTIFY_PRIORITY,
    ApplyEventData,
    HostAdapter,
    InventoryClick,
    LevelAdvance,
    LockRequest,
    NameRequest,
    SelectedItem,
    StruggleRequest,
)
from restraint_bond.core.item.models import Wearable
from restraint_bond.core.naming import (
    RENAME_FIELD_ID,
    RenameOverlay,
    RenameSession,
    can_rename,
    resolve_display_name,
    resolve_name_string,
)
from restraint_bond.core.removal import RemovalGate
from restraint_bond.core.shadow import commit, repair
from restraint_bond.core.text import TextCatalog, TextKeys
from restraint_bond.modules.base import GameContext, GameModule, InventoryAction

logger = logging.getLogger(__name__)

MODULE_NAME = "bonding"
RENAME_ACTION_ID = "BWBRename"
RENAME_ICON_CONFIRM = "InventoryAction/Use"
SELF_LOCK_DURATION = 2


def _mark_new(item: Wearable) -> None:
    item.bond.is_new_restraint = True


def _mark_new_lock(item: Wearable) -> None:
    item.bond.has_new_lock = True


class BondingModule(GameModule):
    """유대 시스템 모듈"""

    def __init__(
        self,
        host: HostAdapter,
        hooks: HookRegistry,
        event_bus: EventBus,
        config: BondConfig,
        texts: TextCatalog,
    ) -> None:
        super().__init__()
        self._host = host
        self._hooks = hooks
        self._bus = event_bus
        self._config = config
        self._texts = texts

        self._engine = BondingEngine(host, config, texts, on_settled=self._on_settled)
        self._detector = FloorTransitionDetector(host, self._on_floor_gained)
        self._gate = RemovalGate(host, config, texts, on_refused=self._on_refused)
        self._rename = RenameSession()
        self.last_results: list[BondResult] = []

        self._wrappers = [
            (HookPoints.ADVANCE_LEVEL, self._advance_level_hook),
            (HookPoints.LOCK, self._lock_hook),
            (HookPoints.LOCK_CLICK, self._lock_click_hook),
            (HookPoints.STRUGGLE, self._gate.guard_struggle),
            (HookPoints.REMOVE_MAGIC_LOCK_CLICK, self._gate.guard_magic_unlock),
            (HookPoints.ITEM_NAME, self._item_name_hook),
            (HookPoints.ITEM_NAME_STRING, self._item_name_string_hook),
            (HookPoints.RESTRAINT_ACTIONS, self._restraint_actions_hook),
            (HookPoints.LOOSE_RESTRAINT_ACTIONS, self._loose_restraint_actions_hook),
            (HookPoints.DRAW_INVENTORY_SELECTED, self._draw_selected_hook),
        ]
        self._listeners = [
            (HookPoints.POST_APPLY, self._on_post_apply),
            (HookPoints.INVENTORY_ADD, self._on_inventory_add),
        ]
        self._rename_action = InventoryAction(
            action_id=RENAME_ACTION_ID,
            module_name=MODULE_NAME,
            text=self._rename_text,
            icon=self._rename_icon,
            valid=lambda item: True,
            show=lambda item: True,
            click=self._rename_click,
        )

    @property
    def name(self) -> str:
        return MODULE_NAME

    @property
    def dependencies(self) -> List[str]:
        return []

    @property
    def rename_session(self) -> RenameSession:
        return self._rename

    def on_enable(self) -> None:
        for point, wrapper in self._wrappers:
            self._hooks.wrap(point, wrapper)
        for point, listener in self._listeners:
            self._hooks.listen(point, listener)
        self._host.register_inventory_action(self._rename_action)

    def on_disable(self) -> None:
        for point, wrapper in self._wrappers:
            self._hooks.unwrap(point, wrapper)
        for point, listener in self._listeners:
            self._hooks.unlisten(point, listener)
        self._host.unregister_inventory_action(RENAME_ACTION_ID)
        self._rename.cancel()

    def on_frame(self, context: GameContext) -> None:
        """인벤토리 화면을 벗어나면 이름 변경 취소."""
        if self._rename.on_frame(context.draw_state):
            logger.debug("Rename cancelled (screen=%s)", context.draw_state)

    def get_inventory_actions(self) -> List[InventoryAction]:
        return [self._rename_action]

    def _lookup(self, item: Wearable):
        return self._host.get_variant_template(item)

    def _emit(self, event_type: str, **data: Any) -> None:
        self._bus.emit(GameEvent(event_type=event_type, data=data, source=MODULE_NAME))

    # === Event capture ===

    def _on_post_apply(self, data: ApplyEventData) -> None:
        item = data.item
        repair(item, self._lookup)

        # 위 아이템을 벗겨 아래 아이템이 드러난 것뿐, 새 장착 아님
        if data.unlink:
            return
        if not item.inventory_variant:
            return

        commit(item, _mark_new, self._lookup)
        self._emit(EventTypes.RESTRAINT_MARKED_NEW, variant_id=item.inventory_variant)

    def _on_inventory_add(self, item: Wearable) -> None:
        repair(item, self._lookup)

    # === Floor transition ===

    def _advance_level_hook(self, call_next: Operation, params: LevelAdvance):
        result = call_next(params)
        try:
            self._detector.after_advance()
        except ConsistencyFault:
            logger.exception("Bonding pass aborted (floor=%d)", params.target_floor)
        return result

    def _on_floor_gained(self, floor: int) -> None:
        self.last_results = self._engine.run()
        self._emit(EventTypes.FLOOR_GAINED, floor=floor)
        for result in self.last_results:
            self._emit(
                EventTypes.BOND_LEVEL_UP,
                variant_id=result.variant_id,
                bond_level=result.bond_level,
            )

    def _on_settled(self, item: Wearable) -> None:
        self._emit(EventTypes.RESTRAINT_SETTLED, variant_id=item.inventory_variant)

    # === Lock tracking ===

    def _lock_hook(self, call_next: Operation, request: LockRequest):
        item = request.item
        repair(item, self._lookup)
        # 빈 자물쇠 = 해제, 기존 자물쇠 교체 = 업그레이드. 둘 다 새 잠금 아님.
        if item.inventory_variant and not item.lock and request.lock_type:
            commit(item, _mark_new_lock, self._lookup)
            self._emit(EventTypes.LOCK_APPLIED, variant_id=item.inventory_variant)
        return call_next(request)

    def _lock_click_hook(self, call_next: Operation, click: InventoryClick):
        result = call_next(click)
        repair(click.item, self._lookup)
        text_key = select_self_lock_key(click.item.bond.bond_level, self._config)
        if text_key is not None:
            self._host.send_notification(
                NOTIFY_PRIORITY,
                self._texts.get(
                    text_key, RestraintName=self._host.display_name(click.item)
                ),
                COLOR_PINK,
                SELF_LOCK_DURATION,
            )
        return result

    # === Removal gate ===

    def _on_refused(self, item: Wearable, text_key: str) -> None:
        self._emit(
            EventTypes.REMOVAL_REFUSED,
            variant_id=item.inventory_variant,
            reason=text_key,
        )

    # === Naming ===

    def _item_name_hook(self, call_next: Operation, request: NameRequest) -> str:
        template = self._lookup(request.item)
        return resolve_display_name(request.item, template, lambda: call_next(request))

    def _item_name_string_hook(self, call_next: Operation, name: str) -> str:
        template = self._host.get_variant_template_by_name(name)
        return resolve_name_string(template, lambda: call_next(name))

    def _restraint_actions_hook(self, call_next: Operation, item: Wearable) -> list[str]:
        actions = list(call_next(item))
        repair(item, self._lookup)
        if can_rename(item, self._config):
            actions.append(RENAME_ACTION_ID)
        return actions

    def _loose_restraint_actions_hook(
        self, call_next: Operation, item: Wearable
    ) -> list[str]:
        # 인벤토리 구속구는 출처마다 필드가 제각각. 템플릿이 있어야 대상
        actions = list(call_next(item))
        if not repair(item, self._lookup):
            return actions
        level = item.bond.bond_level
        if self._config.always_allow_renaming or (
            level is not None and level >= self._config.level_give_name
        ):
            actions.append(RENAME_ACTION_ID)
        return actions

    def _draw_selected_hook(self, call_next: Operation, selected: SelectedItem):
        drawn = call_next(selected)
        if drawn and self._rename.editing:
            overlay = self.rename_overlay(selected.item)
            if overlay is not None:
                selected.overlays.append(overlay)
        return drawn

    def rename_overlay(self, item: Wearable) -> Optional[RenameOverlay]:
        """편집 중인 아이템이 선택돼 있을 때만 입력창. 다른 아이템이면 취소."""
        if not self._rename.on_select(item):
            return None
        return RenameOverlay(
            field_id=RENAME_FIELD_ID,
            initial_value=self._host.display_name(item),
        )

    def begin_rename(self, item: Wearable) -> bool:
        repair(item, self._lookup)
        return self._rename.begin(item, self._config, self._host.display_name(item))

    def type_rename(self, chars: str) -> None:
        self._rename.input(chars)

    def set_rename_text(self, text: str) -> None:
        self._rename.set_draft(text)

    def cancel_rename(self) -> None:
        self._rename.cancel()

    def commit_rename(self, item: Wearable) -> Optional[str]:
        """Raises: ConsistencyFault (세션은 이미 IDLE로 초기화됨)"""
        repair(item, self._lookup)
        new_name = self._rename.commit(item, self._lookup)
        self._emit(
            EventTypes.ITEM_RENAMED,
            variant_id=item.inventory_variant,
            true_name=new_name or "",
        )
        return new_name

    def _rename_text(self, item: Wearable) -> str:
        return self._texts.get(TextKeys.INVENTORY_ACTION_RENAME)

    def _rename_icon(self, item: Wearable) -> str:
        if self._rename.editing:
            return RENAME_ICON_CONFIRM
        return f"Data/BWB_Rename{self._texts.language}"

    def _rename_click(self, item: Wearable) -> None:
        if not self._rename.editing:
            self.begin_rename(item)
            return
        try:
            self.commit_rename(item)
        except ConsistencyFault:
            logger.exception("Rename aborted")
