"""DungeonHost — 메모리 내 레퍼런스 호스트

실제 게임 대신 HostAdapter 계약을 구현하고, 호스트가 여는 확장 지점을
HookRegistry로 제공한다. 호스트의 객체 교체(장착·인벤토리 이동 시 새 객체,
모드 필드 유실)를 그대로 흉내 내어 repair/commit 프로토콜을 검증한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from restraint_bond.core.hooks import HookPoints, HookRegistry
from restraint_bond.core.host import (
    ApplyEventData,
    FrameState,
    HostAdapter,
    InventoryClick,
    LevelAdvance,
    LockRequest,
    NameRequest,
    SelectedItem,
    StruggleAction,
    StruggleOutcome,
    StruggleRequest,
)
from restraint_bond.core.item.models import VariantTemplate, Wearable
from restraint_bond.core.item.registry import RestraintRegistry, VariantRegistry
from restraint_bond.core.logging import get_logger
from restraint_bond.modules.base import InventoryAction

logger = get_logger(__name__)

DRAW_STATE_GAME = "Game"
DRAW_STATE_INVENTORY = "Inventory"
DEFAULT_LOCK = "Red"


@dataclass
class Notification:
    priority: int
    text: str
    color: str
    duration: int


class DungeonHost(HostAdapter):
    """층, 착용 슬롯(부위별 겹침), 인벤토리, 알림 로그를 가진 최소 호스트"""

    def __init__(
        self,
        restraints: RestraintRegistry,
        variants: VariantRegistry,
        hooks: Optional[HookRegistry] = None,
        current_floor: int = 1,
        highest_floor: Optional[int] = None,
    ) -> None:
        self.hooks = hooks if hooks is not None else HookRegistry()
        self._restraints = restraints
        self._variants = variants
        self._floor = current_floor
        self._highest = highest_floor if highest_floor is not None else current_floor

        # 부위 → 겹쳐 입은 아이템 (마지막이 맨 위)
        self._worn: dict[str, list[Wearable]] = {}
        self._inventory: list[Wearable] = []
        self._actions: dict[str, InventoryAction] = {}

        self.notifications: list[Notification] = []
        self.draw_state = DRAW_STATE_GAME

    @property
    def variants(self) -> VariantRegistry:
        return self._variants

    @property
    def inventory(self) -> list[Wearable]:
        return list(self._inventory)

    # === HostAdapter ===

    @property
    def current_floor(self) -> int:
        return self._floor

    @property
    def highest_floor(self) -> int:
        return self._highest

    def restore_floors(self, current_floor: int, highest_floor: int) -> None:
        """세이브 로드 시 층 카운터 복원"""
        self._floor = current_floor
        self._highest = highest_floor

    def list_worn_items(self) -> list[Wearable]:
        return [item for stack in self._worn.values() for item in stack]

    def get_restraint_item(self, group: str) -> Optional[Wearable]:
        stack = self._worn.get(group)
        return stack[-1] if stack else None

    def get_variant_template(self, item: Wearable) -> Optional[VariantTemplate]:
        return self._variants.get_for(item)

    def get_variant_template_by_name(self, name: str) -> Optional[VariantTemplate]:
        return self._variants.get(name)

    def is_armor(self, item: Wearable) -> bool:
        proto = self._restraints.get(item.name)
        return bool(proto and proto.armor)

    def is_lockable(self, item: Wearable) -> bool:
        proto = self._restraints.get(item.name)
        return bool(proto and proto.lockable)

    def default_display_name(self, item: Wearable) -> str:
        template = self._variants.get_for(item)
        if template is not None and template.display_name:
            return template.display_name
        proto = self._restraints.get(item.name)
        if proto is not None and proto.display_name:
            return proto.display_name
        return item.name

    def default_name_string(self, name: str) -> str:
        template = self._variants.get(name)
        if template is not None and template.display_name:
            return template.display_name
        proto = self._restraints.get(name)
        if proto is not None and proto.display_name:
            return proto.display_name
        return name

    def display_name(self, item: Wearable) -> str:
        return self.hooks.invoke(
            HookPoints.ITEM_NAME,
            NameRequest(item),
            lambda request: self.default_display_name(request.item),
        )

    def name_string(self, name: str) -> str:
        return self.hooks.invoke(
            HookPoints.ITEM_NAME_STRING, name, self.default_name_string
        )

    def send_notification(
        self, priority: int, text: str, color: str, duration: int
    ) -> None:
        self.notifications.append(Notification(priority, text, color, duration))
        logger.debug("Notification: %s", text)

    def register_inventory_action(self, action: InventoryAction) -> None:
        if action.action_id in self._actions:
            logger.warning("Overwriting inventory action: %s", action.action_id)
        self._actions[action.action_id] = action

    def unregister_inventory_action(self, action_id: str) -> None:
        self._actions.pop(action_id, None)

    # === 장착 / 인벤토리 ===

    def add_restraint(self, variant_id: str) -> Wearable:
        """variant 장착. 같은 부위에 이미 있으면 그 위에 겹친다 (link)."""
        template = self._variants.get(variant_id)
        if template is None:
            raise ValueError(f"Unknown variant: {variant_id}")
        proto = self._restraints.get(template.template)
        if proto is None:
            raise ValueError(f"Unknown restraint: {template.template}")

        self._inventory = [
            i for i in self._inventory if i.inventory_variant != variant_id
        ]

        stack = self._worn.setdefault(proto.group, [])
        item = template.instantiate()
        stack.append(item)
        logger.info("Equipped %s on %s", variant_id, proto.group)
        self.hooks.notify(
            HookPoints.POST_APPLY, ApplyEventData(item=item, link=len(stack) > 1)
        )
        return item

    def remove_restraint(self, group: str) -> Wearable:
        """맨 위 아이템을 벗겨 인벤토리로. 아래 아이템이 드러나면 unlink 알림."""
        stack = self._worn.get(group)
        if not stack:
            raise ValueError(f"Nothing worn on {group}")

        removed = stack.pop()
        stored = self.inventory_add(removed)

        if stack:
            # 드러난 아이템도 호스트가 새 객체로 바꾼다
            revealed = self.churn(group)
            self.hooks.notify(
                HookPoints.POST_APPLY, ApplyEventData(item=revealed, unlink=True)
            )
        else:
            del self._worn[group]

        logger.info("Removed %s from %s", removed.inventory_variant, group)
        return stored

    def churn(self, group: str) -> Wearable:
        """맨 위 아이템을 새 객체로 교체 (알림 없음). 모드 필드는 기본값이 된다."""
        stack = self._worn.get(group)
        if not stack:
            raise ValueError(f"Nothing worn on {group}")
        stack[-1] = stack[-1].recreate()
        return stack[-1]

    def inventory_add(self, item: Wearable) -> Wearable:
        fresh = item.recreate()
        self._inventory.append(fresh)
        self.hooks.notify(HookPoints.INVENTORY_ADD, fresh)
        return fresh

    def worn_groups(self) -> list[str]:
        return list(self._worn.keys())

    # === 잠금 ===

    def lock(self, item: Wearable, lock_type: Optional[str]) -> None:
        self.hooks.invoke(HookPoints.LOCK, LockRequest(item, lock_type), self._lock_impl)

    def _lock_impl(self, request: LockRequest) -> None:
        request.item.lock = request.lock_type or None

    def click_lock(self, group: str, lock_type: str = DEFAULT_LOCK) -> Any:
        item = self._require_worn(group)
        return self.hooks.invoke(
            HookPoints.LOCK_CLICK,
            InventoryClick(item),
            lambda click: self.lock(click.item, lock_type),
        )

    def click_remove_magic_lock(self, group: str) -> Any:
        item = self._require_worn(group)
        return self.hooks.invoke(
            HookPoints.REMOVE_MAGIC_LOCK_CLICK,
            InventoryClick(item),
            lambda click: self.lock(click.item, None),
        )

    # === 층 진행 ===

    def advance_level(self, target_floor: Optional[int] = None) -> bool:
        """층 이동. 최고 층 기록은 훅이 모두 끝난 뒤 갱신."""
        if target_floor is None:
            target_floor = self._floor + 1
        result = self.hooks.invoke(
            HookPoints.ADVANCE_LEVEL, LevelAdvance(target_floor), self._advance_impl
        )
        self._highest = max(self._highest, self._floor)
        return result

    def _advance_impl(self, params: LevelAdvance) -> bool:
        self._floor = params.target_floor
        logger.info("Advanced to floor %d", self._floor)
        return True

    # === 몸부림 / 제거 ===

    def struggle(
        self, group: str, action: StruggleAction, query: bool = False
    ) -> StruggleOutcome:
        return self.hooks.invoke(
            HookPoints.STRUGGLE,
            StruggleRequest(group=group, action=action, query=query),
            self._struggle_impl,
        )

    def _struggle_impl(self, request: StruggleRequest) -> StruggleOutcome:
        item = self.get_restraint_item(request.group)
        if item is None:
            return StruggleOutcome.IMPOSSIBLE

        if request.action in (StruggleAction.UNLOCK, StruggleAction.PICK):
            if not item.lock:
                return StruggleOutcome.IMPOSSIBLE
            if not request.query:
                self.lock(item, None)
            return StruggleOutcome.SUCCESS

        # 잠긴 아이템은 자르기만 가능
        if item.lock and request.action != StruggleAction.CUT:
            return StruggleOutcome.FAIL
        if not request.query:
            self.remove_restraint(request.group)
        return StruggleOutcome.SUCCESS

    # === 인벤토리 UI ===

    def restraint_actions(self, item: Wearable) -> list[str]:
        return self.hooks.invoke(
            HookPoints.RESTRAINT_ACTIONS, item, self._restraint_actions_impl
        )

    def _restraint_actions_impl(self, item: Wearable) -> list[str]:
        actions = ["Struggle", "Remove"]
        if not item.lock and self.is_lockable(item):
            actions.append("Lock")
        if item.lock:
            actions.append("RemoveMagicLock")
        return actions

    def loose_restraint_actions(self, item: Wearable) -> list[str]:
        return self.hooks.invoke(
            HookPoints.LOOSE_RESTRAINT_ACTIONS, item, lambda i: ["Equip", "Drop"]
        )

    def inventory_action(self, action_id: str) -> Optional[InventoryAction]:
        return self._actions.get(action_id)

    def click_inventory_action(self, action_id: str, item: Wearable) -> bool:
        action = self._actions.get(action_id)
        if action is None:
            raise ValueError(f"Unknown inventory action: {action_id}")
        if not action.valid(item):
            return False
        action.click(item)
        return True

    def run_frame(self, draw_state: Optional[str] = None) -> bool:
        if draw_state is not None:
            self.draw_state = draw_state
        return self.hooks.invoke(
            HookPoints.RUN_FRAME,
            FrameState(self.draw_state, self._floor, self._highest),
            lambda state: True,
        )

    def draw_inventory_selected(self, item: Wearable) -> Optional[SelectedItem]:
        """인벤토리 화면에서 선택 아이템 그리기. 그려진 위젯(overlays) 포함 반환."""
        selected = SelectedItem(item)
        drawn = self.hooks.invoke(
            HookPoints.DRAW_INVENTORY_SELECTED,
            selected,
            lambda s: self.draw_state == DRAW_STATE_INVENTORY,
        )
        return selected if drawn else None

    def _require_worn(self, group: str) -> Wearable:
        item = self.get_restraint_item(group)
        if item is None:
            raise ValueError(f"Nothing worn on {group}")
        return item
