"""이름 변경 — 상태 머신과 이름 결정 순서

상태: IDLE ↔ EDITING(target_variant, draft)
- 시작: 항상 허용 옵션 또는 유대 레벨 >= level_give_name
- 확정: 선택된 아이템 variant가 시작 때와 같아야 함 (다르면 ConsistencyFault)
- 화면 전환/다른 아이템 선택 시 취소

이름 결정: 인스턴스 true_name → 템플릿 true_name → 호스트 기본 이름
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from restraint_bond.core.bonding.config import BondConfig
from restraint_bond.core.errors import ConsistencyFault
from restraint_bond.core.item.models import VariantTemplate, Wearable
from restraint_bond.core.shadow import TemplateLookup, commit

logger = logging.getLogger(__name__)

INVENTORY_DRAW_STATE = "Inventory"
RENAME_FIELD_ID = "BWB_RenameTextField"
RENAME_MAX_LENGTH = 60


class RenameState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


def can_rename(item: Wearable, config: BondConfig) -> bool:
    if config.always_allow_renaming and item.inventory_variant:
        return True
    level = item.bond.bond_level
    return level is not None and level >= config.level_give_name


def resolve_display_name(
    item: Wearable,
    template: Optional[VariantTemplate],
    fallback: Callable[[], str],
) -> str:
    if item.bond.true_name:
        return item.bond.true_name
    if template is not None and template.bond.true_name:
        return template.bond.true_name
    return fallback()


def resolve_name_string(
    template: Optional[VariantTemplate], fallback: Callable[[], str]
) -> str:
    """이름 문자열만 있을 때 (variant 이름 = 아이템 이름)."""
    if template is not None and template.bond.true_name:
        return template.bond.true_name
    return fallback()


@dataclass
class RenameOverlay:
    """EDITING 중에만 그려지는 텍스트 입력창"""

    field_id: str
    initial_value: str
    max_length: int = RENAME_MAX_LENGTH


@dataclass
class RenameSession:
    state: RenameState = RenameState.IDLE
    target_variant: Optional[str] = None
    draft: str = ""

    @property
    def editing(self) -> bool:
        return self.state == RenameState.EDITING

    def begin(self, item: Wearable, config: BondConfig, current_name: str = "") -> bool:
        """편집 시작. 자격 미달이면 False (에러 아님)."""
        if not can_rename(item, config):
            return False
        self.state = RenameState.EDITING
        self.target_variant = item.inventory_variant
        self.draft = current_name
        logger.debug("Rename started: %s", self.target_variant)
        return True

    def input(self, chars: str) -> None:
        if self.editing:
            self.draft += chars

    def set_draft(self, text: str) -> None:
        if self.editing:
            self.draft = text

    def commit(self, item: Wearable, lookup: TemplateLookup) -> Optional[str]:
        """draft를 true_name으로 확정. 빈 문자열이면 이름 해제(None).

        Raises:
            ConsistencyFault: 편집 중이 아니거나 대상 variant 불일치
        """
        if not self.editing:
            raise ConsistencyFault("Rename commit without an active session")

        if item.inventory_variant != self.target_variant:
            target = self.target_variant
            self.cancel()
            raise ConsistencyFault(
                f"Rename target mismatch: {item.inventory_variant} != {target}"
            )

        new_name = self.draft.strip() or None

        def _set_name(i: Wearable) -> None:
            i.bond.true_name = new_name

        commit(item, _set_name, lookup)
        logger.info("Renamed %s → %r", item.inventory_variant, new_name)
        self.cancel()
        return new_name

    def cancel(self) -> None:
        self.state = RenameState.IDLE
        self.target_variant = None
        self.draft = ""

    def on_frame(self, draw_state: str) -> bool:
        """인벤토리 화면을 벗어나면 취소. Returns: 취소했는지"""
        if self.editing and draw_state != INVENTORY_DRAW_STATE:
            self.cancel()
            return True
        return False

    def on_select(self, item: Wearable) -> bool:
        """다른 아이템을 선택하면 취소. Returns: 여전히 편집 중인지"""
        if not self.editing:
            return False
        if item.inventory_variant != self.target_variant:
            self.cancel()
            return False
        return True
