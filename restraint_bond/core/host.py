"""호스트 계약 — 모드가 호스트에게 기대하는 연산과 훅 파라미터

호스트 구현(렌더링, 세이브, 장착/잠금/몸부림 메커니즘)은 범위 밖.
코어는 HostAdapter와 아래 파라미터 객체만 본다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from restraint_bond.core.item.models import VariantTemplate, Wearable

if TYPE_CHECKING:
    from restraint_bond.modules.base import InventoryAction


# 알림 색상 (호스트 팔레트)
COLOR_PINK = "#FF5BA9"
COLOR_WHITE = "#FFFFFF"

NOTIFY_PRIORITY = 5


class StruggleAction(str, Enum):
    STRUGGLE = "Struggle"
    CUT = "Cut"
    REMOVE = "Remove"
    UNLOCK = "Unlock"
    PICK = "Pick"


class StruggleOutcome(str, Enum):
    SUCCESS = "Success"
    FAIL = "Fail"
    IMPOSSIBLE = "Impossible"


# ── 훅 파라미터 ──────────────────────────────────────────────


@dataclass
class ApplyEventData:
    """post-apply 알림. unlink=True면 기존 아이템이 위로 드러난 것일 뿐 새 장착 아님."""

    item: Wearable
    link: bool = False
    unlink: bool = False


@dataclass
class LevelAdvance:
    target_floor: int


@dataclass
class LockRequest:
    item: Wearable
    lock_type: Optional[str]  # None/"" = 잠금 해제


@dataclass
class StruggleRequest:
    group: str
    action: StruggleAction
    index: int = 0
    query: bool = False  # True = 가능 여부 조회만


@dataclass
class NameRequest:
    item: Wearable


@dataclass
class FrameState:
    draw_state: str  # "Game", "Inventory", ...
    current_floor: int = 0
    highest_floor: int = 0


@dataclass
class SelectedItem:
    """인벤토리에서 선택된 아이템 그리기"""

    item: Wearable
    x_offset: int = 0
    overlays: list[Any] = field(default_factory=list)  # 모드가 추가로 그릴 위젯


@dataclass
class InventoryClick:
    item: Wearable


# ── 호스트 계약 ──────────────────────────────────────────────


class HostAdapter(ABC):
    """모드가 소비하는 호스트 연산"""

    @property
    @abstractmethod
    def current_floor(self) -> int:
        """현재 층 (단조 비감소)"""
        ...

    @property
    @abstractmethod
    def highest_floor(self) -> int:
        """지금까지 도달한 최고 층"""
        ...

    @abstractmethod
    def list_worn_items(self) -> list[Wearable]:
        ...

    @abstractmethod
    def get_restraint_item(self, group: str) -> Optional[Wearable]:
        """부위에 착용 중인 아이템"""
        ...

    @abstractmethod
    def get_variant_template(self, item: Wearable) -> Optional[VariantTemplate]:
        ...

    @abstractmethod
    def get_variant_template_by_name(self, name: str) -> Optional[VariantTemplate]:
        ...

    @abstractmethod
    def is_armor(self, item: Wearable) -> bool:
        ...

    @abstractmethod
    def is_lockable(self, item: Wearable) -> bool:
        ...

    @abstractmethod
    def default_display_name(self, item: Wearable) -> str:
        """모드 개입 없는 호스트 기본 이름"""
        ...

    @abstractmethod
    def default_name_string(self, name: str) -> str:
        ...

    @abstractmethod
    def display_name(self, item: Wearable) -> str:
        """훅을 거친 최종 표시 이름"""
        ...

    @abstractmethod
    def send_notification(
        self, priority: int, text: str, color: str, duration: int
    ) -> None:
        ...

    @abstractmethod
    def register_inventory_action(self, action: InventoryAction) -> None:
        ...

    @abstractmethod
    def unregister_inventory_action(self, action_id: str) -> None:
        ...
