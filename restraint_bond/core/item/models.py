"""착용 아이템 도메인 모델 (호스트 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional


class EffectTrigger:
    """효과 발동 시점. 호스트 이벤트 trigger 문자열."""

    TICK = "tick"
    ICON = "icon"
    INVENTORY_TOOLTIP = "inventoryTooltip"
    AFTER_CALC_MANA_POOL = "afterCalcManaPool"


@dataclass
class Effect:
    """아이템의 수치 효과 하나 (예: Accuracy +0.1 / tick)"""

    original: str  # 효과 종류 "Accuracy"
    trigger: str
    power: float = 0.0

    # 첫 유대 상승 시 한 번만 기록. 이후 power 재계산의 기준값.
    base_power: Optional[float] = None

    def copy(self) -> Effect:
        return replace(self)


@dataclass
class BondData:
    """모드 소유 필드. 인스턴스가 아닌 variant 단위로 유지된다."""

    is_new_restraint: bool = False  # 이번 층에 장착됨
    bond_level: Optional[int] = None  # None = 한 번도 유대 없음
    lock_level: int = 0  # 잠긴 채로 보낸 층 수
    has_new_lock: bool = False  # 이번 층에 새로 잠김
    true_name: Optional[str] = None  # 플레이어가 붙인 이름

    def copy(self) -> BondData:
        return replace(self)


@dataclass(frozen=True)
class RestraintPrototype:
    """구속구 원형 — 불변. restraints.json에서 로드."""

    name: str  # "LeatherCuffs"
    group: str  # 착용 부위 "ItemArms"
    display_name: str = ""
    armor: bool = False
    lockable: bool = True


@dataclass
class VariantTemplate:
    """호스트의 variant 정의. 인스턴스가 재생성돼도 살아남는 영속 기록.

    모드 소유 필드의 진짜 원본(shadow)이 여기 붙어 있다.
    """

    variant_id: str
    template: str  # RestraintPrototype.name 참조
    display_name: str = ""  # 호스트가 생성한 variant 이름
    events: list[Effect] = field(default_factory=list)
    bond: BondData = field(default_factory=BondData)

    def instantiate(self) -> Wearable:
        """호스트 방식의 인스턴스 생성.

        호스트는 효과 수치만 복사하고 모드 필드는 모른다.
        모드 필드는 repair()로 복구해야 한다.
        """
        return Wearable(
            name=self.template,
            inventory_variant=self.variant_id,
            events=[Effect(e.original, e.trigger, e.power) for e in self.events],
        )


@dataclass
class Wearable:
    """착용/소지 중인 아이템 인스턴스. 호스트가 언제든 새로 만들 수 있다."""

    name: str
    inventory_variant: Optional[str] = None  # None = 일반/유니크 아이템
    lock: Optional[str] = None  # "Red", "Blue", ...
    events: list[Effect] = field(default_factory=list)
    bond: BondData = field(default_factory=BondData)

    def recreate(self) -> Wearable:
        """호스트의 객체 교체 흉내 (인벤토리 이동 등). 모드 필드는 유실된다."""
        return Wearable(
            name=self.name,
            inventory_variant=self.inventory_variant,
            lock=self.lock,
            events=[Effect(e.original, e.trigger, e.power) for e in self.events],
        )
