"""Shadow Store — 모드 필드의 repair/commit 프로토콜

호스트는 인벤토리 이동·장착 때마다 아이템 객체를 새로 만들고,
그때 모드 필드는 사라진다. variant 템플릿이 영속 원본이며:

- repair(item): 템플릿 → 인스턴스 복구. 새 객체일 수 있는 아이템을 받으면 먼저 호출.
- commit(item, mutator): repair → 인스턴스 변경 → 즉시 템플릿으로 복사.
  모드 필드 변경은 반드시 commit을 거친다.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from restraint_bond.core.item.models import VariantTemplate, Wearable

logger = logging.getLogger(__name__)

TemplateLookup = Callable[[Wearable], Optional[VariantTemplate]]
BondCarrier = Union[Wearable, VariantTemplate]


def clone_bond_data(src: BondCarrier, dest: BondCarrier) -> None:
    """src의 모드 필드를 dest로 복사. 객체를 공유하지 않는다.

    효과는 인덱스 기준. base_power가 있는 효과(= 모드가 power를 건드린 효과)만
    base_power와 power를 함께 복사한다.
    """
    dest.bond = src.bond.copy()

    for i, effect in enumerate(src.events):
        if effect.base_power is None:
            continue
        if i >= len(dest.events):
            logger.warning(
                "Effect index %d missing on destination (%s), skipped",
                i,
                effect.original,
            )
            continue
        dest.events[i].base_power = effect.base_power
        dest.events[i].power = effect.power


def repair(item: Wearable, lookup: TemplateLookup) -> bool:
    """템플릿이 있으면 인스턴스 모드 필드를 덮어쓴다.

    Returns:
        True if 복구함, False if 템플릿 없음 (추적 대상 아님, 에러 아님)
    """
    template = lookup(item)
    if template is None:
        return False
    clone_bond_data(template, item)
    return True


def commit(
    item: Wearable,
    mutator: Callable[[Wearable], None],
    lookup: TemplateLookup,
) -> Wearable:
    """mutator 적용 후 템플릿에 복사. 유일하게 허용된 모드 필드 변경 경로.

    mutator 전에 템플릿 → 인스턴스 복구가 먼저 일어난다. 호스트가 교체한
    객체(모드 필드가 기본값)를 받아도 템플릿의 레벨/이름은 유지된다.
    """
    template = lookup(item)
    if template is not None:
        clone_bond_data(template, item)

    mutator(item)

    if template is None:
        logger.warning(
            "No template for variant %s, change kept on instance only",
            item.inventory_variant,
        )
        return item

    clone_bond_data(item, template)
    return item
