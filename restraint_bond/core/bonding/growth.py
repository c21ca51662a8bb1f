"""유대 레벨 상승과 효과 수치 재계산

수치는 항상 base_power에서 다시 계산한다 (누적 곱셈 오차 방지).
    power = base × base_rate^bond × lock_rate^lock
마나 풀 효과는 POW+1 형태라 1을 빼고 계산 후 다시 더한다.
"""

from __future__ import annotations

import logging
from typing import Optional

from restraint_bond.core.bonding.config import BondConfig
from restraint_bond.core.item.models import Effect, EffectTrigger, Wearable

logger = logging.getLogger(__name__)


def growth(level: int, rate: float) -> float:
    """기하 성장 계수 rate^level."""
    return rate**level


def scaled_power(
    effect: Effect, bond_level: int, lock_level: int, config: BondConfig
) -> Optional[float]:
    """effect의 새 power. 재계산 대상이 아니면 None.

    base_power가 아직 없으면 None (capture_base_power 먼저).
    """
    if effect.trigger == EffectTrigger.ICON:
        return None
    if effect.base_power is None:
        return None

    factor = growth(bond_level, config.base_rate) * growth(lock_level, config.lock_rate)
    if effect.trigger == EffectTrigger.AFTER_CALC_MANA_POOL:
        return 1 + (effect.base_power - 1) * factor
    return effect.base_power * factor


def is_growable(effect: Effect, config: BondConfig) -> bool:
    """인챈트 효과이고, power가 0이 아니고, 아이콘 표시용이 아닐 때."""
    if effect.original not in config.enchantment_kinds:
        return False
    if not effect.power:
        return False
    return effect.trigger != EffectTrigger.ICON


def recompute_effects(item: Wearable, config: BondConfig) -> int:
    """item의 모든 효과 power를 현재 bond/lock 레벨로 재계산. 반환: 갱신 수."""
    bond_level = item.bond.bond_level or 0
    lock_level = item.bond.lock_level
    updated = 0
    for effect in item.events:
        if not is_growable(effect, config):
            continue
        if effect.base_power is None:
            effect.base_power = effect.power
        new_power = scaled_power(effect, bond_level, lock_level, config)
        if new_power is not None:
            effect.power = new_power
            updated += 1
    return updated


def advance_bond(item: Wearable, config: BondConfig) -> None:
    """commit mutator: 유대 레벨 +1 (첫 유대면 base_level), 잠금 연속 기록, 수치 갱신."""
    bond = item.bond
    if bond.bond_level is None:
        bond.bond_level = config.base_level
        bond.lock_level = 0
    else:
        bond.bond_level += 1

    # 이번 층에 새로 잠긴 건 한 번 건너뛴다
    if bond.has_new_lock:
        bond.has_new_lock = False
    elif item.lock:
        bond.lock_level += 1

    updated = recompute_effects(item, config)
    logger.debug(
        "Bond advanced: %s level=%s lock=%d effects=%d",
        item.inventory_variant,
        bond.bond_level,
        bond.lock_level,
        updated,
    )
