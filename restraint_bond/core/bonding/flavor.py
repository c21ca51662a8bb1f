"""유대 상승 메시지 단계 선택"""

from dataclasses import dataclass
from typing import Optional

from restraint_bond.core.bonding.config import BondConfig
from restraint_bond.core.host import COLOR_PINK, COLOR_WHITE
from restraint_bond.core.text import TextKeys


@dataclass(frozen=True)
class FlavorTier:
    text_key: str
    color: str


def select_powerup_tier(level: int, config: BondConfig) -> FlavorTier:
    """레벨 이정표와 정확히 일치하는 단계. 없으면 주기적 "계속 자람" 또는 일반."""
    milestones = (
        (config.level_first, TextKeys.POWERUP_1ST),
        (config.level_low, TextKeys.POWERUP_LOW),
        (config.level_medium, TextKeys.POWERUP_MEDIUM),
        (config.level_high, TextKeys.POWERUP_HIGH),
        (config.level_xhigh, TextKeys.POWERUP_XHIGH),
    )
    for milestone, key in milestones:
        if level == milestone:
            return FlavorTier(key, COLOR_PINK)

    if (
        level >= config.level_xhigh + config.too_high_offset
        and level % config.too_high_period == 0
    ):
        return FlavorTier(TextKeys.POWERUP_TOO_HIGH, COLOR_PINK)
    return FlavorTier(TextKeys.POWERUP_GENERIC, COLOR_WHITE)


def should_urge_lock(
    level: int, locked: bool, lockable: bool, config: BondConfig
) -> bool:
    return level >= config.level_lock_urge and not locked and lockable


def select_self_lock_key(level: Optional[int], config: BondConfig) -> Optional[str]:
    """플레이어가 직접 잠갔을 때의 메시지 키. 낮은 레벨이면 None."""
    if not level:
        return None
    if level >= config.level_xhigh:
        return TextKeys.SELF_LOCK_XHIGH
    if level >= config.level_high:
        return TextKeys.SELF_LOCK_HIGH
    if level >= config.level_medium:
        return TextKeys.SELF_LOCK_MEDIUM
    return None
