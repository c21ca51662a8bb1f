"""유대 시스템 설정 — 임계값, 성장률, 이름 변경 허용"""

from dataclasses import dataclass

# 호스트의 모듈러 인챈트 효과 종류. 이 목록에 없는 효과(저주 등)는 성장하지 않는다.
DEFAULT_ENCHANTMENT_KINDS: tuple[str, ...] = (
    "Accuracy",
    "Evasion",
    "BlockChance",
    "DamageBuff",
    "SpellWard",
    "ManaRegen",
    "StaminaRegen",
    "ManaCostReduction",
    "SneakBuff",
    "IncreaseManaPool",
)


@dataclass(frozen=True)
class BondConfig:
    """유대 레벨 설정. 값의 근거는 마지막 버전 기준 기본값."""

    base_level: int = 1  # 처음 유대가 생길 때의 레벨
    level_give_name: int = 3  # 이름 변경 최소 레벨

    # 축하 메시지 단계 (정확히 일치할 때만)
    level_first: int = 1
    level_low: int = 2
    level_medium: int = 3
    level_high: int = 4
    level_xhigh: int = 6

    # "아직 자라는 중" 메시지: level >= xhigh + offset 이고 period 배수
    too_high_offset: int = 2
    too_high_period: int = 3

    # 초과(>) 시 해당 행동 거부
    level_stop_cut: int = 5
    level_stop_struggle: int = 6
    level_stop_remove: int = 7

    level_lock_urge: int = 5  # 이상(>=)이면 잠그고 싶은 충동 메시지

    base_rate: float = 1.07  # 레벨당 +7%
    lock_rate: float = 1.01  # 잠금 레벨당 +1%

    always_allow_renaming: bool = False

    enchantment_kinds: tuple[str, ...] = DEFAULT_ENCHANTMENT_KINDS
