"""유대 레벨 Core — 층 단위 성장, 수치 재계산, 메시지 단계"""

from .config import BondConfig
from .engine import BondingEngine, BondResult
from .flavor import FlavorTier, select_powerup_tier, select_self_lock_key
from .growth import advance_bond, growth, recompute_effects, scaled_power

__all__ = [
    "BondConfig",
    "BondingEngine",
    "BondResult",
    "FlavorTier",
    "select_powerup_tier",
    "select_self_lock_key",
    "advance_bond",
    "growth",
    "recompute_effects",
    "scaled_power",
]
