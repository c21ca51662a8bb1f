"""착용 아이템 Core — 순수 Python, 호스트 무관"""

from .models import (
    BondData,
    Effect,
    EffectTrigger,
    RestraintPrototype,
    VariantTemplate,
    Wearable,
)
from .registry import RestraintRegistry, VariantRegistry

__all__ = [
    "BondData",
    "Effect",
    "EffectTrigger",
    "RestraintPrototype",
    "VariantTemplate",
    "Wearable",
    "RestraintRegistry",
    "VariantRegistry",
]
