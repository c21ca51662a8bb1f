"""구속구 원형 / variant 템플릿 저장소 — JSON 로드 + 동적 등록"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from .models import BondData, Effect, RestraintPrototype, VariantTemplate, Wearable

logger = logging.getLogger(__name__)


def _read_json_list(path: str | Path) -> list[dict]:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


class RestraintRegistry:
    """구속구 원형 저장소. 갑옷/잠금 가능 여부 판정에 쓴다."""

    def __init__(self) -> None:
        self._prototypes: dict[str, RestraintPrototype] = {}

    def load_from_json(self, path: str | Path) -> int:
        """restraints.json 로드. 반환: 로드된 수량."""
        count = 0
        for raw in _read_json_list(path):
            try:
                proto = RestraintPrototype(
                    name=raw["name"],
                    group=raw["group"],
                    display_name=raw.get("display_name", ""),
                    armor=bool(raw.get("armor", False)),
                    lockable=bool(raw.get("lockable", True)),
                )
                self._prototypes[proto.name] = proto
                count += 1
            except (KeyError, ValueError) as e:
                logger.warning(
                    "Failed to load restraint: %s — %s", raw.get("name", "?"), e
                )

        logger.info("Loaded %d restraints from %s", count, path)
        return count

    def register(self, prototype: RestraintPrototype) -> None:
        if prototype.name in self._prototypes:
            logger.warning("Overwriting existing restraint: %s", prototype.name)
        self._prototypes[prototype.name] = prototype

    def get(self, name: str) -> Optional[RestraintPrototype]:
        return self._prototypes.get(name)

    def get_all(self) -> list[RestraintPrototype]:
        return list(self._prototypes.values())

    def count(self) -> int:
        return len(self._prototypes)


def effect_from_dict(raw: dict) -> Effect:
    base_power = raw.get("base_power")
    return Effect(
        original=raw["original"],
        trigger=raw["trigger"],
        power=float(raw.get("power", 0.0)),
        base_power=float(base_power) if base_power is not None else None,
    )


def effect_to_dict(effect: Effect) -> dict:
    return {
        "original": effect.original,
        "trigger": effect.trigger,
        "power": effect.power,
        "base_power": effect.base_power,
    }


class VariantRegistry:
    """
    variant 템플릿 저장소.
    호스트의 영속 variant 기록 — 모드 필드의 shadow 원본.
    """

    def __init__(self) -> None:
        self._variants: dict[str, VariantTemplate] = {}

    def load_from_json(self, path: str | Path) -> int:
        """variants.json 로드. 반환: 로드된 수량.

        bond 필드는 선택. 없으면 기본값(유대 없음).
        """
        count = 0
        for raw in _read_json_list(path):
            try:
                bond_raw = raw.get("bond", {})
                template = VariantTemplate(
                    variant_id=raw["variant_id"],
                    template=raw["template"],
                    display_name=raw.get("display_name", ""),
                    events=[effect_from_dict(e) for e in raw.get("events", [])],
                    bond=BondData(**bond_raw),
                )
                self._variants[template.variant_id] = template
                count += 1
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(
                    "Failed to load variant: %s — %s", raw.get("variant_id", "?"), e
                )

        logger.info("Loaded %d variants from %s", count, path)
        return count

    def register(self, template: VariantTemplate) -> None:
        if template.variant_id in self._variants:
            logger.warning("Overwriting existing variant: %s", template.variant_id)
        self._variants[template.variant_id] = template

    def get(self, variant_id: str) -> Optional[VariantTemplate]:
        return self._variants.get(variant_id)

    def get_for(self, item: Wearable) -> Optional[VariantTemplate]:
        """인스턴스의 variant 템플릿. variant 없는 아이템이면 None."""
        if not item.inventory_variant:
            return None
        return self._variants.get(item.inventory_variant)

    def get_all(self) -> list[VariantTemplate]:
        return list(self._variants.values())

    def count(self) -> int:
        return len(self._variants)
