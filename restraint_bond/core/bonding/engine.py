"""BondingEngine — 층을 새로 얻을 때마다 한 번, 착용 중인 아이템의 유대 갱신

아이템별 판정 (처음 일치하는 규칙에서 끝):
1. variant 없음 → 대상 아님
2. 이번 층에 장착됨 → 표시만 지우고 건너뜀 (다음 층부터 유대 대상)
3. 갑옷 → 인챈트 여부와 관계없이 제외
나머지는 유대 레벨 상승 + 수치 재계산 + 축하 메시지.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from restraint_bond.core.bonding.config import BondConfig
from restraint_bond.core.bonding.flavor import select_powerup_tier, should_urge_lock
from restraint_bond.core.bonding.growth import advance_bond
from restraint_bond.core.errors import ConsistencyFault
from restraint_bond.core.host import COLOR_PINK, NOTIFY_PRIORITY, HostAdapter
from restraint_bond.core.item.models import Wearable
from restraint_bond.core.shadow import commit, repair
from restraint_bond.core.text import TextCatalog, TextKeys

logger = logging.getLogger(__name__)

NOTIFY_DURATION = 5


@dataclass
class BondResult:
    """유대가 오른 아이템 하나의 결과"""

    variant_id: str
    bond_level: int
    lock_level: int
    text_key: str
    lock_urged: bool = False


def _clear_new_marks(item: Wearable) -> None:
    item.bond.is_new_restraint = False
    item.bond.has_new_lock = False


class BondingEngine:
    """착용 아이템 전체에 대한 유대 패스"""

    def __init__(
        self,
        host: HostAdapter,
        config: BondConfig,
        texts: TextCatalog,
        on_settled: Optional[Callable[[Wearable], None]] = None,
    ) -> None:
        self._host = host
        self._config = config
        self._texts = texts
        self._on_settled = on_settled

    def run(self) -> list[BondResult]:
        """층 하나를 얻었을 때 호출. 반환: 유대가 오른 아이템 결과 목록."""
        results: list[BondResult] = []
        for item in self._host.list_worn_items():
            result = self.process_item(item)
            if result is not None:
                results.append(result)
        logger.info("Bonding pass done: %d item(s) bonded", len(results))
        return results

    def process_item(self, item: Wearable) -> Optional[BondResult]:
        if not item.inventory_variant:
            return None

        lookup = self._host.get_variant_template
        repair(item, lookup)

        if item.bond.is_new_restraint:
            commit(item, _clear_new_marks, lookup)
            logger.debug("New restraint, no bond this floor: %s", item.inventory_variant)
            if self._on_settled is not None:
                self._on_settled(item)
            return None

        if self._host.is_armor(item):
            return None

        commit(item, lambda i: advance_bond(i, self._config), lookup)

        level = item.bond.bond_level
        if level is None:
            raise ConsistencyFault(
                f"advance_bond left bond_level unset for {item.inventory_variant}"
            )

        tier = select_powerup_tier(level, self._config)
        name = self._host.display_name(item)
        self._host.send_notification(
            NOTIFY_PRIORITY,
            self._texts.get(tier.text_key, RestraintName=name),
            tier.color,
            NOTIFY_DURATION,
        )

        urged = should_urge_lock(
            level, bool(item.lock), self._host.is_lockable(item), self._config
        )
        if urged:
            self._host.send_notification(
                NOTIFY_PRIORITY,
                self._texts.get(TextKeys.LOCK_URGE, RestraintName=name),
                COLOR_PINK,
                NOTIFY_DURATION,
            )

        logger.info(
            "Bond level up: %s → %d (lock=%d)",
            item.inventory_variant,
            level,
            item.bond.lock_level,
        )
        return BondResult(
            variant_id=item.inventory_variant,
            bond_level=level,
            lock_level=item.bond.lock_level,
            text_key=tier.text_key,
            lock_urged=urged,
        )
