"""RemovalGate — 유대가 깊은 아이템은 벗기/자르기/몸부림/해제를 거부

호스트 연산 전에 평가. 거부 시 알림 후 "Fail" 반환, 호스트 연산은 호출하지 않는다.
레벨은 repair 후에 읽는다 (호스트가 교체한 객체도 같은 판정).
query 모드(가능 여부만 묻는 호출)는 절대 거부/알림하지 않는다.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from restraint_bond.core.bonding.config import BondConfig
from restraint_bond.core.host import (
    COLOR_PINK,
    NOTIFY_PRIORITY,
    HostAdapter,
    InventoryClick,
    StruggleAction,
    StruggleOutcome,
    StruggleRequest,
)
from restraint_bond.core.item.models import Wearable
from restraint_bond.core.shadow import repair
from restraint_bond.core.text import TextCatalog, TextKeys

logger = logging.getLogger(__name__)

REFUSAL_DURATION = 2


def struggle_refusal(
    level: Optional[int], action: StruggleAction, config: BondConfig
) -> Optional[str]:
    """거부 메시지 키. 허용이면 None."""
    if not level:
        return None
    if level > config.level_stop_remove and action in (
        StruggleAction.REMOVE,
        StruggleAction.UNLOCK,
    ):
        return TextKeys.NO_REMOVE
    if level > config.level_stop_cut and action == StruggleAction.CUT:
        return TextKeys.NO_CUT
    if level > config.level_stop_struggle and action == StruggleAction.STRUGGLE:
        return TextKeys.NO_STRUGGLE
    return None


def magic_unlock_refusal(level: Optional[int], config: BondConfig) -> Optional[str]:
    if level and level > config.level_stop_remove:
        return TextKeys.NO_UNLOCK
    return None


class RemovalGate:
    def __init__(
        self,
        host: HostAdapter,
        config: BondConfig,
        texts: TextCatalog,
        on_refused: Optional[Callable[[Wearable, str], None]] = None,
    ) -> None:
        self._host = host
        self._config = config
        self._texts = texts
        self._on_refused = on_refused

    def _refuse(self, text_key: str, item: Wearable) -> None:
        name = self._host.display_name(item)
        self._host.send_notification(
            NOTIFY_PRIORITY,
            self._texts.get(text_key, RestraintName=name),
            COLOR_PINK,
            REFUSAL_DURATION,
        )
        logger.info("Refused %s on %s", text_key, item.inventory_variant)
        if self._on_refused is not None:
            self._on_refused(item, text_key)

    def guard_struggle(
        self,
        call_next: Callable[[StruggleRequest], Any],
        request: StruggleRequest,
    ) -> Any:
        if request.query:
            return call_next(request)

        item = self._host.get_restraint_item(request.group)
        if item is not None:
            repair(item, self._host.get_variant_template)
            text_key = struggle_refusal(item.bond.bond_level, request.action, self._config)
            if text_key is not None:
                self._refuse(text_key, item)
                return StruggleOutcome.FAIL

        return call_next(request)

    def guard_magic_unlock(
        self, call_next: Callable[[InventoryClick], Any], click: InventoryClick
    ) -> Optional[Any]:
        """인벤토리의 마법 자물쇠 해제 클릭. 거부 시 None."""
        repair(click.item, self._host.get_variant_template)
        text_key = magic_unlock_refusal(click.item.bond.bond_level, self._config)
        if text_key is not None:
            self._refuse(text_key, click.item)
            return None
        return call_next(click)
