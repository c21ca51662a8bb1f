"""층 전환 감지

호스트의 레벨 진행 연산이 끝난 *뒤* 호출한다 (그때 층 변수가 맞다).
current > highest 일 때만 새 층을 얻은 것. 내려갔다가 다시 오르는 등
최고 기록을 넘지 않는 진행은 무시한다. highest 갱신은 호스트 몫.
"""

import logging
from typing import Callable

from restraint_bond.core.host import HostAdapter

logger = logging.getLogger(__name__)


def floor_gained(current_floor: int, highest_floor: int) -> bool:
    return current_floor > highest_floor


class FloorTransitionDetector:
    """새 층 하나당 콜백 한 번"""

    def __init__(self, host: HostAdapter, on_floor_gained: Callable[[int], None]) -> None:
        self._host = host
        self._on_floor_gained = on_floor_gained

    def after_advance(self) -> bool:
        """Returns: True if 새 층 → 콜백 실행함"""
        current = self._host.current_floor
        highest = self._host.highest_floor
        if not floor_gained(current, highest):
            logger.debug("No new floor (current=%d, highest=%d)", current, highest)
            return False

        logger.info("New floor reached: %d (previous highest %d)", current, highest)
        self._on_floor_gained(current)
        return True
