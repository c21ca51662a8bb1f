"""HookRegistry - 호스트 확장 지점 등록 인터페이스

호스트 전역 함수를 재할당하는 대신, 호스트가 이름 붙인 확장 지점을 열어두고
모드가 wrapper/listener를 등록한다.

- wrapper: (call_next, params) -> result. "감싸고, 원본 호출, 확장" 패턴.
  나중에 등록한 wrapper가 바깥쪽에서 먼저 실행된다.
- listener: params만 받는 사후 알림. 예외는 로그 후 무시 (EventBus와 동일).
"""

from collections import defaultdict
from functools import partial
from typing import Any, Callable, Dict, List

from restraint_bond.core.logging import get_logger

logger = get_logger(__name__)

Operation = Callable[[Any], Any]
Wrapper = Callable[[Operation, Any], Any]
Listener = Callable[[Any], None]


class HookPoints:
    """호스트 확장 지점 이름"""

    # listener (사후 알림)
    POST_APPLY = "post_apply"
    INVENTORY_ADD = "inventory_add"

    # wrapper (연산 감싸기)
    ADVANCE_LEVEL = "advance_level"
    LOCK = "lock"
    STRUGGLE = "struggle"
    ITEM_NAME = "item_name"
    ITEM_NAME_STRING = "item_name_string"
    RUN_FRAME = "run_frame"
    DRAW_INVENTORY_SELECTED = "draw_inventory_selected"
    RESTRAINT_ACTIONS = "restraint_actions"
    LOOSE_RESTRAINT_ACTIONS = "loose_restraint_actions"
    LOCK_CLICK = "lock_click"
    REMOVE_MAGIC_LOCK_CLICK = "remove_magic_lock_click"


class HookRegistry:
    """확장 지점별 wrapper/listener 저장소"""

    def __init__(self) -> None:
        self._wrappers: Dict[str, List[Wrapper]] = defaultdict(list)
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def wrap(self, point: str, wrapper: Wrapper) -> None:
        """연산 wrapper 등록"""
        self._wrappers[point].append(wrapper)
        logger.debug("Hook wrap: %s → %s", point, wrapper.__qualname__)

    def unwrap(self, point: str, wrapper: Wrapper) -> None:
        try:
            self._wrappers[point].remove(wrapper)
        except ValueError:
            logger.warning("Wrapper not registered: %s → %s", point, wrapper.__qualname__)

    def listen(self, point: str, listener: Listener) -> None:
        """사후 알림 listener 등록"""
        self._listeners[point].append(listener)
        logger.debug("Hook listen: %s → %s", point, listener.__qualname__)

    def unlisten(self, point: str, listener: Listener) -> None:
        try:
            self._listeners[point].remove(listener)
        except ValueError:
            logger.warning(
                "Listener not registered: %s → %s", point, listener.__qualname__
            )

    def invoke(self, point: str, params: Any, original: Operation) -> Any:
        """등록된 wrapper 체인을 통해 원본 연산 호출.

        wrapper가 없으면 original(params)와 같다.
        """
        call = original
        for wrapper in self._wrappers.get(point, []):
            call = partial(wrapper, call)
        return call(params)

    def notify(self, point: str, params: Any) -> None:
        """listener 순차 호출. 한 listener의 실패가 호스트로 새지 않는다."""
        for listener in list(self._listeners.get(point, [])):
            try:
                listener(params)
            except Exception:
                logger.exception(
                    "Hook listener error: %s (point=%s)", listener.__qualname__, point
                )

    def wrapper_count(self, point: str) -> int:
        return len(self._wrappers.get(point, []))

    @property
    def handler_count(self) -> int:
        """등록된 wrapper + listener 총 수"""
        wrappers = sum(len(w) for w in self._wrappers.values())
        listeners = sum(len(h) for h in self._listeners.values())
        return wrappers + listeners
