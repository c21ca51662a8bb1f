"""모듈 기반 인터페이스"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from restraint_bond.core.item.models import Wearable


@dataclass
class GameContext:
    """매 프레임 모듈에 전달되는 호스트 상태 컨텍스트"""

    draw_state: str  # "Game", "Inventory", ...
    current_floor: int
    highest_floor: int

    # 모듈이 추가 데이터를 넣을 수 있는 확장 슬롯
    extra: Dict[str, Any] = field(default_factory=dict)


def _never_cancel(item: Wearable, delta: float) -> bool:
    return False


@dataclass
class InventoryAction:
    """모듈이 호스트 인벤토리 화면에 등록하는 액션 버튼"""

    action_id: str  # 액션 식별자 (예: "BWBRename")
    module_name: str  # 제공한 모듈 이름
    text: Callable[[Wearable], str]
    icon: Callable[[Wearable], str]
    valid: Callable[[Wearable], bool]
    show: Callable[[Wearable], bool]
    click: Callable[[Wearable], None]
    cancel: Callable[[Wearable, float], bool] = _never_cancel


class GameModule(ABC):
    """모든 모드 모듈의 기반 인터페이스

    규칙:
    - 모듈은 다른 모듈을 직접 import하지 않는다
    - 모듈 간 통신은 EventBus를 경유한다
    - 호스트와는 HookRegistry 확장 지점으로만 연결한다
    """

    _enabled: bool

    def __init__(self) -> None:
        self._enabled = False

    @property
    @abstractmethod
    def name(self) -> str:
        """모듈 고유 이름 (예: 'bonding')"""
        ...

    @property
    def dependencies(self) -> List[str]:
        """이 모듈이 의존하는 다른 모듈 이름 목록

        기본값은 빈 리스트 (의존성 없음).
        """
        return []

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    @abstractmethod
    def on_enable(self) -> None:
        """모듈 활성화 시 훅 등록"""
        ...

    @abstractmethod
    def on_disable(self) -> None:
        """모듈 비활성화 시 훅 해제"""
        ...

    @abstractmethod
    def on_frame(self, context: GameContext) -> None:
        """호스트 메인 루프 한 프레임마다 호출."""
        ...

    @abstractmethod
    def get_inventory_actions(self) -> List[InventoryAction]:
        """이 모듈이 제공하는 인벤토리 액션 목록 반환."""
        ...
