"""모듈 관리자 - 등록, 활성화/비활성화, 의존성 검증, 프레임 전파"""

from typing import Dict, List, Optional

from restraint_bond.core.event_bus import EventBus
from restraint_bond.core.hooks import HookPoints, HookRegistry, Operation
from restraint_bond.core.host import FrameState
from restraint_bond.core.logging import get_logger
from restraint_bond.modules.base import GameContext, GameModule, InventoryAction

logger = get_logger(__name__)


class ModuleManager:
    """모듈 토글 및 생명주기 관리

    호스트의 run_frame 확장 지점에 한 번 연결되어,
    매 프레임 활성 모듈의 on_frame을 호출한다.
    """

    def __init__(self, hooks: Optional[HookRegistry] = None) -> None:
        self._modules: Dict[str, GameModule] = {}
        self._event_bus: EventBus = EventBus()
        self._hooks: HookRegistry = hooks if hooks is not None else HookRegistry()
        self._hooks.wrap(HookPoints.RUN_FRAME, self._run_frame_hook)

    @property
    def event_bus(self) -> EventBus:
        """모듈이 이벤트 구독/발행에 사용할 EventBus"""
        return self._event_bus

    @property
    def hooks(self) -> HookRegistry:
        """모듈이 호스트 확장 지점에 연결할 HookRegistry"""
        return self._hooks

    @property
    def modules(self) -> Dict[str, GameModule]:
        """등록된 모든 모듈 (읽기 전용 접근)"""
        return dict(self._modules)

    def get_enabled_modules(self) -> List[GameModule]:
        return [m for m in self._modules.values() if m.enabled]

    def register(self, module: GameModule) -> None:
        """모듈 등록. 같은 이름이면 덮어쓴다 (활성 상태였다면 먼저 비활성화)."""
        previous = self._modules.get(module.name)
        if previous is not None:
            logger.warning("Replacing module: %s", module.name)
            if previous.enabled:
                self.disable(module.name)
        self._modules[module.name] = module
        logger.info("Module registered: %s", module.name)

    def _unmet_dependency(self, module: GameModule) -> Optional[str]:
        """등록 + 활성화되지 않은 첫 의존성 이름. 모두 충족이면 None."""
        for dep in module.dependencies:
            dep_module = self._modules.get(dep)
            if dep_module is None or not dep_module.enabled:
                return dep
        return None

    def _dependents(self, name: str) -> List[GameModule]:
        return [
            m for m in self._modules.values() if m.enabled and name in m.dependencies
        ]

    def enable(self, name: str) -> bool:
        """모듈 활성화 (on_enable에서 훅 등록). 의존성 미충족이면 False."""
        module = self._modules.get(name)
        if module is None:
            logger.error("Module not registered: %s", name)
            return False
        if module.enabled:
            return True

        missing = self._unmet_dependency(module)
        if missing is not None:
            logger.warning("Cannot enable %s: requires %s", name, missing)
            return False

        module.on_enable()
        module.enabled = True
        logger.info("Module enabled: %s", name)
        return True

    def disable(self, name: str) -> bool:
        """모듈 비활성화 (on_disable에서 훅 해제). 의존하는 모듈이 먼저 꺼진다."""
        module = self._modules.get(name)
        if module is None:
            logger.error("Module not registered: %s", name)
            return False
        if not module.enabled:
            return True

        for dependent in self._dependents(name):
            logger.info("Cascade disable: %s (depends on %s)", dependent.name, name)
            self.disable(dependent.name)

        module.on_disable()
        module.enabled = False
        logger.info("Module disabled: %s", name)
        return True

    def _run_frame_hook(self, call_next: Operation, state: FrameState):
        result = call_next(state)
        self.process_frame(
            GameContext(
                draw_state=state.draw_state,
                current_floor=state.current_floor,
                highest_floor=state.highest_floor,
            )
        )
        return result

    def process_frame(self, context: GameContext) -> None:
        """활성 모듈의 on_frame 순차 호출"""
        for module in self.get_enabled_modules():
            module.on_frame(context)

    def get_all_actions(self) -> List[InventoryAction]:
        """모든 활성 모듈의 인벤토리 액션 수집"""
        return [
            action
            for module in self.get_enabled_modules()
            for action in module.get_inventory_actions()
        ]

    def is_enabled(self, name: str) -> bool:
        module = self._modules.get(name)
        return module.enabled if module else False
