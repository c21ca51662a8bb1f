"""ModuleManager 테스트"""

from restraint_bond.core.hooks import HookPoints, HookRegistry
from restraint_bond.core.host import FrameState
from restraint_bond.modules.base import GameContext, GameModule, InventoryAction
from restraint_bond.modules.module_manager import ModuleManager


# --- 테스트용 모듈 ---


def _action(action_id: str, module_name: str) -> InventoryAction:
    return InventoryAction(
        action_id=action_id,
        module_name=module_name,
        text=lambda item: action_id,
        icon=lambda item: "",
        valid=lambda item: True,
        show=lambda item: True,
        click=lambda item: None,
    )


class AlphaModule(GameModule):
    def __init__(self):
        super().__init__()
        self.enable_called = False
        self.disable_called = False
        self.frames: list[GameContext] = []

    @property
    def name(self):
        return "alpha"

    def on_enable(self):
        self.enable_called = True

    def on_disable(self):
        self.disable_called = True

    def on_frame(self, context):
        self.frames.append(context)

    def get_inventory_actions(self):
        return [_action("AlphaAct", "alpha")]


class BetaModule(GameModule):
    """alpha에 의존하는 모듈"""

    def __init__(self):
        super().__init__()
        self.disable_called = False

    @property
    def name(self):
        return "beta"

    @property
    def dependencies(self):
        return ["alpha"]

    def on_enable(self):
        pass

    def on_disable(self):
        self.disable_called = True

    def on_frame(self, context):
        pass

    def get_inventory_actions(self):
        return [_action("BetaAct", "beta")]


class TestRegisterEnable:
    def test_register_and_enable(self):
        mgr = ModuleManager()
        alpha = AlphaModule()
        mgr.register(alpha)
        assert mgr.enable("alpha") is True
        assert alpha.enable_called
        assert mgr.is_enabled("alpha")

    def test_enable_unregistered(self):
        assert ModuleManager().enable("ghost") is False

    def test_enable_twice(self):
        mgr = ModuleManager()
        mgr.register(AlphaModule())
        mgr.enable("alpha")
        assert mgr.enable("alpha") is True

    def test_missing_dependency(self):
        mgr = ModuleManager()
        mgr.register(BetaModule())
        assert mgr.enable("beta") is False

    def test_disabled_dependency(self):
        mgr = ModuleManager()
        mgr.register(AlphaModule())
        mgr.register(BetaModule())
        assert mgr.enable("beta") is False
        mgr.enable("alpha")
        assert mgr.enable("beta") is True


class TestDisable:
    def test_cascade(self):
        mgr = ModuleManager()
        alpha, beta = AlphaModule(), BetaModule()
        mgr.register(alpha)
        mgr.register(beta)
        mgr.enable("alpha")
        mgr.enable("beta")

        assert mgr.disable("alpha") is True
        assert beta.disable_called
        assert alpha.disable_called
        assert not mgr.is_enabled("beta")

    def test_disable_unregistered(self):
        assert ModuleManager().disable("ghost") is False


class TestFrame:
    def test_run_frame_hook_reaches_enabled_modules(self):
        hooks = HookRegistry()
        mgr = ModuleManager(hooks=hooks)
        alpha = AlphaModule()
        mgr.register(alpha)
        mgr.enable("alpha")

        result = hooks.invoke(
            HookPoints.RUN_FRAME, FrameState("Inventory", 3, 4), lambda s: True
        )
        assert result is True
        assert alpha.frames[0].draw_state == "Inventory"
        assert alpha.frames[0].highest_floor == 4

    def test_disabled_module_skipped(self):
        mgr = ModuleManager()
        alpha = AlphaModule()
        mgr.register(alpha)
        mgr.process_frame(GameContext("Game", 1, 1))
        assert alpha.frames == []


class TestActions:
    def test_actions_from_enabled_only(self):
        mgr = ModuleManager()
        mgr.register(AlphaModule())
        mgr.register(BetaModule())
        mgr.enable("alpha")
        ids = [a.action_id for a in mgr.get_all_actions()]
        assert ids == ["AlphaAct"]

    def test_modules_copy(self):
        mgr = ModuleManager()
        mgr.register(AlphaModule())
        mgr.modules.clear()
        assert "alpha" in mgr.modules


class TestReplace:
    def test_replacing_enabled_module_disables_old(self):
        mgr = ModuleManager()
        old = AlphaModule()
        mgr.register(old)
        mgr.enable("alpha")

        new = AlphaModule()
        mgr.register(new)
        assert old.disable_called
        assert mgr.modules["alpha"] is new
        assert not mgr.is_enabled("alpha")
