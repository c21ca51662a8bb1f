"""모드 모듈 시스템"""

from restraint_bond.modules.base import GameModule, GameContext, InventoryAction
from restraint_bond.modules.module_manager import ModuleManager

__all__ = ["GameModule", "GameContext", "InventoryAction", "ModuleManager"]
