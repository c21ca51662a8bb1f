"""Restraint Bond Core"""

from restraint_bond.core.bonding import BondConfig, BondingEngine, BondResult
from restraint_bond.core.errors import ConsistencyFault
from restraint_bond.core.event_bus import EventBus, GameEvent
from restraint_bond.core.floor import FloorTransitionDetector, floor_gained
from restraint_bond.core.hooks import HookPoints, HookRegistry
from restraint_bond.core.host import HostAdapter, StruggleAction, StruggleOutcome
from restraint_bond.core.item import BondData, Effect, VariantTemplate, Wearable
from restraint_bond.core.naming import RenameSession, RenameState
from restraint_bond.core.removal import RemovalGate
from restraint_bond.core.shadow import commit, repair

__all__ = [
    "BondConfig",
    "BondingEngine",
    "BondResult",
    "ConsistencyFault",
    "EventBus",
    "GameEvent",
    "FloorTransitionDetector",
    "floor_gained",
    "HookPoints",
    "HookRegistry",
    "HostAdapter",
    "StruggleAction",
    "StruggleOutcome",
    "BondData",
    "Effect",
    "VariantTemplate",
    "Wearable",
    "RenameSession",
    "RenameState",
    "RemovalGate",
    "commit",
    "repair",
]
