"""
Pub Fight combat simulator.

A party of up to four adventurers against a pub boss and its minions:
turn-based, AP-driven, with random targeting resolved by an attack wheel.
This package contains the catalog loader, the combat engine, computer
controlled players and bosses, and a terminal interface.
"""

from .combat import (
    ActionResult,
    BossDefinition,
    CheckResult,
    FightRecord,
    FightState,
    PlayerBuild,
    can_execute,
    create_fight,
    execute,
    run_fight,
)
from .combat.scheduler import advance_turn
from .core.content import ContentRepository
from .core.error_handling import EngineError, FightDataError

__all__ = [
    # Import from combat
    "ActionResult",
    "BossDefinition",
    "CheckResult",
    "FightRecord",
    "FightState",
    "PlayerBuild",
    "advance_turn",
    "can_execute",
    "create_fight",
    "execute",
    "run_fight",
    # Import from core
    "ContentRepository",
    "EngineError",
    "FightDataError",
]
