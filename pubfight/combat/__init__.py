"""
Combat system module for the Pub Fight combat simulator.

This module contains the combat engine: fight state, targeting wheel, damage
and effect application, passive dispatch, action execution, turn scheduling,
fight construction, computer-controlled decisions and the fight runner.
"""

from .damage import DamageBreakdown, calculate_damage, take_damage
from .effects import EffectResult, apply_effect
from .executor import ActionResult, CheckResult, TargetResult, can_execute, execute
from .fight_runner import FightRecord, FightRunner, run_fight
from .fight_setup import BossDefinition, PlayerBuild, create_fight
from .fight_state import FightState, check_fight_end
from .minions import create_minion, spawn_minions
from .npc_ai import ActionChoice, choose_boss_action, choose_player_action, get_strategy_names
from .scheduler import advance_turn
from .targeting import (
    WheelResult,
    WheelSector,
    build_wheel,
    resolve_targets,
    roll_to_target,
    spin_wheel,
)

__all__ = [
    # Import from damage.py
    "DamageBreakdown",
    "calculate_damage",
    "take_damage",
    # Import from effects.py
    "EffectResult",
    "apply_effect",
    # Import from executor.py
    "ActionResult",
    "CheckResult",
    "TargetResult",
    "can_execute",
    "execute",
    # Import from fight_runner.py
    "FightRecord",
    "FightRunner",
    "run_fight",
    # Import from fight_setup.py
    "BossDefinition",
    "PlayerBuild",
    "create_fight",
    # Import from fight_state.py
    "FightState",
    "check_fight_end",
    # Import from minions.py
    "create_minion",
    "spawn_minions",
    # Import from npc_ai.py
    "ActionChoice",
    "choose_boss_action",
    "choose_player_action",
    "get_strategy_names",
    # Import from scheduler.py
    "advance_turn",
    # Import from targeting.py
    "WheelResult",
    "WheelSector",
    "build_wheel",
    "resolve_targets",
    "roll_to_target",
    "spin_wheel",
]
