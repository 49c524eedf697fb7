"""
Action system module for the Pub Fight combat simulator.

This module contains the declarative action and effect definitions consumed by
the combat engine, plus the common actions every character starts with.
"""

from .action import Action
from .common import ATTACK, REST, SHIELD, get_default_actions
from .effect import (
    AddShieldEffect,
    BaseEffect,
    DamageEffect,
    Effect,
    HealEffect,
    ModifiableAttribute,
    ModifyAPEffect,
    ModifyAttributeEffect,
    RemoveShieldEffect,
    ReviveEffect,
    SpawnMinionEffect,
)

__all__ = [
    # Import from action.py
    "Action",
    # Import from common.py
    "ATTACK",
    "REST",
    "SHIELD",
    "get_default_actions",
    # Import from effect.py
    "AddShieldEffect",
    "BaseEffect",
    "DamageEffect",
    "Effect",
    "HealEffect",
    "ModifiableAttribute",
    "ModifyAPEffect",
    "ModifyAttributeEffect",
    "RemoveShieldEffect",
    "ReviveEffect",
    "SpawnMinionEffect",
]
