"""
Character system module for the Pub Fight combat simulator.

This module holds the character data model: base attributes, per-fight state,
passive abilities and the Character itself.
"""

from .character_stats import Attributes, CharacterState
from .main import Character, MinionTemplate
from .passive import Passive, PassiveCondition, PassiveEffect

__all__ = [
    # Import from character_stats.py
    "Attributes",
    "CharacterState",
    # Import from main.py
    "Character",
    "MinionTemplate",
    # Import from passive.py
    "Passive",
    "PassiveCondition",
    "PassiveEffect",
]
