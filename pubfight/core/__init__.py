"""
Core system module for the Pub Fight combat simulator.

This module contains the fundamental components shared by the rest of the
package: game constants and enumerations, logging setup, error types and
console utilities.
"""

from .constants import (
    CharacterType,
    FightResult,
    NiceEnum,
    PassiveEffectType,
    PassiveTrigger,
    TargetType,
    is_opponent,
)
from .error_handling import (
    EngineError,
    FightDataError,
    require_found,
    require_non_empty,
    require_unique_ids,
)
from .logging import (
    log_debug,
    log_error,
    log_info,
    log_warning,
    setup_logging,
)
from .utils import ccapture, cprint, crule, make_bar, percent

__all__ = [
    # Import from constants.py
    "CharacterType",
    "FightResult",
    "NiceEnum",
    "PassiveEffectType",
    "PassiveTrigger",
    "TargetType",
    "is_opponent",
    # Import from error_handling.py
    "EngineError",
    "FightDataError",
    "require_found",
    "require_non_empty",
    "require_unique_ids",
    # Import from logging.py
    "log_debug",
    "log_error",
    "log_info",
    "log_warning",
    "setup_logging",
    # Import from utils.py
    "ccapture",
    "cprint",
    "crule",
    "make_bar",
    "percent",
]
