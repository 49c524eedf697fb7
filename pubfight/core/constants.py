"""
Constants and enumerations for the simulator.

Defines global constants, enumerations for character roles, target types,
passive triggers and passive effect tags, together with the numbers that
drive the attack wheel and the action executor.
"""

from enum import Enum

# ============================================================================
# ATTACK WHEEL
# ============================================================================

# Miss chance for an attacker with 0 dexterity (40%).
WHEEL_MAX_MISS_CHANCE = 0.4
# How much of the miss chance 100 dexterity removes (down to 5%).
WHEEL_DEXTERITY_MISS_REDUCTION = 0.35
# How much of a target's slice 100 evasiveness removes.
WHEEL_EVASION_WEIGHT_REDUCTION = 0.9
# Smallest slice weight a target can have, whatever its evasiveness.
WHEEL_MIN_TARGET_WEIGHT = 0.05
WHEEL_DEGREES = 360.0

# ============================================================================
# ACTIONS AND FIGHTS
# ============================================================================

# Maximum number of minions a single boss can have alive at once.
MAX_MINIONS_PER_BOSS = 3
# Safety valve for headless fights (degenerate builds can stall forever).
MAX_FIGHT_TURNS = 300
# Boss health is balanced around a party of this size.
BOSS_HP_REFERENCE_PARTY = 4
BOSS_HP_MIN_SCALE = 0.5
# Default threshold (percent of max health) used by low-HP passives.
DEFAULT_LOW_HP_PERCENT = 25
# Default multiplier of the shield-gain passive.
DEFAULT_SHIELD_GAIN_MULTIPLIER = 2

ATTACK_ACTION_ID = "attack"
SHIELD_ACTION_ID = "shield"
REST_ACTION_ID = "rest"

# Lowest value attribute modifiers can push an attribute to. Keeping max
# health at 1 means a living character always keeps at least 1 health.
ATTRIBUTE_FLOORS = {"power": 0, "max_health": 1}


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class CharacterType(NiceEnum):
    """Defines the role of a character in a fight."""

    PLAYER = "player"
    BOSS = "boss"
    MINION = "minion"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this character type."""
        return {
            CharacterType.PLAYER: "👤",
            CharacterType.BOSS: "👹",
            CharacterType.MINION: "👺",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this character type."""
        return {
            CharacterType.PLAYER: "bold blue",
            CharacterType.BOSS: "bold red",
            CharacterType.MINION: "red",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies character type color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class TargetType(NiceEnum):
    """Defines how an action picks its targets."""

    SELF = "self"
    MANUAL = "manual"
    RANDOM = "random"
    ALL_PARTY = "allParty"
    ALL_ENEMIES = "allEnemies"


class FightResult(NiceEnum):
    """Defines the outcome of a fight."""

    ONGOING = "ongoing"
    VICTORY = "victory"
    DEFEAT = "defeat"

    @property
    def color(self) -> str:
        return {
            FightResult.VICTORY: "bold green",
            FightResult.DEFEAT: "bold red",
        }.get(self, "yellow")


class PassiveTrigger(NiceEnum):
    """Defines the points at which a passive ability is evaluated."""

    ALWAYS = "always"
    ON_HIT = "onHit"
    ON_TAKE_DAMAGE = "onTakeDamage"
    ON_LOW_HP = "onLowHP"
    ON_TURN_START = "onTurnStart"
    ON_KILL = "onKill"
    ON_FIGHT_START = "onFightStart"
    ON_FATAL_DAMAGE = "onFatalDamage"


class PassiveEffectType(NiceEnum):
    """Passive effect tags understood by the dispatcher."""

    DAMAGE_REDUCTION = "damageReduction"
    REFLECT_DAMAGE = "reflectDamage"
    MODIFY_SHIELD_GAIN = "modifyShieldGain"
    MODIFY_DAMAGE = "modifyDamage"
    RESTORE_AP = "restoreAP"
    MODIFY_ABILITY_COST = "modifyAbilityCost"
    MODIFY_MAX_AP = "modifyMaxAP"
    MODIFY_SHIELD_CAPACITY = "modifyShieldCapacity"
    MODIFY_SHIELD_STRENGTH = "modifyShieldStrength"
    SURVIVE_FATAL = "surviveFatal"
    PRECISION = "precision"
    PROVOKE = "provoke"
    GLASS_CANNON = "glassCannon"
    HEAL_BONUS = "healBonus"
    SECOND_WIND = "secondWind"
    GAIN_SHIELD = "gainShield"


def is_opponent(char_type: CharacterType, other_type: CharacterType) -> bool:
    """
    Checks if two character types are on opposite sides of the fight.

    Args:
        char_type (CharacterType): The first character type.
        other_type (CharacterType): The second character type.

    Returns:
        bool: True if exactly one of the two is a player.

    """
    return (char_type == CharacterType.PLAYER) != (other_type == CharacterType.PLAYER)
