"""
Damage module for the simulator.

Handles damage calculation and application: passive modifiers on both sides,
shield absorption, and the fatal-damage check.
"""

from pydantic import BaseModel, Field

from pubfight.character.main import Character
from pubfight.core.constants import PassiveEffectType
from pubfight.core.logging import log_debug

from . import passives


class DamageBreakdown(BaseModel):
    """How a single hit was split between shield and health."""

    raw_damage: int = Field(
        0,
        description="Damage that reached the target, after passive modifiers.",
    )
    shield_absorbed: int = Field(
        0,
        description="Damage soaked by shield points.",
    )
    health_damage: int = Field(
        0,
        description="Damage that went through to health.",
    )
    shield_points_destroyed: int = Field(
        0,
        description="Shield points consumed by the hit.",
    )
    killed: bool = Field(
        False,
        description="True if the hit took the target from alive to dead.",
    )
    survived_fatal: bool = Field(
        False,
        description="True if a survive-fatal passive kept the target at 1 health.",
    )


def calculate_damage(target: Character, damage: int, piercing: bool = False) -> DamageBreakdown:
    """
    Splits incoming damage between the target's shield and its health.

    Each shield point absorbs up to ``shield_strength`` damage and whole points
    are consumed until the damage or the shield runs out. A hit against a
    raised shield always breaks at least one point, even when the damage is
    smaller than the shield strength. Piercing damage skips shields entirely.

    Args:
        target (Character):
            The character being hit. Not modified.
        damage (int):
            The damage reaching the target.
        piercing (bool):
            Whether the damage ignores shields.

    Returns:
        DamageBreakdown:
            The split, without the kill information.

    """
    shield = target.state.shield
    if piercing or shield <= 0:
        return DamageBreakdown(raw_damage=damage, health_damage=damage)

    strength = target.attributes.shield_strength
    remaining = damage
    destroyed = 0
    absorbed = 0
    while remaining > 0 and shield - destroyed > 0:
        soaked = min(strength, remaining)
        absorbed += soaked
        remaining -= soaked
        destroyed += 1

    # A raised shield always loses at least one point when hit.
    if destroyed == 0:
        destroyed = 1

    return DamageBreakdown(
        raw_damage=damage,
        shield_absorbed=absorbed,
        health_damage=remaining,
        shield_points_destroyed=destroyed,
    )


def compute_damage_total(target: Character, amount: int, attacker: Character | None) -> int:
    """
    Applies attacker and target passives to the base amount of a damage effect.

    The attacker adds its power, its glass-cannon bonus and its pending
    first-strike bonus (which is consumed). The target subtracts its damage
    reduction and adds its own glass-cannon bonus, since glass cannon raises
    both damage dealt and damage taken.

    Args:
        target (Character):
            The character receiving the damage.
        amount (int):
            The base amount of the damage effect.
        attacker (Character | None):
            The character dealing the damage, if any.

    Returns:
        int:
            The total damage, never negative.

    """
    total = amount
    if attacker is not None:
        total += attacker.attributes.power
        total += attacker.passive_total(PassiveEffectType.GLASS_CANNON)
        total += passives.consume_first_strike_bonus(attacker)
    total -= target.passive_total(PassiveEffectType.DAMAGE_REDUCTION)
    total += target.passive_total(PassiveEffectType.GLASS_CANNON)
    return max(0, total)


def take_damage(character: Character, damage: int, piercing: bool = False) -> DamageBreakdown:
    """
    Applies already-computed damage to a character.

    Args:
        character (Character):
            The character taking the damage, modified in place.
        damage (int):
            The total damage.
        piercing (bool):
            Whether the damage ignores shields.

    Returns:
        DamageBreakdown:
            What happened, including kill and survive-fatal flags.

    """
    breakdown = calculate_damage(character, damage, piercing)
    state = character.state
    state.shield = max(0, state.shield - breakdown.shield_points_destroyed)
    state.health = max(0, state.health - breakdown.health_damage)

    if state.health == 0 and state.is_alive:
        if passives.consume_survive_fatal(character):
            state.health = 1
            breakdown.survived_fatal = True
        else:
            state.is_alive = False
            breakdown.killed = True
            log_debug(f"{character.name} has been defeated", {"id": character.id})
    return breakdown
