"""
Effect application module for the simulator.

Applies a single declarative effect to a single character and reports what
actually happened. The character is modified in place; callers that need an
untouched snapshot work on a copy of the fight.
"""

from pydantic import BaseModel, Field

from pubfight.actions.effect import (
    AddShieldEffect,
    BaseEffect,
    DamageEffect,
    HealEffect,
    ModifyAPEffect,
    ModifyAttributeEffect,
    RemoveShieldEffect,
    ReviveEffect,
    SpawnMinionEffect,
)
from pubfight.character.main import Character
from pubfight.core.constants import ATTRIBUTE_FLOORS
from pubfight.core.logging import log_debug, log_warning

from . import passives
from .damage import compute_damage_total, take_damage


class EffectResult(BaseModel):
    """What a single effect did to a single character."""

    effect_type: str = Field(
        description="Tag of the applied effect.",
    )
    amount: int = Field(
        0,
        description="Amount actually applied (damage dealt, health healed, AP delta, ...).",
    )
    raw_damage: int = Field(
        0,
        description="Damage after passive modifiers, before shields.",
    )
    shield_damage_absorbed: int = Field(
        0,
        description="Damage soaked by shields.",
    )
    health_damage: int = Field(
        0,
        description="Damage that reached health.",
    )
    shield_points_destroyed: int = Field(
        0,
        description="Shield points consumed.",
    )
    killed: bool = Field(
        False,
        description="True if the effect killed the character.",
    )
    survived_fatal: bool = Field(
        False,
        description="True if a survive-fatal passive saved the character.",
    )
    reflected_damage: int = Field(
        0,
        description="Damage reflected back to the attacker.",
    )
    spawned_minions: int = Field(
        0,
        description="Minions requested by a spawn effect.",
    )


def heal(character: Character, amount: int) -> int:
    """Heals a living character, capped at max health. Returns the health gained."""
    if character.is_dead() or amount <= 0:
        return 0
    before = character.state.health
    character.state.health = min(character.attributes.max_health, before + amount)
    return character.state.health - before


def apply_effect(
    character: Character,
    effect: BaseEffect,
    attacker: Character | None = None,
) -> EffectResult:
    """
    Applies an effect to a character.

    Only revive does anything to a dead character; every other effect
    reports an amount of 0. Damage goes through the passive modifiers of
    both sides and fires the reactions of the target and the attacker.

    Args:
        character (Character):
            The character receiving the effect, modified in place.
        effect (BaseEffect):
            The effect to apply.
        attacker (Character | None):
            The character the effect comes from. None for self effects and
            reflected damage.

    Returns:
        EffectResult:
            What the effect did.

    """
    effect_type = getattr(effect, "effect_type", type(effect).__name__)
    result = EffectResult(effect_type=effect_type)

    if isinstance(effect, ReviveEffect):
        return _apply_revive(character, effect, attacker, result)

    if character.is_dead():
        return result

    if isinstance(effect, DamageEffect):
        _apply_damage(character, effect, attacker, result)
    elif isinstance(effect, HealEffect):
        caster = attacker or character
        result.amount = heal(character, effect.amount + passives.heal_bonus(caster))
    elif isinstance(effect, AddShieldEffect):
        amount = effect.amount * passives.shield_gain_multiplier(character)
        result.amount = passives.gain_shield(character, amount)
    elif isinstance(effect, ModifyAPEffect):
        result.amount = passives.restore_ap(character, effect.amount)
    elif isinstance(effect, RemoveShieldEffect):
        result.amount = character.state.shield
        character.state.shield = 0
    elif isinstance(effect, ModifyAttributeEffect):
        _apply_modify_attribute(character, effect, result)
    elif isinstance(effect, SpawnMinionEffect):
        result.amount = effect.minion_count
        result.spawned_minions = effect.minion_count
    else:
        log_warning(
            f"Unsupported effect '{effect_type}'",
            {"character": character.id},
        )
    return result


def _apply_damage(
    character: Character,
    effect: DamageEffect,
    attacker: Character | None,
    result: EffectResult,
) -> None:
    total = compute_damage_total(character, effect.amount, attacker)
    breakdown = take_damage(character, total, effect.piercing)

    result.amount = total
    result.raw_damage = breakdown.raw_damage
    result.shield_damage_absorbed = breakdown.shield_absorbed
    result.health_damage = breakdown.health_damage
    result.shield_points_destroyed = breakdown.shield_points_destroyed
    result.killed = breakdown.killed
    result.survived_fatal = breakdown.survived_fatal

    result.reflected_damage = passives.on_take_damage(character, attacker)
    passives.on_low_hp(character)
    if attacker is not None and attacker is not character:
        passives.on_hit(attacker)
        if breakdown.killed:
            passives.on_kill(attacker)

    log_debug(
        f"{character.name} takes {total} damage",
        {
            "health": breakdown.health_damage,
            "shield": breakdown.shield_absorbed,
            "killed": breakdown.killed,
        },
    )


def _apply_revive(
    character: Character,
    effect: ReviveEffect,
    attacker: Character | None,
    result: EffectResult,
) -> EffectResult:
    if character.is_alive():
        caster = attacker or character
        result.amount = heal(character, effect.amount + passives.heal_bonus(caster))
        return result

    health = max(1, min(effect.amount, character.attributes.max_health))
    character.state.is_alive = True
    character.state.health = health
    character.state.ap = 0
    result.amount = health
    log_debug(f"{character.name} is revived", {"health": health})
    return result


def _apply_modify_attribute(
    character: Character,
    effect: ModifyAttributeEffect,
    result: EffectResult,
) -> None:
    attributes = character.attributes
    before = getattr(attributes, effect.attribute)
    after = before + effect.amount
    if effect.attribute in ATTRIBUTE_FLOORS:
        after = max(ATTRIBUTE_FLOORS[effect.attribute], after)
    setattr(attributes, effect.attribute, after)
    passives.clamp_state(character)
    result.amount = after - before
