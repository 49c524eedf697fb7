"""
Passive dispatcher module for the simulator.

Passives are evaluated at fixed points of the engine (fight start, damage
application, kills, turn start) and never polled. This module gathers those
evaluation points: the queries used while computing costs, targets and
effect amounts, and the reactions fired after something happened.

Passives with an effect tag the engine does not understand are ignored.
"""

from pubfight.actions.action import Action
from pubfight.character.main import Character
from pubfight.core.constants import (
    ATTACK_ACTION_ID,
    DEFAULT_LOW_HP_PERCENT,
    DEFAULT_SHIELD_GAIN_MULTIPLIER,
    PassiveEffectType,
    PassiveTrigger,
    TargetType,
    is_opponent,
)
from pubfight.core.logging import log_debug

# ============================================================================
# RESOURCE HELPERS
# ============================================================================


def restore_ap(character: Character, amount: int) -> int:
    """Adds AP to a character, clamped to [0, max_ap]. Returns the delta."""
    before = character.state.ap
    character.state.ap = max(0, min(character.attributes.max_ap, before + amount))
    return character.state.ap - before


def gain_shield(character: Character, amount: int) -> int:
    """Adds shield points to a character, capped at capacity. Returns the delta."""
    before = character.state.shield
    capacity = max(0, character.attributes.shield_capacity)
    character.state.shield = max(0, min(capacity, before + amount))
    return character.state.shield - before


def _ignore_unknown(character: Character, trigger: PassiveTrigger) -> None:
    for passive in character.passives:
        if passive.trigger == trigger and not passive.is_known():
            log_debug(
                f"Ignoring unknown passive effect '{passive.effect.effect_type}'",
                {"character": character.id, "trigger": trigger.value},
            )


# ============================================================================
# QUERIES
# ============================================================================


def effective_cost(actor: Character, action: Action) -> int:
    """
    Returns the AP cost of an action once cost modifiers are applied.

    Free actions stay free. Any other action costs at least one AP, however
    large the discount.

    Args:
        actor (Character):
            The character performing the action.
        action (Action):
            The action being priced.

    Returns:
        int:
            The AP the actor has to pay.

    """
    if action.cost <= 0:
        return 0
    modifier = actor.passive_total(PassiveEffectType.MODIFY_ABILITY_COST)
    return max(1, action.cost + modifier)


def effective_target_type(actor: Character, action: Action) -> TargetType:
    """Returns the targeting mode of an action, after precision is applied."""
    if (
        action.id == ATTACK_ACTION_ID
        and action.target_type == TargetType.RANDOM
        and actor.has_passive(PassiveEffectType.PRECISION)
    ):
        return TargetType.MANUAL
    return action.target_type


def consume_first_strike_bonus(attacker: Character) -> int:
    """
    Returns and consumes the attacker's pending first-strike damage bonus.

    The bonus comes from fight-start damage modifiers and is spent by the
    first damage effect the attacker lands.
    """
    bonus = 0
    for passive in attacker.iter_passives(
        PassiveEffectType.MODIFY_DAMAGE, PassiveTrigger.ON_FIGHT_START
    ):
        bonus += passive.amount
        passive.used = True
    return bonus


def shield_gain_multiplier(character: Character) -> int:
    """Returns the multiplier applied to the character's shield gains right now."""
    multiplier = 1
    for passive in character.iter_passives(PassiveEffectType.MODIFY_SHIELD_GAIN):
        if character.hp_percent() < passive.hp_threshold(DEFAULT_LOW_HP_PERCENT):
            multiplier *= passive.amount or DEFAULT_SHIELD_GAIN_MULTIPLIER
    return multiplier


def heal_bonus(caster: Character | None) -> int:
    if caster is None:
        return 0
    return caster.passive_total(PassiveEffectType.HEAL_BONUS)


def second_wind_bonus(actor: Character) -> int:
    """Returns the extra healing the actor gets when resting."""
    return actor.passive_total(PassiveEffectType.SECOND_WIND)


def consume_survive_fatal(character: Character) -> bool:
    """
    Consumes an unused survive-fatal passive, if the character has one.

    Returns:
        bool:
            True if a passive intercepted the fatal blow.

    """
    passive = next(
        character.iter_passives(PassiveEffectType.SURVIVE_FATAL),
        None,
    )
    if passive is None:
        return False
    passive.used = True
    log_debug(f"{character.name} survives a fatal blow", {"skill": passive.skill_id})
    return True


# ============================================================================
# REACTIONS
# ============================================================================


def _react(holder: Character, trigger: PassiveTrigger) -> None:
    """Fires the AP and shield reactions of the holder for a trigger point."""
    for passive in holder.iter_passives(trigger=trigger):
        if passive.is_a(PassiveEffectType.RESTORE_AP):
            restore_ap(holder, passive.amount)
        elif passive.is_a(PassiveEffectType.GAIN_SHIELD):
            if passive.effect.condition and holder.hp_percent() >= passive.hp_threshold(100):
                continue
            gain_shield(holder, passive.amount)


def on_take_damage(holder: Character, attacker: Character | None) -> int:
    """
    Fires the holder's reactions to a damage effect it just took.

    Reflection deals fixed damage back to a living attacker. It is applied
    without an attacker of its own, so reflection never bounces back. Shield
    gains only fire while the holder is alive and below the health threshold.

    Args:
        holder (Character):
            The character that took the damage.
        attacker (Character | None):
            The character that dealt the damage, if any.

    Returns:
        int:
            The total damage reflected to the attacker.

    """
    # Imported here to avoid a circular dependency with the damage module.
    from .damage import take_damage

    reflected = 0
    for passive in holder.iter_passives(trigger=PassiveTrigger.ON_TAKE_DAMAGE):
        if passive.is_a(PassiveEffectType.REFLECT_DAMAGE):
            if attacker is None or attacker is holder or attacker.is_dead():
                continue
            if passive.amount <= 0:
                continue
            take_damage(attacker, passive.amount)
            reflected += passive.amount
            log_debug(
                f"{holder.name} reflects {passive.amount} damage to {attacker.name}",
                {"skill": passive.skill_id},
            )
        elif passive.is_a(PassiveEffectType.GAIN_SHIELD):
            if holder.is_dead():
                continue
            threshold = passive.hp_threshold(DEFAULT_LOW_HP_PERCENT)
            if holder.hp_percent() < threshold:
                gain_shield(holder, passive.amount)
    _ignore_unknown(holder, PassiveTrigger.ON_TAKE_DAMAGE)
    return reflected


def on_low_hp(holder: Character) -> None:
    """
    Fires the holder's low-health reactions, once per fight each.

    Each passive fires the first time health drops below its threshold and
    is then marked as used.
    """
    if holder.is_dead():
        return
    for passive in holder.iter_passives(trigger=PassiveTrigger.ON_LOW_HP):
        if not passive.is_known():
            continue
        if holder.hp_percent() >= passive.hp_threshold(DEFAULT_LOW_HP_PERCENT):
            continue
        if passive.is_a(PassiveEffectType.RESTORE_AP):
            restore_ap(holder, passive.amount)
        elif passive.is_a(PassiveEffectType.GAIN_SHIELD):
            gain_shield(holder, passive.amount)
        else:
            continue
        passive.used = True


def on_hit(attacker: Character) -> None:
    """Fires the attacker's reactions to landing a damage effect."""
    if attacker.is_dead():
        return
    _react(attacker, PassiveTrigger.ON_HIT)


def on_kill(attacker: Character) -> None:
    """Fires the attacker's reactions to killing a target."""
    if attacker.is_dead():
        return
    _react(attacker, PassiveTrigger.ON_KILL)


def on_turn_start(character: Character) -> None:
    """Fires the reactions of the character whose turn is starting."""
    if character.is_dead():
        return
    _react(character, PassiveTrigger.ON_TURN_START)
    _ignore_unknown(character, PassiveTrigger.ON_TURN_START)


# ============================================================================
# FIGHT INITIALISATION
# ============================================================================


def apply_always_passives(character: Character) -> None:
    """
    Applies the permanent stat modifiers of a character.

    Called once per character when the fight is created. Shield and AP
    state are clamped to the new maximums.
    """
    attributes = character.attributes
    for passive in character.iter_passives(trigger=PassiveTrigger.ALWAYS):
        if passive.is_a(PassiveEffectType.PROVOKE):
            # Negative amounts enlarge the holder's slice of the wheel.
            attributes.evasiveness += passive.amount
        elif passive.is_a(PassiveEffectType.MODIFY_SHIELD_CAPACITY):
            attributes.shield_capacity += passive.amount
        elif passive.is_a(PassiveEffectType.MODIFY_SHIELD_STRENGTH):
            attributes.shield_strength += passive.amount
        elif passive.is_a(PassiveEffectType.MODIFY_MAX_AP):
            attributes.max_ap += passive.amount
            character.state.ap = attributes.max_ap
        elif not passive.is_known():
            log_debug(
                f"Ignoring unknown passive effect '{passive.effect.effect_type}'",
                {"character": character.id},
            )
    clamp_state(character)


def apply_fight_start_passives(characters: list[Character]) -> None:
    """
    Applies fight-start passives.

    AP restoration is granted to the whole side of the holder; maximum AP
    changes affect the holder only. Damage modifiers are left in place and
    spent later as a first-strike bonus.
    """
    for holder in characters:
        for passive in holder.iter_passives(trigger=PassiveTrigger.ON_FIGHT_START):
            if passive.is_a(PassiveEffectType.RESTORE_AP):
                for ally in characters:
                    if not is_opponent(ally.char_type, holder.char_type) and ally.is_alive():
                        restore_ap(ally, passive.amount)
            elif passive.is_a(PassiveEffectType.MODIFY_MAX_AP):
                holder.attributes.max_ap += passive.amount
                holder.state.ap = holder.attributes.max_ap
            elif not passive.is_known():
                log_debug(
                    f"Ignoring unknown passive effect '{passive.effect.effect_type}'",
                    {"character": holder.id},
                )


def clamp_state(character: Character) -> None:
    attributes = character.attributes
    state = character.state
    state.ap = max(0, min(max(0, attributes.max_ap), state.ap))
    state.shield = max(0, min(max(0, attributes.shield_capacity), state.shield))
    state.health = max(0, min(max(0, attributes.max_health), state.health))
