"""
Action executor module for the simulator.

Runs a single action from validation to the fight-end check:

    Validate -> DeductCost -> ResolveTargets -> ApplyTargetEffects
             -> ApplySelfEffects -> CheckFightEnd

The executor never mutates the state it is given. It works on a deep copy
and returns it together with an ActionResult describing everything that
happened, wheel spins included.
"""

import random

from pydantic import BaseModel, Field

from pubfight.actions.action import Action
from pubfight.actions.effect import HealEffect, SpawnMinionEffect
from pubfight.character.main import Character
from pubfight.core.constants import REST_ACTION_ID, SHIELD_ACTION_ID
from pubfight.core.error_handling import require_found
from pubfight.core.logging import log_debug

from . import passives
from .effects import EffectResult, apply_effect, heal
from .fight_state import FightState, check_fight_end
from .minions import spawn_minions
from .targeting import WheelResult, resolve_targets


class CheckResult(BaseModel):
    """Whether an action can be executed right now, and why not."""

    can_execute: bool = Field(
        description="True if the action passes validation.",
    )
    reason: str | None = Field(
        None,
        description="Why the action cannot be executed.",
    )

    def __bool__(self) -> bool:
        return self.can_execute


class TargetResult(BaseModel):
    """The effects an action applied to one resolved target."""

    target_id: str = Field(
        description="Id of the target.",
    )
    target_name: str = Field(
        description="Name of the target.",
    )
    hit: bool = Field(
        True,
        description="Always True, misses only appear in the wheel trace.",
    )
    effects: list[EffectResult] = Field(
        default_factory=list,
        description="Results of the action's effects, in order.",
    )


class ActionResult(BaseModel):
    """Everything an executed (or rejected) action did."""

    success: bool = Field(
        False,
        description="True if the action passed validation and was resolved.",
    )
    reason: str | None = Field(
        None,
        description="Why the action was rejected.",
    )
    actor_id: str = Field(
        description="Id of the acting character.",
    )
    action_id: str = Field(
        description="Id of the action.",
    )
    action_name: str = Field(
        "",
        description="Display name of the action.",
    )
    ap_deducted: int = Field(
        0,
        description="AP paid for the action.",
    )
    target_results: list[TargetResult] = Field(
        default_factory=list,
        description="Per-target effect breakdown, one entry per hit.",
    )
    self_results: list[EffectResult] = Field(
        default_factory=list,
        description="Results of the self effects, in order.",
    )
    wheel_results: list[WheelResult] = Field(
        default_factory=list,
        description="Every wheel spin of the action.",
    )
    spawned_minion_ids: list[str] = Field(
        default_factory=list,
        description="Ids of the minions the action summoned.",
    )

    def total_health_damage(self) -> int:
        """Sums the health damage dealt to every target."""
        return sum(
            effect.health_damage
            for target in self.target_results
            for effect in target.effects
            if effect.effect_type == "damage"
        )

    def total_shield_absorbed(self) -> int:
        return sum(
            effect.shield_damage_absorbed
            for target in self.target_results
            for effect in target.effects
            if effect.effect_type == "damage"
        )

    def kills(self) -> list[str]:
        """Returns the ids of the targets killed by the action."""
        return [
            target.target_id
            for target in self.target_results
            if any(effect.killed for effect in target.effects)
        ]

    def misses(self) -> int:
        return sum(1 for spin in self.wheel_results if spin.is_miss)


def can_execute(actor: Character, action: Action) -> CheckResult:
    """
    Checks whether a character can perform an action right now.

    Args:
        actor (Character):
            The character performing the action. Not modified.
        action (Action):
            The action to check.

    Returns:
        CheckResult:
            The verdict and, when negative, the reason.

    """
    if actor.is_dead():
        return CheckResult(can_execute=False, reason="Character is dead")
    if actor.state.ap < passives.effective_cost(actor, action):
        return CheckResult(can_execute=False, reason="Not enough AP")
    if action.id == SHIELD_ACTION_ID and actor.state.shield >= actor.attributes.shield_capacity:
        return CheckResult(can_execute=False, reason="Shield at max capacity")
    if action.is_exhausted():
        return CheckResult(can_execute=False, reason="No uses remaining")
    return CheckResult(can_execute=True)


def execute(
    state: FightState,
    actor_id: str,
    action_id: str,
    manual_target_id: str | None = None,
    rng: random.Random | None = None,
) -> tuple[FightState, ActionResult]:
    """
    Executes an action on behalf of a character.

    AP is paid before targeting and never refunded, even when every wheel
    spin misses. A rejected action returns the very state object it was
    given, untouched.

    Args:
        state (FightState):
            The current fight. Not modified.
        actor_id (str):
            Id of the acting character.
        action_id (str):
            Id of the action, among the actor's actions.
        manual_target_id (str | None):
            The chosen target for manual actions.
        rng (random.Random | None):
            Random source for the wheel. A fresh, unseeded one is used when
            omitted.

    Returns:
        tuple[FightState, ActionResult]:
            The new fight state and what the action did.

    Raises:
        FightDataError: If the actor or the action does not exist.

    """
    actor = require_found(state.get_character(actor_id), "character", actor_id)
    action = require_found(actor.get_action(action_id), "action", action_id, {"actor": actor_id})

    result = ActionResult(actor_id=actor_id, action_id=action_id, action_name=action.name)

    if state.is_over:
        result.reason = "Fight is over"
        return state, result
    check = can_execute(actor, action)
    if not check:
        result.reason = check.reason
        log_debug(
            f"{actor.name} cannot use {action.name}",
            {"reason": check.reason},
        )
        return state, result

    if rng is None:
        rng = random.Random()

    new_state = state.copy_state()
    actor = new_state.get_character(actor_id)
    action = actor.get_action(action_id)

    # Pay.
    cost = passives.effective_cost(actor, action)
    actor.state.ap -= cost
    result.ap_deducted = cost
    if action.uses_remaining is not None:
        action.uses_remaining -= 1

    # Resolve targets.
    targets, wheel_results = resolve_targets(new_state, actor, action, manual_target_id, rng)
    result.wheel_results = wheel_results

    # Target effects.
    for target in targets:
        target_result = TargetResult(target_id=target.id, target_name=target.name)
        for effect in action.effects:
            target_result.effects.append(apply_effect(target, effect, actor))
        result.target_results.append(target_result)

    # Self effects, strictly after the target effects so drain can read them.
    drained = result.total_health_damage()
    for effect in action.self_effects:
        if isinstance(effect, HealEffect) and effect.drain:
            self_result = EffectResult(effect_type=effect.effect_type)
            self_result.amount = heal(actor, drained)
        elif isinstance(effect, SpawnMinionEffect) and actor.is_alive():
            spawned = spawn_minions(new_state, actor, effect.minion_count)
            self_result = EffectResult(
                effect_type=effect.effect_type,
                amount=len(spawned),
                spawned_minions=len(spawned),
            )
            result.spawned_minion_ids.extend(m.id for m in spawned)
        else:
            self_result = apply_effect(actor, effect)
        result.self_results.append(self_result)

    if action.id == REST_ACTION_ID:
        bonus = passives.second_wind_bonus(actor)
        if bonus > 0:
            self_result = EffectResult(effect_type=HealEffect().effect_type)
            self_result.amount = heal(actor, bonus)
            result.self_results.append(self_result)

    result.success = True
    check_fight_end(new_state)

    log_debug(
        f"{actor.name} uses {action.name}",
        {
            "cost": cost,
            "targets": len(result.target_results),
            "misses": result.misses(),
            "damage": result.total_health_damage(),
        },
    )
    return new_state, result
