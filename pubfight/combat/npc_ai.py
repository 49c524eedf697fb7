"""
Computer-controlled decision making for the simulator.

Bosses and minions pick uniformly among the actions they can afford. Headless
players follow one of three heuristics (aggressive, balanced, defensive)
that read whatever actions the character has, without knowing any skill by
name.
"""

import random
from typing import Callable

from pydantic import BaseModel, Field

from pubfight.actions.action import Action
from pubfight.actions.effect import AddShieldEffect, ReviveEffect
from pubfight.character.main import Character
from pubfight.core.constants import (
    ATTACK_ACTION_ID,
    REST_ACTION_ID,
    CharacterType,
    TargetType,
)

from .executor import can_execute
from .fight_state import FightState
from .passives import effective_target_type

# =============================================================================
# Support Functions
# =============================================================================


class ActionChoice(BaseModel):
    """An action picked by the AI, with its manual target when it needs one."""

    action: Action | None = Field(
        None,
        description="The chosen action, None when nothing can be done.",
    )
    manual_target_id: str | None = Field(
        None,
        description="Target of a manual action.",
    )


def _hp_ratio(character: Character) -> float:
    """
    Helper function to calculate the HP ratio of a character.

    Args:
        character (Character): The character.

    Returns:
        float: Current health over maximum health, 0 if the maximum is 0.

    """
    if character.attributes.max_health <= 0:
        return 0.0
    return character.state.health / character.attributes.max_health


def get_affordable_actions(actor: Character) -> list[Action]:
    """Returns the actions the actor could execute right now."""
    return [action for action in actor.actions if can_execute(actor, action)]


def _is_shield_action(action: Action) -> bool:
    return any(isinstance(e, AddShieldEffect) for e in [*action.effects, *action.self_effects])


def _is_revive_action(action: Action) -> bool:
    return any(isinstance(e, ReviveEffect) for e in action.effects)


def _by_damage(actions: list[Action]) -> list[Action]:
    return sorted(actions, key=lambda a: a.expected_damage(), reverse=True)


def _by_heal(actions: list[Action]) -> list[Action]:
    return sorted(actions, key=lambda a: a.expected_heal(), reverse=True)


def _find(actions: list[Action], action_id: str) -> Action | None:
    return next((a for a in actions if a.id == action_id), None)


def pick_manual_target(action: Action, state: FightState, actor: Character) -> str | None:
    """
    Picks the target of a manual action.

    Damage goes to the boss first, then to any living minion. Revives go to
    a fallen ally, heals to the most wounded living ally. Anything else
    targets the actor itself.

    Args:
        action (Action): The manual action.
        state (FightState): The fight.
        actor (Character): The acting player.

    Returns:
        str | None: The id of the target, or None if there is nobody to hit.

    """
    if action.deals_damage():
        enemies = state.opponents_of(actor)
        boss = next((e for e in enemies if e.char_type == CharacterType.BOSS), None)
        if boss is not None:
            return boss.id
        return enemies[0].id if enemies else None
    if _is_revive_action(action):
        fallen = [c for c in state.characters if c.is_player() and c.is_dead()]
        if fallen:
            return fallen[0].id
    if action.heals():
        allies = sorted(state.allies_of(actor), key=_hp_ratio)
        if allies:
            return allies[0].id
    return actor.id


# =============================================================================
# Boss AI
# =============================================================================


def choose_boss_action(actor: Character, rng: random.Random) -> Action | None:
    """
    Picks a random affordable action for a boss or a minion.

    Args:
        actor (Character): The acting boss or minion.
        rng (random.Random): The random source.

    Returns:
        Action | None: The chosen action, or None if nothing is affordable.

    """
    affordable = get_affordable_actions(actor)
    if not affordable:
        return None
    return rng.choice(affordable)


# =============================================================================
# Player strategies
# =============================================================================


def choose_aggressive(actor: Character, state: FightState) -> Action | None:
    """Always goes for the highest expected damage, rests when it cannot."""
    actions = get_affordable_actions(actor)
    if not actions:
        return None
    damage = _by_damage([a for a in actions if a.deals_damage()])
    if damage:
        return damage[0]
    return _find(actions, REST_ACTION_ID) or actions[0]


def choose_balanced(actor: Character, state: FightState) -> Action | None:
    """Heals below 30% health, otherwise prefers skills over the basic attack."""
    actions = get_affordable_actions(actor)
    if not actions:
        return None

    if _hp_ratio(actor) < 0.3:
        heals = _by_heal([a for a in actions if a.heals()])
        if heals:
            return heals[0]

    skills = _by_damage([a for a in actions if a.deals_damage() and a.id != ATTACK_ACTION_ID])
    if skills:
        return skills[0]

    return _find(actions, ATTACK_ACTION_ID) or _find(actions, REST_ACTION_ID) or actions[0]


def choose_defensive(actor: Character, state: FightState) -> Action | None:
    """Shields up first, then revives and heals the party, then attacks."""
    actions = get_affordable_actions(actor)
    if not actions:
        return None

    if actor.state.shield < actor.attributes.shield_capacity:
        shields = [a for a in actions if _is_shield_action(a)]
        if shields:
            return shields[0]

    if any(c.is_player() and c.is_dead() for c in state.characters):
        revives = [a for a in actions if _is_revive_action(a)]
        if revives:
            return revives[0]

    if any(_hp_ratio(ally) < 0.5 for ally in state.allies_of(actor)):
        heals = _by_heal([a for a in actions if a.heals()])
        if heals:
            return heals[0]

    damage = _by_damage([a for a in actions if a.deals_damage()])
    if damage:
        return damage[0]

    return _find(actions, REST_ACTION_ID) or actions[0]


STRATEGIES: dict[str, Callable[[Character, FightState], Action | None]] = {
    "aggressive": choose_aggressive,
    "balanced": choose_balanced,
    "defensive": choose_defensive,
}


def get_strategy_names() -> list[str]:
    return list(STRATEGIES)


def choose_player_action(
    actor: Character,
    state: FightState,
    strategy: str = "balanced",
) -> ActionChoice:
    """
    Picks an action, and its manual target, for a computer-controlled player.

    Args:
        actor (Character): The acting player.
        state (FightState): The fight.
        strategy (str): Name of the strategy, unknown names fall back to
            "balanced".

    Returns:
        ActionChoice: The decision, with no action when nothing is possible.

    """
    chooser = STRATEGIES.get(strategy, choose_balanced)
    action = chooser(actor, state)
    if action is None:
        return ActionChoice()
    manual_target_id = None
    if effective_target_type(actor, action) == TargetType.MANUAL:
        manual_target_id = pick_manual_target(action, state, actor)
    return ActionChoice(action=action, manual_target_id=manual_target_id)
