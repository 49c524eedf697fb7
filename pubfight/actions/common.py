"""
Common actions available to every character.

Players always get attack, shield and rest; bosses and minions get attack and
shield (their AP is refilled at the start of each of their turns, so they
never need to rest).
"""

from pubfight.core.constants import (
    ATTACK_ACTION_ID,
    REST_ACTION_ID,
    SHIELD_ACTION_ID,
    CharacterType,
    TargetType,
)

from .action import Action
from .effect import AddShieldEffect, DamageEffect, ModifyAPEffect

ATTACK = Action(
    id=ATTACK_ACTION_ID,
    name="Attack",
    description="Spin the wheel and hit whoever it lands on.",
    cost=1,
    target_type=TargetType.RANDOM,
    hits=1,
    effects=[DamageEffect(amount=10)],
)

SHIELD = Action(
    id=SHIELD_ACTION_ID,
    name="Shield",
    description="Raise one shield point.",
    cost=1,
    target_type=TargetType.SELF,
    self_effects=[AddShieldEffect(amount=1)],
)

REST = Action(
    id=REST_ACTION_ID,
    name="Rest",
    description="Catch your breath and recover 2 AP.",
    cost=0,
    target_type=TargetType.SELF,
    self_effects=[ModifyAPEffect(amount=2)],
)


def get_default_actions(char_type: CharacterType) -> list[Action]:
    """
    Returns fresh copies of the common actions for a character type.

    Args:
        char_type (CharacterType): The role of the character.

    Returns:
        list[Action]: Independent copies, safe to mutate per fight.

    """
    actions = [ATTACK, SHIELD]
    if char_type == CharacterType.PLAYER:
        actions.append(REST)
    return [action.model_copy(deep=True) for action in actions]
