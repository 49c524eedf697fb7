"""
Minion module for the simulator.

Creates the minions a boss summons and adds them to a fight, honouring the
per-boss cap on living minions.
"""

from pubfight.actions.common import get_default_actions
from pubfight.character.character_stats import CharacterState
from pubfight.character.main import Character
from pubfight.core.constants import MAX_MINIONS_PER_BOSS, CharacterType
from pubfight.core.logging import log_debug, log_warning

from .fight_state import FightState


def create_minion(boss: Character, minion_id: str) -> Character | None:
    """
    Builds a fresh minion from a boss's minion template.

    Args:
        boss (Character):
            The boss summoning the minion.
        minion_id (str):
            The id of the new minion.

    Returns:
        Character | None:
            The minion at full health and AP, or None if the boss has no
            minion template.

    """
    template = boss.minion_template
    if template is None:
        log_warning(
            f"{boss.name} cannot spawn minions without a minion template",
            {"boss": boss.id},
        )
        return None
    attributes = template.attributes.model_copy(deep=True)
    if template.actions:
        actions = [action.model_copy(deep=True) for action in template.actions]
    else:
        actions = get_default_actions(CharacterType.MINION)
    return Character(
        id=minion_id,
        name=template.name,
        char_type=CharacterType.MINION,
        attributes=attributes,
        state=CharacterState(
            health=attributes.max_health,
            ap=attributes.max_ap,
            shield=0,
            is_alive=True,
        ),
        actions=actions,
        boss_id=boss.boss_id,
        owner_id=boss.id,
    )


def spawn_minions(state: FightState, boss: Character, count: int) -> list[Character]:
    """
    Adds minions to a fight on behalf of a boss.

    The request is truncated so the boss never has more than the allowed
    number of living minions; a boss already at the cap spawns nothing.
    New minions are appended to both the character list and the turn order.

    Args:
        state (FightState):
            The fight, updated in place.
        boss (Character):
            The boss summoning the minions.
        count (int):
            The number of minions requested.

    Returns:
        list[Character]:
            The minions actually spawned.

    """
    headroom = max(0, MAX_MINIONS_PER_BOSS - len(state.alive_minions_of(boss.id)))
    count = min(max(0, count), headroom)
    spawned: list[Character] = []
    for _ in range(count):
        state.spawn_counter += 1
        minion = create_minion(boss, f"{boss.id}-minion-{state.spawn_counter}")
        if minion is None:
            break
        state.characters.append(minion)
        state.turn_order.append(minion.id)
        spawned.append(minion)
    if spawned:
        log_debug(
            f"{boss.name} summons {len(spawned)} minion(s)",
            {"ids": ",".join(m.id for m in spawned)},
        )
    return spawned
