"""
Fight setup module for the simulator.

Turns player builds and a boss definition into a ready-to-play FightState:
characters at full resources, passives applied, optional minions on the
field and a shuffled turn order.
"""

import random
import uuid

from pydantic import BaseModel, Field

from pubfight.actions.action import Action
from pubfight.actions.common import get_default_actions
from pubfight.character.character_stats import Attributes, CharacterState
from pubfight.character.main import Character, MinionTemplate
from pubfight.character.passive import Passive
from pubfight.core.constants import BOSS_HP_MIN_SCALE, BOSS_HP_REFERENCE_PARTY, CharacterType
from pubfight.core.error_handling import FightDataError, require_non_empty, require_unique_ids
from pubfight.core.logging import log_error, log_info

from . import passives
from .fight_state import FightState
from .minions import spawn_minions


class PlayerBuild(BaseModel):
    """A player character as it enters a fight, with its skills already resolved."""

    id: str = Field(
        description="Identifier of the player, unique within the fight.",
    )
    name: str = Field(
        description="Display name of the player.",
    )
    character_class: str | None = Field(
        None,
        description="Class of the player.",
    )
    level: int = Field(
        1,
        ge=1,
        description="Level of the player.",
    )
    attributes: Attributes = Field(
        description="Base attributes, level-up points included.",
    )
    actions: list[Action] = Field(
        default_factory=list,
        description="Actions unlocked through skills. Common actions are added on top.",
    )
    passives: list[Passive] = Field(
        default_factory=list,
        description="Passives unlocked through skills.",
    )
    owned_skill_ids: list[str] = Field(
        default_factory=list,
        description="Skills the player owns.",
    )
    include_common_actions: bool = Field(
        True,
        description="Whether attack, shield and rest are added to the actions.",
    )


class BossDefinition(BaseModel):
    """Catalog entry of a boss."""

    id: str = Field(
        description="Catalog identifier of the boss.",
    )
    name: str = Field(
        description="Display name of the boss.",
    )
    level: int = Field(
        1,
        description="Level at which the boss is fought.",
    )
    archetype: str | None = Field(
        None,
        description="Boss archetype, informational.",
    )
    attributes: Attributes = Field(
        description="Base attributes, health balanced for a party of four.",
    )
    abilities: list[Action] = Field(
        default_factory=list,
        description="The boss's actions.",
    )
    minion: MinionTemplate | None = Field(
        None,
        description="Template of the minions the boss can spawn.",
    )


def scaled_boss_health(base_health: int, party_size: int) -> int:
    """
    Scales a boss's maximum health to the party size.

    Bosses are balanced around four players. Smaller parties face a weaker
    boss, down to half health; larger parties face a proportionally
    tougher one.
    """
    scale = max(BOSS_HP_MIN_SCALE, party_size / BOSS_HP_REFERENCE_PARTY)
    return max(1, int(base_health * scale + 0.5))


def create_player(build: PlayerBuild) -> Character:
    """Creates a player character at full health and AP from a build."""
    actions = get_default_actions(CharacterType.PLAYER) if build.include_common_actions else []
    common_ids = {action.id for action in actions}
    for action in build.actions:
        if action.id in common_ids:
            continue
        action = action.model_copy(deep=True)
        action.uses_remaining = action.max_uses
        actions.append(action)

    attributes = build.attributes.model_copy(deep=True)
    return Character(
        id=build.id,
        name=build.name,
        char_type=CharacterType.PLAYER,
        attributes=attributes,
        state=CharacterState(health=attributes.max_health, ap=attributes.max_ap),
        actions=actions,
        passives=[passive.model_copy(deep=True) for passive in build.passives],
        character_class=build.character_class,
        level=build.level,
        owned_skill_ids=list(build.owned_skill_ids),
    )


def create_boss(definition: BossDefinition, party_size: int, boss_id: str) -> Character:
    """Creates a boss character from its definition, scaled to the party size."""
    attributes = definition.attributes.model_copy(deep=True)
    attributes.max_health = scaled_boss_health(attributes.max_health, party_size)
    actions = []
    for ability in definition.abilities:
        action = ability.model_copy(deep=True)
        action.uses_remaining = action.max_uses
        actions.append(action)
    return Character(
        id=boss_id,
        name=definition.name,
        char_type=CharacterType.BOSS,
        attributes=attributes,
        state=CharacterState(health=attributes.max_health, ap=attributes.max_ap),
        actions=actions,
        level=definition.level,
        boss_id=definition.id,
        archetype=definition.archetype,
        minion_template=(
            definition.minion.model_copy(deep=True) if definition.minion is not None else None
        ),
    )


def create_fight(
    player_builds: list[PlayerBuild],
    boss_definition: BossDefinition,
    rng: random.Random,
    initial_minions: int = 0,
    level: int | None = None,
) -> FightState:
    """
    Creates a new fight between a party and a boss.

    Args:
        player_builds (list[PlayerBuild]):
            The party, at least one player.
        boss_definition (BossDefinition):
            The boss to fight.
        rng (random.Random):
            Random source used for the fight id and the turn order.
        initial_minions (int):
            Minions the boss starts the fight with.
        level (int | None):
            Level of the fight, defaults to the boss's level.

    Returns:
        FightState:
            The fight, ready for its first action.

    Raises:
        FightDataError: If the party is empty, ids collide, or the boss has
            no actions.

    """
    require_non_empty(player_builds, "player build")
    if not boss_definition.abilities:
        log_error(f"Boss '{boss_definition.id}' has no abilities", {"boss": boss_definition.id})
        raise FightDataError(
            f"Boss {boss_definition.id} has no abilities",
            {"boss": boss_definition.id},
        )
    if initial_minions > 0 and boss_definition.minion is None:
        log_error(
            f"Boss '{boss_definition.id}' cannot start with minions",
            {"boss": boss_definition.id},
        )
        raise FightDataError(
            f"Boss {boss_definition.id} has no minion template",
            {"boss": boss_definition.id},
        )
    for build in player_builds:
        require_unique_ids((a.id for a in build.actions), f"action of {build.id}")
    require_unique_ids((a.id for a in boss_definition.abilities), f"ability of {boss_definition.id}")

    boss_id = f"boss-{uuid.UUID(int=rng.getrandbits(128)).hex[:8]}"
    require_unique_ids([*(b.id for b in player_builds), boss_id], "character")

    players = [create_player(build) for build in player_builds]
    boss = create_boss(boss_definition, len(players), boss_id)
    characters = [*players, boss]

    for character in characters:
        passives.apply_always_passives(character)
    passives.apply_fight_start_passives(characters)

    state = FightState(
        id=uuid.UUID(int=rng.getrandbits(128)).hex,
        level=level if level is not None else boss_definition.level,
        characters=characters,
        turn_order=[character.id for character in characters],
    )
    if initial_minions > 0:
        spawn_minions(state, boss, initial_minions)
    # Starting minions take part in the shuffle like everyone else.
    rng.shuffle(state.turn_order)

    log_info(
        f"Fight created: {len(players)} player(s) vs {boss.name}",
        {"fight": state.id[:8], "boss_hp": boss.attributes.max_health},
    )
    return state
