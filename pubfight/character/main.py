"""
Character management module for the simulator.

Defines the Character model shared by players, bosses and minions, and the
minion template bosses use to summon helpers.
"""

from typing import Iterator

from pydantic import BaseModel, Field

from pubfight.actions.action import Action
from pubfight.core.constants import CharacterType, PassiveEffectType, PassiveTrigger
from pubfight.core.utils import percent

from .character_stats import Attributes, CharacterState
from .passive import Passive


class MinionTemplate(BaseModel):
    """Blueprint of the minions a boss can spawn."""

    name: str = Field(
        description="Display name of the spawned minions.",
    )
    attributes: Attributes = Field(
        description="Base attributes of a freshly spawned minion.",
    )
    actions: list[Action] = Field(
        default_factory=list,
        description="Actions of the minion. Common actions are used when empty.",
    )


class Character(BaseModel):
    """
    Represents a combatant: a player, a boss or a minion.

    A character owns its attributes, its state, its actions and its passives.
    Actions and passives carry per-fight counters, so a character must never
    share them with another character instance.

    Attributes:
        id (str):
            Identifier, unique within a fight.
        name (str):
            Display name.
        char_type (CharacterType):
            Role of the character (player, boss or minion).
        attributes (Attributes):
            Base attributes.
        state (CharacterState):
            Current resources.
        actions (list[Action]):
            Actions the character can take.
        passives (list[Passive]):
            Passive abilities of the character.

    """

    id: str = Field(
        description="Identifier of the character, unique within a fight.",
    )
    name: str = Field(
        description="Display name of the character.",
    )
    char_type: CharacterType = Field(
        description="Role of the character in the fight.",
    )
    attributes: Attributes = Field(
        description="Base attributes of the character.",
    )
    state: CharacterState = Field(
        default_factory=CharacterState,
        description="Current resources of the character.",
    )
    actions: list[Action] = Field(
        default_factory=list,
        description="Actions the character can take.",
    )
    passives: list[Passive] = Field(
        default_factory=list,
        description="Passive abilities of the character.",
    )
    # Players only.
    character_class: str | None = Field(
        None,
        description="Class of a player character.",
    )
    level: int = Field(
        1,
        description="Level of the character.",
    )
    owned_skill_ids: list[str] = Field(
        default_factory=list,
        description="Skills a player unlocked, already resolved into actions and passives.",
    )
    # Bosses and minions only.
    boss_id: str | None = Field(
        None,
        description="Catalog id of the boss definition (bosses and their minions).",
    )
    archetype: str | None = Field(
        None,
        description="Boss archetype, informational.",
    )
    minion_template: MinionTemplate | None = Field(
        None,
        description="Blueprint used when the boss spawns minions.",
    )
    owner_id: str | None = Field(
        None,
        description="Id of the boss that spawned this minion.",
    )

    # ============================================================================
    # DISPLAY
    # ============================================================================

    @property
    def colored_name(self) -> str:
        """Returns the character's name colored by its role."""
        return self.char_type.colorize(self.name)

    # ============================================================================
    # STATE QUERIES
    # ============================================================================

    def is_alive(self) -> bool:
        return self.state.is_alive

    def is_dead(self) -> bool:
        return not self.state.is_alive

    def is_player(self) -> bool:
        return self.char_type == CharacterType.PLAYER

    def is_enemy(self) -> bool:
        """True for bosses and minions."""
        return self.char_type in (CharacterType.BOSS, CharacterType.MINION)

    def hp_percent(self) -> float:
        """Returns the current health as a percentage of the maximum."""
        return percent(self.state.health, self.attributes.max_health)

    def get_action(self, action_id: str) -> Action | None:
        """Returns the action with the given id, or None."""
        return next((a for a in self.actions if a.id == action_id), None)

    def iter_passives(
        self,
        effect_type: PassiveEffectType | None = None,
        trigger: PassiveTrigger | None = None,
        include_used: bool = False,
    ) -> Iterator[Passive]:
        """
        Iterates over the character's passives, optionally filtered.

        Args:
            effect_type (PassiveEffectType | None):
                Only yield passives with this effect tag.
            trigger (PassiveTrigger | None):
                Only yield passives evaluated at this trigger point.
            include_used (bool):
                Also yield single-use passives that already fired.

        Yields:
            Passive: The matching passives, in declaration order.

        """
        for passive in self.passives:
            if effect_type is not None and not passive.is_a(effect_type):
                continue
            if trigger is not None and passive.trigger != trigger:
                continue
            if passive.used and not include_used:
                continue
            yield passive

    def passive_total(
        self,
        effect_type: PassiveEffectType,
        trigger: PassiveTrigger | None = None,
    ) -> int:
        """Sums the amount of every matching, unused passive."""
        return sum(p.amount for p in self.iter_passives(effect_type, trigger))

    def has_passive(
        self,
        effect_type: PassiveEffectType,
        trigger: PassiveTrigger | None = None,
    ) -> bool:
        return next(self.iter_passives(effect_type, trigger), None) is not None

    def __str__(self) -> str:
        return (
            f"{self.name} [{self.char_type}] "
            f"HP {self.state.health}/{self.attributes.max_health} "
            f"AP {self.state.ap}/{self.attributes.max_ap} "
            f"SH {self.state.shield}/{self.attributes.shield_capacity}"
        )
