"""
Fight state module for the simulator.

Defines the FightState snapshot threaded through every engine operation, and
the queries used to read it.
"""

from pydantic import BaseModel, Field

from pubfight.character.main import Character
from pubfight.core.constants import CharacterType, FightResult


class FightState(BaseModel):
    """
    Complete snapshot of a fight.

    The state is a plain serialisable value: engine operations never mutate
    the instance they receive, they work on a deep copy and hand it back.
    The turn order is fixed when the fight is created; spawned minions are
    appended to it.
    """

    id: str = Field(
        description="Identifier of the fight.",
    )
    level: int | None = Field(
        None,
        description="Level of the boss being fought, if known.",
    )
    characters: list[Character] = Field(
        default_factory=list,
        description="Every character taking part, dead ones included.",
    )
    turn_order: list[str] = Field(
        default_factory=list,
        description="Character ids in acting order.",
    )
    current_turn_index: int = Field(
        0,
        ge=0,
        description="Index in turn_order of the character whose turn it is.",
    )
    is_over: bool = Field(
        False,
        description="True once one side has been wiped out.",
    )
    result: FightResult = Field(
        FightResult.ONGOING,
        description="Outcome of the fight.",
    )
    spawn_counter: int = Field(
        0,
        ge=0,
        description="Number of minions spawned so far, used to build their ids.",
    )

    def copy_state(self) -> "FightState":
        """Returns an independent deep copy of the fight."""
        return self.model_copy(deep=True)

    def get_character(self, character_id: str | None) -> Character | None:
        """Returns the character with the given id, or None."""
        if character_id is None:
            return None
        return next((c for c in self.characters if c.id == character_id), None)

    def current_character(self) -> Character | None:
        """Returns the character whose turn it is."""
        if not self.turn_order:
            return None
        return self.get_character(self.turn_order[self.current_turn_index])

    def alive_party(self) -> list[Character]:
        """Returns the living player characters."""
        return [c for c in self.characters if c.is_player() and c.is_alive()]

    def alive_enemies(self) -> list[Character]:
        """Returns the living bosses and minions."""
        return [c for c in self.characters if c.is_enemy() and c.is_alive()]

    def alive_minions_of(self, boss_id: str) -> list[Character]:
        """Returns the living minions spawned by the given boss."""
        return [
            c
            for c in self.characters
            if c.char_type == CharacterType.MINION and c.owner_id == boss_id and c.is_alive()
        ]

    def opponents_of(self, actor: Character) -> list[Character]:
        """Returns the living characters on the other side of the actor."""
        return self.alive_enemies() if actor.is_player() else self.alive_party()

    def allies_of(self, actor: Character) -> list[Character]:
        """Returns the living characters on the actor's side (actor included)."""
        return self.alive_party() if actor.is_player() else self.alive_enemies()


def check_fight_end(state: FightState) -> None:
    """
    Marks the fight as over if one side has been wiped out.

    Args:
        state (FightState):
            The fight to check, updated in place.

    """
    if not state.alive_party():
        state.is_over = True
        state.result = FightResult.DEFEAT
    elif not state.alive_enemies():
        state.is_over = True
        state.result = FightResult.VICTORY
