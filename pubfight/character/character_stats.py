"""
Character stats module for the simulator.

Defines the base attributes of a character and its mutable per-fight state
(health, AP, shield and whether it is still standing).
"""

from pydantic import BaseModel, Field


class Attributes(BaseModel):
    """
    Baseline numbers of a character.

    They only change through explicit attribute-modifying effects, fight-start
    passives, or level-up allocation done outside the engine. Dexterity and
    evasiveness are nominally 0-100 but may leave that range under debuffs;
    negative evasiveness (provoke) makes a character easier to hit.
    """

    max_health: int = Field(
        description="Maximum health.",
    )
    max_ap: int = Field(
        description="Maximum action points.",
    )
    power: int = Field(
        0,
        description="Flat bonus added to every damage effect the character deals.",
    )
    shield_capacity: int = Field(
        0,
        description="Maximum number of shield points.",
    )
    shield_strength: int = Field(
        0,
        description="Damage absorbed by a single shield point.",
    )
    dexterity: int = Field(
        50,
        description="Accuracy, shrinks the miss sector of the wheel.",
    )
    evasiveness: int = Field(
        0,
        description="Dodge, shrinks the character's slice of the wheel.",
    )


class CharacterState(BaseModel):
    """
    Mutable resources of a character during a fight.

    Invariants maintained by the engine:
        0 <= health <= max_health
        0 <= ap <= max_ap
        0 <= shield <= shield_capacity
        is_alive is False iff health reached 0 without a survive-fatal save.
    """

    health: int = Field(
        0,
        description="Current health.",
    )
    ap: int = Field(
        0,
        description="Current action points.",
    )
    shield: int = Field(
        0,
        description="Current shield points.",
    )
    is_alive: bool = Field(
        True,
        description="Whether the character is still in the fight.",
    )
