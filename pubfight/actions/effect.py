"""
Effect module for the simulator.

Defines the declarative effects carried by actions. Every effect is a small
pydantic model tagged by its ``effect_type`` literal, so a list of effects
can be loaded straight from JSON and the effect applier can dispatch on the
concrete class.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

ModifiableAttribute = Literal[
    "max_health",
    "max_ap",
    "power",
    "shield_capacity",
    "shield_strength",
    "dexterity",
    "evasiveness",
]


class BaseEffect(BaseModel):
    """Fields shared by every effect."""

    amount: int = Field(
        0,
        description="Magnitude of the effect (damage, heal, shield points, AP delta, ...).",
    )

    @property
    def display_name(self) -> str:
        return type(self).__name__.replace("Effect", "")


class DamageEffect(BaseEffect):
    """Deals damage, absorbed by shields unless piercing."""

    effect_type: Literal["damage"] = "damage"
    piercing: bool = Field(
        False,
        description="If True the damage ignores shields entirely.",
    )


class HealEffect(BaseEffect):
    """Restores health up to the maximum."""

    effect_type: Literal["heal"] = "heal"
    drain: bool = Field(
        False,
        description="If True the heal equals the health damage dealt by the same action.",
    )


class AddShieldEffect(BaseEffect):
    """Adds shield points up to the shield capacity."""

    effect_type: Literal["addShield"] = "addShield"


class ModifyAPEffect(BaseEffect):
    """Adds (or removes, when negative) action points."""

    effect_type: Literal["modifyAP"] = "modifyAP"


class RemoveShieldEffect(BaseEffect):
    """Strips every shield point from the target."""

    effect_type: Literal["removeShield"] = "removeShield"


class ReviveEffect(BaseEffect):
    """Brings a dead character back with ``amount`` health."""

    effect_type: Literal["revive"] = "revive"


class SpawnMinionEffect(BaseEffect):
    """Summons minions next to the acting boss."""

    effect_type: Literal["spawnMinion"] = "spawnMinion"
    minion_count: int = Field(
        1,
        ge=0,
        description="Number of minions requested.",
    )


class ModifyAttributeEffect(BaseEffect):
    """Adds ``amount`` to one of the target's base attributes."""

    effect_type: Literal["modifyAttribute"] = "modifyAttribute"
    attribute: ModifiableAttribute = Field(
        description="Name of the attribute to change.",
    )


Effect = Annotated[
    Union[
        DamageEffect,
        HealEffect,
        AddShieldEffect,
        ModifyAPEffect,
        RemoveShieldEffect,
        ReviveEffect,
        SpawnMinionEffect,
        ModifyAttributeEffect,
    ],
    Field(discriminator="effect_type"),
]
