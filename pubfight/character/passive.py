"""
Passive ability module for the simulator.

A passive is a trigger paired with a declarative effect. The effect type is
kept as a free string so catalogs can carry tags this version of the engine
does not know yet; the dispatcher ignores those.
"""

from typing import Any

from pydantic import BaseModel, Field

from pubfight.core.constants import PassiveEffectType, PassiveTrigger


class PassiveCondition(BaseModel):
    """Optional gate evaluated against the holder's current state."""

    hp_below: int | None = Field(
        None,
        description="Only applies while health is below this percentage of max health.",
    )


class PassiveEffect(BaseModel):
    """The effect side of a passive ability."""

    effect_type: str = Field(
        description="Passive effect tag (see PassiveEffectType for the known ones).",
    )
    amount: int = Field(
        0,
        description="Magnitude of the passive.",
    )
    condition: PassiveCondition | None = Field(
        None,
        description="Optional condition gating the passive.",
    )


class Passive(BaseModel):
    """
    A passive ability owned by a character.

    The ``used`` flag is per-fight state for single-use passives (survive
    fatal damage, first-strike bonus, low-HP reactions).
    """

    skill_id: str = Field(
        "",
        description="Identifier of the skill granting the passive.",
    )
    name: str = Field(
        "",
        description="Display name of the passive.",
    )
    trigger: PassiveTrigger = Field(
        description="When the passive is evaluated.",
    )
    effect: PassiveEffect = Field(
        description="What the passive does.",
    )
    used: bool = Field(
        False,
        description="True once a single-use passive has fired this fight.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.name:
            self.name = self.skill_id or self.effect.effect_type

    @property
    def amount(self) -> int:
        return self.effect.amount

    def is_a(self, effect_type: PassiveEffectType) -> bool:
        """Checks whether the passive carries the given effect tag."""
        return self.effect.effect_type == effect_type.value

    def is_known(self) -> bool:
        """Checks whether the passive carries an effect tag the engine understands."""
        return self.effect.effect_type in {t.value for t in PassiveEffectType}

    def hp_threshold(self, default: int) -> int:
        """Returns the condition's HP threshold, or ``default`` if none is set."""
        if self.effect.condition and self.effect.condition.hp_below is not None:
            return self.effect.condition.hp_below
        return default
