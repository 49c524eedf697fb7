"""
Action module for the simulator.

Defines the Action model: what a character can do on its turn, what it costs,
how it picks targets and which effects it applies.
"""

from typing import Any

from pydantic import BaseModel, Field

from pubfight.core.constants import TargetType

from .effect import DamageEffect, Effect, HealEffect


class Action(BaseModel):
    """
    An action a character can take on its turn.

    Actions are plain data. The only per-fight mutable field is
    ``uses_remaining``, which is why every character gets its own deep copy
    of its actions when a fight is created.
    """

    id: str = Field(
        description="Unique identifier of the action on its character.",
    )
    name: str = Field(
        "",
        description="Display name of the action.",
    )
    description: str = Field(
        "",
        description="A brief description of the action.",
    )
    cost: int = Field(
        0,
        ge=0,
        description="Base AP cost of the action.",
    )
    target_type: TargetType = Field(
        TargetType.SELF,
        description="How the action resolves its targets.",
    )
    hits: int = Field(
        1,
        ge=0,
        description="Number of wheel spins for random-target actions.",
    )
    effects: list[Effect] = Field(
        default_factory=list,
        description="Effects applied, in order, to every resolved target.",
    )
    self_effects: list[Effect] = Field(
        default_factory=list,
        description="Effects applied, in order, to the actor after the target effects.",
    )
    max_uses: int | None = Field(
        None,
        ge=1,
        description="Uses per fight, None for unlimited.",
    )
    uses_remaining: int | None = Field(
        None,
        ge=0,
        description="Uses left in the current fight, None for unlimited.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.id:
            raise ValueError("Action id must be a non-empty string")
        if not self.name:
            self.name = self.id.replace("_", " ").title()
        if self.max_uses is not None and self.uses_remaining is None:
            self.uses_remaining = self.max_uses

    def is_exhausted(self) -> bool:
        """True if the action has a use limit and no uses left."""
        return self.uses_remaining is not None and self.uses_remaining <= 0

    def deals_damage(self) -> bool:
        return any(isinstance(e, DamageEffect) for e in self.effects)

    def heals(self) -> bool:
        return any(isinstance(e, HealEffect) for e in [*self.effects, *self.self_effects])

    def expected_damage(self) -> int:
        """Sum of the base damage of every hit, ignoring misses and modifiers."""
        per_hit = sum(e.amount for e in self.effects if isinstance(e, DamageEffect))
        return per_hit * max(1, self.hits)

    def expected_heal(self) -> int:
        """Sum of the fixed (non-drain) heals of the action."""
        return sum(
            e.amount
            for e in [*self.effects, *self.self_effects]
            if isinstance(e, HealEffect) and not e.drain
        )
