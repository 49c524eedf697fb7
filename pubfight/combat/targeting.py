"""
Targeting module for the simulator.

Resolves the targets of an action. Random targeting goes through the attack
wheel: a circle split into a miss sector, whose size depends on the
attacker's dexterity, and one sector per candidate, whose size depends on
the candidate's evasiveness. Every spin is recorded so that a fight can be
replayed or audited afterwards.
"""

import random
from typing import Literal

from pydantic import BaseModel, Field

from pubfight.actions.action import Action
from pubfight.character.main import Character
from pubfight.core.constants import (
    WHEEL_DEGREES,
    WHEEL_DEXTERITY_MISS_REDUCTION,
    WHEEL_EVASION_WEIGHT_REDUCTION,
    WHEEL_MAX_MISS_CHANCE,
    WHEEL_MIN_TARGET_WEIGHT,
    TargetType,
)
from pubfight.core.logging import log_debug

from .fight_state import FightState
from .passives import effective_target_type


class WheelSector(BaseModel):
    """A contiguous slice of the attack wheel, in degrees."""

    sector_type: Literal["miss", "target"] = Field(
        description="Whether landing in the sector misses or hits a target.",
    )
    target_id: str | None = Field(
        None,
        description="The character hit when landing in the sector.",
    )
    start: float = Field(
        description="Start angle, inclusive.",
    )
    end: float = Field(
        description="End angle, exclusive.",
    )

    def contains(self, roll: float) -> bool:
        return self.start <= roll < self.end

    @property
    def size(self) -> float:
        return self.end - self.start


class WheelResult(BaseModel):
    """The outcome of one wheel spin, with everything needed to replay it."""

    target_id: str | None = Field(
        None,
        description="The character hit, or None on a miss.",
    )
    roll: float = Field(
        description="The angle the wheel stopped at, in [0, 360).",
    )
    sectors: list[WheelSector] = Field(
        default_factory=list,
        description="The wheel layout the roll was resolved against.",
    )

    @property
    def is_miss(self) -> bool:
        return self.target_id is None


def miss_chance(attacker: Character) -> float:
    """
    Returns the fraction of the wheel taken by the miss sector.

    Args:
        attacker (Character):
            The character spinning the wheel.

    Returns:
        float:
            The miss chance in [0, 1]. Dexterity 0 gives 40%, dexterity 100
            gives 5%.

    """
    dexterity = attacker.attributes.dexterity
    chance = WHEEL_MAX_MISS_CHANCE - dexterity / 100 * WHEEL_DEXTERITY_MISS_REDUCTION
    return max(0.0, min(1.0, chance))


def target_weight(target: Character) -> float:
    """Returns the relative size of a target's sector; never below 0.05."""
    evasiveness = target.attributes.evasiveness
    return max(WHEEL_MIN_TARGET_WEIGHT, 1 - evasiveness / 100 * WHEEL_EVASION_WEIGHT_REDUCTION)


def build_wheel(attacker: Character, targets: list[Character]) -> list[WheelSector]:
    """
    Builds the attack wheel for an attacker and a pool of candidates.

    The sectors tile [0, 360) exactly: the miss sector comes first and the
    last sector always ends at 360. An empty pool yields a single miss
    sector covering the whole circle.

    Args:
        attacker (Character):
            The character spinning the wheel.
        targets (list[Character]):
            The candidates, in order.

    Returns:
        list[WheelSector]:
            The sectors, in angular order.

    """
    if not targets:
        return [WheelSector(sector_type="miss", start=0.0, end=WHEEL_DEGREES)]

    miss_size = miss_chance(attacker) * WHEEL_DEGREES
    sectors = [WheelSector(sector_type="miss", start=0.0, end=miss_size)]

    weights = [target_weight(t) for t in targets]
    total_weight = sum(weights)
    remaining = WHEEL_DEGREES - miss_size

    cursor = miss_size
    for target, weight in zip(targets, weights):
        size = remaining * weight / total_weight
        sectors.append(
            WheelSector(
                sector_type="target",
                target_id=target.id,
                start=cursor,
                end=cursor + size,
            )
        )
        cursor += size

    # Floating point drift must not leave a gap at the end of the circle.
    sectors[-1].end = WHEEL_DEGREES
    return sectors


def roll_to_target(roll: float, sectors: list[WheelSector]) -> str | None:
    """
    Resolves a roll against a wheel layout.

    Args:
        roll (float):
            The angle, in [0, 360).
        sectors (list[WheelSector]):
            The wheel layout.

    Returns:
        str | None:
            The id of the target hit, or None on a miss.

    """
    for sector in sectors:
        if sector.contains(roll):
            return sector.target_id if sector.sector_type == "target" else None
    return None


def spin_wheel(attacker: Character, targets: list[Character], rng: random.Random) -> WheelResult:
    """Spins the attack wheel once."""
    sectors = build_wheel(attacker, targets)
    roll = rng.random() * WHEEL_DEGREES
    target_id = roll_to_target(roll, sectors)
    log_debug(
        f"{attacker.name} spins the wheel",
        {"roll": f"{roll:.1f}", "target": target_id or "miss"},
    )
    return WheelResult(target_id=target_id, roll=roll, sectors=sectors)


def resolve_targets(
    state: FightState,
    actor: Character,
    action: Action,
    manual_target_id: str | None,
    rng: random.Random,
) -> tuple[list[Character], list[WheelResult]]:
    """
    Resolves the targets of an action.

    Random actions spin the wheel once per hit over the pool of living
    opponents captured before the first spin; each hit lands in the returned
    list, so the same character can appear several times. Misses only show
    up in the wheel trace.

    Args:
        state (FightState):
            The fight the action happens in.
        actor (Character):
            The character performing the action.
        action (Action):
            The action being resolved.
        manual_target_id (str | None):
            The chosen target for manual actions.
        rng (random.Random):
            The random source used by the wheel.

    Returns:
        tuple[list[Character], list[WheelResult]]:
            The targets, and the trace of every wheel spin.

    """
    target_type = effective_target_type(actor, action)

    if target_type == TargetType.SELF:
        return [actor], []

    if target_type == TargetType.MANUAL:
        # Dead targets are returned too, revive needs them.
        target = state.get_character(manual_target_id)
        return ([target] if target is not None else []), []

    if target_type == TargetType.ALL_PARTY:
        return state.alive_party(), []

    if target_type == TargetType.ALL_ENEMIES:
        return state.alive_enemies(), []

    pool = state.opponents_of(actor)
    targets: list[Character] = []
    wheel_results: list[WheelResult] = []
    for _ in range(action.hits):
        spin = spin_wheel(actor, pool, rng)
        wheel_results.append(spin)
        if spin.target_id is not None:
            target = state.get_character(spin.target_id)
            if target is not None:
                targets.append(target)
    return targets, wheel_results
