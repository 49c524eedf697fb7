"""
Fight runner module for the simulator.

Drives a fight from its first action to its end, asking the AI (or a human,
through the terminal interface) for decisions and collecting statistics.
A maximum number of turns keeps degenerate builds from stalling forever.
"""

import random
from typing import TYPE_CHECKING, Literal

from catchery import log_warning
from pydantic import BaseModel, Field

from pubfight.character.main import Character
from pubfight.core.constants import MAX_FIGHT_TURNS
from pubfight.core.logging import log_debug, log_info

from .executor import ActionResult, execute
from .fight_state import FightState
from .npc_ai import ActionChoice, choose_boss_action, choose_player_action
from .scheduler import advance_turn

if TYPE_CHECKING:
    from pubfight.ui.cli_interface import PlayerInterface


class FightRecord(BaseModel):
    """Statistics of a completed (or timed out) fight."""

    result: Literal["victory", "defeat", "timeout"] = Field(
        "timeout",
        description="Outcome, timeout when the turn limit was reached first.",
    )
    turns: int = Field(
        0,
        description="Number of turns played.",
    )
    player_damage_dealt: dict[str, int] = Field(
        default_factory=dict,
        description="Health damage dealt, per player id.",
    )
    player_damage_taken: dict[str, int] = Field(
        default_factory=dict,
        description="Health damage taken, per player id.",
    )
    player_healing_done: dict[str, int] = Field(
        default_factory=dict,
        description="Health restored, per player id.",
    )
    boss_healing_done: int = Field(
        0,
        description="Health restored by the boss side.",
    )
    shield_absorbed: int = Field(
        0,
        description="Damage absorbed by shields, both sides.",
    )
    actions_used: dict[str, int] = Field(
        default_factory=dict,
        description="Successful uses, per action id.",
    )
    player_survived: dict[str, bool] = Field(
        default_factory=dict,
        description="Whether each player was alive at the end.",
    )
    final_state: FightState | None = Field(
        None,
        description="The state the fight ended in.",
    )


class FightRunner:
    """
    Runs a fight to completion.

    Every turn the current character picks an action: bosses and minions at
    random, players through the headless strategy or, when an interface is
    given, through the terminal. Rejected actions and characters that cannot
    act simply pass their turn.
    """

    def __init__(
        self,
        state: FightState,
        rng: random.Random,
        strategy: str = "balanced",
        max_turns: int = MAX_FIGHT_TURNS,
        ui: "PlayerInterface | None" = None,
    ) -> None:
        """
        Initialize the runner.

        Args:
            state (FightState): The fight to run.
            rng (random.Random): Random source for the AI and the wheel.
            strategy (str): Strategy of computer-controlled players.
            max_turns (int): Turn limit before the fight is declared a timeout.
            ui (PlayerInterface | None): Terminal interface for human players,
                None for a fully headless fight.

        """
        self.state: FightState = state
        self.rng: random.Random = rng
        self.strategy: str = strategy
        self.max_turns: int = max_turns
        self.ui: "PlayerInterface | None" = ui
        self.turn_number: int = 0
        self.record: FightRecord = FightRecord()
        for character in state.characters:
            if character.is_player():
                self.record.player_damage_dealt[character.id] = 0
                self.record.player_damage_taken[character.id] = 0
                self.record.player_healing_done[character.id] = 0
                self.record.player_survived[character.id] = True

    def is_fight_over(self) -> bool:
        return self.state.is_over or self.turn_number >= self.max_turns

    def choose(self, actor: Character) -> ActionChoice:
        """Asks the right decision maker for the actor's next action."""
        if actor.is_player():
            if self.ui is not None:
                return self.ui.ask_for_action(actor, self.state)
            return choose_player_action(actor, self.state, self.strategy)
        return ActionChoice(action=choose_boss_action(actor, self.rng))

    def run_turn(self) -> ActionResult | None:
        """
        Plays the current character's turn and moves on to the next one.

        Returns:
            ActionResult | None: The result of the action taken, None if the
            character passed.

        """
        actor = self.state.current_character()
        result: ActionResult | None = None

        if actor is not None and actor.is_alive():
            choice = self.choose(actor)
            if choice.action is not None:
                new_state, result = execute(
                    self.state,
                    actor.id,
                    choice.action.id,
                    choice.manual_target_id,
                    self.rng,
                )
                if result.success:
                    self._track(actor, result)
                    self.state = new_state
                else:
                    log_debug(
                        f"{actor.name} passes: {result.reason}",
                        {"action": choice.action.id},
                    )
                if self.ui is not None:
                    self.ui.show_result(self.state, result)

        if not self.state.is_over:
            self.state = advance_turn(self.state)
        self.turn_number += 1
        return result

    def run(self) -> FightRecord:
        """
        Runs the fight until one side wins or the turn limit is reached.

        Returns:
            FightRecord: The statistics of the fight.

        """
        while not self.is_fight_over():
            self.run_turn()

        self.record.turns = self.turn_number
        if self.state.is_over:
            self.record.result = self.state.result.value
        else:
            log_warning(
                "Fight stopped at the turn limit",
                {"fight": self.state.id, "turns": self.turn_number},
            )
        for character in self.state.characters:
            if character.is_player():
                self.record.player_survived[character.id] = character.is_alive()
        self.record.final_state = self.state

        log_info(
            f"Fight over: {self.record.result}",
            {"turns": self.record.turns},
        )
        return self.record

    def _track(self, actor: Character, result: ActionResult) -> None:
        record = self.record
        record.actions_used[result.action_id] = record.actions_used.get(result.action_id, 0) + 1
        record.shield_absorbed += result.total_shield_absorbed()

        for target in result.target_results:
            for effect in target.effects:
                if effect.effect_type == "damage":
                    if actor.is_player():
                        record.player_damage_dealt[actor.id] += effect.health_damage
                    if target.target_id in record.player_damage_taken:
                        record.player_damage_taken[target.target_id] += effect.health_damage
                elif effect.effect_type == "heal":
                    if actor.is_player():
                        record.player_healing_done[actor.id] += effect.amount
                    else:
                        record.boss_healing_done += effect.amount

        for effect in result.self_results:
            if effect.effect_type != "heal":
                continue
            if actor.is_player():
                record.player_healing_done[actor.id] += effect.amount
            else:
                record.boss_healing_done += effect.amount


def run_fight(
    state: FightState,
    rng: random.Random,
    strategy: str = "balanced",
    max_turns: int = MAX_FIGHT_TURNS,
    ui: "PlayerInterface | None" = None,
) -> FightRecord:
    """Runs a fight to completion and returns its statistics."""
    return FightRunner(state, rng, strategy, max_turns, ui).run()
