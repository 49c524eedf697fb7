"""
User interface module for the simulator.

Provides console-based user interface components for playing a party member
by hand: action and target menus, and the display of what each action did.
"""

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from pubfight.actions.action import Action
from pubfight.actions.effect import ReviveEffect
from pubfight.character.main import Character
from pubfight.combat.executor import ActionResult, can_execute
from pubfight.combat.fight_state import FightState
from pubfight.combat.npc_ai import ActionChoice
from pubfight.combat.passives import effective_cost, effective_target_type
from pubfight.core.constants import TargetType
from pubfight.core.sheets import action_to_string, print_action_result, print_fight_status
from pubfight.core.utils import ccapture

# one session keeps history
session: PromptSession = PromptSession(erase_when_done=True)


class PlayerInterface:
    """
    Command-line interface for the human-controlled party members.

    Provides Rich table-based menus for action and target selection. Uses
    prompt_toolkit for interactive input with numeric shortcuts; 'q' passes
    the turn (or goes back from the target menu).
    """

    def __init__(self) -> None:
        """Initialize the PlayerInterface with no configuration needed."""

    def choose_action(
        self,
        actor: Character,
        actions: list[Action],
        exit_entry: str | None = "Pass",
    ) -> Action | str | None:
        """Choose an action from a list of available actions.

        Args:
            actor (Character): The character about to act, used for costs.
            actions (list[Action]): The list of available actions to choose from.
            exit_entry (Optional[str], optional): Text for exit option. Defaults to "Pass".

        Returns:
            Optional[Action | str]: The selected action, or "q" for exit.

        """
        if not actions:
            return None
        # Create a table of actions.
        table = Table(title=f"{actor.name}'s actions", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Cost", justify="right")
        table.add_column("Details", style="dim")
        for i, action in enumerate(actions, 1):
            table.add_row(
                str(i),
                action.name,
                str(effective_cost(actor, action)),
                action_to_string(action),
            )
        # Add the exit entry if requested.
        if exit_entry:
            table.add_row()
            table.add_row("q", exit_entry, "", "")
        # Generate a prompt with the table and a question.
        prompt = "\n" + ccapture(table) + "\nAction > "
        while True:
            # Prompt the user for input.
            answer = session.prompt(ANSI(prompt))
            # Keep asking until the user provides a valid input.
            if not answer:
                continue
            # If the user typed a number, return the corresponding action.
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(actions):
                return actions[index]
            # If the user typed 'q', return a generic "q".
            if exit_entry and answer.lower() == "q":
                return "q"

    def choose_target(
        self,
        targets: list[Character],
        exit_entry: str | None = "Back",
    ) -> Character | str | None:
        """Choose a target from a list of characters.

        Args:
            targets (list[Character]): The list of target characters to choose from.
            exit_entry (Optional[str], optional): Text for exit option. Defaults to "Back".

        Returns:
            Optional[Character | str]: The selected target character, or "q" for exit.

        """
        # If there are no targets, return None.
        if not targets:
            return None
        # Sort targets for consistent display.
        sorted_targets = sorted(targets, key=lambda t: t.name.lower())
        # Create a table of targets.
        table = Table(title="Targets", pad_edge=False)
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Name", style="bold")
        table.add_column("HP", justify="right")
        table.add_column("Shield", justify="right")
        for i, target in enumerate(sorted_targets, 1):
            table.add_row(
                str(i),
                target.colored_name,
                f"{target.state.health:>3}/{target.attributes.max_health:<3}",
                f"{target.state.shield}/{target.attributes.shield_capacity}",
            )
        # Add the exit entry if requested.
        if exit_entry:
            table.add_row()
            table.add_row("q", exit_entry, "", "")
        # Generate a prompt with the table and a question.
        prompt = "\n" + ccapture(table) + "\nTarget > "
        while True:
            # Prompt the user for input.
            answer = session.prompt(ANSI(prompt))
            # Keep asking until the user provides a valid input.
            if not answer:
                continue
            # If the user typed a number, return the corresponding target.
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(sorted_targets):
                return sorted_targets[index]
            # If the user typed 'q', return a generic "q".
            if exit_entry and answer.lower() == "q":
                return "q"

    def ask_for_action(self, actor: Character, state: FightState) -> ActionChoice:
        """
        Asks the user what the actor should do this turn.

        Only actions that pass validation are offered. Manual actions are
        followed by a target menu; backing out of it returns to the action
        menu.

        Args:
            actor (Character): The player character whose turn it is.
            state (FightState): The current fight.

        Returns:
            ActionChoice: The chosen action and target, empty to pass.

        """
        print_fight_status(state)
        actions = [a for a in actor.actions if can_execute(actor, a)]
        while True:
            action = self.choose_action(actor, actions)
            if not isinstance(action, Action):
                return ActionChoice()
            if effective_target_type(actor, action) != TargetType.MANUAL:
                return ActionChoice(action=action)
            target = self.choose_target(self.manual_candidates(actor, action, state))
            if isinstance(target, Character):
                return ActionChoice(action=action, manual_target_id=target.id)

    def show_result(self, state: FightState, result: ActionResult) -> None:
        """Prints what an action did."""
        print_action_result(state, result)

    @staticmethod
    def manual_candidates(
        actor: Character,
        action: Action,
        state: FightState,
    ) -> list[Character]:
        """
        Returns the characters a manual action can sensibly be aimed at.

        Args:
            actor (Character): The acting character.
            action (Action): The manual action.
            state (FightState): The current fight.

        Returns:
            list[Character]: Fallen allies for revives, living opponents for
            damage, and every living character otherwise.

        """
        if any(isinstance(e, ReviveEffect) for e in action.effects):
            return [
                c for c in state.characters if c.is_dead() and c.is_player() == actor.is_player()
            ]
        if action.deals_damage():
            return state.opponents_of(actor)
        return [c for c in state.characters if c.is_alive()]

    @staticmethod
    def get_digit_choice(answer: str) -> int:
        """
        Convert a numeric string input to its integer value.

        Args:
            answer (str): User input string to parse.

        Returns:
            int: The integer value of the input, or -1 if invalid input.

        """
        if isinstance(answer, str) and answer.isdigit():
            return int(answer)
        return -1
