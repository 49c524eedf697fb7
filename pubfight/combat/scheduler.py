"""
Turn scheduler module for the simulator.

Moves the turn to the next living character. Bosses and minions get their
AP refilled when their turn comes; players manage their AP by resting.
"""

from pubfight.core.logging import log_debug

from . import passives
from .fight_state import FightState


def next_turn_index(state: FightState) -> int:
    """
    Finds the index of the next living character in turn order.

    The scan is circular, starts right after the current index and covers
    at most one full cycle. When every character is dead the current index
    is returned unchanged.

    Args:
        state (FightState):
            The fight. Not modified.

    Returns:
        int:
            The index in turn_order of the next character to act.

    """
    count = len(state.turn_order)
    if count == 0:
        return state.current_turn_index
    for step in range(1, count + 1):
        index = (state.current_turn_index + step) % count
        character = state.get_character(state.turn_order[index])
        if character is not None and character.is_alive():
            return index
    return state.current_turn_index


def advance_turn(state: FightState) -> FightState:
    """
    Advances a fight to the next living character's turn.

    Args:
        state (FightState):
            The current fight. Not modified.

    Returns:
        FightState:
            A new state with the turn moved on, the AP of a boss or minion
            refilled and the turn-start passives of the new actor fired.

    """
    new_state = state.copy_state()
    index = next_turn_index(new_state)
    new_state.current_turn_index = index

    character = new_state.current_character()
    if character is None or character.is_dead():
        return new_state

    if character.is_enemy():
        character.state.ap = max(0, character.attributes.max_ap)
    passives.on_turn_start(character)

    log_debug(
        f"Turn passes to {character.name}",
        {"index": index, "ap": character.state.ap},
    )
    return new_state
