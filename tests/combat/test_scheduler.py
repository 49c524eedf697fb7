"""
Tests for turn scheduling.
"""

from pubfight.combat.scheduler import advance_turn, next_turn_index
from pubfight.core.constants import CharacterType


def test_turn_skips_dead_characters(make_state, make_character, boss):
    first = make_character("first")
    fallen = make_character("fallen", health=0)
    fallen.state.is_alive = False
    state = make_state(first, fallen, boss)
    assert next_turn_index(state) == 2
    new_state = advance_turn(state)
    assert new_state.current_character().id == "boss"
    assert state.current_turn_index == 0


def test_turn_wraps_around(make_state, make_character, boss):
    state = make_state(make_character("first"), boss, current=1)
    assert advance_turn(state).current_turn_index == 0


def test_enemies_get_their_ap_back(make_state, make_character):
    hero = make_character("hero", ap=0)
    boss = make_character("boss", char_type=CharacterType.BOSS, max_ap=3, ap=0)
    state = make_state(hero, boss)
    state = advance_turn(state)
    assert state.current_character().state.ap == 3
    # Players keep whatever they had left.
    state = advance_turn(state)
    assert state.current_character().state.ap == 0


def test_turn_start_passives_fire_for_the_new_actor(make_state, make_character, make_passive, boss):
    hero = make_character("hero", max_ap=5, ap=0, passives=[make_passive("onTurnStart", "restoreAP", 1)])
    state = make_state(boss, hero)
    state = advance_turn(state)
    assert state.current_character().state.ap == 1


def test_everyone_dead_keeps_the_index(make_state, make_character):
    a = make_character("a", health=0)
    b = make_character("b", char_type=CharacterType.BOSS, health=0)
    a.state.is_alive = False
    b.state.is_alive = False
    state = make_state(a, b, current=1)
    assert next_turn_index(state) == 1
