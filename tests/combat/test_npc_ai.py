"""
Tests for computer-controlled decisions.
"""

import random

import pytest

from pubfight.actions.action import Action
from pubfight.actions.common import get_default_actions
from pubfight.actions.effect import AddShieldEffect, DamageEffect, HealEffect, ReviveEffect
from pubfight.combat.npc_ai import (
    choose_boss_action,
    choose_player_action,
    get_strategy_names,
)
from pubfight.core.constants import CharacterType, TargetType


@pytest.fixture
def kit():
    return [
        *get_default_actions(CharacterType.PLAYER),
        Action(id="big_hit", cost=2, target_type=TargetType.MANUAL, effects=[DamageEffect(amount=15)]),
        Action(id="potion", cost=1, target_type=TargetType.MANUAL, effects=[HealEffect(amount=5)]),
        Action(id="raise", cost=2, target_type=TargetType.MANUAL, effects=[ReviveEffect(amount=4)]),
        Action(id="wall", cost=1, target_type=TargetType.SELF, self_effects=[AddShieldEffect(amount=2)]),
    ]


def test_strategy_names():
    assert get_strategy_names() == ["aggressive", "balanced", "defensive"]


def test_boss_picks_only_affordable_actions(boss):
    boss.actions = [
        Action(id="cheap", cost=1, target_type=TargetType.RANDOM, effects=[DamageEffect(amount=1)]),
        Action(id="pricey", cost=9, target_type=TargetType.RANDOM, effects=[DamageEffect(amount=9)]),
    ]
    rng = random.Random(0)
    for _ in range(20):
        assert choose_boss_action(boss, rng).id == "cheap"
    boss.state.ap = 0
    assert choose_boss_action(boss, rng) is None


def test_aggressive_aims_the_biggest_hit_at_the_boss(make_state, make_character, kit, boss):
    hero = make_character(actions=kit)
    minion = make_character("minion", char_type=CharacterType.MINION)
    state = make_state(hero, minion, boss)
    choice = choose_player_action(hero, state, "aggressive")
    assert choice.action.id == "big_hit"
    assert choice.manual_target_id == "boss"


def test_balanced_heals_when_hurt(make_state, make_character, kit, boss):
    hero = make_character(actions=kit, health=4)
    state = make_state(hero, boss)
    choice = choose_player_action(hero, state, "balanced")
    assert choice.action.id == "potion"
    assert choice.manual_target_id == "hero"


def test_defensive_shields_then_revives(make_state, make_character, kit, boss):
    hero = make_character(actions=kit, shield_capacity=2, shield_strength=1)
    fallen = make_character("fallen", health=0)
    fallen.state.is_alive = False
    state = make_state(hero, fallen, boss)

    choice = choose_player_action(hero, state, "defensive")
    assert choice.action.id in ("shield", "wall")

    hero.state.shield = 2
    choice = choose_player_action(hero, state, "defensive")
    assert choice.action.id == "raise"
    assert choice.manual_target_id == "fallen"


def test_out_of_ap_player_rests(make_state, make_character, kit, boss):
    hero = make_character(actions=kit, ap=0)
    state = make_state(hero, boss)
    for strategy in get_strategy_names():
        assert choose_player_action(hero, state, strategy).action.id == "rest"


def test_unknown_strategy_falls_back_to_balanced(make_state, make_character, kit, boss):
    hero = make_character(actions=kit)
    state = make_state(hero, boss)
    assert choose_player_action(hero, state, "chaotic") == choose_player_action(hero, state, "balanced")
