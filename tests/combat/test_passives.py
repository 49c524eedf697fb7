"""
Tests for passive abilities.
"""

from pubfight.actions.action import Action
from pubfight.actions.effect import DamageEffect
from pubfight.combat import passives
from pubfight.combat.effects import apply_effect
from pubfight.core.constants import CharacterType


def test_ability_cost_discount_never_goes_below_one(make_character, make_passive):
    wizard = make_character(passives=[make_passive("always", "modifyAbilityCost", -5)])
    assert passives.effective_cost(wizard, Action(id="meteor", cost=4)) == 1
    assert passives.effective_cost(wizard, Action(id="rest", cost=0)) == 0


def test_kill_restores_ap(make_character, make_passive):
    warrior = make_character(
        "warrior",
        max_ap=5,
        ap=1,
        passives=[make_passive("onKill", "restoreAP", 2)],
    )
    victim = make_character("victim", char_type=CharacterType.MINION, max_health=3)
    result = apply_effect(victim, DamageEffect(amount=5), warrior)
    assert result.killed
    assert warrior.state.ap == 3


def test_kill_reaction_does_not_fire_without_a_kill(make_character, make_passive):
    warrior = make_character("warrior", ap=1, passives=[make_passive("onKill", "restoreAP", 2)])
    victim = make_character("victim", char_type=CharacterType.BOSS, max_health=30)
    apply_effect(victim, DamageEffect(amount=5), warrior)
    assert warrior.state.ap == 1


def test_hit_reaction_fires_on_every_damage_effect(make_character, make_passive):
    striker = make_character("striker", max_ap=9, ap=0, passives=[make_passive("onHit", "restoreAP", 1)])
    target = make_character("target", char_type=CharacterType.BOSS, max_health=50)
    apply_effect(target, DamageEffect(amount=1), striker)
    apply_effect(target, DamageEffect(amount=1), striker)
    assert striker.state.ap == 2


def test_low_hp_reaction_fires_once_per_fight(make_character, make_passive):
    holder = make_character(
        shield_capacity=5,
        shield_strength=1,
        passives=[make_passive("onLowHP", "gainShield", 2, hp_below=50)],
    )
    apply_effect(holder, DamageEffect(amount=12))
    assert holder.state.shield == 2
    assert holder.passives[0].used

    holder.state.shield = 0
    apply_effect(holder, DamageEffect(amount=1))
    assert holder.state.shield == 0


def test_take_damage_shield_gain_needs_low_health(make_character, make_passive):
    holder = make_character(
        shield_capacity=5,
        shield_strength=1,
        passives=[make_passive("onTakeDamage", "gainShield", 1, hp_below=25)],
    )
    apply_effect(holder, DamageEffect(amount=2))
    assert holder.state.shield == 0
    apply_effect(holder, DamageEffect(amount=14))
    assert holder.state.shield == 1


def test_turn_start_reaction(make_character, make_passive):
    holder = make_character(max_ap=5, ap=0, passives=[make_passive("onTurnStart", "restoreAP", 1)])
    passives.on_turn_start(holder)
    assert holder.state.ap == 1


def test_always_passives_change_attributes(make_character, make_passive):
    tank = make_character(
        max_ap=3,
        ap=1,
        shield_capacity=2,
        shield_strength=1,
        evasiveness=10,
        passives=[
            make_passive("always", "provoke", -30),
            make_passive("always", "modifyShieldCapacity", 3),
            make_passive("always", "modifyShieldStrength", 1),
            make_passive("always", "modifyMaxAP", 1),
        ],
    )
    passives.apply_always_passives(tank)
    assert tank.attributes.evasiveness == -20
    assert tank.attributes.shield_capacity == 5
    assert tank.attributes.shield_strength == 2
    assert tank.attributes.max_ap == 4
    assert tank.state.ap == 4


def test_fight_start_ap_goes_to_the_whole_side(make_character, make_passive):
    alchemist = make_character(
        "alchemist",
        max_ap=5,
        ap=2,
        passives=[make_passive("onFightStart", "restoreAP", 1)],
    )
    ally = make_character("ally", max_ap=5, ap=2)
    boss = make_character("boss", char_type=CharacterType.BOSS, max_ap=5, ap=2)
    passives.apply_fight_start_passives([alchemist, ally, boss])
    assert alchemist.state.ap == 3
    assert ally.state.ap == 3
    assert boss.state.ap == 2


def test_unknown_passives_are_ignored(make_character, make_passive):
    holder = make_character(passives=[make_passive("onTakeDamage", "summonDragon", 9)])
    passives.apply_always_passives(holder)
    result = apply_effect(holder, DamageEffect(amount=3))
    assert result.health_damage == 3
    assert holder.state.health == 17
