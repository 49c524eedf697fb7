"""
Tests for action validation and execution.
"""

import random

import pytest

from pubfight.actions.action import Action
from pubfight.actions.effect import DamageEffect, HealEffect, SpawnMinionEffect
from pubfight.character.character_stats import Attributes
from pubfight.character.main import MinionTemplate
from pubfight.combat.executor import can_execute, execute
from pubfight.core.constants import MAX_MINIONS_PER_BOSS, CharacterType, FightResult, TargetType
from pubfight.core.error_handling import FightDataError


@pytest.fixture
def smash():
    return Action(
        id="smash",
        cost=2,
        target_type=TargetType.MANUAL,
        effects=[DamageEffect(amount=6)],
    )


@pytest.fixture
def summoner(make_character):
    rally = Action(
        id="rally",
        cost=1,
        target_type=TargetType.SELF,
        self_effects=[SpawnMinionEffect(minion_count=2)],
    )
    return make_character(
        "boss",
        char_type=CharacterType.BOSS,
        max_health=40,
        actions=[rally],
        minion_template=MinionTemplate(
            name="Bar Regular",
            attributes=Attributes(max_health=3, max_ap=2, dexterity=40, evasiveness=20),
        ),
    )


def test_can_execute_reasons(make_character, smash):
    actor = make_character(ap=1)
    actor.actions.append(smash)
    assert can_execute(actor, smash).reason == "Not enough AP"

    actor.state.ap = 5
    assert can_execute(actor, smash)

    shield = actor.get_action("shield")
    assert can_execute(actor, shield).reason == "Shield at max capacity"

    actor.state.is_alive = False
    assert can_execute(actor, smash).reason == "Character is dead"


def test_can_execute_does_not_mutate(player, smash):
    player.actions.append(smash)
    before = player.model_dump()
    can_execute(player, smash)
    assert player.model_dump() == before


def test_rejected_action_returns_the_same_state(make_state, make_character, boss, smash):
    actor = make_character(ap=1, actions=[smash])
    state = make_state(actor, boss)
    snapshot = state.model_dump()
    new_state, result = execute(state, "hero", "smash", "boss", random.Random(0))
    assert new_state is state
    assert not result.success
    assert result.reason == "Not enough AP"
    assert state.model_dump() == snapshot


def test_execute_leaves_the_input_state_untouched(make_state, make_character, boss, smash):
    actor = make_character(actions=[smash])
    state = make_state(actor, boss)
    snapshot = state.model_dump()
    new_state, result = execute(state, "hero", "smash", "boss", random.Random(0))
    assert result.success
    assert new_state is not state
    assert state.model_dump() == snapshot
    assert new_state.get_character("boss").state.health == 44
    assert new_state.get_character("hero").state.ap == 3
    assert result.ap_deducted == 2


def test_unknown_ids_are_data_errors(make_state, player, boss):
    state = make_state(player, boss)
    with pytest.raises(FightDataError):
        execute(state, "ghost", "attack")
    with pytest.raises(FightDataError):
        execute(state, "hero", "teleport")


def test_finished_fight_rejects_actions(make_state, player, boss):
    state = make_state(player, boss)
    state.is_over = True
    new_state, result = execute(state, "hero", "attack")
    assert new_state is state
    assert result.reason == "Fight is over"


def test_ap_is_spent_even_when_every_spin_misses(make_state, make_character, boss):
    clumsy = make_character(dexterity=-1000)
    state = make_state(clumsy, boss)
    new_state, result = execute(state, "hero", "attack", rng=random.Random(5))
    assert result.success
    assert result.misses() == 1
    assert result.target_results == []
    assert new_state.get_character("hero").state.ap == 4


def test_limited_uses_run_out(make_state, make_character, boss):
    once = Action(id="once", cost=1, target_type=TargetType.SELF, max_uses=1)
    actor = make_character(actions=[once])
    state = make_state(actor, boss)
    state, first = execute(state, "hero", "once")
    assert first.success
    state, second = execute(state, "hero", "once")
    assert second.reason == "No uses remaining"


def test_drain_heals_by_the_damage_dealt(make_state, make_character, boss):
    leech = Action(
        id="leech",
        cost=1,
        target_type=TargetType.MANUAL,
        effects=[DamageEffect(amount=6)],
        self_effects=[HealEffect(amount=0, drain=True)],
    )
    actor = make_character(health=5, actions=[leech])
    boss.attributes.shield_capacity = 1
    boss.attributes.shield_strength = 2
    boss.state.shield = 1
    state = make_state(actor, boss)
    new_state, result = execute(state, "hero", "leech", "boss", random.Random(0))
    assert result.total_health_damage() == 4
    assert result.self_results[0].amount == 4
    assert new_state.get_character("hero").state.health == 9


def test_drain_sums_health_damage_over_every_target(make_state, make_character, boss):
    siphon = Action(
        id="siphon",
        cost=1,
        target_type=TargetType.ALL_PARTY,
        effects=[DamageEffect(amount=5)],
        self_effects=[HealEffect(amount=0, drain=True)],
    )
    boss.actions = [siphon]
    boss.state.health = 30
    tank = make_character("tank", shield_capacity=1, shield_strength=3, shield=1)
    hero = make_character("hero")
    state = make_state(boss, tank, hero)

    new_state, result = execute(state, "boss", "siphon", rng=random.Random(0))
    effects = [t.effects[0] for t in result.target_results]
    assert [e.health_damage for e in effects] == [2, 5]
    assert sum(e.amount for e in effects) == 10
    assert result.self_results[0].amount == 7
    assert new_state.get_character("boss").state.health == 37


def test_dead_summoner_spawns_nothing(make_state, make_character, make_passive, summoner):
    summoner.actions[0].target_type = TargetType.ALL_PARTY
    summoner.actions[0].effects = [DamageEffect(amount=1)]
    summoner.state.health = 5
    tank = make_character("tank", passives=[make_passive("onTakeDamage", "reflectDamage", 10)])
    state = make_state(summoner, tank)

    new_state, result = execute(state, "boss", "rally", rng=random.Random(0))
    assert result.success
    assert not new_state.get_character("boss").is_alive()
    assert result.spawned_minion_ids == []
    assert result.self_results[0].amount == 0
    assert len(new_state.characters) == 2
    assert new_state.is_over
    assert new_state.result == FightResult.VICTORY


def test_killing_the_last_enemy_wins_the_fight(make_state, make_character, smash):
    actor = make_character(actions=[smash])
    weak_boss = make_character("boss", char_type=CharacterType.BOSS, max_health=5)
    state = make_state(actor, weak_boss)
    new_state, result = execute(state, "hero", "smash", "boss")
    assert result.kills() == ["boss"]
    assert new_state.is_over
    assert new_state.result == FightResult.VICTORY


def test_spawn_adds_minions_to_turn_order(make_state, player, summoner):
    state = make_state(player, summoner)
    new_state, result = execute(state, "boss", "rally")
    assert result.spawned_minion_ids == ["boss-minion-1", "boss-minion-2"]
    assert new_state.turn_order[-2:] == result.spawned_minion_ids
    minion = new_state.get_character("boss-minion-1")
    assert minion.char_type == CharacterType.MINION
    assert minion.owner_id == "boss"
    assert minion.state.health == 3
    assert new_state.spawn_counter == 2


def test_spawn_at_the_cap_does_nothing(make_state, player, summoner):
    summoner.attributes.max_ap = 10
    summoner.state.ap = 10
    state = make_state(player, summoner)
    spawned = 0
    for _ in range(3):
        state, result = execute(state, "boss", "rally")
        spawned += len(result.spawned_minion_ids)
    assert spawned == MAX_MINIONS_PER_BOSS
    assert result.success
    assert result.spawned_minion_ids == []
    assert result.self_results[0].amount == 0


def test_second_wind_adds_healing_to_rest(make_state, make_character, make_passive, boss):
    actor = make_character(health=10, ap=0, passives=[make_passive("always", "secondWind", 2)])
    state = make_state(actor, boss)
    new_state, result = execute(state, "hero", "rest")
    hero = new_state.get_character("hero")
    assert hero.state.ap == 2
    assert hero.state.health == 12
    assert [r.effect_type for r in result.self_results] == ["modifyAP", "heal"]
