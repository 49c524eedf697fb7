"""
Tests for fight construction.
"""

import random

import pytest

from pubfight.actions.action import Action
from pubfight.actions.effect import DamageEffect
from pubfight.character.character_stats import Attributes
from pubfight.character.main import MinionTemplate
from pubfight.combat.fight_setup import (
    BossDefinition,
    PlayerBuild,
    create_fight,
    scaled_boss_health,
)
from pubfight.core.constants import CharacterType, FightResult, TargetType
from pubfight.core.error_handling import FightDataError


@pytest.fixture
def boss_definition():
    return BossDefinition(
        id="molly",
        name="Molly",
        level=1,
        attributes=Attributes(max_health=40, max_ap=3, power=1),
        abilities=[
            Action(
                id="slap",
                cost=1,
                target_type=TargetType.RANDOM,
                effects=[DamageEffect(amount=2)],
                max_uses=2,
            )
        ],
        minion=MinionTemplate(
            name="Regular",
            attributes=Attributes(max_health=3, max_ap=2),
        ),
    )


@pytest.fixture
def builds():
    return [
        PlayerBuild(
            id=f"p{i}",
            name=f"Player {i}",
            attributes=Attributes(max_health=10, max_ap=3),
        )
        for i in range(1, 5)
    ]


@pytest.mark.parametrize(
    "party_size, expected",
    [(1, 20), (2, 20), (3, 30), (4, 40), (6, 60)],
)
def test_boss_health_scales_with_party_size(party_size, expected):
    assert scaled_boss_health(40, party_size) == expected


def test_create_fight(builds, boss_definition):
    state = create_fight(builds, boss_definition, random.Random(1))
    assert len(state.characters) == 5
    assert sorted(state.turn_order) == sorted(c.id for c in state.characters)
    assert state.result == FightResult.ONGOING
    assert not state.is_over
    assert state.level == 1

    boss = next(c for c in state.characters if c.char_type == CharacterType.BOSS)
    assert boss.state.health == 40
    assert boss.actions[0].uses_remaining == 2
    assert [a.id for a in boss.actions] == ["slap"]

    player = state.get_character("p1")
    assert [a.id for a in player.actions] == ["attack", "shield", "rest"]
    assert player.state.health == 10
    assert player.state.ap == 3


def test_same_seed_same_fight(builds, boss_definition):
    first = create_fight(builds, boss_definition, random.Random(9))
    second = create_fight(builds, boss_definition, random.Random(9))
    assert first.model_dump() == second.model_dump()


def test_characters_do_not_share_actions(builds, boss_definition):
    shared = Action(id="combo", cost=1, target_type=TargetType.SELF, max_uses=1)
    builds[0].actions.append(shared)
    builds[1].actions.append(shared)
    state = create_fight(builds, boss_definition, random.Random(2))
    first = state.get_character("p1").get_action("combo")
    second = state.get_character("p2").get_action("combo")
    first.uses_remaining = 0
    assert second.uses_remaining == 1
    assert shared.uses_remaining == 1


def test_initial_minions_join_the_fight(builds, boss_definition):
    state = create_fight(builds, boss_definition, random.Random(3), initial_minions=2)
    minions = [c for c in state.characters if c.char_type == CharacterType.MINION]
    assert len(minions) == 2
    assert all(m.id in state.turn_order for m in minions)
    assert sorted(state.turn_order) == sorted(c.id for c in state.characters)
    assert state.spawn_counter == 2


def test_initial_minions_are_shuffled_into_the_turn_order(builds, boss_definition):
    positions = set()
    for seed in range(30):
        state = create_fight(builds, boss_definition, random.Random(seed), initial_minions=1)
        minion = next(c for c in state.characters if c.char_type == CharacterType.MINION)
        positions.add(state.turn_order.index(minion.id))
    assert len(positions) > 1
    assert min(positions) < len(state.turn_order) - 1


def test_empty_party_is_rejected(boss_definition):
    with pytest.raises(FightDataError):
        create_fight([], boss_definition, random.Random(0))


def test_boss_without_actions_is_rejected(builds, boss_definition):
    boss_definition.abilities = []
    with pytest.raises(FightDataError):
        create_fight(builds, boss_definition, random.Random(0))


def test_duplicate_player_ids_are_rejected(builds, boss_definition):
    builds[1].id = builds[0].id
    with pytest.raises(FightDataError):
        create_fight(builds, boss_definition, random.Random(0))


def test_minions_without_template_are_rejected(builds, boss_definition):
    boss_definition.minion = None
    with pytest.raises(FightDataError):
        create_fight(builds, boss_definition, random.Random(0), initial_minions=1)


def test_fight_start_passives_are_applied(builds, boss_definition, make_passive):
    builds[0].passives.append(make_passive("always", "modifyMaxAP", 1))
    state = create_fight(builds, boss_definition, random.Random(4))
    player = state.get_character("p1")
    assert player.attributes.max_ap == 4
    assert player.state.ap == 4
