"""
Tests for the content repository and the shipped catalog.
"""

import json
import random

import pytest

from pubfight.combat.fight_setup import create_fight
from pubfight.core.constants import TargetType
from pubfight.core.content import ContentRepository
from pubfight.core.error_handling import FightDataError


@pytest.fixture(scope="module")
def repo():
    return ContentRepository()


def test_catalog_loads(repo):
    assert set(repo.classes) == {"tank", "wizard", "alchemist", "warrior"}
    assert len(repo.bosses) == 7
    assert sorted(b.level for b in repo.bosses.values()) == list(range(1, 8))
    assert all(boss.abilities for boss in repo.bosses.values())


def test_boss_lookup(repo):
    assert repo.get_boss_for_level(1).id == "molly_the_matron"
    assert repo.get_boss("nobody") is None
    assert repo.get_boss_for_level(99) is None
    with pytest.raises(FightDataError):
        repo.require_boss("nobody")


def test_swarm_bosses_carry_a_minion_template(repo):
    assert repo.get_boss("molly_the_matron").minion.name == "Bar Regular"
    assert repo.get_boss("the_last_call").minion is not None
    assert repo.get_boss("pickled_pete").minion is None


def test_skills_for_class_respects_level(repo):
    level_one = repo.skills_for_class("tank", level=1)
    assert level_one
    assert all(s.level_required == 1 and s.character_class == "tank" for s in level_one)
    assert len(repo.skills_for_class("tank")) > len(level_one)


def test_build_player_resolves_skills(repo):
    build = repo.build_player("p1", "Tanky", "tank", level=1)
    assert build.character_class == "tank"
    assert build.attributes.max_health == repo.get_class("tank").attributes.max_health
    assert {a.id for a in build.actions} == {"taunt", "shield_bash"}
    assert [p.skill_id for p in build.passives] == ["iron_skin"]


def test_build_player_with_explicit_skills(repo):
    build = repo.build_player("p1", "Zap", "wizard", skill_ids=["arcane_bolt"])
    bolt = build.actions[0]
    assert bolt.id == "arcane_bolt"
    assert bolt.cost == 2
    assert bolt.target_type == TargetType.MANUAL
    assert bolt.effects[0].amount == 10
    assert build.passives == []


def test_skill_can_grant_several_passives(repo):
    build = repo.build_player(
        "p1", "Tanky", "tank", skill_ids=["iron_skin", "fortress", "titans_resolve"]
    )
    titan = [p for p in build.passives if p.skill_id == "titans_resolve"]
    assert [(p.effect.effect_type, p.amount) for p in titan] == [
        ("modifyShieldCapacity", 3),
        ("modifyShieldStrength", 1),
    ]

    base = repo.get_class("tank").attributes
    boss = repo.get_boss_for_level(1)
    state = create_fight([build], boss, random.Random(0))
    tank = state.get_character("p1")
    assert tank.attributes.shield_capacity == base.shield_capacity + 3
    assert tank.attributes.shield_strength == base.shield_strength + 1


@pytest.mark.parametrize(
    "class_name, skill_ids",
    [
        ("bard", None),
        ("tank", ["no_such_skill"]),
        ("tank", ["fireball"]),
        ("tank", ["shield_wall"]),
    ],
)
def test_build_player_errors(repo, class_name, skill_ids):
    with pytest.raises(FightDataError):
        repo.build_player("p1", "Broken", class_name, skill_ids=skill_ids)


def test_every_class_can_fight_every_boss(repo):
    for level in range(1, 8):
        party = [
            repo.build_player(f"p{i}", name, name, level=level)
            for i, name in enumerate(repo.classes, 1)
        ]
        for boss in repo.bosses.values():
            state = create_fight(party, boss, random.Random(level))
            assert len(state.alive_party()) == 4


def test_missing_catalog_file_is_a_data_error(tmp_path):
    with pytest.raises(FightDataError):
        ContentRepository(tmp_path)


def test_duplicate_ids_are_a_data_error(tmp_path, repo):
    source = repo.data_dir
    for name in ("classes.json", "skills.json", "bosses.json"):
        (tmp_path / name).write_text((source / name).read_text(encoding="utf-8"), encoding="utf-8")
    bosses = json.loads((tmp_path / "bosses.json").read_text(encoding="utf-8"))
    bosses.append(bosses[0])
    (tmp_path / "bosses.json").write_text(json.dumps(bosses), encoding="utf-8")
    with pytest.raises(FightDataError):
        ContentRepository(tmp_path)


def test_unknown_skill_class_is_a_data_error(tmp_path, repo):
    source = repo.data_dir
    for name in ("classes.json", "bosses.json"):
        (tmp_path / name).write_text((source / name).read_text(encoding="utf-8"), encoding="utf-8")
    skills = json.loads((source / "skills.json").read_text(encoding="utf-8"))
    skills[0]["character_class"] = "bard"
    (tmp_path / "skills.json").write_text(json.dumps(skills), encoding="utf-8")
    with pytest.raises(FightDataError):
        ContentRepository(tmp_path)
