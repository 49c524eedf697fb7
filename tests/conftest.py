"""
Shared fixtures for the Pub Fight tests.
"""

import random

import pytest

from pubfight.actions.common import get_default_actions
from pubfight.character.character_stats import Attributes, CharacterState
from pubfight.character.main import Character
from pubfight.character.passive import Passive, PassiveCondition, PassiveEffect
from pubfight.combat.fight_state import FightState
from pubfight.core.constants import CharacterType, PassiveTrigger


@pytest.fixture
def rng():
    """A seeded random source, so every test is reproducible."""
    return random.Random(1234)


@pytest.fixture
def make_character():
    """Factory building a character at full resources unless told otherwise."""

    def _make(
        id="hero",
        char_type=CharacterType.PLAYER,
        max_health=20,
        max_ap=5,
        power=0,
        shield_capacity=0,
        shield_strength=0,
        dexterity=50,
        evasiveness=0,
        health=None,
        ap=None,
        shield=0,
        actions=None,
        passives=None,
        **kwargs,
    ):
        return Character(
            id=id,
            name=id.capitalize(),
            char_type=char_type,
            attributes=Attributes(
                max_health=max_health,
                max_ap=max_ap,
                power=power,
                shield_capacity=shield_capacity,
                shield_strength=shield_strength,
                dexterity=dexterity,
                evasiveness=evasiveness,
            ),
            state=CharacterState(
                health=max_health if health is None else health,
                ap=max_ap if ap is None else ap,
                shield=shield,
            ),
            actions=get_default_actions(char_type) if actions is None else actions,
            passives=passives or [],
            **kwargs,
        )

    return _make


@pytest.fixture
def make_passive():
    """Factory building a passive from a trigger, an effect tag and an amount."""

    def _make(trigger, effect_type, amount=0, hp_below=None):
        condition = PassiveCondition(hp_below=hp_below) if hp_below is not None else None
        return Passive(
            skill_id=f"{effect_type}_skill",
            trigger=PassiveTrigger(trigger),
            effect=PassiveEffect(effect_type=effect_type, amount=amount, condition=condition),
        )

    return _make


@pytest.fixture
def make_state():
    """Factory wrapping characters into a fight, acting in the given order."""

    def _make(*characters, current=0):
        return FightState(
            id="test-fight",
            characters=list(characters),
            turn_order=[c.id for c in characters],
            current_turn_index=current,
        )

    return _make


@pytest.fixture
def player(make_character):
    return make_character("hero", max_health=20, max_ap=5, dexterity=100)


@pytest.fixture
def boss(make_character):
    return make_character("boss", char_type=CharacterType.BOSS, max_health=50, max_ap=3)
