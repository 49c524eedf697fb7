"""
Content repository module for the simulator.

Loads the JSON catalog (classes, skills and bosses), gives by-id access to
it, and turns a class plus a set of owned skills into a PlayerBuild the
engine can consume.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

from catchery import log_warning
from pydantic import BaseModel, Field

from pubfight.actions.action import Action
from pubfight.actions.effect import Effect
from pubfight.character.character_stats import Attributes
from pubfight.character.passive import Passive, PassiveEffect
from pubfight.combat.fight_setup import BossDefinition, PlayerBuild
from pubfight.core.constants import PassiveTrigger, TargetType
from pubfight.core.error_handling import FightDataError, require_found
from pubfight.core.logging import log_debug

# Catalog shipped with the package.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class ClassDefinition(BaseModel):
    """A playable class and its level-1 attributes."""

    name: str = Field(
        description="Identifier of the class.",
    )
    description: str = Field(
        "",
        description="A brief description of the class.",
    )
    attributes: Attributes = Field(
        description="Base attributes of a level-1 character of this class.",
    )


class SkillAbility(BaseModel):
    """The action granted by an ability skill."""

    cost: int = Field(
        0,
        ge=0,
        description="AP cost of the action.",
    )
    target_type: TargetType = Field(
        TargetType.SELF,
        description="How the action resolves its targets.",
    )
    hits: int = Field(
        1,
        ge=0,
        description="Number of wheel spins for random-target actions.",
    )
    effects: list[Effect] = Field(
        default_factory=list,
        description="Effects applied to every target.",
    )
    self_effects: list[Effect] = Field(
        default_factory=list,
        description="Effects applied to the caster.",
    )
    max_uses: int | None = Field(
        None,
        ge=1,
        description="Uses per fight, None for unlimited.",
    )


class SkillPassive(BaseModel):
    """The passive granted by a passive skill."""

    trigger: PassiveTrigger = Field(
        description="When the passive is evaluated.",
    )
    effect: PassiveEffect = Field(
        description="What the passive does.",
    )


class SkillDefinition(BaseModel):
    """A node of a class skill tree."""

    id: str = Field(
        description="Identifier of the skill.",
    )
    name: str = Field(
        description="Display name of the skill.",
    )
    description: str = Field(
        "",
        description="A brief description of the skill.",
    )
    character_class: str = Field(
        description="Class the skill belongs to.",
    )
    level_required: int = Field(
        1,
        ge=1,
        description="Character level needed to unlock the skill.",
    )
    requires: str | None = Field(
        None,
        description="Skill that must be owned before this one.",
    )
    skill_type: Literal["ability", "passive"] = Field(
        description="Whether the skill grants an action or a passive.",
    )
    ability: SkillAbility | None = Field(
        None,
        description="The granted action, for ability skills.",
    )
    passive: SkillPassive | None = Field(
        None,
        description="The granted passive, for passive skills.",
    )
    extra_passives: list[SkillPassive] = Field(
        default_factory=list,
        description="Further passives granted together with the main one.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.skill_type == "ability" and self.ability is None:
            raise ValueError(f"Ability skill {self.id} has no ability")
        if self.skill_type == "passive" and self.passive is None:
            raise ValueError(f"Passive skill {self.id} has no passive")
        if self.extra_passives and self.passive is None:
            raise ValueError(f"Skill {self.id} has extra passives but no passive")

    def to_action(self) -> Action | None:
        """Returns a fresh action for an ability skill, None for a passive."""
        if self.ability is None:
            return None
        return Action(
            id=self.id,
            name=self.name,
            description=self.description,
            **self.ability.model_dump(),
        )

    def to_passives(self) -> list[Passive]:
        """Returns fresh passives for a passive skill, none for an ability."""
        if self.passive is None:
            return []
        return [
            Passive(
                skill_id=self.id,
                name=self.name,
                trigger=granted.trigger,
                effect=granted.effect.model_copy(deep=True),
            )
            for granted in [self.passive, *self.extra_passives]
        ]


class ContentRepository:
    """
    One-stop registry for the catalog: classes, skills and bosses.
    """

    classes: dict[str, ClassDefinition]
    skills: dict[str, SkillDefinition]
    bosses: dict[str, BossDefinition]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing the catalog files. Defaults to the
                catalog shipped with the package.

        """
        self.data_dir: Path = data_dir or DEFAULT_DATA_DIR
        self.reload(self.data_dir)

    def reload(self, root: Path) -> None:
        """
        (Re)load every catalog file from disk.

        Args:
            root (Path):
                The directory containing the catalog files.

        Raises:
            FightDataError: If a file is missing, malformed, or references
                something that does not exist.

        """
        self.classes = _load_json_file(
            root / "classes.json",
            self._load_classes,
            "classes",
        )
        self.skills = _load_json_file(
            root / "skills.json",
            self._load_skills,
            "skills",
        )
        self.bosses = _load_json_file(
            root / "bosses.json",
            self._load_bosses,
            "bosses",
        )
        self._check_references()

    def _get_from_collection(self, collection_name: str, item_name: str) -> Any | None:
        """
        Generic helper to get an item from any collection.

        Args:
            collection_name (str):
                Name of the collection attribute (e.g., 'skills', 'bosses')
            item_name (str):
                Identifier of the item to retrieve

        Returns:
            Any | None:
                The item if found, None otherwise

        """
        collection = getattr(self, collection_name, None)
        if not collection:
            log_warning(
                f"Collection '{collection_name}' not found in ContentRepository.",
                {"collection_name": collection_name, "item_name": item_name},
            )
            return None
        entry = collection.get(item_name)
        if entry is None:
            log_warning(
                f"Item '{item_name}' not found in collection '{collection_name}'.",
                {"collection_name": collection_name, "item_name": item_name},
            )
        return entry

    def get_class(self, name: str) -> ClassDefinition | None:
        """Get a class by name, or None if not found."""
        return self._get_from_collection("classes", name)

    def get_skill(self, skill_id: str) -> SkillDefinition | None:
        """Get a skill by id, or None if not found."""
        return self._get_from_collection("skills", skill_id)

    def get_boss(self, boss_id: str) -> BossDefinition | None:
        """Get a boss by id, or None if not found."""
        return self._get_from_collection("bosses", boss_id)

    def get_boss_for_level(self, level: int) -> BossDefinition | None:
        """Get the boss fought at a given level, or None if there is none."""
        boss = next((b for b in self.bosses.values() if b.level == level), None)
        if boss is None:
            log_warning(f"No boss for level {level}.", {"level": level})
        return boss

    def require_boss(self, boss_id: str) -> BossDefinition:
        """Get a boss by id, raising FightDataError if it does not exist."""
        return require_found(self.bosses.get(boss_id), "boss", boss_id)

    def skills_for_class(self, class_name: str, level: int | None = None) -> list[SkillDefinition]:
        """
        Lists the skills of a class, in catalog order.

        Args:
            class_name (str): The class.
            level (int | None): Only list skills unlocked at this level or below.

        Returns:
            list[SkillDefinition]: The matching skills.

        """
        return [
            skill
            for skill in self.skills.values()
            if skill.character_class == class_name
            and (level is None or skill.level_required <= level)
        ]

    def build_player(
        self,
        player_id: str,
        name: str,
        class_name: str,
        skill_ids: list[str] | None = None,
        level: int = 1,
        attributes: Attributes | None = None,
    ) -> PlayerBuild:
        """
        Resolves a class and its owned skills into a PlayerBuild.

        Args:
            player_id (str):
                Identifier of the player in the fight.
            name (str):
                Display name of the player.
            class_name (str):
                Class of the player.
            skill_ids (list[str] | None):
                Owned skills. Defaults to every skill of the class unlocked
                at ``level``.
            level (int):
                Level of the player.
            attributes (Attributes | None):
                Attributes to use instead of the class's base attributes
                (e.g. after level-up allocation).

        Returns:
            PlayerBuild:
                The build, with abilities resolved into actions and passive
                skills resolved into passives.

        Raises:
            FightDataError: If the class or a skill does not exist, a skill
                belongs to another class, or its prerequisite is not owned.

        """
        class_def = require_found(self.classes.get(class_name), "class", class_name)
        if skill_ids is None:
            skill_ids = [s.id for s in self.skills_for_class(class_name, level)]

        actions: list[Action] = []
        passives: list[Passive] = []
        for skill_id in skill_ids:
            skill = require_found(self.get_skill(skill_id), "skill", skill_id, {"player": player_id})
            if skill.character_class != class_name:
                raise FightDataError(
                    f"Skill {skill_id} belongs to {skill.character_class}, not {class_name}",
                    {"player": player_id, "skill": skill_id},
                )
            if skill.requires is not None and skill.requires not in skill_ids:
                raise FightDataError(
                    f"Skill {skill_id} requires {skill.requires}",
                    {"player": player_id, "skill": skill_id},
                )
            action = skill.to_action()
            if action is not None:
                actions.append(action)
            passives.extend(skill.to_passives())

        return PlayerBuild(
            id=player_id,
            name=name,
            character_class=class_name,
            level=level,
            attributes=(attributes or class_def.attributes).model_copy(deep=True),
            actions=actions,
            passives=passives,
            owned_skill_ids=list(skill_ids),
        )

    def _check_references(self) -> None:
        for skill in self.skills.values():
            if skill.character_class not in self.classes:
                raise FightDataError(
                    f"Skill {skill.id} references unknown class {skill.character_class}",
                    {"skill": skill.id},
                )
            if skill.requires is not None and skill.requires not in self.skills:
                raise FightDataError(
                    f"Skill {skill.id} requires unknown skill {skill.requires}",
                    {"skill": skill.id},
                )

    @staticmethod
    def _load_classes(data: list[dict]) -> dict[str, ClassDefinition]:
        """
        Load classes from JSON data.

        Args:
            data (list[dict]): List of class data dictionaries.

        Returns:
            dict[str, ClassDefinition]: Dictionary mapping class names to definitions.

        Raises:
            ValueError: If duplicate class names are found.

        """
        classes: dict[str, ClassDefinition] = {}
        for class_data in data:
            class_def = ClassDefinition(**class_data)
            if class_def.name in classes:
                raise ValueError(f"Duplicate class name: {class_def.name}")
            classes[class_def.name] = class_def
        return classes

    @staticmethod
    def _load_skills(data: list[dict]) -> dict[str, SkillDefinition]:
        """
        Load skills from JSON data.

        Args:
            data (list[dict]): List of skill data dictionaries.

        Returns:
            dict[str, SkillDefinition]: Dictionary mapping skill ids to definitions.

        Raises:
            ValueError: If duplicate skill ids are found.

        """
        skills: dict[str, SkillDefinition] = {}
        for skill_data in data:
            skill = SkillDefinition(**skill_data)
            if skill.id in skills:
                raise ValueError(f"Duplicate skill id: {skill.id}")
            skills[skill.id] = skill
        return skills

    @staticmethod
    def _load_bosses(data: list[dict]) -> dict[str, BossDefinition]:
        """
        Load bosses from JSON data.

        Args:
            data (list[dict]): List of boss data dictionaries.

        Returns:
            dict[str, BossDefinition]: Dictionary mapping boss ids to definitions.

        Raises:
            ValueError: If duplicate boss ids are found, or a boss has no abilities.

        """
        bosses: dict[str, BossDefinition] = {}
        for boss_data in data:
            boss = BossDefinition(**boss_data)
            if boss.id in bosses:
                raise ValueError(f"Duplicate boss id: {boss.id}")
            if not boss.abilities:
                raise ValueError(f"Boss {boss.id} has no abilities")
            bosses[boss.id] = boss
        return bosses


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[str, Any]],
    description: str,
) -> dict[str, Any]:
    """Helper to load and validate JSON files"""
    try:
        log_debug(f"Loading {description} using {loader_func.__name__}", {"file": filepath})
        # Validate file path
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        # Load and validate JSON
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise FightDataError(f"File {filepath} raised an error: {e}", {"file": str(filepath)}) from e
