"""
Main entry point for the Pub Fight combat simulator.

Loads the content catalog, builds a party and a boss, then runs the fight
headlessly or, with --interactive, lets the user play the party.

The simulator supports:
- Picking the boss by id or by pub level
- Any party of up to four classes, with every skill unlocked at their level
- Seeded runs, so a fight can be replayed exactly
- Batches of headless fights to gauge a party's win rate
"""

import argparse
import logging
import random
from collections import Counter
from pathlib import Path

from pubfight.combat.fight_runner import FightRecord, run_fight
from pubfight.combat.fight_setup import BossDefinition, PlayerBuild, create_fight
from pubfight.combat.npc_ai import get_strategy_names
from pubfight.core.constants import MAX_FIGHT_TURNS
from pubfight.core.content import ContentRepository
from pubfight.core.error_handling import FightDataError
from pubfight.core.logging import log_error, setup_logging
from pubfight.core.sheets import print_character_sheet, print_fight_record
from pubfight.core.utils import cprint, crule

DEFAULT_PARTY = ["tank", "wizard", "alchemist", "warrior"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pub Fight combat simulator")
    parser.add_argument("--data-dir", type=Path, default=None, help="Catalog directory")
    parser.add_argument("--boss", default=None, help="Boss id (see --list)")
    parser.add_argument("--level", type=int, default=1, help="Pub level, used when --boss is not given")
    parser.add_argument(
        "--players",
        nargs="+",
        default=DEFAULT_PARTY,
        help="Classes of the party members",
    )
    parser.add_argument("--player-level", type=int, default=1, help="Level of every party member")
    parser.add_argument("--initial-minions", type=int, default=0)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--strategy", choices=get_strategy_names(), default="balanced")
    parser.add_argument("--max-turns", type=int, default=MAX_FIGHT_TURNS)
    parser.add_argument("--runs", type=int, default=1, help="Number of headless fights to run")
    parser.add_argument("--interactive", action="store_true", help="Play the party by hand")
    parser.add_argument("--list", action="store_true", help="List classes and bosses and exit")
    parser.add_argument("--verbose", action="store_true", help="Log every action")
    return parser


def build_party(repo: ContentRepository, classes: list[str], level: int) -> list[PlayerBuild]:
    """
    Builds one player per class, with every skill unlocked at ``level``.

    Args:
        repo (ContentRepository): The loaded catalog.
        classes (list[str]): Class of each party member.
        level (int): Level of every party member.

    Returns:
        list[PlayerBuild]: The party.

    """
    # Count how many times each class appears to number duplicates.
    counts = Counter(classes)
    seen: Counter[str] = Counter()
    builds = []
    for index, class_name in enumerate(classes, 1):
        name = class_name.capitalize()
        if counts[class_name] > 1:
            seen[class_name] += 1
            name = f"{name} ({seen[class_name]})"
        builds.append(repo.build_player(f"player-{index}", name, class_name, level=level))
    return builds


def select_boss(repo: ContentRepository, boss_id: str | None, level: int) -> BossDefinition:
    if boss_id is not None:
        return repo.require_boss(boss_id)
    boss = repo.get_boss_for_level(level)
    if boss is None:
        raise FightDataError(f"No boss for level {level}", {"level": level})
    return boss


def list_content(repo: ContentRepository) -> None:
    crule("Classes", style="bold blue")
    for class_def in repo.classes.values():
        cprint(f"[bold]{class_def.name}[/]: {class_def.description}")
    crule("Bosses", style="bold red")
    for boss in sorted(repo.bosses.values(), key=lambda b: b.level):
        cprint(f"[bold]{boss.id}[/] (level {boss.level}): {boss.name}, {boss.archetype}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        repo = ContentRepository(args.data_dir)
        if args.list:
            list_content(repo)
            return 0
        boss = select_boss(repo, args.boss, args.level)
        party = build_party(repo, args.players, args.player_level)
    except FightDataError as e:
        log_error(f"Cannot set up the fight: {e}", e.context)
        return 1

    rng = random.Random(args.seed)
    crule(f"{boss.name} (level {boss.level})", style="bold red")

    if args.interactive:
        from pubfight.ui.cli_interface import PlayerInterface

        state = create_fight(party, boss, rng, args.initial_minions)
        for character in state.characters:
            print_character_sheet(character)
        record = run_fight(state, rng, args.strategy, args.max_turns, ui=PlayerInterface())
        print_fight_record(record)
        return 0

    records: list[FightRecord] = []
    for _ in range(max(1, args.runs)):
        state = create_fight(party, boss, rng, args.initial_minions)
        records.append(run_fight(state, rng, args.strategy, args.max_turns))

    if len(records) == 1:
        print_fight_record(records[0])
    else:
        outcomes = Counter(r.result for r in records)
        average_turns = sum(r.turns for r in records) / len(records)
        cprint(
            f"{len(records)} fights: [green]{outcomes['victory']}[/] victories, "
            f"[red]{outcomes['defeat']}[/] defeats, [yellow]{outcomes['timeout']}[/] timeouts, "
            f"{average_turns:.1f} turns on average"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
