"""
Module for printing characters, fights and action results in a formatted way.
"""

from rich.padding import Padding
from rich.table import Table

from pubfight.actions.action import Action
from pubfight.actions.effect import DamageEffect
from pubfight.character.main import Character
from pubfight.combat.effects import EffectResult
from pubfight.combat.executor import ActionResult
from pubfight.combat.fight_runner import FightRecord
from pubfight.combat.fight_state import FightState
from pubfight.combat.targeting import WheelResult

from .utils import cprint, crule, make_bar


def character_status_line(character: Character) -> str:
    """
    Builds a one-line status of a character, with health, AP and shield bars.

    Args:
        character (Character): The character to describe.

    Returns:
        str: The formatted status line.

    """
    if character.is_dead():
        return f"{character.char_type.emoji} [strike]{character.colored_name}[/] [dim](down)[/]"
    attrs = character.attributes
    state = character.state
    line = f"{character.char_type.emoji} {character.colored_name:<30} "
    line += f"HP {make_bar(state.health, attrs.max_health, color='green')} "
    line += f"{state.health:>3}/{attrs.max_health:<3} "
    line += f"AP {make_bar(state.ap, attrs.max_ap, length=5, color='yellow')} "
    line += f"{state.ap}/{attrs.max_ap}"
    if attrs.shield_capacity > 0:
        line += f" SH {make_bar(state.shield, attrs.shield_capacity, length=3, color='cyan')}"
        line += f" {state.shield}/{attrs.shield_capacity}"
    return line


def action_to_string(action: Action) -> str:
    """Converts an action to a short description of its cost and effects."""
    parts = [f"{action.cost} AP", action.target_type.display_name.lower()]
    if action.hits > 1:
        parts.append(f"{action.hits} hits")
    for effect in action.effects:
        text = f"{effect.display_name.lower()} {effect.amount}"
        if isinstance(effect, DamageEffect) and effect.piercing:
            text += " (piercing)"
        parts.append(text)
    for effect in action.self_effects:
        parts.append(f"self {effect.display_name.lower()} {effect.amount}")
    if action.uses_remaining is not None:
        parts.append(f"{action.uses_remaining}/{action.max_uses} uses")
    return ", ".join(parts)


def print_character_sheet(character: Character, padding: int = 2) -> None:
    """
    Prints the attributes, actions and passives of a character.

    Args:
        character (Character): The character to display.
        padding (int): Left padding for the output. Defaults to 2.

    """
    crule(character.colored_name, style="dim")
    attrs = character.attributes
    cprint(
        Padding(
            f"HP {attrs.max_health}, AP {attrs.max_ap}, power {attrs.power}, "
            f"shield {attrs.shield_capacity}x{attrs.shield_strength}, "
            f"dexterity {attrs.dexterity}, evasiveness {attrs.evasiveness}",
            (0, padding),
        )
    )
    if character.actions:
        cprint(Padding("[bold]Actions[/]", (0, padding)))
        for action in character.actions:
            cprint(Padding(f"[blue]{action.name}[/]: {action_to_string(action)}", (0, padding + 2)))
    if character.passives:
        cprint(Padding("[bold]Passives[/]", (0, padding)))
        for passive in character.passives:
            cprint(
                Padding(
                    f"[magenta]{passive.name}[/]: {passive.trigger.value} "
                    f"{passive.effect.effect_type} {passive.amount}",
                    (0, padding + 2),
                )
            )


def print_fight_status(state: FightState) -> None:
    """Prints a table with the status of every character in the fight."""
    table = Table(title=f"Fight {state.id[:8]}", pad_edge=False)
    table.add_column("", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("HP", justify="right")
    table.add_column("AP", justify="right")
    table.add_column("Shield", justify="right")
    current = state.current_character()
    for character_id in state.turn_order:
        character = state.get_character(character_id)
        if character is None:
            continue
        marker = "▶" if current is not None and character.id == current.id else ""
        name = character.colored_name if character.is_alive() else f"[dim]{character.name}[/]"
        table.add_row(
            marker,
            name,
            f"{character.state.health:>3}/{character.attributes.max_health:<3}",
            f"{character.state.ap}/{character.attributes.max_ap}",
            f"{character.state.shield}/{character.attributes.shield_capacity}",
        )
    cprint(table)


def wheel_to_string(state: FightState, spin: WheelResult) -> str:
    """Describes a wheel spin: where it stopped and what it landed on."""
    if spin.is_miss:
        return f"wheel stopped at {spin.roll:6.2f}°: [dim]miss[/]"
    target = state.get_character(spin.target_id)
    name = target.colored_name if target else spin.target_id
    return f"wheel stopped at {spin.roll:6.2f}°: {name}"


def effect_result_to_string(effect: EffectResult) -> str:
    """Converts the result of one effect to a formatted string."""
    if effect.effect_type == "damage":
        text = f"[red]{effect.health_damage}[/] damage"
        if effect.shield_damage_absorbed:
            text += f" ([cyan]{effect.shield_damage_absorbed}[/] absorbed)"
        if effect.survived_fatal:
            text += ", [yellow]refused to fall[/]"
        if effect.killed:
            text += ", [bold red]down![/]"
        if effect.reflected_damage:
            text += f", [magenta]{effect.reflected_damage}[/] reflected"
        return text
    if effect.effect_type in ("heal", "revive"):
        return f"[green]+{effect.amount}[/] {effect.effect_type}"
    if effect.effect_type == "spawnMinion":
        return f"summoned {effect.spawned_minions}"
    return f"{effect.effect_type} {effect.amount:+}"


def print_action_result(state: FightState, result: ActionResult) -> None:
    """
    Prints what an action did, wheel trace included.

    Args:
        state (FightState): The fight after the action, used to resolve names.
        result (ActionResult): The result to display.

    """
    actor = state.get_character(result.actor_id)
    actor_name = actor.colored_name if actor else result.actor_id
    if not result.success:
        cprint(f"{actor_name} cannot use [blue]{result.action_name}[/]: {result.reason}")
        return
    cprint(f"{actor_name} uses [blue]{result.action_name}[/] ({result.ap_deducted} AP)")
    for spin in result.wheel_results:
        cprint(Padding(wheel_to_string(state, spin), (0, 2)))
    for target in result.target_results:
        effects = ", ".join(effect_result_to_string(e) for e in target.effects)
        cprint(Padding(f"{target.target_name}: {effects}", (0, 2)))
    if result.self_results:
        effects = ", ".join(effect_result_to_string(e) for e in result.self_results)
        cprint(Padding(f"self: {effects}", (0, 2)))


def print_fight_record(record: FightRecord) -> None:
    """Prints the outcome and statistics of a fight."""
    colors = {"victory": "bold green", "defeat": "bold red"}
    crule(f"[{colors.get(record.result, 'yellow')}]{record.result.upper()}[/]")
    cprint(f"Turns played: {record.turns}")

    table = Table(title="Party", pad_edge=False)
    table.add_column("Player", style="bold")
    table.add_column("Dealt", justify="right")
    table.add_column("Taken", justify="right")
    table.add_column("Healed", justify="right")
    table.add_column("Survived", justify="center")
    final = record.final_state
    for player_id, dealt in record.player_damage_dealt.items():
        player = final.get_character(player_id) if final else None
        table.add_row(
            player.name if player else player_id,
            str(dealt),
            str(record.player_damage_taken.get(player_id, 0)),
            str(record.player_healing_done.get(player_id, 0)),
            "[green]✓[/]" if record.player_survived.get(player_id) else "[red]✗[/]",
        )
    cprint(table)
    cprint(f"Shield absorbed: {record.shield_absorbed}, boss healing: {record.boss_healing_done}")
    if record.actions_used:
        used = ", ".join(
            f"{action_id} x{count}"
            for action_id, count in sorted(record.actions_used.items(), key=lambda kv: -kv[1])
        )
        cprint(f"Actions used: {used}")
