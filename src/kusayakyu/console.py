"""Interactive console for Kusayakyu.

A small command shell on top of the tournament engine: every command maps to
one collection or controller operation, and the collection is saved to the
JSON store after each change. Run ``kusayakyu`` (or ``python -m kusayakyu``)
and type ``help``.
"""

# Kusayakyu
# Copyright (C) 2025  Kusayakyu developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import shlex
import sys
from typing import Callable, Dict, List, Optional, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import confirm as prompt_confirm
from prompt_toolkit.styles import Style

from kusayakyu.collection import TournamentCollection
from kusayakyu.config import AppConfig
from kusayakyu.constants import (
    CAMP_KEYS,
    FORMAT_NORMAL,
    FORMAT_TAIKO,
    PHASE_FINAL,
    RESULT_DRAW,
    RESULT_LOSE,
    RESULT_WIN,
    ROLE_NAMES,
    TOURNAMENT_FORMATS,
    WINNER_DRAW,
)
from kusayakyu.controllers import NormalController, TaikoController
from kusayakyu.exceptions import KusayakyuException, ValidationError
from kusayakyu.models import Camp, HeadToHead, StandingsRow
from kusayakyu.storage import JsonStore, export_collection, import_collection
from kusayakyu.utils import setup_logger

logger = setup_logger(__name__)


# Command definitions: name -> (usage, description)
COMMANDS: Dict[str, tuple] = {
    "help": ("help [command]", "Show commands, or help for one command"),
    "list": ("list", "List tournaments (* marks the active one)"),
    "new": ("new NAME [--date D] [--format normal|taiko]", "Create a tournament"),
    "select": ("select ID", "Make a tournament the active one"),
    "rename": ("rename NAME [--date D]", "Rename the active tournament"),
    "delete": ("delete ID", "Delete a tournament"),
    "teams": ("teams", "Show the roster (both camps for taiko)"),
    "add": ("add [A|B] NAME", "Register a team (camp key for taiko)"),
    "remove": ("remove [A|B] ID", "Remove a team and its matches"),
    "camp": ("camp A|B NAME", "Rename a taiko camp"),
    "schedule": ("schedule", "Generate the round-robin / preliminaries"),
    "matches": ("matches", "Show matches with their index"),
    "score": ("score [A|B] INDEX X Y", "Enter a score (camp key for preliminaries)"),
    "clear": ("clear [A|B] INDEX", "Remove an entered score"),
    "standings": ("standings", "Show standings"),
    "matchup": ("matchup", "Show the head-to-head table"),
    "finalize": ("finalize", "Assign taiko roles and build the final"),
    "result": ("result", "Show the taiko final result"),
    "export": ("export DIRECTORY", "Export all tournaments to a JSON file"),
    "import": ("import FILE", "Replace all tournaments with an export file"),
    "reset": ("reset", "Delete all tournaments"),
    "quit": ("quit", "Leave the console"),
}

H2H_MARKS = {RESULT_WIN: "○", RESULT_LOSE: "●", RESULT_DRAW: "△"}


# ========== Rendering ==========


def format_standings(rows: Sequence[StandingsRow]) -> str:
    """Standings as a text table."""
    if not rows:
        return "No teams registered"
    header = f"{'#':>2}  {'Team':<16}{'G':>3}{'W':>3}{'L':>3}{'D':>3}{'Pts':>5}{'Win%':>7}{'RF':>4}{'RA':>4}{'Diff':>6}"
    lines = [header]
    for rank, row in enumerate(rows, start=1):
        lines.append(
            f"{rank:>2}  {row.name:<16}{row.played:>3}{row.wins:>3}{row.losses:>3}"
            f"{row.draws:>3}{row.points:>5}{row.win_rate * 100:>6.1f}%"
            f"{row.runs_for:>4}{row.runs_against:>4}{row.run_diff:>+6d}"
        )
    return "\n".join(lines)


def format_crosstable(
    names: Sequence[str], grid: Sequence[Sequence[Optional[HeadToHead]]]
) -> str:
    """Head-to-head table; each cell shows own-opponent score and a mark."""
    if len(names) < 2:
        return "At least 2 teams are needed for the matchup table"

    def cell(h2h: Optional[HeadToHead]) -> str:
        if h2h is None:
            return "-"
        if h2h.score is None:
            return "."
        return f"{H2H_MARKS[h2h.result]}{h2h.score}"

    width = max(8, max(len(n) for n in names) + 2)
    lines = [" " * width + "".join(f"{n:>{width}}" for n in names)]
    for name, row in zip(names, grid):
        lines.append(f"{name:<{width}}" + "".join(f"{cell(c):>{width}}" for c in row))
    return "\n".join(lines)


def format_camp(key: str, camp: Camp) -> str:
    lines = [f"Camp {key}: {camp.name}"]
    for i, team in enumerate(camp.teams, start=1):
        role = f" [{team.role_name}]" if team.role else ""
        lines.append(f"  {i}. {team.name} (id {team.id}){role}")
    if not camp.teams:
        lines.append("  (no teams)")
    return "\n".join(lines)


# ========== Session ==========


class ConsoleSession:
    """UI state of one console run.

    Holds the collection being edited and where it is stored. Confirmation
    prompts and output go through the injected callables so the session can
    be driven without a terminal.
    """

    def __init__(
        self,
        store: JsonStore,
        collection: Optional[TournamentCollection] = None,
        confirm: Callable[[str], bool] = prompt_confirm,
        out: Callable[[str], None] = print,
    ) -> None:
        self.store = store
        self.collection = (
            collection if collection is not None else store.load_collection()
        )
        self.confirm = confirm
        self.out = out

    def save(self) -> None:
        self.store.save_collection(self.collection)

    # ========== Dispatch ==========

    def execute(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the user asked to quit, True otherwise
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.out(f"Error: {e}")
            return True
        if not parts:
            return True

        command, args = parts[0].lstrip("/"), parts[1:]
        if command in ("quit", "exit", "q"):
            return False
        if command not in COMMANDS:
            self.out(f"Unknown command: {command} (type 'help')")
            return True

        handler = getattr(self, f"cmd_{command}")
        try:
            if handler(args):
                self.save()
        except SystemExit:
            # argparse calls sys.exit on error
            pass
        except (KusayakyuException, ValueError) as e:
            self.out(f"Error: {e}")
            logger.debug(f"Command {command} failed: {e}")
        return True

    def _parse(self, command: str, args: List[str], *arguments) -> argparse.Namespace:
        parser = argparse.ArgumentParser(
            prog=command, description=COMMANDS[command][1], add_help=False
        )
        for names, kwargs in arguments:
            parser.add_argument(*names, **kwargs)
        return parser.parse_args(args)

    def _controller(self):
        return self.collection.controller()

    @staticmethod
    def _camp_args(controller, args: List[str], needed: int) -> tuple:
        """Split an optional leading camp key off the arguments.

        Taiko commands take the camp key first; normal ones do not.
        """
        if isinstance(controller, TaikoController):
            if not args or args[0].upper() not in CAMP_KEYS:
                raise ValidationError("Give the camp first: A or B")
            camp_key, args = args[0].upper(), args[1:]
        else:
            camp_key = None
        if len(args) < needed:
            raise ValidationError("Missing arguments")
        return camp_key, args

    # ========== Commands ==========
    # Each returns True when the collection changed and must be saved.

    def cmd_help(self, args: List[str]) -> bool:
        if args and args[0] in COMMANDS:
            usage, description = COMMANDS[args[0]]
            self.out(f"{usage}\n  {description}")
            return False
        for usage, description in COMMANDS.values():
            self.out(f"  {usage:<46}{description}")
        return False

    def cmd_list(self, args: List[str]) -> bool:
        if not self.collection.tournaments:
            self.out("No tournaments yet (create one with 'new')")
        for t in self.collection.tournaments:
            mark = "*" if t.id == self.collection.active_tournament_id else " "
            self.out(f"{mark} {t.id:>4}  {t.name}  {t.date or '-'}  [{t.format}]")
        return False

    def cmd_new(self, args: List[str]) -> bool:
        ns = self._parse(
            "new",
            args,
            (("name",), {"nargs": "+"}),
            (("--date",), {"default": ""}),
            (("--format",), {"choices": TOURNAMENT_FORMATS, "default": FORMAT_NORMAL}),
        )
        tournament = self.collection.create(" ".join(ns.name), ns.date, ns.format)
        self.out(f"Created {tournament.name} (id {tournament.id})")
        return True

    def cmd_select(self, args: List[str]) -> bool:
        ns = self._parse("select", args, (("id",), {"type": int}))
        tournament = self.collection.select(ns.id)
        self.out(f"Active: {tournament.name}")
        return True

    def cmd_rename(self, args: List[str]) -> bool:
        ns = self._parse(
            "rename", args, (("name",), {"nargs": "+"}), (("--date",), {"default": None})
        )
        tournament = self.collection.rename(" ".join(ns.name), ns.date)
        self.out(f"Renamed to {tournament.name} {tournament.date}")
        return True

    def cmd_delete(self, args: List[str]) -> bool:
        ns = self._parse("delete", args, (("id",), {"type": int}))
        tournament = self.collection.get(ns.id)
        if tournament is None:
            self.out(f"No tournament with id {ns.id}")
            return False
        if not self.confirm(f"Delete {tournament.name}? This cannot be undone."):
            return False
        return self.collection.delete(ns.id)

    def cmd_teams(self, args: List[str]) -> bool:
        controller = self._controller()
        if isinstance(controller, TaikoController):
            for key in CAMP_KEYS:
                self.out(format_camp(key, controller.camp(key)))
            return False
        if not controller.teams:
            self.out("No teams registered")
        for i, team in enumerate(controller.teams, start=1):
            self.out(f"{i}. {team.name} (id {team.id})")
        return False

    def cmd_add(self, args: List[str]) -> bool:
        controller = self._controller()
        camp_key, rest = self._camp_args(controller, args, 1)
        name = " ".join(rest)
        if camp_key:
            team = controller.add_team_to_camp(camp_key, name)
        else:
            team = controller.add_team(name)
        self.out(f"Added {team.name} (id {team.id})")
        return True

    def cmd_remove(self, args: List[str]) -> bool:
        controller = self._controller()
        camp_key, rest = self._camp_args(controller, args, 1)
        team_id = int(rest[0])
        if not self.confirm("Remove this team? Its matches are removed too."):
            return False
        if camp_key:
            return controller.remove_team_from_camp(camp_key, team_id)
        return controller.remove_team(team_id)

    def cmd_camp(self, args: List[str]) -> bool:
        controller = self._controller()
        if not isinstance(controller, TaikoController):
            raise ValidationError("Only taiko tournaments have camps")
        camp_key, rest = self._camp_args(controller, args, 1)
        camp = controller.rename_camp(camp_key, " ".join(rest))
        self.out(f"Camp {camp_key} is now {camp.name}")
        return True

    def cmd_schedule(self, args: List[str]) -> bool:
        controller = self._controller()
        if controller.has_results and not self.confirm(
            "Overwrite the schedule? All entered results are reset."
        ):
            return False
        if isinstance(controller, TaikoController):
            controller.generate_preliminaries()
            for key in CAMP_KEYS:
                self.out(f"Camp {key}: {len(controller.camp(key).matches)} matches")
        else:
            matches = controller.generate_schedule()
            self.out(f"Generated {len(matches)} matches")
        return True

    def cmd_matches(self, args: List[str]) -> bool:
        controller = self._controller()
        if isinstance(controller, NormalController):
            self._print_matches(controller.matches, controller.team_name)
            return False
        for key in CAMP_KEYS:
            self.out(f"Camp {key}: {controller.camp(key).name}")
            self._print_matches(controller.camp(key).matches, controller.team_name)
        if controller.final_matches:
            self.out("Final:")
            for i, m in enumerate(controller.final_matches):
                score = f"{m.team_a_score}-{m.team_b_score}" if m.completed else "vs"
                self.out(
                    f"  [{i}] {ROLE_NAMES[m.role]}: {controller.team_name(m.team_a_id)} "
                    f"{score} {controller.team_name(m.team_b_id)}"
                )
        return False

    def _print_matches(self, matches, name_of) -> None:
        if not matches:
            self.out("  No schedule generated yet")
        for i, m in enumerate(matches):
            score = f"{m.home_score}-{m.away_score}" if m.completed else "vs"
            self.out(
                f"  [{i}] #{m.match_number} {name_of(m.home_team_id)} "
                f"{score} {name_of(m.away_team_id)}"
            )

    def cmd_score(self, args: List[str]) -> bool:
        controller = self._controller()
        if isinstance(controller, TaikoController) and controller.phase == PHASE_FINAL:
            if len(args) < 3:
                raise ValidationError("Usage: score INDEX A_SCORE B_SCORE")
            controller.record_final_score(int(args[0]), args[1], args[2])
            return True
        camp_key, rest = self._camp_args(controller, args, 3)
        if camp_key:
            controller.record_camp_score(camp_key, int(rest[0]), rest[1], rest[2])
        else:
            controller.record_score(int(rest[0]), rest[1], rest[2])
        return True

    def cmd_clear(self, args: List[str]) -> bool:
        controller = self._controller()
        if isinstance(controller, TaikoController) and controller.phase == PHASE_FINAL:
            if not args:
                raise ValidationError("Usage: clear INDEX")
            controller.clear_final_score(int(args[0]))
            return True
        camp_key, rest = self._camp_args(controller, args, 1)
        if camp_key:
            controller.clear_camp_score(camp_key, int(rest[0]))
        else:
            controller.clear_score(int(rest[0]))
        return True

    def cmd_standings(self, args: List[str]) -> bool:
        controller = self._controller()
        if isinstance(controller, TaikoController):
            for key in CAMP_KEYS:
                self.out(f"Camp {key}: {controller.camp(key).name}")
                self.out(format_standings(controller.camp_standings(key)))
        else:
            self.out(format_standings(controller.standings()))
        return False

    def cmd_matchup(self, args: List[str]) -> bool:
        controller = self._controller()
        if not isinstance(controller, NormalController):
            raise ValidationError("The matchup table is for normal tournaments")
        names = [t.name for t in controller.teams]
        self.out(format_crosstable(names, controller.crosstable()))
        return False

    def cmd_finalize(self, args: List[str]) -> bool:
        controller = self._controller()
        if not isinstance(controller, TaikoController):
            raise ValidationError("Only taiko tournaments have a final")
        if not self.confirm("Finalize the preliminaries? This cannot be undone."):
            return False
        controller.finalize_preliminary()
        for role, name_a, name_b in controller.final_pairing_names():
            self.out(f"{ROLE_NAMES[role]}: {name_a} vs {name_b}")
        return True

    def cmd_result(self, args: List[str]) -> bool:
        controller = self._controller()
        if not isinstance(controller, TaikoController):
            raise ValidationError("Only taiko tournaments have a final")
        result = controller.camp_result()
        if result is None:
            self.out("The final is not finished yet")
            return False
        if result.winner == WINNER_DRAW:
            winner = "Draw"
        else:
            winner = f"Camp {result.winner} ({controller.camp(result.winner).name}) wins"
        self.out(f"{winner}: {result.camp_a_points} - {result.camp_b_points}")
        return False

    def cmd_export(self, args: List[str]) -> bool:
        ns = self._parse("export", args, (("directory",), {"nargs": "?", "default": "."}))
        path = export_collection(self.collection, ns.directory)
        self.out(f"Exported to {path}")
        return False

    def cmd_import(self, args: List[str]) -> bool:
        ns = self._parse("import", args, (("file",), {}))
        imported = import_collection(ns.file)
        if not self.confirm("Replace all tournaments with the imported ones?"):
            return False
        self.collection = imported
        self.out(f"Imported {len(imported)} tournaments")
        return True

    def cmd_reset(self, args: List[str]) -> bool:
        if not self.confirm("Delete all data? This cannot be undone."):
            return False
        self.collection.clear()
        return True


# ========== Entry Point ==========


def create_completer() -> NestedCompleter:
    """Autocomplete for command names and camp keys."""
    camp_keys = {key: None for key in CAMP_KEYS}
    options: Dict[str, Optional[dict]] = {name: None for name in COMMANDS}
    for name in ("add", "remove", "camp", "score", "clear"):
        options[name] = camp_keys
    options["new"] = {"--format": {FORMAT_NORMAL: None, FORMAT_TAIKO: None}}
    options["help"] = {name: None for name in COMMANDS}
    return NestedCompleter.from_nested_dict(options)


def run_interactive(session: ConsoleSession) -> int:
    """Read-eval loop with history and autocomplete."""
    style = Style.from_dict({"prompt": "#00aa00 bold"})
    prompt = PromptSession(
        completer=create_completer(), history=InMemoryHistory(), style=style
    )

    while True:
        active = session.collection.active
        label = active.name if active else "-"
        try:
            line = prompt.prompt(f"kusayakyu [{label}]> ")
        except KeyboardInterrupt:
            session.out("Use 'quit' to leave")
            continue
        except EOFError:
            break
        if not session.execute(line):
            break
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kusayakyu", description="Amateur baseball tournament manager"
    )
    parser.add_argument("--data-dir", help="Folder holding the tournament store")
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Run a single console command instead of the interactive shell",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_main_parser().parse_args(argv)

    config = AppConfig.from_env()
    if args.data_dir:
        config.data_dir = args.data_dir
    try:
        session = ConsoleSession(JsonStore(config.store_path))
    except KusayakyuException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command:
        session.execute(shlex.join(args.command))
        return 0
    return run_interactive(session)


if __name__ == "__main__":
    sys.exit(main())
