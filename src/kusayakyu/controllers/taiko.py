"""Controller for taiko (two-camp) tournaments.

A taiko tournament moves through three phases, never backwards:

``setup``
    Teams are registered in camp A or camp B, camps may be renamed.
``preliminary``
    Each camp plays its own round-robin. Once every camp match has a score
    the preliminaries are finalized: the camp standings hand out the roles
    大将 (captain), 副将 (vice-captain), 次鋒 (second) and 先鋒 (lead) by rank.
``final``
    The two camps' holders of each role meet once. The camp that collects
    more points (win 3, draw 1) over these matches wins the tournament.

Each phase is represented by a stage class exposing only the operations valid
in it; :attr:`TaikoController.stage` returns the one for the current phase.
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

from typing import ClassVar, Dict, List, Optional, Sequence, Tuple, Type, Union

from kusayakyu.constants import (
    CAMP_A,
    CAMP_B,
    CAMP_KEYS,
    MIN_TEAMS_FOR_SCHEDULE,
    PHASE_FINAL,
    PHASE_PRELIMINARY,
    PHASE_SETUP,
    ROLE_ORDER,
    WINNER_DRAW,
)
from kusayakyu.exceptions import (
    IncompleteMatchesError,
    InsufficientTeamsError,
    PhaseError,
)
from kusayakyu.models import (
    Camp,
    CampResult,
    FinalMatch,
    Match,
    StandingsRow,
    TaikoTournament,
    Team,
    find_team,
    team_name,
)
from kusayakyu.type_hints import CampKey, PhaseName, RoleAssignment, ScoreInput
from kusayakyu.utils import IdAllocator, setup_logger
from kusayakyu.utils.validation import clean_name, validate_team_name

from .result_recorder import ResultRecorder
from .schedule import generate_round_robin
from .standings import compute_standings, outcome

logger = setup_logger(__name__)


# ========== Role Assignment and Final Bracket ==========


def assign_roles(standings: Sequence[StandingsRow]) -> RoleAssignment:
    """Map team ids to roles by rank: best team captain, then vice-captain...

    Camps with fewer than four teams leave the lower roles unassigned; teams
    ranked below fourth get no role.
    """
    return {row.team_id: role for row, role in zip(standings, ROLE_ORDER)}


def build_final_matches(
    camp_a: Camp, camp_b: Camp, allocator: IdAllocator
) -> List[FinalMatch]:
    """One final match per role held in both camps, in role order."""
    final_matches = []
    for role in ROLE_ORDER:
        holder_a = camp_a.holder_of(role)
        holder_b = camp_b.holder_of(role)
        if holder_a is None or holder_b is None:
            logger.debug(f"Role {role} not held in both camps, no final match")
            continue
        final_matches.append(
            FinalMatch(
                id=allocator.next(),
                role=role,
                team_a_id=holder_a.id,
                team_b_id=holder_b.id,
            )
        )
    return final_matches


def tally_camp_result(final_matches: Sequence[FinalMatch]) -> Optional[CampResult]:
    """Camp points over the final, or None while any final match is unplayed."""
    if not final_matches or not all(m.completed for m in final_matches):
        return None

    camp_a_points = camp_b_points = 0
    for match in final_matches:
        _, points_a = outcome(match.team_a_score, match.team_b_score)
        _, points_b = outcome(match.team_b_score, match.team_a_score)
        camp_a_points += points_a
        camp_b_points += points_b

    if camp_a_points > camp_b_points:
        winner = CAMP_A
    elif camp_b_points > camp_a_points:
        winner = CAMP_B
    else:
        winner = WINNER_DRAW
    return CampResult(
        winner=winner, camp_a_points=camp_a_points, camp_b_points=camp_b_points
    )


# ========== Phase Stages ==========


class _Stage:
    """Operations available in one phase.

    A stage object stays bound to its phase: once the tournament has moved
    on, every mutating call on an old stage object raises :class:`PhaseError`.
    """

    phase: ClassVar[str] = ""

    def __init__(self, controller: "TaikoController") -> None:
        self._controller = controller

    @property
    def tournament(self) -> TaikoTournament:
        return self._controller.tournament

    def _ensure_current(self) -> None:
        if self.tournament.phase != self.phase:
            raise PhaseError(
                f"Tournament is in the {self.tournament.phase} phase, "
                f"not {self.phase}"
            )

    def _generate_preliminaries(self) -> "PreliminaryStage":
        tournament = self.tournament
        for key in CAMP_KEYS:
            camp = tournament.camp(key)
            if len(camp.teams) < MIN_TEAMS_FOR_SCHEDULE:
                raise InsufficientTeamsError(
                    f"Camp {camp.name} needs at least {MIN_TEAMS_FOR_SCHEDULE} "
                    f"teams (has {len(camp.teams)})"
                )

        allocator = self._controller.allocator
        # Each camp pairs only within itself
        matches_a = generate_round_robin(tournament.camp_a.teams, allocator)
        matches_b = generate_round_robin(tournament.camp_b.teams, allocator)
        tournament.camp_a.matches = matches_a
        tournament.camp_b.matches = matches_b
        tournament.phase = PHASE_PRELIMINARY

        logger.info(
            f"Generated preliminaries for {tournament.name}: "
            f"{len(matches_a)} + {len(matches_b)} matches"
        )
        return PreliminaryStage(self._controller)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tournament={self.tournament.id})"


class SetupStage(_Stage):
    """Registration phase: fill and name both camps."""

    phase = PHASE_SETUP

    def add_team(self, camp_key: CampKey, name: str) -> Team:
        """Register a team in one camp.

        Names must be unique across both camps.

        Raises:
            BlankNameError: If the name is blank after trimming
            DuplicateTeamNameError: If either camp already has the name
        """
        self._ensure_current()
        camp = self.tournament.camp(camp_key)
        cleaned = validate_team_name(name, (t.name for t in self.tournament.all_teams))
        team = Team(id=self._controller.allocator.next(), name=cleaned)
        camp.teams.append(team)
        logger.info(f"Added team {team.name} ({team.id}) to camp {camp.name}")
        return team

    def remove_team(self, camp_key: CampKey, team_id: int) -> bool:
        """Remove a team from one camp.

        Returns:
            True if removed, False if the camp has no such team
        """
        self._ensure_current()
        camp = self.tournament.camp(camp_key)
        team = find_team(camp.teams, team_id)
        if team is None:
            logger.debug(f"Team {team_id} not in camp {camp.name}, nothing to remove")
            return False

        camp.teams.remove(team)
        camp.matches = [m for m in camp.matches if not m.involves(team_id)]
        logger.info(f"Removed team {team.name} ({team_id}) from camp {camp.name}")
        return True

    def rename_camp(self, camp_key: CampKey, name: str) -> Camp:
        """Change a camp's display name."""
        self._ensure_current()
        camp = self.tournament.camp(camp_key)
        camp.name = clean_name(name, "Camp name")
        logger.info(f"Renamed camp {camp_key} to {camp.name}")
        return camp

    def generate_preliminaries(self) -> "PreliminaryStage":
        """Build both camps' round-robins and enter the preliminary phase.

        Raises:
            InsufficientTeamsError: If either camp has fewer than two teams
        """
        self._ensure_current()
        return self._generate_preliminaries()


class PreliminaryStage(_Stage):
    """Camp round-robins are being played."""

    phase = PHASE_PRELIMINARY

    def generate_preliminaries(self) -> "PreliminaryStage":
        """Rebuild both camps' round-robins, discarding entered scores."""
        self._ensure_current()
        logger.warning("Regenerating preliminaries, entered results are discarded")
        return self._generate_preliminaries()

    def record_score(
        self,
        camp_key: CampKey,
        match_index: int,
        home_score: ScoreInput,
        away_score: ScoreInput,
    ) -> Match:
        """Enter or correct the score of one camp match."""
        self._ensure_current()
        camp = self.tournament.camp(camp_key)
        return self._controller.result_recorder.record_score(
            camp.matches, match_index, home_score, away_score
        )

    def clear_score(self, camp_key: CampKey, match_index: int) -> Match:
        self._ensure_current()
        camp = self.tournament.camp(camp_key)
        return self._controller.result_recorder.clear_score(camp.matches, match_index)

    def preview_roles(self) -> Dict[str, RoleAssignment]:
        """Roles the current camp standings would hand out, per camp key.

        Nothing is changed; finalizing with the same standings assigns
        exactly these roles.
        """
        return {
            key: assign_roles(self._controller.camp_standings(key))
            for key in CAMP_KEYS
        }

    def finalize(self) -> "FinalStage":
        """Assign roles from the camp standings and build the final.

        This cannot be undone.

        Raises:
            IncompleteMatchesError: If any camp match has no score yet
        """
        self._ensure_current()
        tournament = self.tournament

        incomplete = [
            key for key in CAMP_KEYS if not tournament.camp(key).all_matches_completed
        ]
        if incomplete:
            recorder = self._controller.result_recorder
            counts = ", ".join(
                f"camp {key}: {len(recorder.pending(tournament.camp(key).matches))}"
                for key in incomplete
            )
            logger.error(f"Cannot finalize preliminaries, unplayed matches ({counts})")
            raise IncompleteMatchesError(
                f"Every preliminary match needs a score first ({counts})"
            )

        for key, roles in self.preview_roles().items():
            for team in tournament.camp(key).teams:
                team.role = roles.get(team.id)

        tournament.final_matches = build_final_matches(
            tournament.camp_a, tournament.camp_b, self._controller.allocator
        )
        tournament.phase = PHASE_FINAL

        logger.info(
            f"Finalized preliminaries for {tournament.name}: "
            f"{len(tournament.final_matches)} final matches"
        )
        return FinalStage(self._controller)


class FinalStage(_Stage):
    """Cross-camp final matches are being played."""

    phase = PHASE_FINAL

    def record_score(
        self, match_index: int, team_a_score: ScoreInput, team_b_score: ScoreInput
    ) -> FinalMatch:
        """Enter or correct the score of one final match."""
        self._ensure_current()
        return self._controller.result_recorder.record_score(
            self.tournament.final_matches, match_index, team_a_score, team_b_score
        )

    def clear_score(self, match_index: int) -> FinalMatch:
        self._ensure_current()
        return self._controller.result_recorder.clear_score(
            self.tournament.final_matches, match_index
        )

    def camp_result(self) -> Optional[CampResult]:
        """Tournament outcome, or None while any final match is unplayed."""
        return tally_camp_result(self.tournament.final_matches)


STAGES: Dict[str, Type[_Stage]] = {
    PHASE_SETUP: SetupStage,
    PHASE_PRELIMINARY: PreliminaryStage,
    PHASE_FINAL: FinalStage,
}

AnyStage = Union[SetupStage, PreliminaryStage, FinalStage]


# ========== Controller ==========


class TaikoController:
    """Operations on a taiko tournament.

    Read-only queries work in every phase. Mutations go through the current
    :attr:`stage`; the ``*_camp_*`` / ``*_final_*`` methods below are
    shortcuts that resolve the stage and raise :class:`PhaseError` when the
    operation does not belong to the current phase.
    """

    def __init__(self, tournament: TaikoTournament, allocator: IdAllocator) -> None:
        self.tournament = tournament
        self.allocator = allocator
        self.result_recorder = ResultRecorder()

    # ========== Properties ==========

    @property
    def phase(self) -> PhaseName:
        return self.tournament.phase

    @property
    def stage(self) -> AnyStage:
        """Stage object for the current phase."""
        return STAGES[self.tournament.phase](self)

    @property
    def final_matches(self) -> List[FinalMatch]:
        return self.tournament.final_matches

    def camp(self, camp_key: CampKey) -> Camp:
        return self.tournament.camp(camp_key)

    @property
    def has_results(self) -> bool:
        """Whether regenerating the preliminaries would discard entered scores."""
        return any(
            m.completed
            for key in CAMP_KEYS
            for m in self.tournament.camp(key).matches
        )

    def _in(self, *stage_types: Type[_Stage]) -> AnyStage:
        stage = self.stage
        if not isinstance(stage, stage_types):
            allowed = " or ".join(t.phase for t in stage_types)
            logger.error(
                f"Operation needs the {allowed} phase, tournament is in {self.phase}"
            )
            raise PhaseError(
                f"Not allowed in the {self.phase} phase (needs {allowed})"
            )
        return stage

    # ========== Setup ==========

    def add_team_to_camp(self, camp_key: CampKey, name: str) -> Team:
        return self._in(SetupStage).add_team(camp_key, name)

    def remove_team_from_camp(self, camp_key: CampKey, team_id: int) -> bool:
        return self._in(SetupStage).remove_team(camp_key, team_id)

    def rename_camp(self, camp_key: CampKey, name: str) -> Camp:
        return self._in(SetupStage).rename_camp(camp_key, name)

    def generate_preliminaries(self) -> PreliminaryStage:
        return self._in(SetupStage, PreliminaryStage).generate_preliminaries()

    # ========== Preliminary ==========

    def record_camp_score(
        self,
        camp_key: CampKey,
        match_index: int,
        home_score: ScoreInput,
        away_score: ScoreInput,
    ) -> Match:
        return self._in(PreliminaryStage).record_score(
            camp_key, match_index, home_score, away_score
        )

    def clear_camp_score(self, camp_key: CampKey, match_index: int) -> Match:
        return self._in(PreliminaryStage).clear_score(camp_key, match_index)

    def preview_roles(self) -> Dict[str, RoleAssignment]:
        return self._in(PreliminaryStage).preview_roles()

    def finalize_preliminary(self) -> FinalStage:
        return self._in(PreliminaryStage).finalize()

    # ========== Final ==========

    def record_final_score(
        self, match_index: int, team_a_score: ScoreInput, team_b_score: ScoreInput
    ) -> FinalMatch:
        return self._in(FinalStage).record_score(
            match_index, team_a_score, team_b_score
        )

    def clear_final_score(self, match_index: int) -> FinalMatch:
        return self._in(FinalStage).clear_score(match_index)

    def camp_result(self) -> Optional[CampResult]:
        """Outcome of the final; None before the final or while it is unfinished."""
        return tally_camp_result(self.tournament.final_matches)

    # ========== Queries ==========

    def camp_standings(self, camp_key: CampKey) -> List[StandingsRow]:
        camp = self.tournament.camp(camp_key)
        return compute_standings(camp.teams, camp.matches)

    def team_name(self, team_id: int) -> str:
        return team_name(self.tournament.all_teams, team_id)

    def final_pairing_names(self) -> List[Tuple[str, str, str]]:
        """(role, camp A team name, camp B team name) per final match."""
        return [
            (m.role, self.team_name(m.team_a_id), self.team_name(m.team_b_id))
            for m in self.final_matches
        ]
