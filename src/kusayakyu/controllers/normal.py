"""Controller for normal (flat round-robin) tournaments."""

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

from typing import List, Optional

from kusayakyu.models import (
    HeadToHead,
    Match,
    NormalTournament,
    StandingsRow,
    Team,
    find_team,
    team_name,
)
from kusayakyu.type_hints import ScoreInput
from kusayakyu.utils import IdAllocator, setup_logger
from kusayakyu.utils.validation import validate_team_name

from .result_recorder import ResultRecorder
from .schedule import generate_round_robin
from .standings import compute_standings, crosstable, head_to_head

logger = setup_logger(__name__)


class NormalController:
    """Operations on a normal tournament's roster and schedule.

    The controller holds no state of its own besides collaborators: all
    changes go to the wrapped :class:`NormalTournament`, so the collection
    snapshot always reflects them.
    """

    def __init__(self, tournament: NormalTournament, allocator: IdAllocator) -> None:
        self.tournament = tournament
        self.allocator = allocator
        self.result_recorder = ResultRecorder()

    # ========== Properties ==========

    @property
    def teams(self) -> List[Team]:
        return self.tournament.teams

    @property
    def matches(self) -> List[Match]:
        return self.tournament.matches

    @property
    def has_results(self) -> bool:
        """Whether regenerating the schedule would discard entered scores."""
        return any(m.completed for m in self.matches)

    # ========== Team Management ==========

    def add_team(self, name: str) -> Team:
        """Register a team.

        Raises:
            BlankNameError: If the name is blank after trimming
            DuplicateTeamNameError: If the roster already has the name
        """
        cleaned = validate_team_name(name, (t.name for t in self.teams))
        team = Team(id=self.allocator.next(), name=cleaned)
        self.teams.append(team)
        logger.info(f"Added team: {team.name} ({team.id})")
        return team

    def remove_team(self, team_id: int) -> bool:
        """Remove a team and every match it plays in.

        Returns:
            True if removed, False if the team was not rostered
        """
        team = find_team(self.teams, team_id)
        if team is None:
            logger.debug(f"Team {team_id} not found, nothing to remove")
            return False

        self.teams.remove(team)
        before = len(self.matches)
        self.tournament.matches = [m for m in self.matches if not m.involves(team_id)]
        logger.info(
            f"Removed team: {team.name} ({team_id}) and "
            f"{before - len(self.matches)} of its matches"
        )
        return True

    def team_name(self, team_id: int) -> str:
        return team_name(self.teams, team_id)

    # ========== Schedule and Results ==========

    def generate_schedule(self) -> List[Match]:
        """Replace the match list with a fresh round-robin.

        Raises:
            InsufficientTeamsError: If fewer than two teams are rostered
        """
        matches = generate_round_robin(self.teams, self.allocator)
        if self.has_results:
            logger.warning("Regenerating schedule, entered results are discarded")
        self.tournament.matches = matches
        logger.info(
            f"Generated schedule for {self.tournament.name}: {len(matches)} matches"
        )
        return matches

    def record_score(
        self, match_index: int, home_score: ScoreInput, away_score: ScoreInput
    ) -> Match:
        """Enter or correct the score of the match at ``match_index``."""
        return self.result_recorder.record_score(
            self.matches, match_index, home_score, away_score
        )

    def clear_score(self, match_index: int) -> Match:
        return self.result_recorder.clear_score(self.matches, match_index)

    # ========== Standings ==========

    def standings(self) -> List[StandingsRow]:
        return compute_standings(self.teams, self.matches)

    def head_to_head(self, team_a_id: int, team_b_id: int) -> HeadToHead:
        return head_to_head(self.matches, team_a_id, team_b_id)

    def crosstable(self) -> List[List[Optional[HeadToHead]]]:
        return crosstable(self.teams, self.matches)
