"""Derived, read-only result records."""

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

from dataclasses import dataclass
from typing import Optional, Tuple

from kusayakyu.constants import RESULT_NONE
from kusayakyu.type_hints import CampWinner, HeadToHeadResult


@dataclass
class StandingsRow:
    """One team's line in the standings table.

    ``run_diff`` and ``win_rate`` are filled in once all matches have been
    accumulated.
    """

    team_id: int
    name: str
    played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    points: int = 0
    runs_for: int = 0
    runs_against: int = 0
    run_diff: int = 0
    win_rate: float = 0.0

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        """Ranking key, compared descending: points, run diff, runs scored."""
        return (self.points, self.run_diff, self.runs_for)


@dataclass(frozen=True)
class HeadToHead:
    """Result of the match between two teams, from the first team's view.

    ``score`` is formatted "own-opponent", e.g. "5-3".
    """

    result: HeadToHeadResult = RESULT_NONE
    score: Optional[str] = None


@dataclass(frozen=True)
class CampResult:
    """Outcome of a completed taiko final."""

    winner: CampWinner
    camp_a_points: int
    camp_b_points: int
