"""Match data classes."""

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
from typing import Any, Dict, Optional, Tuple


def _score_from(value: Any) -> Optional[int]:
    # bool is an int subclass and never a score
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@dataclass
class Match:
    """A round-robin match between two teams of the same roster.

    Attributes
    ----------
    id : int
        Identifier, unique and never reused.
    match_number : int
        1-based position in the generated schedule.
    home_team_id : int
        Team listed first in the roster.
    away_team_id : int
        Team listed later in the roster.
    home_score, away_score : int or None
        Runs scored, None until entered.
    completed : bool
        True once both scores are entered.
    """

    id: int
    match_number: int
    home_team_id: int
    away_team_id: int
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    completed: bool = False

    def set_score(self, home_score: int, away_score: int) -> None:
        """Store both scores and mark the match completed."""
        self.home_score = home_score
        self.away_score = away_score
        self.completed = True

    def clear_score(self) -> None:
        """Return the match to the unplayed state."""
        self.home_score = None
        self.away_score = None
        self.completed = False

    def involves(self, team_id: int) -> bool:
        """Whether ``team_id`` plays in this match."""
        return team_id in (self.home_team_id, self.away_team_id)

    def pairs(self, team1_id: int, team2_id: int) -> bool:
        """Whether this is the match between the two teams, in either order."""
        return {self.home_team_id, self.away_team_id} == {team1_id, team2_id}

    def scores_for(self, team_id: int) -> Tuple[Optional[int], Optional[int]]:
        """(own score, opponent score) from ``team_id``'s point of view."""
        if team_id == self.home_team_id:
            return self.home_score, self.away_score
        return self.away_score, self.home_score

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "matchNumber": self.match_number,
            "homeTeamId": self.home_team_id,
            "awayTeamId": self.away_team_id,
            "homeScore": self.home_score,
            "awayScore": self.away_score,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary.

        ``completed`` is derived from the scores so a document can never
        hold a completed match without both scores.
        """
        home_score = _score_from(data.get("homeScore"))
        away_score = _score_from(data.get("awayScore"))
        return cls(
            id=data["id"],
            match_number=data.get("matchNumber", 0),
            home_team_id=data["homeTeamId"],
            away_team_id=data["awayTeamId"],
            home_score=home_score,
            away_score=away_score,
            completed=home_score is not None and away_score is not None,
        )


@dataclass
class FinalMatch:
    """A taiko final match between the two camps' holders of one role.

    Attributes
    ----------
    id : int
        Identifier, unique and never reused.
    role : str
        Role both teams hold in their camp.
    team_a_id : int
        Camp A's team.
    team_b_id : int
        Camp B's team.
    team_a_score, team_b_score : int or None
        Runs scored, None until entered.
    completed : bool
        True once both scores are entered.
    """

    id: int
    role: str
    team_a_id: int
    team_b_id: int
    team_a_score: Optional[int] = None
    team_b_score: Optional[int] = None
    completed: bool = False

    def set_score(self, team_a_score: int, team_b_score: int) -> None:
        """Store both scores and mark the match completed."""
        self.team_a_score = team_a_score
        self.team_b_score = team_b_score
        self.completed = True

    def clear_score(self) -> None:
        """Return the match to the unplayed state."""
        self.team_a_score = None
        self.team_b_score = None
        self.completed = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize final match to dictionary."""
        return {
            "id": self.id,
            "role": self.role,
            "teamAId": self.team_a_id,
            "teamBId": self.team_b_id,
            "teamAScore": self.team_a_score,
            "teamBScore": self.team_b_score,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FinalMatch":
        """Deserialize final match from dictionary."""
        team_a_score = _score_from(data.get("teamAScore"))
        team_b_score = _score_from(data.get("teamBScore"))
        return cls(
            id=data["id"],
            role=data["role"],
            team_a_id=data["teamAId"],
            team_b_id=data["teamBId"],
            team_a_score=team_a_score,
            team_b_score=team_b_score,
            completed=team_a_score is not None and team_b_score is not None,
        )
