"""Data models for Kusayakyu tournaments."""

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

from kusayakyu.models.camp import Camp
from kusayakyu.models.match import FinalMatch, Match
from kusayakyu.models.standings import CampResult, HeadToHead, StandingsRow
from kusayakyu.models.team import Team, find_team, team_name
from kusayakyu.models.tournament import (
    BaseTournament,
    NormalTournament,
    TaikoTournament,
    Tournament,
    tournament_from_dict,
)

__all__ = [
    "BaseTournament",
    "Camp",
    "CampResult",
    "FinalMatch",
    "HeadToHead",
    "Match",
    "NormalTournament",
    "StandingsRow",
    "TaikoTournament",
    "Team",
    "Tournament",
    "find_team",
    "team_name",
    "tournament_from_dict",
]
