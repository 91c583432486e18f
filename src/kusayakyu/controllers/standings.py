"""Standings calculation.

This module reduces completed matches over a roster into ranked per-team
statistics, and answers head-to-head questions for the matchup table.

Ranking, best first:

1. Points (win 3, draw 1, loss 0)
2. Run differential
3. Runs scored

Teams still level after all three keep their roster order.

The win rate shown next to the points is ``wins / (wins + losses)``: draws are
left out of the denominator, so it answers "of the decisive games, how many
were won". It plays no part in the ranking.
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

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from kusayakyu.constants import (
    DRAW_POINTS,
    LOSS_POINTS,
    RESULT_DRAW,
    RESULT_LOSE,
    RESULT_WIN,
    WIN_POINTS,
)
from kusayakyu.models import HeadToHead, Match, StandingsRow, Team
from kusayakyu.utils import setup_logger

logger = setup_logger(__name__)


def outcome(own_score: int, opponent_score: int) -> Tuple[str, int]:
    """Result and points earned for one side of a finished match."""
    if own_score > opponent_score:
        return RESULT_WIN, WIN_POINTS
    if own_score < opponent_score:
        return RESULT_LOSE, LOSS_POINTS
    return RESULT_DRAW, DRAW_POINTS


def _apply(row: StandingsRow, runs_for: int, runs_against: int) -> None:
    row.played += 1
    row.runs_for += runs_for
    row.runs_against += runs_against

    result, points = outcome(runs_for, runs_against)
    row.points += points
    if result == RESULT_WIN:
        row.wins += 1
    elif result == RESULT_LOSE:
        row.losses += 1
    else:
        row.draws += 1


def compute_standings(
    teams: Sequence[Team], matches: Iterable[Match]
) -> List[StandingsRow]:
    """Get current standings for a roster.

    Args:
        teams: Roster; its order breaks ties that remain after every key
        matches: Matches of the roster; unplayed ones are ignored

    Returns:
        One row per team, sorted best first
    """
    rows: Dict[int, StandingsRow] = {
        team.id: StandingsRow(team_id=team.id, name=team.name) for team in teams
    }

    for match in matches:
        if not match.completed:
            continue

        home = rows.get(match.home_team_id)
        away = rows.get(match.away_team_id)
        if home is None or away is None:
            # Happens transiently while a deletion cascades
            logger.debug(
                f"Skipping match {match.id}: team no longer in the roster"
            )
            continue

        _apply(home, match.home_score, match.away_score)
        _apply(away, match.away_score, match.home_score)

    for row in rows.values():
        row.run_diff = row.runs_for - row.runs_against
        decisive = row.wins + row.losses
        row.win_rate = row.wins / decisive if decisive > 0 else 0

    # dicts keep roster order and sorted() is stable, also with reverse=True
    return sorted(rows.values(), key=lambda r: r.sort_key, reverse=True)


def find_match(
    matches: Iterable[Match], team1_id: int, team2_id: int
) -> Optional[Match]:
    """The match between two teams, in either home/away order."""
    return next((m for m in matches if m.pairs(team1_id, team2_id)), None)


def head_to_head(
    matches: Iterable[Match], team_a_id: int, team_b_id: int
) -> HeadToHead:
    """Result of the match between two teams, from ``team_a_id``'s view.

    Returns ``HeadToHead("none", None)`` when the teams have no completed
    match against each other.
    """
    match = find_match(matches, team_a_id, team_b_id)
    if match is None or not match.completed:
        return HeadToHead()

    own, opponent = match.scores_for(team_a_id)
    result, _ = outcome(own, opponent)
    return HeadToHead(result=result, score=f"{own}-{opponent}")


def crosstable(
    teams: Sequence[Team], matches: Sequence[Match]
) -> List[List[Optional[HeadToHead]]]:
    """Matchup grid: cell ``[i][j]`` is team i's result against team j.

    Diagonal cells are None.
    """
    return [
        [
            None if row_team.id == col_team.id
            else head_to_head(matches, row_team.id, col_team.id)
            for col_team in teams
        ]
        for row_team in teams
    ]
