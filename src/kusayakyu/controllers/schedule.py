"""Round-robin schedule generation.

Every team in a roster meets every other team exactly once. The roster order
decides who is listed as the home side (the team registered first) and the
numbering of the matches:

    >>> [(m.match_number, m.home_team_id, m.away_team_id)
    ...  for m in generate_round_robin(teams, allocator)]   # teams 1, 2, 3
    [(1, 1, 2), (2, 1, 3), (3, 2, 3)]
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

from itertools import combinations
from typing import List, Sequence

from kusayakyu.constants import MIN_TEAMS_FOR_SCHEDULE
from kusayakyu.exceptions import InsufficientTeamsError
from kusayakyu.models import Match, Team
from kusayakyu.utils import IdAllocator, setup_logger

logger = setup_logger(__name__)


def number_of_matches(num_teams: int) -> int:
    """Size of a full round-robin over ``num_teams`` teams."""
    return num_teams * (num_teams - 1) // 2 if num_teams > 1 else 0


def generate_round_robin(teams: Sequence[Team], allocator: IdAllocator) -> List[Match]:
    """Create an unplayed round-robin for ``teams``.

    Args:
        teams: Roster, in registration order. Not modified.
        allocator: Source of match identifiers

    Returns:
        ``n(n-1)/2`` matches, numbered from 1 in generation order

    Raises:
        InsufficientTeamsError: If the roster has fewer than two teams
    """
    if len(teams) < MIN_TEAMS_FOR_SCHEDULE:
        raise InsufficientTeamsError(
            f"At least {MIN_TEAMS_FOR_SCHEDULE} teams are needed to generate "
            f"a schedule (got {len(teams)})"
        )

    # combinations() yields (i, j) with i < j, outer index ascending
    matches = [
        Match(
            id=allocator.next(),
            match_number=number,
            home_team_id=home.id,
            away_team_id=away.id,
        )
        for number, (home, away) in enumerate(combinations(teams, 2), start=1)
    ]

    logger.debug(f"Generated {len(matches)} matches for {len(teams)} teams")
    return matches
