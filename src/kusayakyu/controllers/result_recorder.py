"""Result recording and validation for tournaments.

This module handles recording match scores with proper validation and error
checking. Matches are addressed by their index in the list shown to the user.
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

from typing import List, Sequence, Tuple, TypeVar, Union

from kusayakyu.exceptions import MatchIndexError
from kusayakyu.models import FinalMatch, Match
from kusayakyu.type_hints import ScoreInput
from kusayakyu.utils import setup_logger
from kusayakyu.utils.validation import parse_score

logger = setup_logger(__name__)

AnyMatch = TypeVar("AnyMatch", Match, FinalMatch)


class ResultRecorder:
    """Handles recording and clearing match scores.

    This class is responsible for:
    - Checking the match index
    - Parsing both scores before anything is changed
    - Marking matches completed or unplayed
    """

    def get_match(self, matches: Sequence[AnyMatch], match_index: int) -> AnyMatch:
        """Look up a match by position.

        Raises:
            MatchIndexError: If ``match_index`` is outside the list. Negative
                indices are rejected instead of counting from the end.
        """
        if not 0 <= match_index < len(matches):
            logger.error(
                f"Match index {match_index} out of range (0..{len(matches) - 1})"
            )
            raise MatchIndexError(f"No match at index {match_index}")
        return matches[match_index]

    def parse_scores(
        self, first: ScoreInput, second: ScoreInput
    ) -> Tuple[int, int]:
        """Parse both sides' scores; raises InvalidScoreError for bad input."""
        return parse_score(first), parse_score(second)

    def record_score(
        self,
        matches: Sequence[AnyMatch],
        match_index: int,
        first_score: ScoreInput,
        second_score: ScoreInput,
    ) -> AnyMatch:
        """Record the score of one match.

        Args:
            matches: The match list the index refers to
            match_index: 0-based position of the match
            first_score: Home score (camp A score for final matches)
            second_score: Away score (camp B score for final matches)

        Returns:
            The updated match
        """
        match = self.get_match(matches, match_index)
        first, second = self.parse_scores(first_score, second_score)

        if match.completed:
            logger.info(f"Overwriting score of match {match.id}")
        match.set_score(first, second)

        logger.debug(f"Recorded match {match.id}: {first}-{second}")
        return match

    def clear_score(
        self, matches: Sequence[AnyMatch], match_index: int
    ) -> AnyMatch:
        """Return one match to the unplayed state."""
        match = self.get_match(matches, match_index)
        match.clear_score()
        logger.debug(f"Cleared score of match {match.id}")
        return match

    @staticmethod
    def pending(matches: Sequence[Union[Match, FinalMatch]]) -> List[int]:
        """Indices of matches still waiting for a score."""
        return [i for i, m in enumerate(matches) if not m.completed]
