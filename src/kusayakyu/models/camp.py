"""Camp data class for taiko tournaments."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .match import Match
from .team import Team


@dataclass
class Camp:
    """One half of a taiko tournament, with its own roster and round-robin.

    Attributes
    ----------
    name : str
        Display name of the camp.
    teams : list of Team
        Camp roster, in registration order.
    matches : list of Match
        The camp's preliminary round-robin.
    """

    name: str
    teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)

    @property
    def all_matches_completed(self) -> bool:
        return all(m.completed for m in self.matches)

    def holder_of(self, role: str) -> Optional[Team]:
        """The team holding ``role`` in this camp, if any."""
        return next((t for t in self.teams if t.role == role), None)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize camp to dictionary."""
        return {
            "name": self.name,
            "teams": [t.to_dict() for t in self.teams],
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_name: str = "") -> "Camp":
        """Deserialize camp from dictionary."""
        return cls(
            name=data.get("name") or default_name,
            teams=[Team.from_dict(t) for t in data.get("teams", [])],
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
        )
