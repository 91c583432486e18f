"""Team data class."""

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
from typing import Any, Dict, List, Optional

from kusayakyu.constants import ROLE_NAMES, ROLE_ORDER, UNKNOWN_TEAM_NAME


@dataclass
class Team:
    """A team registered in a roster.

    Attributes
    ----------
    id : int
        Identifier, unique and never reused.
    name : str
        Display name, unique within the roster scope.
    role : str or None
        Taiko role (``captain``, ``vice_captain``, ``second``, ``lead``)
        assigned when the preliminaries are finalized, otherwise None.
    """

    id: int
    name: str
    role: Optional[str] = None

    @property
    def role_name(self) -> Optional[str]:
        """Japanese label of the role, e.g. 大将."""
        return ROLE_NAMES.get(self.role) if self.role else None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.role is not None:
            data["role"] = self.role
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        role = data.get("role")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            role=role if role in ROLE_ORDER else None,
        )


def find_team(teams: List[Team], team_id: int) -> Optional[Team]:
    """Return the team with ``team_id`` or None."""
    return next((t for t in teams if t.id == team_id), None)


def team_name(teams: List[Team], team_id: int) -> str:
    """Return a team's name, or the unknown-team label if it is not rostered."""
    team = find_team(teams, team_id)
    return team.name if team else UNKNOWN_TEAM_NAME
