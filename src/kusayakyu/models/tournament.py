"""Tournament records, one dataclass per format.

A tournament is either a :class:`NormalTournament` (one flat round-robin) or a
:class:`TaikoTournament` (two camps and a final). The format is a class
attribute, so it cannot change after creation.
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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, Iterator, List, Union

from kusayakyu.constants import (
    CAMP_A,
    CAMP_B,
    DEFAULT_CAMP_NAMES,
    FORMAT_NORMAL,
    FORMAT_TAIKO,
    PHASE_ORDER,
    PHASE_SETUP,
)
from kusayakyu.exceptions import UnknownCampError

from .camp import Camp
from .match import FinalMatch, Match
from .team import Team


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


@dataclass
class BaseTournament:
    """Fields every tournament has, whatever its format.

    Attributes
    ----------
    id : int
        Identifier, unique within the collection.
    name : str
        Tournament name.
    date : str
        ISO date the tournament is held on, or empty.
    created_at : str
        ISO timestamp of creation.
    """

    format: ClassVar[str] = ""

    id: int
    name: str
    date: str = ""
    created_at: str = field(default_factory=_now)

    def _header_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date,
            "format": self.format,
            "createdAt": self.created_at,
        }

    @staticmethod
    def _header_kwargs(data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": data["id"],
            "name": data.get("name", ""),
            "date": data.get("date", ""),
            "created_at": data.get("createdAt", ""),
        }

    def iter_ids(self) -> Iterator[int]:
        """Every identifier owned by this tournament, its own included."""
        yield self.id


@dataclass
class NormalTournament(BaseTournament):
    """Flat round-robin tournament.

    Attributes
    ----------
    teams : list of Team
        Roster, in registration order.
    matches : list of Match
        Generated schedule, empty until generated.
    """

    format: ClassVar[str] = FORMAT_NORMAL

    teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)

    def iter_ids(self) -> Iterator[int]:
        yield self.id
        yield from (t.id for t in self.teams)
        yield from (m.id for m in self.matches)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        data = self._header_dict()
        data["teams"] = [t.to_dict() for t in self.teams]
        data["matches"] = [m.to_dict() for m in self.matches]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NormalTournament":
        """Deserialize tournament from dictionary."""
        return cls(
            teams=[Team.from_dict(t) for t in data.get("teams", [])],
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            **cls._header_kwargs(data),
        )


@dataclass
class TaikoTournament(BaseTournament):
    """Two-camp tournament: camp round-robins, then a cross-camp final.

    Attributes
    ----------
    camp_a, camp_b : Camp
        The two camps.
    final_matches : list of FinalMatch
        One per role held in both camps, built when the preliminaries end.
    phase : str
        ``setup``, ``preliminary`` or ``final``.
    """

    format: ClassVar[str] = FORMAT_TAIKO

    camp_a: Camp = field(default_factory=lambda: Camp(DEFAULT_CAMP_NAMES[CAMP_A]))
    camp_b: Camp = field(default_factory=lambda: Camp(DEFAULT_CAMP_NAMES[CAMP_B]))
    final_matches: List[FinalMatch] = field(default_factory=list)
    phase: str = PHASE_SETUP

    def camp(self, key: str) -> Camp:
        """Look up a camp by key ('A' or 'B')."""
        if key == CAMP_A:
            return self.camp_a
        if key == CAMP_B:
            return self.camp_b
        raise UnknownCampError(f"Unknown camp: {key!r}")

    @property
    def all_teams(self) -> List[Team]:
        return self.camp_a.teams + self.camp_b.teams

    def iter_ids(self) -> Iterator[int]:
        yield self.id
        for camp in (self.camp_a, self.camp_b):
            yield from (t.id for t in camp.teams)
            yield from (m.id for m in camp.matches)
        yield from (m.id for m in self.final_matches)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        data = self._header_dict()
        data["campA"] = self.camp_a.to_dict()
        data["campB"] = self.camp_b.to_dict()
        data["finalMatches"] = [m.to_dict() for m in self.final_matches]
        data["phase"] = self.phase
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaikoTournament":
        """Deserialize tournament from dictionary."""
        phase = data.get("phase", PHASE_SETUP)
        return cls(
            camp_a=Camp.from_dict(data.get("campA", {}), DEFAULT_CAMP_NAMES[CAMP_A]),
            camp_b=Camp.from_dict(data.get("campB", {}), DEFAULT_CAMP_NAMES[CAMP_B]),
            final_matches=[
                FinalMatch.from_dict(m) for m in data.get("finalMatches", [])
            ],
            phase=phase if phase in PHASE_ORDER else PHASE_SETUP,
            **cls._header_kwargs(data),
        )


Tournament = Union[NormalTournament, TaikoTournament]

TOURNAMENT_CLASSES = {
    FORMAT_NORMAL: NormalTournament,
    FORMAT_TAIKO: TaikoTournament,
}


def tournament_from_dict(data: Dict[str, Any]) -> Tournament:
    """Deserialize a tournament of either format.

    Documents without a ``format`` key predate taiko support and are normal
    tournaments.
    """
    cls = TOURNAMENT_CLASSES.get(data.get("format", FORMAT_NORMAL))
    if cls is None:
        raise ValueError(f"Unknown tournament format: {data.get('format')!r}")
    return cls.from_dict(data)
