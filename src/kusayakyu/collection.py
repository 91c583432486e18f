"""Tournament collection - the entry point for storage and UI layers.

The collection owns every tournament record and the active selection, hands
out format-specific controllers, and converts the whole state to and from a
JSON-compatible document.
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
from typing import Any, Dict, List, Optional, Union

from kusayakyu.constants import (
    DEFAULT_TOURNAMENT_NAME,
    FORMAT_NORMAL,
    FORMAT_TAIKO,
    SNAPSHOT_VERSION,
    TOURNAMENT_FORMATS,
)
from kusayakyu.controllers import NormalController, TaikoController
from kusayakyu.exceptions import (
    NoActiveTournamentError,
    TournamentNotFoundError,
    ValidationError,
)
from kusayakyu.models import (
    Match,
    NormalTournament,
    TaikoTournament,
    Team,
    Tournament,
    tournament_from_dict,
)
from kusayakyu.type_hints import Document, Format
from kusayakyu.utils import IdAllocator, setup_logger
from kusayakyu.utils.validation import clean_name, normalize_date

logger = setup_logger(__name__)

Controller = Union[NormalController, TaikoController]


@dataclass
class TournamentCollection:
    """All tournaments plus the active selection.

    Attributes
    ----------
    tournaments : list of Tournament
        Tournaments in creation order.
    active_tournament_id : int or None
        Id of a member of ``tournaments``, or None. Never dangling.
    allocator : IdAllocator
        Identifier source shared by everything in the collection. Not part of
        equality.
    """

    tournaments: List[Tournament] = field(default_factory=list)
    active_tournament_id: Optional[int] = None
    allocator: IdAllocator = field(default_factory=IdAllocator, compare=False, repr=False)

    # ========== Lookup ==========

    def get(self, tournament_id: int) -> Optional[Tournament]:
        """Get a tournament by id, or None."""
        return next((t for t in self.tournaments if t.id == tournament_id), None)

    def __len__(self) -> int:
        return len(self.tournaments)

    @property
    def active(self) -> Optional[Tournament]:
        """The active tournament, or None when nothing is selected."""
        if self.active_tournament_id is None:
            return None
        return self.get(self.active_tournament_id)

    def require_active(self) -> Tournament:
        """The active tournament.

        Raises:
            NoActiveTournamentError: If nothing is selected
        """
        tournament = self.active
        if tournament is None:
            raise NoActiveTournamentError("No tournament is selected")
        return tournament

    def controller(self, tournament_id: Optional[int] = None) -> Controller:
        """Controller for a tournament, the active one by default.

        Raises:
            NoActiveTournamentError: If no id is given and nothing is selected
            TournamentNotFoundError: If ``tournament_id`` is unknown
        """
        if tournament_id is None:
            tournament = self.require_active()
        else:
            tournament = self.get(tournament_id)
            if tournament is None:
                raise TournamentNotFoundError(f"No tournament with id {tournament_id}")

        if isinstance(tournament, TaikoTournament):
            return TaikoController(tournament, self.allocator)
        return NormalController(tournament, self.allocator)

    # ========== Tournament Management ==========

    def create(self, name: str, date: Any = "", format: Format = FORMAT_NORMAL) -> Tournament:
        """Create a tournament and make it the active one.

        Args:
            name: Tournament name, must not be blank
            date: Date the tournament is held on, anything dateutil can parse,
                or empty
            format: ``normal`` or ``taiko``

        Raises:
            ValidationError: For a blank name, an unparsable date or an
                unknown format
        """
        if format not in TOURNAMENT_FORMATS:
            raise ValidationError(f"Unknown tournament format: {format!r}")
        cleaned = clean_name(name, "Tournament name")
        iso_date = normalize_date(date)

        cls = TaikoTournament if format == FORMAT_TAIKO else NormalTournament
        tournament = cls(id=self.allocator.next(), name=cleaned, date=iso_date)
        self.tournaments.append(tournament)
        self.active_tournament_id = tournament.id

        logger.info(f"Created {format} tournament: {tournament.name} ({tournament.id})")
        return tournament

    def delete(self, tournament_id: int) -> bool:
        """Delete a tournament.

        If it was active, the first remaining tournament becomes active (or
        nothing, when none remain).

        Returns:
            True if deleted, False if no such tournament
        """
        tournament = self.get(tournament_id)
        if tournament is None:
            logger.debug(f"Tournament {tournament_id} not found, nothing to delete")
            return False

        self.tournaments.remove(tournament)
        if self.active_tournament_id == tournament_id:
            self.active_tournament_id = (
                self.tournaments[0].id if self.tournaments else None
            )
        logger.info(f"Deleted tournament: {tournament.name} ({tournament_id})")
        return True

    def select(self, tournament_id: int) -> Tournament:
        """Make a tournament the active one.

        Raises:
            TournamentNotFoundError: If ``tournament_id`` is unknown
        """
        tournament = self.get(tournament_id)
        if tournament is None:
            logger.error(f"Cannot select unknown tournament {tournament_id}")
            raise TournamentNotFoundError(f"No tournament with id {tournament_id}")
        self.active_tournament_id = tournament_id
        logger.debug(f"Selected tournament {tournament.name} ({tournament_id})")
        return tournament

    def rename(self, name: str, date: Any = None) -> Tournament:
        """Change the active tournament's name, and its date if given.

        Raises:
            NoActiveTournamentError: If nothing is selected
            ValidationError: For a blank name or an unparsable date
        """
        tournament = self.require_active()
        cleaned = clean_name(name, "Tournament name")
        iso_date = tournament.date if date is None else normalize_date(date)

        tournament.name = cleaned
        tournament.date = iso_date
        logger.info(f"Renamed tournament {tournament.id}: {cleaned} {iso_date}")
        return tournament

    def clear(self) -> None:
        """Delete every tournament."""
        count = len(self.tournaments)
        self.tournaments.clear()
        self.active_tournament_id = None
        logger.warning(f"Cleared all data ({count} tournaments)")

    # ========== Serialization ==========

    def to_dict(self) -> Document:
        """Serialize the collection to a JSON-compatible document."""
        return {
            "version": SNAPSHOT_VERSION,
            "tournaments": [t.to_dict() for t in self.tournaments],
            "activeTournamentId": self.active_tournament_id,
        }

    @classmethod
    def from_dict(cls, data: Document) -> "TournamentCollection":
        """Deserialize a collection document.

        Documents written before multi-tournament support (a single
        tournament with ``tournamentName``/``teams``/``matches`` at the top
        level) are upgraded into a one-tournament collection.
        """
        collection = cls()

        if "tournaments" in data:
            collection.tournaments = [
                tournament_from_dict(t) for t in data.get("tournaments") or []
            ]
            collection.active_tournament_id = data.get("activeTournamentId")
            if any(t.id is None for t in collection.tournaments):
                raise ValueError("Tournament without an id")
            collection.allocator.observe(
                i for t in collection.tournaments for i in t.iter_ids()
            )
        elif _is_legacy_document(data):
            legacy = _upgrade_legacy(data)
            # The id is allocated once the stored team and match ids are known
            collection.allocator.observe(legacy.iter_ids())
            legacy.id = collection.allocator.next()
            collection.tournaments = [legacy]
            collection.active_tournament_id = legacy.id

        if collection.active_tournament_id is not None and collection.active is None:
            logger.warning(
                f"Active tournament {collection.active_tournament_id} not in document"
            )
            collection.active_tournament_id = None

        logger.info(f"Loaded {len(collection)} tournaments")
        return collection


def _is_legacy_document(data: Document) -> bool:
    return any(
        key in data for key in ("teams", "matches", "tournamentName", "tournamentDate")
    )


def _upgrade_legacy(data: Document) -> NormalTournament:
    # Id is None until the allocator has seen the stored team and match ids
    tournament = NormalTournament(
        id=None,
        name=data.get("tournamentName") or DEFAULT_TOURNAMENT_NAME,
        date=data.get("tournamentDate") or "",
        teams=[Team.from_dict(t) for t in data.get("teams") or []],
        matches=[Match.from_dict(m) for m in data.get("matches") or []],
    )
    logger.info(
        f"Upgraded single-tournament document: {tournament.name}, "
        f"{len(tournament.teams)} teams, {len(tournament.matches)} matches"
    )
    return tournament


def serialize(collection: TournamentCollection) -> Document:
    """Whole-collection snapshot for the storage layer."""
    return collection.to_dict()


def deserialize(document: Document) -> TournamentCollection:
    """Rebuild a collection from a snapshot (current or legacy shape)."""
    return TournamentCollection.from_dict(document)
