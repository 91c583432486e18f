"""Exceptions for use in Kusayakyu"""

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


# ========== Base Application Exception ==========


class KusayakyuException(Exception):
    """Base exception for all Kusayakyu errors.

    All custom exceptions in the application inherit from this class, so a
    rendering layer can catch every engine error with a single except clause.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationError(KusayakyuException):
    """Base exception for user input the engine refuses.

    Always recoverable: the operation is rejected before any state changes.
    """

    pass


class BlankNameError(ValidationError):
    """Raised when a team, camp or tournament name is empty after trimming."""

    pass


class DuplicateTeamNameError(ValidationError):
    """Raised when a team name is already used in the same roster scope."""

    pass


class InsufficientTeamsError(ValidationError):
    """Raised when a roster is too small to build a round-robin."""

    pass


class InvalidScoreError(ValidationError):
    """Raised when a score is not a non-negative integer."""

    pass


class InvalidDateError(ValidationError):
    """Raised when a tournament date cannot be parsed."""

    pass


# ========== Precondition Exceptions ==========


class PreconditionError(KusayakyuException):
    """Base exception for operations whose prerequisites are not met yet."""

    pass


class PhaseError(PreconditionError):
    """Raised when a taiko operation is not valid in the current phase."""

    pass


class IncompleteMatchesError(PreconditionError):
    """Raised when finalizing preliminaries with unplayed camp matches."""

    pass


class NoActiveTournamentError(PreconditionError):
    """Raised when an operation needs an active tournament and none is selected."""

    pass


# ========== Lookup Exceptions ==========


class NotFoundError(KusayakyuException):
    """Base exception for lookups of things that do not exist.

    These point at a caller bug rather than at bad user input.
    """

    pass


class MatchIndexError(NotFoundError, IndexError):
    """Raised when a match index is outside the match list."""

    pass


class TournamentNotFoundError(NotFoundError):
    """Raised when a requested tournament id is not in the collection."""

    pass


class UnknownCampError(NotFoundError, KeyError):
    """Raised when a camp key other than 'A' or 'B' is used."""

    pass


# ========== Snapshot/File Exceptions ==========


class SnapshotError(KusayakyuException):
    """Base exception for persistence and import/export errors."""

    pass


class FileLoadError(SnapshotError):
    """Raised when a stored or imported document cannot be read."""

    pass


class FileSaveError(SnapshotError):
    """Raised when a document cannot be written."""

    pass
