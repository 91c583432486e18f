"""Identifier allocation."""

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

from typing import Iterable, Optional


class IdAllocator:
    """Hands out strictly increasing integer identifiers.

    One allocator serves teams, matches, final matches and tournaments, so an
    identifier is never handed out twice, not even after the entity holding
    it has been deleted.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def next(self) -> int:
        """Return a fresh identifier."""
        value = self._next
        self._next += 1
        return value

    def observe(self, ids: Iterable[Optional[int]]) -> None:
        """Move past every identifier in ``ids``.

        Called after loading a snapshot so new identifiers cannot collide with
        stored ones (legacy documents use millisecond timestamps).
        """
        for value in ids:
            if value is not None and value >= self._next:
                self._next = value + 1

    @property
    def peek(self) -> int:
        """The identifier the next call to :meth:`next` returns."""
        return self._next

    def __repr__(self) -> str:
        return f"IdAllocator(next={self._next})"
