# -*- coding: utf-8 -*-
#
# tile.py
#
# This file is part of merge2048.
#
# merge2048 is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# merge2048 is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with merge2048.  If not, see <https://www.gnu.org/licenses/>.

"""Declares the `Tile` class, which represents one occupied cell of
the field, and `Origin`, which tells how the tile got there during
the current move.
"""

# allowing postponed evaluation of annotations; see:
# https://www.python.org/dev/peps/pep-0563/
from __future__ import annotations

import enum
from typing import NamedTuple, Optional, Tuple

from merge2048.core import Point
from merge2048.utils import check_int, type_check


__all__ = ["Origin", "OriginKind", "Tile"]


@enum.unique
class OriginKind(enum.Enum):
    APPEAR = enum.auto()
    HOLD = enum.auto()
    MOVED = enum.auto()
    MERGED = enum.auto()


class Origin(NamedTuple):
    """Provenance of a `Tile` since the last `Field.hold_all` call.

    `kind` decides which of the two points are meaningful:

    APPEAR
        spawned this turn; no points.
    HOLD
        `source` is the tile's own position at the start of the move.
    MOVED
        `source` is where the tile slid from, unmerged.
    MERGED
        `source` is where the tile nearer the gravity side was, and
        `partner` where the one it absorbed was.

    Use the `appear`, `hold`, `moved` and `merged` constructors rather
    than building the tuple by hand.
    """

    kind: OriginKind
    source: Optional[Point] = None
    partner: Optional[Point] = None

    @classmethod
    def appear(cls) -> Origin:
        return cls(OriginKind.APPEAR)

    @classmethod
    def hold(cls, x: int, y: int) -> Origin:
        return cls(OriginKind.HOLD, Point(x, y))

    @classmethod
    def moved(cls, x: int, y: int) -> Origin:
        return cls(OriginKind.MOVED, Point(x, y))

    @classmethod
    def merged(cls, first: Tuple[int, int], second: Tuple[int, int]) -> Origin:
        return cls(OriginKind.MERGED, Point(*first), Point(*second))

    @property
    def is_baseline(self) -> bool:
        """Whether this origin says "untouched since `hold_all`".
        """

        return self.kind is OriginKind.HOLD

    def __repr__(self) -> str:
        kind = self.kind
        if kind is OriginKind.APPEAR:
            return "Appear"
        if kind is OriginKind.HOLD or kind is OriginKind.MOVED:
            return f"{kind.name.capitalize()}{tuple(self.source)}"
        if kind is OriginKind.MERGED:
            return f"Merged({tuple(self.source)}, {tuple(self.partner)})"
        raise AssertionError(f"unhandled origin kind {kind!r}")


class Tile:
    """One occupied cell of the field.

    A tile stores its `level`, the exponent of its value
    (`value == 2 ** level`), and its `origin`. Tiles are immutable and
    compare equal when both level and origin match; a tile that changes
    place is replaced by a new one (see `with_origin`).
    """

    __slots__ = ("_level", "_origin")

    def __init__(self, level: int, origin: Origin) -> None:
        check_int(level)
        type_check(origin, Origin)
        self._level = level
        self._origin = origin

    @classmethod
    def from_value(cls, value: int, origin: Origin) -> Tile:
        """Build a tile from a power of 2, not from its exponent.
        """

        check_int(value)
        if not value or value & (value - 1):
            raise ValueError(f"{value} is not a positive power of 2")
        return cls(value.bit_length() - 1, origin)

    level = property(lambda self: self._level)
    origin = property(lambda self: self._origin)

    @property
    def value(self) -> int:
        return 1 << self._level

    def with_origin(self, origin: Origin) -> Tile:
        return type(self)(self._level, origin)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other) -> bool:
        if isinstance(other, type(self)):
            return (self._level, self._origin) == (other._level, other._origin)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self._level, self._origin))

    def __repr__(self) -> str:
        return f"Tile({self._level}, {self._origin!r})"

    def __str__(self) -> str:
        return str(self.value)
