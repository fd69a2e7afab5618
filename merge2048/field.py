# -*- coding: utf-8 -*-
#
# field.py
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

"""Declares the `Field` class and the join rule it is built upon.
"""

# allowing postponed evaluation of annotations; see:
# https://www.python.org/dev/peps/pep-0563/
from __future__ import annotations

import enum
import logging
import random
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from merge2048.core import Point, Side
from merge2048.tile import Origin, OriginKind, Tile
from merge2048.utils import (
    ExpectationError,
    IntPair,
    InvalidShapeError,
    InvalidValueError,
    Matrix,
    as_int,
    check_int,
    classname,
    either_0_power2,
    type_check,
)


__all__ = ["Field", "JoinResult", "can_join_tiles", "join_tiles"]

logger = logging.getLogger(__name__)

Slot = Optional[Tile]


class JoinResult(enum.Enum):
    NONE = enum.auto()
    MOVED = enum.auto()
    MERGED = enum.auto()


# origins that may still take part in a merge this move
_MERGEABLE = (OriginKind.HOLD, OriginKind.MOVED)


def join_tiles(dst: Slot, src: Slot) -> Tuple[JoinResult, Slot, Slot]:
    """Try to pull `src` into `dst`, its neighbour on the gravity side.

    Return what happened and the new contents of both slots. An empty
    `dst` always takes `src`, which keeps a `MERGED` origin as is (a merged
    tile may keep sliding) and otherwise becomes `MOVED` from its original
    spot. Two tiles merge only if neither has merged already this move and
    their levels match; the new tile remembers both sources.
    """

    if src is None:
        return JoinResult.NONE, dst, src
    src_kind = src.origin.kind
    if dst is None:
        if src_kind in _MERGEABLE:
            moved = src.with_origin(Origin.moved(*src.origin.source))
        else:
            moved = src
        return JoinResult.MOVED, moved, None
    if (
        dst.origin.kind in _MERGEABLE
        and src_kind in _MERGEABLE
        and dst.level == src.level
    ):
        merged = Tile(
            dst.level + 1, Origin.merged(dst.origin.source, src.origin.source)
        )
        return JoinResult.MERGED, merged, None
    return JoinResult.NONE, dst, src


def can_join_tiles(dst: Slot, src: Slot, baseline: bool = False) -> bool:
    """Tell whether `join_tiles(dst, src)` would change anything.

    :param bool baseline: ignore origins, that is, answer as if
        `Field.hold_all` had just been called
    """

    if src is None:
        return False
    if dst is None:
        return True
    if dst.level != src.level:
        return False
    if baseline:
        return True
    return dst.origin.kind in _MERGEABLE and src.origin.kind in _MERGEABLE


class Field:
    """Fixed-size grid of optional `Tile`s.

    Cells are addressed as `(x, y)`, `x` being the column and `y` the row.
    The swipe algorithm is written once, pulling tiles towards local row 0
    of each local column, and reused for every `Side` by remapping indices
    (see `index_from_side`).

    The tiles' origins are the only record of the last move, so `undo` can
    go back a single step.

    Main ("public") methods:

    swipe(self, side: Side) -> int
        Collapse every column towards `side`; return the score gained.
    append_tile(self) -> bool
        Spawn one random tile on a free cell.
    undo(self) -> int
        Revert the last move; return the score it had given.
    """

    # levels a spawned tile may have; 0 and 1 are the values 1 and 2
    SPAWN_LEVELS: Tuple[int, ...] = (0, 1)

    # -- init
    def __init__(
        self, width: int, height: int, rng: Optional[random.Random] = None
    ) -> None:
        for size in (width, height):
            check_int(size)
            if not size:
                raise ValueError(
                    f"Cannot create a {width}x{height} {classname(self)}"
                )
        if rng is None:
            rng = random.Random()
        self.rng = rng
        self._width = width
        self._height = height
        # row-major storage: self._rows[y][x]
        self._rows: List[List[Slot]] = [
            [None] * width for _ in range(height)
        ]

    @classmethod
    def from_array(
        cls, matrix: Sequence[Sequence[Any]], rng: Optional[random.Random] = None
    ) -> Field:
        """Return a new Field holding the values of `matrix`.

        `matrix` is a sequence of rows; every entry must be 0 (empty) or
        a power of 2. Each tile's origin is `HOLD` at its own cell.
        """

        rows = [list(row) for row in matrix]
        if not rows or not rows[0]:
            raise InvalidShapeError(
                f"Cannot create {classname(cls)} from an empty matrix"
            )
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise InvalidShapeError(
                    f"Row {y} has {len(row)} entries, but row 0 has {width}"
                )
        new = cls(width, len(rows), rng)
        for y, row in enumerate(rows):
            for x, entry in enumerate(row):
                value = as_int(entry)
                if not either_0_power2(value):
                    raise InvalidValueError(value, (x, y))
                if value:
                    new._rows[y][x] = Tile.from_value(value, Origin.hold(x, y))
        logger.debug("Created %r from a value matrix.", new)
        return new

    def into_array(self) -> Matrix:
        """Return the values as a list of rows, 0 standing for empty cells.
        """

        return [
            [0 if tile is None else tile.value for tile in row]
            for row in self._rows
        ]

    def copy(self) -> Field:
        """Return an independent Field with the same tiles and generator.
        """

        new = type(self)(self._width, self._height, self.rng)
        new._rows = [list(row) for row in self._rows]
        return new

    # -- dimensions
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def width_from_side(self, side: Side) -> int:
        """How many local columns there are when gravity pulls to `side`.
        """

        return self._width if side.is_vertical else self._height

    def height_from_side(self, side: Side) -> int:
        """How many local rows there are when gravity pulls to `side`.
        """

        return self._height if side.is_vertical else self._width

    # -- coordinates
    def index_from_side(self, side: Side, x: int, y: int) -> IntPair:
        """Map local `(x, y)` as seen from `side` to a physical
        `(row, column)` index.

        Local row 0 is always the row next to `side`, so "gravity" pulls
        towards decreasing local `y` whatever the side.
        """

        if side is Side.UP:
            return y, x
        if side is Side.DOWN:
            return self._height - 1 - y, self._width - 1 - x
        if side is Side.LEFT:
            return self._height - 1 - x, y
        if side is Side.RIGHT:
            return x, self._width - 1 - y
        raise ExpectationError(side, Side)

    def get_from_side(self, side: Side, x: int, y: int) -> Slot:
        row, col = self.index_from_side(side, x, y)
        return self._rows[row][col]

    def put_from_side(self, side: Side, x: int, y: int, tile: Slot) -> None:
        row, col = self.index_from_side(side, x, y)
        self._rows[row][col] = tile

    def _check_point(self, x: int, y: int) -> None:
        # lists accept negative indexes, so we must check both ends
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"({x}, {y}) is outside a {self._width}x{self._height} field"
            )

    def get(self, x: int, y: int) -> Slot:
        self._check_point(x, y)
        return self._rows[y][x]

    def put(self, x: int, y: int, tile: Slot) -> None:
        self._check_point(x, y)
        if tile is not None:
            type_check(tile, Tile)
        self._rows[y][x] = tile

    def points(self) -> Iterator[Point]:
        """Yield every Point, column by column.
        """

        for x in range(self._width):
            for y in range(self._height):
                yield Point(x, y)

    def tiles(self) -> Iterator[Tuple[Point, Tile]]:
        """Yield `(point, tile)` for every occupied cell, row by row.
        """

        for y, row in enumerate(self._rows):
            for x, tile in enumerate(row):
                if tile is not None:
                    yield Point(x, y), tile

    # -- queries
    def get_free_cells(self) -> List[Point]:
        return [point for point in self.points() if self.get(*point) is None]

    @property
    def is_full(self) -> bool:
        return all(tile is not None for row in self._rows for tile in row)

    @property
    def largest(self) -> int:
        return max((tile.value for _, tile in self.tiles()), default=0)

    @property
    def total(self) -> int:
        """Sum of every tile's value; no swipe changes it.
        """

        return sum(tile.value for _, tile in self.tiles())

    def can_swipe(self, side: Side, baseline: bool = False) -> bool:
        """Tell whether swiping to `side` would change anything.

        This never calls `hold_all`. Right after a swipe, merged tiles
        can't merge again, so the answer for the same side is `False`;
        pass `baseline=True` to answer for the next move instead.
        """

        height = self.height_from_side(side)
        for x in range(self.width_from_side(side)):
            for y in range(height - 1):
                if can_join_tiles(
                    self.get_from_side(side, x, y),
                    self.get_from_side(side, x, y + 1),
                    baseline,
                ):
                    return True
        return False

    def is_jammed(self, baseline: bool = True) -> bool:
        """Tell whether no side can be swiped.
        """

        return not any(self.can_swipe(side, baseline) for side in Side)

    def can_undo(self) -> bool:
        return any(not tile.origin.is_baseline for _, tile in self.tiles())

    # -- moves
    def hold_all(self) -> None:
        """Mark every tile as `HOLD` at its current cell, starting a new
        move.
        """

        for point, tile in list(self.tiles()):
            self._rows[point.y][point.x] = tile.with_origin(
                Origin.hold(*point)
            )

    def _collapse_column(self, side: Side, x: int) -> int:
        """Join neighbours of local column `x` until nothing changes.
        """

        height = self.height_from_side(side)
        score = 0
        changed = True
        while changed:
            changed = False
            for y in range(height - 1):
                result, dst, src = join_tiles(
                    self.get_from_side(side, x, y),
                    self.get_from_side(side, x, y + 1),
                )
                if result is JoinResult.NONE:
                    continue
                self.put_from_side(side, x, y, dst)
                self.put_from_side(side, x, y + 1, src)
                if result is JoinResult.MERGED:
                    score += dst.value
                changed = True
        return score

    def swipe(self, side: Side) -> int:
        """Pull every tile towards `side`, merging equal neighbours once.

        Every tile is held first, so afterwards the origins describe this
        move only.

        :return: the sum of the values of the tiles formed by merging
        """

        type_check(side, Side)
        self.hold_all()
        score = sum(
            self._collapse_column(side, x)
            for x in range(self.width_from_side(side))
        )
        logger.debug("Swiped %s for %d point(s).", side, score)
        return score

    def append_tile(self) -> bool:
        """Put a tile of a random `SPAWN_LEVELS` level on a random free cell.

        :return: whether there was a free cell
        """

        free = self.get_free_cells()
        if not free:
            logger.debug("No free cell to append a tile to.")
            return False
        x, y = self.rng.choice(free)
        level = self.rng.choice(self.SPAWN_LEVELS)
        self._rows[y][x] = Tile(level, Origin.appear())
        logger.debug("Appended a level %d tile at (%d, %d).", level, x, y)
        return True

    def undo(self) -> int:
        """Put every tile back where its origin says it was.

        Spawned (`APPEAR`) tiles are dropped and merged tiles split in two,
        which leaves only `HOLD` tiles, so undoing can't be chained.

        :return: the score the undone merges had given
        """

        rows: List[List[Slot]] = [
            [None] * self._width for _ in range(self._height)
        ]
        removed = 0
        for _, tile in self.tiles():
            origin = tile.origin
            kind = origin.kind
            if kind is OriginKind.APPEAR:
                continue
            if kind is OriginKind.HOLD or kind is OriginKind.MOVED:
                x, y = origin.source
                rows[y][x] = Tile(tile.level, Origin.hold(x, y))
            elif kind is OriginKind.MERGED:
                for x, y in (origin.source, origin.partner):
                    rows[y][x] = Tile(tile.level - 1, Origin.hold(x, y))
                removed += tile.value
            else:
                raise AssertionError(f"unhandled origin kind {kind!r}")
        self._rows = rows
        logger.debug("Undid a move worth %d point(s).", removed)
        return removed

    # -- dunders
    def __eq__(self, other) -> bool:
        if isinstance(other, type(self)):
            return self._rows == other._rows
        return NotImplemented

    # mutable, so unhashable
    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return f"{classname(self)}({self._width}, {self._height})"

    def __str__(self) -> str:
        rows = self.into_array()
        width = max(len(str(value)) for row in rows for value in row)
        return "\n".join(
            " ".join(f"{value:>{width}}" for value in row) for row in rows
        )
