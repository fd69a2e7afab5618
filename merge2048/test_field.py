# -*- coding: utf-8 -*-
#
# test_field.py
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

"""pytest test suite for `Field`, `Tile` and the join rule.

To run, simply:
>>> pytest merge2048/test_field.py
"""

# allowing postponed evaluation of annotations; see:
# https://www.python.org/dev/peps/pep-0563/
from __future__ import annotations

import random
from typing import List

import pytest

from merge2048.core import Point, Side
from merge2048.field import Field, JoinResult, can_join_tiles, join_tiles
from merge2048.tile import Origin, OriginKind, Tile
from merge2048.utils import (
    ExpectationError,
    InvalidShapeError,
    InvalidValueError,
    NegativeIntegerError,
)


SAMPLE = [
    [0, 2, 4, 4],
    [0, 2, 2, 4],
    [0, 0, 2, 2],
    [0, 0, 0, 2],
]


def hold(level: int, x: int, y: int) -> Tile:
    return Tile(level, Origin.hold(x, y))


def merged(level: int, a, b) -> Tile:
    return Tile(level, Origin.merged(a, b))


def random_matrix(rng: random.Random, width: int, height: int) -> List[List[int]]:
    """Mostly small values, about a third of the cells empty.
    """

    choices = [0, 0, 0, 2, 2, 4, 4, 8, 16]
    return [[rng.choice(choices) for _ in range(width)] for _ in range(height)]


class FirstChoice:
    """Stands in for `random.Random`: always picks the first option.
    """

    def choice(self, seq):
        return seq[0]


class TestTile:
    def test_value_and_level(self) -> None:
        tile = Tile(3, Origin.appear())
        assert tile.value == 8
        assert int(tile) == 8
        assert str(tile) == "8"
        assert Tile.from_value(8, Origin.appear()) == tile
        assert Tile.from_value(1, Origin.appear()).level == 0

    def test_bad_levels(self) -> None:
        with pytest.raises(NegativeIntegerError):
            Tile(-1, Origin.appear())
        with pytest.raises(ExpectationError):
            Tile(1.0, Origin.appear())
        with pytest.raises(ExpectationError):
            Tile(1, "Appear")
        with pytest.raises(ValueError):
            Tile.from_value(6, Origin.appear())

    def test_equality_includes_origin(self) -> None:
        assert hold(1, 0, 0) == hold(1, 0, 0)
        assert hold(1, 0, 0) != hold(1, 0, 1)
        assert hold(1, 0, 0) != Tile(1, Origin.moved(0, 0))
        assert len({hold(1, 0, 0), hold(1, 0, 0), hold(2, 0, 0)}) == 2

    def test_with_origin_returns_new_tile(self) -> None:
        tile = hold(2, 1, 1)
        moved = tile.with_origin(Origin.moved(1, 1))
        assert tile.origin.kind is OriginKind.HOLD
        assert moved.origin.kind is OriginKind.MOVED
        assert moved.level == tile.level

    def test_origin_repr(self) -> None:
        assert repr(Origin.appear()) == "Appear"
        assert repr(Origin.hold(1, 2)) == "Hold(1, 2)"
        assert repr(Origin.moved(3, 0)) == "Moved(3, 0)"
        assert repr(Origin.merged((0, 0), (0, 1))) == "Merged((0, 0), (0, 1))"


class TestJoinRule:
    def test_empty_pairs(self) -> None:
        tile = hold(1, 0, 0)
        assert join_tiles(None, None) == (JoinResult.NONE, None, None)
        assert join_tiles(tile, None) == (JoinResult.NONE, tile, None)
        assert not can_join_tiles(None, None)
        assert not can_join_tiles(tile, None)

    def test_slide_into_empty(self) -> None:
        result, dst, src = join_tiles(None, hold(1, 2, 3))
        assert result is JoinResult.MOVED
        assert dst == Tile(1, Origin.moved(2, 3))
        assert src is None
        # a moved tile keeps its first position
        _, dst, _ = join_tiles(None, Tile(1, Origin.moved(2, 3)))
        assert dst == Tile(1, Origin.moved(2, 3))

    def test_merged_tile_keeps_sliding(self) -> None:
        tile = merged(2, (0, 0), (0, 1))
        result, dst, src = join_tiles(None, tile)
        assert result is JoinResult.MOVED
        assert dst == tile
        assert src is None

    def test_merge(self) -> None:
        result, dst, src = join_tiles(hold(1, 0, 0), Tile(1, Origin.moved(0, 2)))
        assert result is JoinResult.MERGED
        assert dst == merged(2, (0, 0), (0, 2))
        assert src is None

    def test_no_merge(self) -> None:
        pairs = [
            (hold(1, 0, 0), hold(2, 0, 1)),
            (merged(2, (0, 0), (0, 1)), hold(2, 0, 2)),
            (hold(2, 0, 0), merged(2, (0, 1), (0, 2))),
        ]
        for dst, src in pairs:
            assert join_tiles(dst, src) == (JoinResult.NONE, dst, src)
            assert not can_join_tiles(dst, src)

    def test_baseline_ignores_origins(self) -> None:
        dst, src = merged(2, (0, 0), (0, 1)), hold(2, 0, 2)
        assert can_join_tiles(dst, src, baseline=True)
        assert not can_join_tiles(hold(1, 0, 0), hold(2, 0, 1), baseline=True)
        assert can_join_tiles(None, src, baseline=True)


class TestFieldBasics:
    def test_new_field_is_empty(self) -> None:
        field = Field(3, 2)
        assert (field.width, field.height) == (3, 2)
        assert field.into_array() == [[0, 0, 0], [0, 0, 0]]
        assert len(field.get_free_cells()) == 6
        assert not field.can_undo()

    @pytest.mark.parametrize("width, height", [(0, 4), (4, 0), (-1, 3)])
    def test_bad_sizes(self, width: int, height: int) -> None:
        with pytest.raises(ValueError):
            Field(width, height)

    def test_from_array_assigns_hold(self) -> None:
        field = Field.from_array(
            [[8, 4, 2], [4, 2, 1], [2, 1, 0], [1, 0, 16]]
        )
        assert (field.width, field.height) == (3, 4)
        assert field.get(0, 0) == hold(3, 0, 0)
        assert field.get(1, 2) == hold(0, 1, 2)
        assert field.get(2, 3) == hold(4, 2, 3)
        assert field.get(2, 2) is None
        assert field.get(1, 3) is None

    def test_round_trip(self) -> None:
        rng = random.Random(2048)
        for width, height in [(1, 1), (4, 4), (3, 5), (6, 2)]:
            matrix = random_matrix(rng, width, height)
            assert Field.from_array(matrix).into_array() == matrix
        # tuples are fine too
        assert Field.from_array(((0, 2), (4, 0))).into_array() == [[0, 2], [4, 0]]

    @pytest.mark.parametrize(
        "matrix", [[[3]], [[0, 2], [6, 0]], [[-2]], [[2, 0], [0, -1]]]
    )
    def test_invalid_values(self, matrix) -> None:
        with pytest.raises(InvalidValueError):
            Field.from_array(matrix)

    def test_invalid_value_reports_position(self) -> None:
        with pytest.raises(ValueError) as info:
            Field.from_array([[0, 2], [4, 12]])
        assert info.value.point == (1, 1)
        assert "12" in str(info.value)

    def test_non_integers(self) -> None:
        for bad in (2.0, "2", None, True):
            with pytest.raises(ExpectationError):
                Field.from_array([[bad]])

    @pytest.mark.parametrize("matrix", [[], [[]], [[2, 2], [2]]])
    def test_invalid_shapes(self, matrix) -> None:
        with pytest.raises(InvalidShapeError):
            Field.from_array(matrix)

    def test_put_and_get(self) -> None:
        field = Field(2, 2)
        tile = Tile(5, Origin.appear())
        field.put(1, 0, tile)
        assert field.get(1, 0) == tile
        assert field.into_array() == [[0, 32], [0, 0]]
        field.put(1, 0, None)
        assert field.get(1, 0) is None

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
    def test_out_of_bounds(self, x: int, y: int) -> None:
        field = Field(4, 3)
        with pytest.raises(IndexError):
            field.get(x, y)
        with pytest.raises(IndexError):
            field.put(x, y, None)

    def test_str(self) -> None:
        field = Field.from_array([[2, 16], [0, 128]])
        assert str(field) == "  2  16\n  0 128"

    def test_copy_is_independent(self) -> None:
        field = Field.from_array(SAMPLE)
        other = field.copy()
        assert other == field
        other.swipe(Side.UP)
        assert other != field
        assert field.into_array() == SAMPLE


class TestSides:
    def _make_field(self) -> Field:
        """A 3x4 field where the tile at (x, y) has level 10x + y.
        """

        field = Field(3, 4)
        for x, y in field.points():
            field.put(x, y, hold(10 * x + y, x, y))
        return field

    def test_sizes_from_side(self) -> None:
        field = self._make_field()
        assert field.width_from_side(Side.UP) == 3
        assert field.height_from_side(Side.DOWN) == 4
        assert field.width_from_side(Side.LEFT) == 4
        assert field.height_from_side(Side.RIGHT) == 3

    def test_get_from_side(self) -> None:
        field = self._make_field()
        expected = {
            (Side.UP, 0, 0): 0,
            (Side.DOWN, 0, 0): 23,
            (Side.LEFT, 0, 0): 3,
            (Side.RIGHT, 0, 0): 20,
            (Side.UP, 1, 2): 12,
            (Side.DOWN, 1, 2): 11,
            (Side.LEFT, 1, 2): 22,
            (Side.RIGHT, 1, 2): 1,
        }
        for (side, x, y), level in expected.items():
            assert field.get_from_side(side, x, y).level == level

    def test_every_side_covers_every_cell(self) -> None:
        field = self._make_field()
        for side in Side:
            seen = {
                field.index_from_side(side, x, y)
                for x in range(field.width_from_side(side))
                for y in range(field.height_from_side(side))
            }
            assert len(seen) == field.width * field.height

    def test_put_from_side(self) -> None:
        field = Field(3, 4)
        field.put_from_side(Side.RIGHT, 1, 2, hold(1, 0, 1))
        assert field.get(0, 1) == hold(1, 0, 1)


class TestSwipe:
    def test_swipe_up(self) -> None:
        field = Field.from_array(
            [[0, 2, 4, 4], [0, 2, 2, 4], [0, 0, 2, 2], [2, 0, 0, 2]]
        )
        assert field.swipe(Side.UP) == 20
        assert field.into_array() == [
            [2, 4, 4, 8],
            [0, 0, 4, 4],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ]

    def test_swipe_up_origins(self) -> None:
        field = Field.from_array(SAMPLE)
        assert field.swipe(Side.UP) == 20
        assert field.get(0, 0) is None
        assert field.get(1, 0) == merged(2, (1, 0), (1, 1))
        assert field.get(2, 0) == hold(2, 2, 0)
        assert field.get(3, 0) == merged(3, (3, 0), (3, 1))
        assert field.get(2, 1) == merged(2, (2, 1), (2, 2))
        assert field.get(3, 1) == merged(2, (3, 2), (3, 3))

    def test_swipe_down(self) -> None:
        field = Field.from_array(SAMPLE)
        assert field.swipe(Side.DOWN) == 20
        assert field.into_array() == [
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 4, 8],
            [0, 4, 4, 4],
        ]

    def test_swipe_left(self) -> None:
        field = Field.from_array(SAMPLE)
        assert field.swipe(Side.LEFT) == 16
        assert field.into_array() == [
            [2, 8, 0, 0],
            [4, 4, 0, 0],
            [4, 0, 0, 0],
            [2, 0, 0, 0],
        ]

    def test_swipe_right(self) -> None:
        field = Field.from_array(SAMPLE)
        assert field.swipe(Side.RIGHT) == 16
        assert field.into_array() == [
            [0, 0, 2, 8],
            [0, 0, 4, 4],
            [0, 0, 0, 4],
            [0, 0, 0, 2],
        ]
        assert field.get(3, 0) == merged(3, (3, 0), (2, 0))
        assert field.get(2, 0) == Tile(1, Origin.moved(1, 0))
        assert field.get(3, 3) == hold(1, 3, 3)

    @pytest.mark.parametrize(
        "column, expected, score",
        [
            ([2, 2, 2, 2], [4, 4, 0, 0], 8),
            ([2, 2, 4, 0], [4, 4, 0, 0], 4),
            ([4, 2, 2, 0], [4, 4, 0, 0], 4),
            ([2, 0, 2, 2], [4, 2, 0, 0], 4),
            ([0, 2, 2, 2], [4, 2, 0, 0], 4),
            ([0, 0, 0, 8], [8, 0, 0, 0], 0),
            ([2, 4, 8, 16], [2, 4, 8, 16], 0),
            ([8, 0, 4, 4, 0, 8], [8, 8, 8, 0, 0, 0], 8),
        ],
    )
    def test_merge_once(self, column, expected, score) -> None:
        field = Field.from_array([[value] for value in column])
        assert field.swipe(Side.UP) == score
        assert [row[0] for row in field.into_array()] == expected

    def test_swipe_empty_field(self) -> None:
        field = Field(4, 4)
        for side in Side:
            assert field.swipe(side) == 0
        assert field.into_array() == [[0] * 4 for _ in range(4)]

    def test_bad_side(self) -> None:
        with pytest.raises(ExpectationError):
            Field(2, 2).swipe("UP")

    def test_swipe_properties(self) -> None:
        rng = random.Random(16)
        for _ in range(40):
            width, height = rng.randint(1, 6), rng.randint(1, 6)
            matrix = random_matrix(rng, width, height)
            for side in Side:
                field = Field.from_array(matrix)
                before = field.total
                score = field.swipe(side)
                # merging two N's into one 2N preserves the sum
                assert field.total == before
                assert score == sum(
                    tile.value
                    for _, tile in field.tiles()
                    if tile.origin.kind is OriginKind.MERGED
                )
                # nothing left to join
                assert not field.can_swipe(side)
                changed = field.into_array() != matrix
                assert field.can_undo() == changed
                assert field.undo() == score
                assert field.into_array() == matrix
                assert not field.can_undo()

    def test_can_swipe(self) -> None:
        field = Field.from_array([[2, 4], [0, 0]])
        assert not field.can_swipe(Side.UP)
        assert field.can_swipe(Side.DOWN)
        assert not field.can_swipe(Side.LEFT)
        assert not field.can_swipe(Side.RIGHT)
        field = Field.from_array([[2, 2], [4, 8]])
        assert field.can_swipe(Side.LEFT)
        assert field.can_swipe(Side.RIGHT)
        assert not field.can_swipe(Side.UP)

    def test_can_swipe_after_merge(self) -> None:
        field = Field.from_array([[4], [2], [2]])
        field.swipe(Side.UP)
        assert field.into_array() == [[4], [4], [0]]
        # the new 4 has merged already; only the next move may merge it
        assert not field.can_swipe(Side.UP)
        assert field.can_swipe(Side.UP, baseline=True)
        field.hold_all()
        assert field.can_swipe(Side.UP)

    def test_can_swipe_does_not_hold(self) -> None:
        field = Field.from_array(SAMPLE)
        field.swipe(Side.LEFT)
        field.can_swipe(Side.UP)
        assert field.can_undo()


class TestJammed:
    def test_checkerboard_is_jammed(self) -> None:
        field = Field.from_array([[2, 4, 2], [4, 2, 4], [2, 4, 2]])
        assert field.is_full
        assert field.is_jammed()
        for side in Side:
            assert not field.can_swipe(side)

    def test_one_pair_is_enough(self) -> None:
        field = Field.from_array([[2, 4, 2], [4, 2, 4], [2, 8, 8]])
        assert not field.is_jammed()
        assert field.can_swipe(Side.LEFT)
        assert field.can_swipe(Side.RIGHT)
        assert not field.can_swipe(Side.UP)

    def test_one_hole_is_enough(self) -> None:
        field = Field.from_array([[2, 4, 2], [4, 0, 4], [2, 4, 2]])
        assert not field.is_full
        assert not field.is_jammed()

    def test_jammed_matches_definition(self) -> None:
        rng = random.Random(4)
        for _ in range(200):
            matrix = [[rng.choice([0, 2, 4, 8, 16, 32]) for _ in range(3)]
                      for _ in range(3)]
            has_hole = any(not value for row in matrix for value in row)
            has_pair = any(
                matrix[y][x] == matrix[y][x + 1]
                for y in range(3)
                for x in range(2)
            ) or any(
                matrix[y][x] == matrix[y + 1][x]
                for y in range(2)
                for x in range(3)
            )
            field = Field.from_array(matrix)
            assert field.is_jammed() == (not has_hole and not has_pair)


class TestAppend:
    def test_full_field(self) -> None:
        matrix = [[2, 4], [8, 16]]
        field = Field.from_array(matrix, random.Random(1))
        assert not field.append_tile()
        assert field.into_array() == matrix
        assert not field.can_undo()

    def test_append(self) -> None:
        field = Field(3, 3, random.Random(5))
        assert field.append_tile()
        tiles = list(field.tiles())
        assert len(tiles) == 1
        (point, tile), = tiles
        assert tile.origin == Origin.appear()
        assert tile.level in Field.SPAWN_LEVELS
        assert field.can_undo()
        assert len(field.get_free_cells()) == 8

    def test_scripted_generator(self) -> None:
        field = Field.from_array([[2, 0], [0, 0]], FirstChoice())
        # free cells are listed column by column
        assert field.get_free_cells() == [Point(0, 1), Point(1, 0), Point(1, 1)]
        assert field.append_tile()
        assert field.get(0, 1) == Tile(0, Origin.appear())

    def test_same_seed_same_tiles(self) -> None:
        fields = [Field(4, 4, random.Random(99)) for _ in range(2)]
        for field in fields:
            for _ in range(10):
                field.append_tile()
        assert fields[0] == fields[1]

    def test_fills_up(self) -> None:
        field = Field(2, 3, random.Random(0))
        for _ in range(6):
            assert field.append_tile()
        assert field.is_full
        assert not field.append_tile()


class TestUndo:
    def test_undo_reverts_spawns_too(self) -> None:
        field = Field.from_array(SAMPLE, random.Random(3))
        score = field.swipe(Side.UP)
        field.append_tile()
        field.append_tile()
        assert field.undo() == score
        assert field.into_array() == SAMPLE

    def test_undo_cannot_be_chained(self) -> None:
        field = Field.from_array(SAMPLE)
        field.swipe(Side.RIGHT)
        assert field.can_undo()
        field.undo()
        assert not field.can_undo()
        assert field.undo() == 0
        assert field.into_array() == SAMPLE

    def test_undo_restores_hold_origins(self) -> None:
        field = Field.from_array(SAMPLE)
        field.swipe(Side.DOWN)
        field.undo()
        assert field == Field.from_array(SAMPLE)

    def test_hold_all_forgets_the_move(self) -> None:
        field = Field.from_array(SAMPLE)
        field.swipe(Side.LEFT)
        field.hold_all()
        assert not field.can_undo()
        assert all(tile.origin == Origin.hold(*point)
                   for point, tile in field.tiles())

    def test_undo_only_spawn(self) -> None:
        field = Field(2, 2, random.Random(8))
        field.append_tile()
        assert field.can_undo()
        assert field.undo() == 0
        assert field.into_array() == [[0, 0], [0, 0]]
