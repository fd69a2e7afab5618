# -*- coding: utf-8 -*-
#
# game.py
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

"""Declares the `Game` class: a `Field` plus the score of the moves
made on it.
"""

# allowing postponed evaluation of annotations; see:
# https://www.python.org/dev/peps/pep-0563/
from __future__ import annotations

import logging
import random
from typing import Any, Optional, Sequence

from merge2048.core import Side
from merge2048.field import Field
from merge2048.utils import Base2048Error, Matrix, check_int, type_check


__all__ = ["Game"]

logger = logging.getLogger(__name__)


class Game:
    """Keeps the score of a `Field` and decides when tiles spawn.

    A successful swipe is followed by `spawns_per_move` new tiles, two by
    default, where the classic game spawns one. Undoing reverts the swipe
    together with its spawns.
    """

    DEFAULT_WIDTH = 4
    DEFAULT_HEIGHT = 4
    # how many tiles a new game starts with
    STARTING_AMOUNT = 2
    # how many tiles spawn after each successful swipe
    SPAWNS_PER_MOVE = 2

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,  # makes the remaining arguments keyword-only
        spawns_per_move: Optional[int] = None,
        starting_amount: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        # `x = x or DEFAULT` would let 0 pass silently
        if spawns_per_move is None:
            spawns_per_move = self.SPAWNS_PER_MOVE
        if starting_amount is None:
            starting_amount = self.STARTING_AMOUNT
        check_int(spawns_per_move)
        check_int(starting_amount)
        if starting_amount > width * height:
            raise Base2048Error(
                f"Cannot start a {width}x{height} game with "
                f"{starting_amount} tiles"
            )
        self.spawns_per_move = spawns_per_move
        self.starting_amount = starting_amount
        self._width = width
        self._height = height
        self._rng = random.Random() if rng is None else rng
        self._field: Field
        self._score = 0
        self.reset()

    @classmethod
    def from_array(
        cls, matrix: Sequence[Sequence[Any]], score: int = 0, **kwargs: Any
    ) -> Game:
        """Resume a game from a value matrix and its score.

        Keyword arguments are passed on to `Game.__init__`.
        """

        check_int(score)
        field = Field.from_array(matrix, kwargs.get("rng"))
        # a 1x1 matrix must not fail the starting amount check
        kwargs.setdefault(
            "starting_amount",
            min(cls.STARTING_AMOUNT, field.width * field.height),
        )
        new = cls(field.width, field.height, **kwargs)
        field.rng = new._rng
        new._field = field
        new._score = score
        return new

    # -- read-only state
    @property
    def field(self) -> Field:
        return self._field

    @property
    def score(self) -> int:
        return self._score

    @property
    def largest(self) -> int:
        return self._field.largest

    @property
    def is_over(self) -> bool:
        """Whether no side can be swiped anymore.
        """

        return self._field.is_jammed(baseline=True)

    def into_array(self) -> Matrix:
        return self._field.into_array()

    # -- moves
    def reset(self) -> None:
        """Start over with a fresh field and a zero score.
        """

        self._field = Field(self._width, self._height, self._rng)
        self._score = 0
        for _ in range(self.starting_amount):
            self._field.append_tile()
        self._field.hold_all()
        logger.info("New %dx%d game.", self._width, self._height)

    def can_swipe(self, side: Side) -> bool:
        return self._field.can_swipe(side, baseline=True)

    def swipe(self, side: Side) -> bool:
        """Swipe the field if that changes it, then spawn new tiles.

        An impossible swipe changes nothing, so the last move can still be
        undone.

        :return: whether the field changed
        """

        type_check(side, Side)
        if not self.can_swipe(side):
            logger.debug("Cannot swipe %s.", side)
            return False
        gained = self._field.swipe(side)
        self._score += gained
        spawned = sum(
            self._field.append_tile() for _ in range(self.spawns_per_move)
        )
        logger.debug(
            "Swiped %s: +%d point(s), %d tile(s) spawned, score %d.",
            side,
            gained,
            spawned,
            self._score,
        )
        return True

    def can_undo(self) -> bool:
        return self._field.can_undo()

    def undo(self) -> bool:
        """Revert the last swipe and its spawns, and take back its score.

        :return: whether undoing occurred
        """

        if not self.can_undo():
            return False
        self._score -= self._field.undo()
        # the restored field is the new baseline; undoing it makes no sense
        self._field.hold_all()
        logger.debug("Undone; score back to %d.", self._score)
        return True

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._width}, {self._height}, "
            f"score={self._score})"
        )

    def __str__(self) -> str:
        return f"{self._field}\nScore: {self._score}"
