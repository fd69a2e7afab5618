# -*- coding: utf-8 -*-
#
# core.py
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

"""Declares the basic building blocks every other module relies on:
the `Point` coordinates, the `Side` enum and the per-user `DATA_DIR`.
"""

import enum
from pathlib import Path
from typing import NamedTuple

import appdirs

from merge2048 import APPNAME


__all__ = ["DATA_DIR", "Point", "Side"]


# where the command line keeps its log file
DATA_DIR = Path(appdirs.user_data_dir(APPNAME))


class Point(NamedTuple):
    """Physical coordinates of a cell: `x` is the column, `y` the row.
    """

    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@enum.unique
class Side(enum.Enum):
    """The four directions a field can be swiped to.

    The value of each member is the letter used to spell it on the
    command line.
    """

    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def is_vertical(self) -> bool:
        return self in (Side.UP, Side.DOWN)

    @classmethod
    def pretty(cls) -> str:
        """Return the member names joined like 'UP, DOWN, LEFT or RIGHT'.
        """

        names = [member.name for member in cls]
        return ", ".join(names[:-1]) + f" or {names[-1]}"

    @classmethod
    def from_letter(cls, letter: str) -> "Side":
        """Convert 'U', 'd', 'L'... into a `Side`; raise `ValueError` for
        anything else.
        """

        try:
            return cls(letter.upper())
        except ValueError:
            raise ValueError(
                f"{letter!r} is not a side; use U, D, L or R"
            ) from None

    def __str__(self) -> str:
        return self.name
