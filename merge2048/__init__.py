# -*- coding: utf-8 -*-
#
# __init__.py
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

# these basic "constants" are declared here before imports because
# other modules we import require them, so we're avoiding circular
# importing errors
__version__ = (0, 1)
VERSION = ".".join(map(str, __version__))
APPNAME = __name__
COPY_FOOTER = "merge2048 is free software, released under the GNU GPLv3+."

from merge2048.core import DATA_DIR, Point, Side
from merge2048.field import Field, JoinResult, can_join_tiles, join_tiles
from merge2048.game import Game
from merge2048.players import BasePlayer, Outcome, RandomPlayer, ScriptedPlayer
from merge2048.tile import Origin, OriginKind, Tile
from merge2048.utils import (
    Base2048Error,
    ExpectationError,
    InvalidShapeError,
    InvalidValueError,
    NegativeIntegerError,
    check_int,
    classname,
    either_0_power2,
    is_container,
    type_check,
    typename,
)
