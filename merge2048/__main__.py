#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# __main__.py
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

"""Plays one headless game and prints how it ended.

>>> python3 -m merge2048 --seed 7 --moves ULDR -v
"""

# logging will be configured by our 'log' module, unless "-q" has been passed
# from the command-line
import argparse
import logging
import random
import sys
from typing import List, NoReturn, Optional

from merge2048 import APPNAME, COPY_FOOTER, VERSION
from merge2048.core import Side
from merge2048.game import Game
from merge2048.players import BasePlayer, RandomPlayer, ScriptedPlayer


## GLOBALS
logger = logging.getLogger(APPNAME)


def parse_sides(letters: str) -> List[Side]:
    """argparse `type` for --moves: 'ULdr' -> [UP, LEFT, DOWN, RIGHT].
    """

    try:
        return [Side.from_letter(letter) for letter in letters]
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error)) from None


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses sys.argv options.
    """

    mainparser = argparse.ArgumentParser(
        prog=f"python3 -m {APPNAME}",
        description=(
            "Plays a game of 2048 without any display, either with random "
            "moves or with the moves given, and prints the final board."
        ),
        epilog=COPY_FOOTER,
    )
    mainparser.add_argument(
        "--width", type=int, default=Game.DEFAULT_WIDTH, help="board columns"
    )
    mainparser.add_argument(
        "--height", type=int, default=Game.DEFAULT_HEIGHT, help="board rows"
    )
    mainparser.add_argument(
        "--seed",
        type=int,
        help="seed of the random generator, for reproducible games",
    )
    mainparser.add_argument(
        "--spawns",
        metavar="number",
        type=int,
        default=Game.SPAWNS_PER_MOVE,
        help="how many tiles appear after each move",
    )
    mainparser.add_argument(
        "-g",
        "--goal",
        metavar="number",
        type=int,
        # no `default=2048` here; the default will be `None` and be handled
        # later
        help="the number of the tile needed to win",
    )
    mainparser.add_argument(
        "--moves",
        metavar="letters",
        type=parse_sides,
        help="play these sides (U, D, L, R) instead of random ones",
    )
    verb_group = mainparser.add_mutually_exclusive_group()
    verb_group.add_argument(
        "-v",
        dest="verbosity",
        action="count",
        default=0,
        help="increase output verbosity",
    )
    verb_group.add_argument(
        "-q",
        "--quiet",
        dest="verbosity",
        action="store_const",
        const=None,
        help="suppress all logging",
    )
    mainparser.add_argument("--version", action="version", version=VERSION)
    return mainparser.parse_args(argv)


def setup_logger(arguments: argparse.Namespace) -> None:
    """Setup the logger (even if a dummy one).
    """

    global logger
    verbosity = arguments.verbosity
    if verbosity is not None:
        from merge2048.log import LOGGER as logger

        # less verbose <--> more verbose
        levels = (logging.WARNING, logging.INFO, logging.DEBUG)
        try:
            logger.setLevel(levels[verbosity])
        except IndexError:
            logger.setLevel(logging.DEBUG)
    else:
        logger.addHandler(logging.NullHandler())
        # the NullHandler alone would let warnings reach `logging.lastResort`
        logger.propagate = False


def make_player(arguments: argparse.Namespace) -> BasePlayer:
    rng = random.Random(arguments.seed)
    game = Game(
        arguments.width,
        arguments.height,
        spawns_per_move=arguments.spawns,
        rng=rng,
    )
    if arguments.moves is not None:
        return ScriptedPlayer(game, arguments.moves, goal=arguments.goal)
    return RandomPlayer(game, goal=arguments.goal, rng=rng)


def main(argv: Optional[List[str]] = None) -> NoReturn:
    arguments = parse_arguments(argv)
    setup_logger(arguments)
    logger.debug("Parsed arguments: %r", arguments)
    try:
        player = make_player(arguments)
        outcome = player.play()
    except Exception as error:
        logger.critical("%s: %s", type(error).__name__, error)
        sys.exit(1)
    if outcome is None:
        # interrupted with Ctrl-C
        print()
        sys.exit(1)
    print(player.game.field)
    print(f"Score: {player.game.score} ({outcome.value})")
    sys.exit()


if __name__ == "__main__":
    main()
