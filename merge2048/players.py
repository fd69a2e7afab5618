# -*- coding: utf-8 -*-
#
# players.py
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

"""Headless players: objects that drive a `Game` until it ends.
"""

import enum
import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Optional, final

from merge2048.core import Side
from merge2048.game import Game
from merge2048.utils import Base2048Error, type_check


__all__ = ["BasePlayer", "Outcome", "RandomPlayer", "ScriptedPlayer"]

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    QUIT = "quit"
    VICTORY = "victory"
    OVERVICTORY = "overvictory"
    LOSS = "loss"


class BasePlayer(ABC):
    """Abstract class that implements the `play` method.

    A concrete player should inherit from this class, but shouldn't
    override this method.
    Many other methods are 'hooks' that either can, should, or must be
    overridden.
    """

    DEFAULT_GOAL = 2048

    def __init__(self, game: Game, *, goal: Optional[int] = None) -> None:
        type_check(game, Game)
        # `goal = goal or DEFAULT_GOAL` would allow "goal = 0" to pass silently
        if goal is None:
            goal = self.DEFAULT_GOAL
        elif goal < 1 or goal & (goal - 1):
            raise ValueError(f"goal must be a positive power of 2, not {goal}")
        self.game = game
        self.goal = goal
        self.victory = False
        self.attempts = 0
        self.moves = 0

    # play hooks: don't need to be overridden, but probably should
    def on_play(self) -> Any:
        pass

    def after_choice(self, choice: Side) -> Any:
        pass

    def after_change(self, choice: Side) -> Any:
        pass

    def after_nochange(self, choice: Side) -> Any:
        pass

    def after_play(self) -> Any:
        pass

    # MAIN LOOP: shouldn't be overridden
    @final
    def play(self) -> Optional[Outcome]:
        """The main loop repeatedly calls `self.choose_side`. If that
        raises `KeyboardInterrupt`, it returns `None` immediately, skipping
        `self.after_play()`. If that raises `EOFError`, it breaks the loop
        and ends the game as a quit.
        This loops until either a) the game is over; or b) the player quits;
        or c) the goal has been reached for the first time.
        """

        game = self.game
        self.on_play()
        if game.is_over:
            raise Base2048Error(f"Asked to play a finished game:\n{game}")
        player_quit = False
        is_over = False
        while not is_over:
            try:
                choice = self.choose_side()
            except KeyboardInterrupt:
                return None
            except EOFError:
                player_quit = True
                break
            type_check(choice, Side)
            self.attempts += 1
            self.after_choice(choice)
            if game.swipe(choice):
                self.moves += 1
                self.after_change(choice)
                is_over = game.is_over
            else:
                self.after_nochange(choice)
            # if the player kept playing after winning, we don't want to
            # exit this loop
            if not self.victory and game.largest >= self.goal:
                self.victory = True
                break
        # after loop stuff
        self.after_play()
        if player_quit:
            outcome = Outcome.QUIT
            self.on_player_quit()
        elif self.victory:
            if is_over:
                outcome = Outcome.OVERVICTORY
                self.on_player_overvictory()
            else:
                outcome = Outcome.VICTORY
                self.on_player_victory()
        else:
            assert is_over
            outcome = Outcome.LOSS
            self.on_player_loss()
        logger.info(
            "Game ended (%s) after %d move(s): score %d, largest %d.",
            outcome.value,
            self.moves,
            game.score,
            game.largest,
        )
        return outcome

    # the following methods MUST be overridden
    @abstractmethod
    def choose_side(self) -> Side:
        pass

    @abstractmethod
    def on_player_quit(self) -> Any:
        pass

    @abstractmethod
    def on_player_victory(self) -> Any:
        pass

    @abstractmethod
    def on_player_overvictory(self) -> Any:
        pass

    @abstractmethod
    def on_player_loss(self) -> Any:
        pass


class _LoggingPlayer(BasePlayer):
    """Reports the end of the game through the module logger only.
    """

    def after_nochange(self, choice: Side) -> None:
        logger.debug("%s changed nothing.", choice)

    def on_player_quit(self) -> None:
        logger.info("Player quit.")

    def on_player_victory(self) -> None:
        logger.info("Goal %d reached.", self.goal)

    def on_player_overvictory(self) -> None:
        logger.info("Goal %d reached, then no move was left.", self.goal)

    def on_player_loss(self) -> None:
        logger.info("No move left.")


class RandomPlayer(_LoggingPlayer):
    """Picks a side at random each turn.
    """

    # a tuple version of the enum to make it work with `random`
    SIDES = tuple(Side)

    def __init__(
        self,
        game: Game,
        *,
        goal: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(game, goal=goal)
        self.rng = random.Random() if rng is None else rng

    def choose_side(self) -> Side:
        return self.rng.choice(self.SIDES)


class ScriptedPlayer(_LoggingPlayer):
    """Replays a fixed sequence of sides, then quits.
    """

    def __init__(
        self, game: Game, sides: Iterable[Side], *, goal: Optional[int] = None
    ) -> None:
        super().__init__(game, goal=goal)
        self._sides: Iterator[Side] = iter(sides)

    def choose_side(self) -> Side:
        try:
            return next(self._sides)
        except StopIteration:
            raise EOFError("no side left to play") from None
