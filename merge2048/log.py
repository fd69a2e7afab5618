# -*- coding: utf-8 -*-
#
# log.py
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

"""Equips the package logger with a log file and a stderr handler.

Importing this module has side effects (it creates `DATA_DIR`), so only
the command line does it; the library itself never adds handlers.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from merge2048 import APPNAME, DATA_DIR

__all__ = ["FORMATTER", "LOGGER", "setup_logger"]


# set up a formatter (to be used for all handlers)
FORMATTER = logging.Formatter(
    fmt="\t".join(
        [
            "%(asctime)s",  # human-readable timestamp
            "%(funcName)s @ %(module)s",  # calling function @ module
            "(%(levelname)s) %(message)s",  # (level name) message
        ]
    ),
    datefmt="%H:%M:%S",
)


def make_handlers(folder: Optional[Path] = None) -> List[logging.Handler]:
    """Return a file handler writing into `folder` (`DATA_DIR` by default)
    and a stderr handler that only lets errors through.
    """

    if folder is None:
        folder = DATA_DIR
    folder.mkdir(parents=True, exist_ok=True)
    fpath = str(folder.resolve() / f"{APPNAME}.log")
    handlers: List[logging.Handler] = [
        logging.FileHandler(filename=fpath, mode="w"),
        logging.StreamHandler(stream=sys.stderr),
    ]
    handlers[-1].setLevel(logging.ERROR)  # will override the logger's level
    return handlers


def setup_logger(
    name: str, folder: Optional[Path] = None
) -> logging.Logger:
    logger = logging.getLogger(name)
    for h in make_handlers(folder):
        h.setFormatter(FORMATTER)
        logger.addHandler(h)
        logger.info("Loaded handler: '%s'.", h)
    logger.info("Created '%s'.", logger)
    return logger


# set up the main logger and equip it
LOGGER = setup_logger(APPNAME)
