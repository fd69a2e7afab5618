# -*- coding: utf-8 -*-
#
# utils.py
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

"""Declares a few type aliases and auxiliary functions and exceptions.

The functions aren't related to board games at all, except for
`either_0_power2`, which validates the numbers a board may hold.
"""

import inspect
import operator
from collections.abc import Collection
from typing import Any, List, Optional, Sequence, Tuple, Type, Union

from merge2048 import APPNAME


__all__ = [
    "Expectation",
    "IntPair",
    "Matrix",
    # generic functions
    "as_int",
    "check_int",
    "classname",
    "either_0_power2",
    "is_container",
    "type_check",
    "typename",
    # exceptions
    "Base2048Error",
    "ExpectationError",
    "InvalidShapeError",
    "InvalidValueError",
    "NegativeIntegerError",
]


# -- TYPE ALIASES
Expectation = Union[Type, Sequence[Type]]
IntPair = Tuple[int, int]
# rows of columns; what `Field.into_array` returns
Matrix = List[List[int]]


# -- GENERAL-PURPOSE FUNCTIONS
def typename(thing: Any) -> str:
    """Return the name of its argument's class.
    """

    return thing.__class__.__name__


def classname(thing: Any) -> str:
    """Return its argument's name, if it's a class,
    or the name of its argument's class.
    """

    if inspect.isclass(thing):
        return thing.__name__
    return typename(thing)


def is_container(thing: Any) -> bool:
    """Determine whether the argument is an iterable, but not a `str`.

    Classes never are, even iterable ones such as `enum.Enum` subclasses.
    """

    if inspect.isclass(thing):
        return False
    cls = type(thing)
    return issubclass(cls, Collection) and not issubclass(cls, str)


def type_check(
    value: Any, expected: Expectation, was_positive: bool = True
) -> None:
    """Verify whether `value` is of an appropriate type, or
    is not of a forbidden one.

    :param Any value: the object to check
    :param Expectation expected: a class or a sequence of classes
    :param bool was_positive: if `True`, raises `ExpectationError` if
           the type of `value` IS NOT listed in, or DIFFERS from,
           `expected`.
           If `False`, raises the error if the type of `value` IS
           listed in, or EQUALS, `expected`.
    """

    if is_container(expected):
        matches = type(value) in expected
    else:
        matches = isinstance(value, expected)
    if matches != was_positive:
        raise ExpectationError(value, expected, was_positive=was_positive)


def check_int(i: int) -> None:
    """Raise `ExpectationError` if `i` is not `int`, and
    `NegativeIntegerError` if it's a negative `int`.
    """

    # bool is an int subclass, but True is no sensible level or size
    type_check(i, bool, was_positive=False)
    type_check(i, int)
    if i < 0:
        raise NegativeIntegerError(i)


def as_int(thing: Any) -> int:
    """Return `thing` as a plain `int` if it's integral (`int`, numpy
    integers...), raise `ExpectationError` otherwise.

    Floats are rejected even when they hold a whole number.
    """

    if isinstance(thing, bool):
        raise ExpectationError(thing, int)
    try:
        return operator.index(thing)
    except TypeError:
        raise ExpectationError(thing, int) from None


def either_0_power2(integer: int) -> bool:
    """Adapted from: https://www.geeksforgeeks.org/python-program-to-find-whether-a-no-is-power-of-two/

    A power of 2 bitwise-AND its predecessor always equals 0.
    :param integer: any non-negative `int`
    :return: whether `integer` is either 0 or a (positive) power of 2
    """

    return integer >= 0 and not integer & (integer - 1)


# -- CLASSES
# Exceptions
class Base2048Error(Exception):
    pass


class NegativeIntegerError(Base2048Error, ValueError):
    """Raised when a negative `int` is found when a positive one or 0
    was required.
    """

    STD_MESSAGE = f"Only non-negative integers can be used in a {APPNAME} field"

    def __init__(self, number: int, message: Optional[str] = None) -> None:
        self.number = number
        if message:
            self.message = f"{message}. "
            super().__init__(message)
        else:
            self.message = ""
            super().__init__()

    def __str__(self) -> str:
        return f"{self.message}{self.STD_MESSAGE}; but {self.number} found"


class InvalidValueError(Base2048Error, ValueError):
    """Raised when a value matrix holds something other than 0 or a
    power of 2.
    """

    def __init__(self, value: int, point: Optional[IntPair] = None) -> None:
        self.value = value
        self.point = point
        super().__init__(value, point)

    def __str__(self) -> str:
        where = "" if self.point is None else f" at {tuple(self.point)}"
        return f"Expected 0 or a power of 2{where}, but {self.value} found"


class InvalidShapeError(Base2048Error, ValueError):
    """Raised when a value matrix is empty or its rows differ in length.
    """


class ExpectationError(Base2048Error, TypeError):
    """Raised when the type of an argument is incorrect.

    Just like `TypeError`, but more verbose.
    """

    def __init__(
        self,
        problem: Any,
        expectation: Expectation,
        *args: str,
        was_positive: bool = True,
    ) -> None:
        if is_container(expectation):
            self.expectation = "/".join(map(classname, expectation))
        else:
            self.expectation = classname(expectation)
        self.problem = repr(problem)
        self.problem_type = typename(problem)
        if args:
            self.message = "".join(args).rstrip() + ". "
        else:
            self.message = ""
        self.was_positive = was_positive
        super().__init__(*args)

    def __str__(self) -> str:
        if self.was_positive:
            msg = (
                f"{self.message}Expected {self.expectation}, "
                f"but {self.problem} is {self.problem_type}"
            )
        else:
            msg = (
                f"{self.message}Found {self.problem} of "
                f"type {self.problem_type}, but "
                "the following class(es) is/are "
                f"not allowed: {self.expectation}"
            )
        return msg
