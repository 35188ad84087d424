# -*- coding: utf-8 -*-
"""
Exact Accumulator - Running sum carried as an unrounded pair.

The polygon area is the sum of many edge contributions of large and
opposite sign. Keeping the rounding remainder of every addition alongside
the rounded sum (double-double style) keeps the result accurate to roughly
twice the working precision.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import math
from typing import Union

from grdl_geodesy.utils.geomath import two_sum


class Accumulator:
    """
    Running sum with a compensating remainder.

    Parameters
    ----------
    y : float or Accumulator
        Initial value; an ``Accumulator`` is copied.

    Examples
    --------
    >>> acc = Accumulator()
    >>> for x in (1e20, 1.0, -1e20):
    ...     acc.add(x)
    >>> acc.sum()
    1.0
    """

    def __init__(self, y: Union[float, "Accumulator"] = 0.0):
        self._s = 0.0
        self._t = 0.0
        self.set(y)

    def set(self, y: Union[float, "Accumulator"]) -> None:
        """Reset the sum to ``y``."""
        if isinstance(y, Accumulator):
            self._s, self._t = y._s, y._t
        else:
            self._s, self._t = float(y), 0.0

    def add(self, y: float) -> None:
        """Add ``y`` to the running sum."""
        y, u = two_sum(y, self._t)
        self._s, self._t = two_sum(y, self._s)
        # Keep _s the rounded value of _s + _t; a zero _s would lose u
        if self._s == 0:
            self._s = u
        else:
            self._t += u

    def sum(self, y: float = 0.0) -> float:
        """
        Value of the sum, optionally with ``y`` added.

        The accumulator itself is not modified.
        """
        if y == 0.0:
            return self._s
        b = Accumulator(self)
        b.add(y)
        return b._s

    def negate(self) -> None:
        """Change the sign of the sum."""
        self._s *= -1
        self._t *= -1

    def remainder(self, y: float) -> None:
        """Reduce the sum to the range [-y/2, y/2] by multiples of ``y``."""
        self._s = math.remainder(self._s, y)
        self.add(0.0)

    def __float__(self) -> float:
        return self._s

    def __repr__(self) -> str:
        return f"Accumulator(s={self._s!r}, t={self._t!r})"


__all__ = [
    "Accumulator",
]
