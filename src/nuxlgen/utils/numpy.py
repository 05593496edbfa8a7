"""Numpy array utilities."""

from __future__ import annotations

from typing import Iterable

import numpy
from numpy.typing import NDArray


def cartesian_product_from_iterable(*args: Iterable) -> NDArray:
    """Compute the cartesian product of args as a 2D array.

    Rows are sorted such that the first column changes slowest.

    """
    if not args:
        raise ValueError("At least one argument is required to compute the cartesian product.")
    res = None
    for x in args:
        if res is None:
            # initialize cartesian product array
            res = numpy.array(list(x))
            res = res.reshape((res.size, 1))
        else:
            x = numpy.array(list(x))
            row, col = res.shape
            new_res_shape = (row * x.size, col + 1)
            new_res = numpy.zeros(shape=new_res_shape, dtype=res.dtype)
            ind = numpy.repeat(numpy.arange(row), x.size)
            new_res[:, :col] = res[ind]
            new_res[:, -1] = numpy.tile(x, row)
            res = new_res
    return res
