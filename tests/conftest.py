import matplotlib

matplotlib.use("Agg")

import pytest

from linear_program import LinearProgram


@pytest.fixture
def textbook():
    # max 3x1 + 2x2, x1 + x2 <= 4, x1 + 3x2 <= 6
    return LinearProgram.from_arrays([3, 2], [[1, 1], [1, 3]], [4, 6])


@pytest.fixture
def production():
    return LinearProgram.from_arrays([3, 5], [[1, 0], [0, 2], [3, 2]], [4, 12, 18])


@pytest.fixture
def unbounded():
    return LinearProgram.from_arrays([1, 0], [[1, -1]], [1])
