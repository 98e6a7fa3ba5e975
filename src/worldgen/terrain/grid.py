"""Thread control for the numba-parallel grid kernels.

Every grid operation in the pipeline is a pure function of the cell index
plus read-only configuration.  The kernels run ``prange`` over rows, so
each thread writes only its own rows of the output and completion order
never affects the result.  Noise sampling fans out the same way through
opensimplex's numba-compiled ``noise2array``.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import numba


def default_workers() -> int:
    """Number of threads numba was started with."""
    return numba.config.NUMBA_NUM_THREADS


@contextmanager
def worker_threads(workers: int | None) -> Iterator[int]:
    """Run the enclosed parallel kernels on at most *workers* threads.

    ``None`` keeps the current thread count.  Counts above the number of
    threads numba launched with are clamped to it.
    """
    previous = numba.get_num_threads()
    if workers is None:
        yield previous
        return

    count = max(1, min(workers, default_workers()))
    numba.set_num_threads(count)
    try:
        yield count
    finally:
        numba.set_num_threads(previous)
