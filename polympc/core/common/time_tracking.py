import functools
import logging
import time

logger = logging.getLogger(__name__)


def timed_cycle(func):
    """
    Time a control-cycle method of an object that holds an ``MPCConfig``.

    The elapsed time is stored on ``last_cycle_time``. A cycle that runs past
    ``config.max_wall_time`` is logged as a warning, otherwise at debug level.
    """
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        start = time.perf_counter()
        try:
            return func(self, *args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            self.last_cycle_time = elapsed
            budget = self.config.max_wall_time
            name = f"{type(self).__name__}.{func.__name__}"
            if elapsed > budget:
                logger.warning(f"[TIMEIT] {name} took {elapsed:.4f}s, over the {budget:.4f}s cycle budget")
            else:
                logger.debug(f"[TIMEIT] {name} executed in {elapsed:.4f} seconds")
    return wrapper
