import time
from typing import Callable


class FixedIntervalThrottle:
    """
    Fixed-rate gate for outbound sends: pause() always sleeps one full
    interval. No burst allowance.
    """

    def __init__(self, rate_per_second: float = 1.0, sleep: Callable[[float], None] = time.sleep):
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be positive")
        self.interval = 1.0 / rate_per_second
        self._sleep = sleep

    def pause(self) -> None:
        self._sleep(self.interval)
