"""
Fixed-delay request throttle.
"""

from __future__ import annotations

import time
from collections.abc import Callable


class RequestThrottle:
    """
    Sleeps a constant delay between consecutive catalog requests.
    """

    def __init__(
        self,
        *,
        delay_seconds: float,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.delay_seconds = max(0.0, delay_seconds)
        self._sleep = sleep

    def pause(self) -> None:
        if self.delay_seconds > 0:
            self._sleep(self.delay_seconds)
