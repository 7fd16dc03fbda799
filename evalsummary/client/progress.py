import random
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

ProgressListener = Callable[[int], None]


class ProgressAnimator:
    """Cosmetic progress that creeps toward a ceiling until work finishes."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        max_step: int = 10,
        ceiling: int = 90,
    ) -> None:
        self._rng = rng or random.Random()
        self._max_step = max_step
        self._ceiling = ceiling
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        return self._value

    def tick(self) -> int:
        with self._lock:
            if self._value < self._ceiling:
                step = self._rng.randint(1, self._max_step)
                self._value = min(self._ceiling, self._value + step)
            return self._value

    def complete(self) -> int:
        with self._lock:
            self._value = 100
            return self._value

    @contextmanager
    def running(self, listener: ProgressListener, interval_seconds: float = 0.5) -> Iterator["ProgressAnimator"]:
        """Tick in a background thread while the block runs."""
        stop = threading.Event()

        def _loop() -> None:
            while not stop.wait(interval_seconds):
                listener(self.tick())

        thread = threading.Thread(target=_loop, name="progress-animator", daemon=True)
        thread.start()
        try:
            yield self
        finally:
            stop.set()
            thread.join()
