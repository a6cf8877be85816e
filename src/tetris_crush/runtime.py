from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, TypeVar

from tetris_crush.game import GameSession, SessionSnapshot


logger = logging.getLogger(__name__)

T = TypeVar("T")


class SerializedSession:
    """Funnels commands from independent sources through one lock.

    Input handlers and the gravity clock both call into this wrapper; each
    command holds the lock for its whole read-modify-write over the grid.
    """

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self._lock = threading.RLock()

    def submit(self, command: Callable[[GameSession], T]) -> T:
        with self._lock:
            return command(self.session)

    def move(self, dx: int) -> bool:
        return self.submit(lambda s: s.move(dx))

    def rotate(self, direction: int) -> bool:
        return self.submit(lambda s: s.rotate(direction))

    def soft_drop(self):
        return self.submit(lambda s: s.soft_drop())

    def hard_drop(self) -> int:
        return self.submit(lambda s: s.hard_drop())

    def tick(self):
        return self.submit(lambda s: s.tick())

    def select(self, x: int, y: int) -> bool:
        return self.submit(lambda s: s.select(x, y))

    def toggle_pause(self) -> bool:
        return self.submit(lambda s: s.toggle_pause())

    def snapshot(self) -> SessionSnapshot:
        return self.submit(lambda s: s.snapshot())


class GravityClock:
    """Calls ``tick()`` on a serialized session every ``interval`` seconds."""

    def __init__(self, target: SerializedSession, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.target = target
        self.interval = float(interval)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="gravity-clock", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.target.tick()
        logger.debug("gravity clock stopped")

    def __enter__(self) -> "GravityClock":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
