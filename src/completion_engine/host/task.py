"""Generation-based cancellation for background completion work."""

from __future__ import annotations

import threading
from typing import Protocol


class CancelQuery(Protocol):
    def is_canceled(self) -> bool:
        ...


class TaskController:
    """Issues handles; restarting or canceling invalidates earlier ones."""

    def __init__(self) -> None:
        self._generation = 0
        self._canceled = False
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        return self._generation

    def restart(self) -> "TaskHandle":
        with self._lock:
            self._generation += 1
            self._canceled = False
            return TaskHandle(self, self._generation)

    def cancel(self) -> None:
        with self._lock:
            self._canceled = True

    def is_running(self) -> bool:
        with self._lock:
            return not self._canceled and self._generation > 0

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return not self._canceled and generation == self._generation


class TaskHandle:
    def __init__(self, controller: TaskController, generation: int) -> None:
        self._controller = controller
        self.generation = generation

    def is_canceled(self) -> bool:
        return not self._controller._is_current(self.generation)


__all__ = ["CancelQuery", "TaskController", "TaskHandle"]
