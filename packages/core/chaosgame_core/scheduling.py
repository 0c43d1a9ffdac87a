"""Host scheduling abstraction: repeating timers and resize notifications."""

from __future__ import annotations

from typing import Callable, Protocol


TickCallback = Callable[[], None]
ResizeCallback = Callable[[int, int], None]


class TimerHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_every(self, interval_ms: int, callback: TickCallback) -> TimerHandle: ...

    def on_resize(self, callback: ResizeCallback) -> None: ...


class ManualTimer:
    def __init__(self, interval_ms: int, callback: TickCallback) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.elapsed_ms = 0
        self.fired = 0
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class ManualScheduler:
    """Deterministic host driven by the caller instead of a clock.

    Used by tests and by the headless CLI commands. Timers fire strictly one
    callback at a time, so a tick always finishes before the next begins.
    """

    def __init__(self) -> None:
        self.timers: list[ManualTimer] = []
        self._resize_callbacks: list[ResizeCallback] = []

    def call_every(self, interval_ms: int, callback: TickCallback) -> ManualTimer:
        if interval_ms < 1:
            raise ValueError(f"interval_ms must be >= 1, got {interval_ms}")
        timer = ManualTimer(interval_ms, callback)
        self.timers.append(timer)
        return timer

    def on_resize(self, callback: ResizeCallback) -> None:
        self._resize_callbacks.append(callback)

    @property
    def active_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.active]

    def fire(self, count: int = 1) -> int:
        """Fire every active timer ``count`` times; returns callbacks run."""
        runs = 0
        for _ in range(count):
            for timer in self.active_timers:
                if not timer.active:
                    continue
                timer.fired += 1
                timer.callback()
                runs += 1
        return runs

    def advance(self, elapsed_ms: int) -> int:
        """Let ``elapsed_ms`` pass, firing each timer once per whole interval."""
        runs = 0
        for timer in self.active_timers:
            timer.elapsed_ms += elapsed_ms
            while timer.active and timer.elapsed_ms >= timer.interval_ms:
                timer.elapsed_ms -= timer.interval_ms
                timer.fired += 1
                timer.callback()
                runs += 1
        return runs

    def resize(self, width: int, height: int) -> None:
        for callback in list(self._resize_callbacks):
            callback(width, height)
