"""Chaos game loop: plot midpoint jumps in batches, then present once per tick."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from chaosgame_renderer import Color, Point, RasterBuffer, Shape, Viewport, midpoint

from .config import ChaosGameConfig, validate_config
from .logging_setup import get_logger
from .scheduling import Scheduler, TimerHandle


class LoopState(str, Enum):
    IDLE = "Idle"
    RUNNING = "Running"


@dataclass
class LoopStats:
    ticks: int = 0
    dots: int = 0
    presentations: int = 0
    skipped_presentations: int = 0
    presentation_errors: int = 0


class ChaosGameLoop:
    def __init__(
        self,
        shape: Shape,
        buffer: RasterBuffer,
        viewport: Viewport,
        color: Color,
        scheduler: Scheduler,
        dots_per_tick: int = 1,
        tick_interval_ms: int = 30,
    ) -> None:
        if dots_per_tick < 1:
            raise ValueError(f"dots_per_tick must be >= 1, got {dots_per_tick}")
        if tick_interval_ms < 1:
            raise ValueError(f"tick_interval_ms must be >= 1, got {tick_interval_ms}")

        self.shape = shape
        self.buffer = buffer
        self.viewport = viewport
        self.color = color
        self.scheduler = scheduler
        self.dots_per_tick = dots_per_tick
        self.tick_interval_ms = tick_interval_ms

        self.current_position: Point | None = None
        self._state = LoopState.IDLE
        self._timer: TimerHandle | None = None
        self._stats = LoopStats()
        self._logger = get_logger("loop")

    @classmethod
    def from_config(
        cls,
        config: ChaosGameConfig,
        scheduler: Scheduler,
        viewport: Viewport,
        rng: random.Random | None = None,
    ) -> ChaosGameLoop:
        validate_config(config)
        render = config.render
        buffer = RasterBuffer(render.buffer_width, render.buffer_height)
        shape = Shape.triangle(render.horizontal_resolution, render.logical_height, rng=rng)
        return cls(
            shape=shape,
            buffer=buffer,
            viewport=viewport,
            color=config.color.to_color(),
            scheduler=scheduler,
            dots_per_tick=config.loop.dots_per_tick,
            tick_interval_ms=config.loop.tick_interval_ms,
        )

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state == LoopState.RUNNING

    @property
    def stats(self) -> LoopStats:
        return self._stats

    def start(self) -> None:
        if self._state == LoopState.RUNNING:
            self._logger.debug("start ignored, already running", extra={"event": "loop_start_ignored"})
            return

        self.current_position = self.shape.random_corner()
        self._timer = self.scheduler.call_every(self.tick_interval_ms, self.tick)
        self._state = LoopState.RUNNING
        self._logger.info(
            "chaos game started: %sx%s buffer, %s dots every %s ms",
            self.buffer.width,
            self.buffer.height,
            self.dots_per_tick,
            self.tick_interval_ms,
            extra={"event": "loop_started"},
        )

    def stop(self) -> None:
        if self._state == LoopState.IDLE:
            return
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._state = LoopState.IDLE
        self._logger.info(
            "chaos game stopped after %s ticks, %s dots (%s dropped)",
            self._stats.ticks,
            self._stats.dots,
            self.buffer.dropped_plots,
            extra={"event": "loop_stopped"},
        )

    def step(self) -> Point:
        """Jump once toward a random corner and plot the new position."""
        if self.current_position is None:
            self.current_position = self.shape.random_corner()
        target = self.shape.random_corner()
        self.current_position = midpoint(self.current_position, target)
        self.buffer.plot(self.current_position, self.color)
        self._stats.dots += 1
        return self.current_position

    def tick(self) -> None:
        for _ in range(self.dots_per_tick):
            self.step()
        self._stats.ticks += 1
        self._present()

    def _present(self) -> None:
        try:
            presented = self.viewport.update(self.buffer)
        except Exception as exc:
            self._stats.presentation_errors += 1
            self._logger.warning(
                "presentation failed, continuing: %s",
                exc,
                exc_info=True,
                extra={"event": "present_error"},
            )
            return

        if presented:
            self._stats.presentations += 1
        else:
            self._stats.skipped_presentations += 1
