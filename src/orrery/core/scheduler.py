"""One tick per display refresh: input, integration, presentation."""
from __future__ import annotations

import logging
from typing import Callable, Protocol

from .camera import CameraState
from .events import Click, InputEvent, InputQueue, Resize
from .orbits import advance
from .simulation import SceneSnapshot, Simulation

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def present(self, snapshot: SceneSnapshot, camera: CameraState) -> None: ...

    def size(self) -> tuple[int, int]: ...


class RenderLoop:
    """Drives a :class:`Simulation` from explicit ``tick(dt)`` calls.

    ``dt`` is wall-clock seconds; it is converted to simulated time units
    with ``cfg.time_units_per_second`` before reaching the integrator.
    """

    def __init__(
        self,
        simulation: Simulation,
        renderer: Renderer | None = None,
        *,
        queue: InputQueue | None = None,
    ) -> None:
        self.simulation = simulation
        self.renderer = renderer
        self.queue = queue if queue is not None else InputQueue()
        self.frames = 0
        self._running = True
        self._teardown: list[Callable[[], None]] = []

    @property
    def running(self) -> bool:
        return self._running

    def enqueue(self, event: InputEvent) -> bool:
        if not self._running:
            return False
        return self.queue.push(event)

    def on_teardown(self, callback: Callable[[], None]) -> None:
        """Register a release callback (e.g. listener removal) run once by :meth:`stop`."""

        if not self._running:
            callback()
            return
        self._teardown.append(callback)

    def tick(self, dt: float) -> bool:
        if not self._running:
            return False
        sim = self.simulation

        for event in self.queue.drain():
            self._dispatch(event)

        advance(sim.scene, sim.clock, dt * sim.cfg.time_units_per_second)
        self.frames += 1

        recorder = sim.recorder
        if recorder is not None and sim.clock.playing and self.frames % sim.cfg.record_every_ticks == 0:
            recorder.log_bodies(sim.clock.elapsed, sim.scene.order)

        if self.renderer is not None:
            snapshot = sim.snapshot()
            self.renderer.present(snapshot, snapshot.camera)
        return True

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self.queue.close()
        callbacks, self._teardown = self._teardown, []
        for callback in callbacks:
            callback()
        logger.debug("Render loop stopped after %d frames", self.frames)

    def _dispatch(self, event: InputEvent) -> None:
        sim = self.simulation
        if isinstance(event, Resize):
            sim.controller.resize(event.width, event.height)
        elif isinstance(event, Click):
            sim.select_at((event.x, event.y))
        else:
            sim.controller.handle(event)


__all__ = ["RenderLoop", "Renderer"]
