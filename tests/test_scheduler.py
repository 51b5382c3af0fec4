import math

import numpy as np
import pytest

from orrery.core.camera import CameraState
from orrery.core.events import Click, PointerDown, PointerMove, Resize, Wheel
from orrery.core.logging_utils import SessionRecorder
from orrery.core.scheduler import RenderLoop
from orrery.core.simulation import SceneSnapshot, Simulation


class FakeRenderer:
    def __init__(self) -> None:
        self.frames: list[tuple[SceneSnapshot, CameraState]] = []

    def present(self, snapshot: SceneSnapshot, camera: CameraState) -> None:
        self.frames.append((snapshot, camera))

    def size(self) -> tuple[int, int]:
        return 1280, 800


@pytest.fixture
def simulation(small_system) -> Simulation:
    return Simulation.from_system(small_system, viewport=(1280, 800), rng=np.random.default_rng(7))


def test_one_display_frame_is_one_time_unit(simulation) -> None:
    renderer = FakeRenderer()
    loop = RenderLoop(simulation, renderer)
    assert loop.tick(1 / 60) is True
    assert math.isclose(simulation.clock.elapsed, 1.0)
    assert math.isclose(simulation.scene.by_name["Earth"].phase, 0.02)
    assert len(renderer.frames) == 1
    snapshot, camera = renderer.frames[0]
    assert [body.name for body in snapshot.bodies] == ["Sun", "Earth", "Moon", "Mars"]
    np.testing.assert_allclose(camera.position, [0.0, 30.0, 60.0])


def test_paused_loop_still_presents(simulation) -> None:
    renderer = FakeRenderer()
    loop = RenderLoop(simulation, renderer)
    simulation.toggle_playing()
    before = simulation.scene.by_name["Earth"].position.copy()
    loop.tick(1.0)
    np.testing.assert_array_equal(simulation.scene.by_name["Earth"].position, before)
    assert len(renderer.frames) == 1
    assert renderer.frames[0][0].playing is False


def test_queued_click_selects_body(simulation) -> None:
    loop = RenderLoop(simulation)
    screen = simulation.camera.world_to_screen(simulation.scene.by_name["Earth"].position)
    loop.enqueue(Click(*screen))
    loop.tick(0.0)
    assert simulation.selected == "Earth"

    loop.enqueue(Click(0, 0))
    loop.tick(0.0)
    assert simulation.selected == "Earth"


def test_pointer_events_reach_camera_controller(simulation) -> None:
    loop = RenderLoop(simulation)
    distance = simulation.camera.distance
    loop.enqueue(Wheel(1))
    loop.enqueue(PointerDown(0, 0))
    loop.enqueue(PointerMove(10, 0))
    loop.tick(0.0)
    assert simulation.camera.distance > distance
    assert simulation.camera.position[0] > 0.0


def test_resize_updates_viewport(simulation) -> None:
    loop = RenderLoop(simulation)
    loop.enqueue(Resize(640, 480))
    loop.tick(0.0)
    assert simulation.camera.viewport == (640, 480)
    loop.enqueue(Resize(0, 480))
    loop.tick(0.0)
    assert simulation.camera.viewport == (640, 480)


def test_stop_is_idempotent_and_runs_teardown_once(simulation) -> None:
    renderer = FakeRenderer()
    loop = RenderLoop(simulation, renderer)
    calls: list[str] = []
    loop.on_teardown(lambda: calls.append("listener"))
    loop.stop()
    loop.stop()
    assert calls == ["listener"]
    assert loop.running is False

    elapsed = simulation.clock.elapsed
    assert loop.tick(1.0) is False
    assert simulation.clock.elapsed == elapsed
    assert renderer.frames == []
    assert loop.enqueue(Click(0, 0)) is False

    loop.on_teardown(lambda: calls.append("late"))
    assert calls == ["listener", "late"]


def test_stop_discards_pending_events(simulation) -> None:
    loop = RenderLoop(simulation)
    loop.enqueue(Wheel(1))
    loop.stop()
    assert len(loop.queue) == 0


def test_recorder_receives_samples_and_events(tmp_path, small_system) -> None:
    recorder = SessionRecorder(tmp_path, session_id="run")
    simulation = Simulation.from_system(
        small_system,
        viewport=(1280, 800),
        rng=np.random.default_rng(7),
        recorder=recorder,
    )
    loop = RenderLoop(simulation)
    loop.on_teardown(recorder.close)
    for _ in range(20):
        loop.tick(1 / 60)
    simulation.set_speed(2.0)
    simulation.focus_on("Mars")
    loop.stop()

    assert recorder.closed
    sample_lines = recorder.samples_path.read_text(encoding="utf-8").splitlines()
    # Header plus two samples of four bodies.
    assert len(sample_lines) == 1 + 2 * 4
    events = recorder.events_path.read_text(encoding="utf-8").splitlines()
    assert [line.split(",")[1] for line in events[1:]] == ["speed", "focus"]
