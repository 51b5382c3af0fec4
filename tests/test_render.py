import numpy as np
import pytest

pygame = pytest.importorskip("pygame")

from orrery.core.camera import Camera
from orrery.core.scheduler import RenderLoop
from orrery.core.simulation import Simulation
from orrery.render import AssetLibrary, PygameSurface, circle_points, parse_hex_color, project_polyline


def test_parse_hex_color() -> None:
    assert parse_hex_color("#FFD700") == (255, 215, 0)
    assert parse_hex_color("6b93d6") == (107, 147, 214)
    assert parse_hex_color("#XYZXYZ") == (192, 192, 192)
    assert parse_hex_color("#FFF", default=(1, 2, 3)) == (1, 2, 3)


def test_circle_points_are_closed_and_flat() -> None:
    center = np.array([1.0, 2.0, 3.0])
    points = circle_points(center, 5.0, 32)
    assert points.shape == (33, 3)
    np.testing.assert_allclose(points[0], points[-1], atol=1e-12)
    np.testing.assert_allclose(points[:, 1], 2.0)
    np.testing.assert_allclose(np.linalg.norm(points - center, axis=1), 5.0)


def test_project_polyline_splits_behind_camera() -> None:
    camera = Camera((1280, 800))
    points = np.array(
        [
            [0.0, 0.0, 0.0],
            [0.0, 0.0, 30.0],
            [0.0, 30.0, 100.0],
            [0.0, 0.0, -10.0],
        ]
    )
    runs = project_polyline(camera, points)
    assert len(runs) == 1
    assert len(runs[0]) == 2
    x, y = runs[0][0]
    assert abs(x - 640) <= 1 and abs(y - 400) <= 1


def test_body_sprites_are_cached() -> None:
    assets = AssetLibrary(max_entries=2)
    first = assets.get_body_sprite((255, 0, 0), 6)
    assert assets.get_body_sprite((255, 0, 0), 6) is first
    assert assets.get_body_sprite((255, 0, 0), 6, glow=True).get_width() == 24
    assets.get_body_sprite((0, 255, 0), 6)
    assert assets.get_body_sprite((255, 0, 0), 6) is not first
    with pytest.raises(ValueError):
        assets.get_body_sprite((255, 0, 0), 0)


class RecordingPanel:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def contains(self, pos) -> bool:
        return True

    def handle_click(self, pos) -> bool:
        self.calls.append("click")
        return True

    def toggle_playing(self) -> None:
        self.calls.append("toggle")


def _headless_surface(panel: RecordingPanel) -> PygameSurface:
    surface = PygameSurface.__new__(PygameSurface)
    surface.panel = panel
    surface._press_pos = None
    surface._panel_press = False
    return surface


@pytest.mark.parametrize(
    "quit_event",
    [pygame.event.Event(pygame.QUIT), pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0)],
)
def test_events_after_quit_are_dropped(monkeypatch, small_system, quit_event) -> None:
    simulation = Simulation.from_system(small_system, viewport=(1280, 800), rng=np.random.default_rng(7))
    loop = RenderLoop(simulation)
    panel = RecordingPanel()
    batch = [
        quit_event,
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE, mod=0),
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(20, 20)),
    ]
    monkeypatch.setattr(pygame.event, "get", lambda: batch)

    _headless_surface(panel).pump_events(loop)

    assert loop.running is False
    assert panel.calls == []
    assert simulation.clock.playing is True
