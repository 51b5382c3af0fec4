import math

import numpy as np
import pytest

from orrery.core.timekeeping import FrameTimer, InvalidSpeedError, SimulationClock


def test_toggle_playing_flips_and_keeps_speed() -> None:
    clock = SimulationClock(speed=3.0)
    assert clock.toggle_playing() is False
    assert clock.speed == 3.0
    assert clock.toggle_playing() is True
    assert clock.speed == 3.0


@pytest.mark.parametrize(
    "bad",
    [0.0, -1.0, float("nan"), float("inf"), float("-inf"), "fast", None, True, np.float32("nan"), np.int64(-2)],
)
def test_set_speed_rejects_invalid_multiplier(bad) -> None:
    clock = SimulationClock(speed=2.0)
    with pytest.raises(InvalidSpeedError):
        clock.set_speed(bad)
    assert clock.speed == 2.0


def test_invalid_speed_error_is_a_value_error() -> None:
    assert issubclass(InvalidSpeedError, ValueError)
    with pytest.raises(ValueError):
        SimulationClock(speed=0.0)


@pytest.mark.parametrize("value", [np.float32(2.0), np.float64(0.5), np.int64(3), 4])
def test_set_speed_accepts_numpy_scalars(value) -> None:
    clock = SimulationClock()
    clock.set_speed(value)
    assert clock.speed == float(value)
    assert isinstance(clock.speed, float)


def test_set_speed_accepts_values_outside_ui_bounds() -> None:
    clock = SimulationClock()
    clock.set_speed(250)
    assert clock.speed == 250.0
    clock.set_speed(1e-6)
    assert clock.speed == 1e-6


def test_consume_scales_and_accumulates() -> None:
    clock = SimulationClock(speed=0.5)
    assert clock.consume(4.0) == 2.0
    assert clock.consume(-1.0) == 0.0
    clock.toggle_playing()
    assert clock.consume(4.0) == 0.0
    assert clock.elapsed == 2.0
    assert clock.ticks == 1


def test_new_speed_is_not_applied_retroactively() -> None:
    clock = SimulationClock(speed=1.0)
    clock.consume(10.0)
    clock.set_speed(4.0)
    assert clock.elapsed == 10.0
    clock.consume(1.0)
    assert math.isclose(clock.elapsed, 14.0)


def test_frame_timer_measures_forward_time() -> None:
    timer = FrameTimer(last_time=0.0)
    assert timer.tick() > 0.0
    assert timer.tick() >= 0.0
