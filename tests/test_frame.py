import pytest

from enginekit.frame import FrameTimer


class FakeClock:
    def __init__(self, times):
        self._times = iter(times)

    def __call__(self):
        return next(self._times)


def test_delta_time_is_difference_between_updates():
    timer = FrameTimer(FakeClock([1.0, 1.1, 1.35]))
    timer.update()
    assert timer.delta_time == pytest.approx(0.1)
    timer.update()
    assert timer.delta_time == pytest.approx(0.25)


def test_initial_values_are_zero():
    timer = FrameTimer(FakeClock([5.0]))
    assert timer.delta_time == 0.0
    assert timer.fps == 0.0


def test_fps_not_computed_before_half_second():
    timer = FrameTimer(FakeClock([0.0, 0.1, 0.2, 0.3]))
    for _ in range(3):
        timer.update()
    assert timer.fps == 0.0


def test_fps_averaged_over_window():
    timer = FrameTimer(FakeClock([0.0, 0.25, 0.5]))
    timer.update()
    timer.update()
    assert timer.fps == pytest.approx(4.0)


def test_fps_window_restarts_after_computation():
    timer = FrameTimer(FakeClock([0.0, 0.5, 0.6, 1.0]))
    timer.update()
    first = timer.fps
    timer.update()
    assert timer.fps == first
    timer.update()
    assert timer.fps == pytest.approx(2 / 0.5)


def test_reset_clears_state():
    timer = FrameTimer(FakeClock([0.0, 1.0, 2.0]))
    timer.update()
    assert timer.fps > 0.0
    timer.reset()
    assert timer.fps == 0.0
    assert timer.delta_time == 0.0