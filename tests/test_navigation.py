import math

import pytest

from dxsamples.events import ButtonState, Camera, EventKind, KeyPressEvent, MouseEvent
from dxsamples.navigation import (
    PanInteractor,
    RotateInteractor,
    ZoomInteractor,
    default_interactors,
)


def _cam(**kw):
    base = dict(to=(0, 0, 0), eye=(0, 0, 5), up=(0, 1, 0), perspective=False, fov=0.5, width=10)
    base.update(kw)
    return Camera(**base)


def _left(x, y, state):
    return MouseEvent(EventKind.LEFT, x, y, state)


def _drag(mode, start, end):
    mode.handle_event(_left(*start, ButtonState.DOWN))
    mode.handle_event(_left(*end, ButtonState.UP))


def _dist(a, b):
    return math.sqrt(sum((p - q) ** 2 for p, q in zip(a, b)))


def test_default_interactors_order():
    assert default_interactors() == (RotateInteractor, PanInteractor, ZoomInteractor)


@pytest.mark.parametrize("cls", [RotateInteractor, PanInteractor, ZoomInteractor])
def test_renderable_round_trip(cls):
    mode = cls(200, 100)
    assert mode.get_renderable() is None
    obj = object()
    mode.set_renderable(obj)
    assert mode.get_renderable() is obj


@pytest.mark.parametrize("cls", [RotateInteractor, PanInteractor, ZoomInteractor])
def test_camera_round_trip_and_mask(cls):
    mode = cls(200, 200)
    cam = _cam()
    mode.set_camera(cam)
    assert mode.get_camera() == cam
    assert mode.event_mask == EventKind.LEFT


@pytest.mark.parametrize("cls", [RotateInteractor, PanInteractor, ZoomInteractor])
def test_keypress_is_ignored(cls):
    mode = cls(200, 200)
    mode.set_camera(_cam())
    mode.handle_event(KeyPressEvent(10, 10, "x"))
    assert mode.get_camera() == _cam()


def test_rotate_without_movement_keeps_camera():
    mode = RotateInteractor(200, 200)
    mode.set_camera(_cam())
    _drag(mode, (50, 50), (50, 50))
    assert mode.get_camera() == _cam()


def test_rotate_horizontal_stroke_orbits_about_up():
    mode = RotateInteractor(200, 200)
    mode.set_camera(_cam())
    _drag(mode, (100, 100), (200, 100))
    cam = mode.get_camera()
    assert _dist(cam.eye, cam.to) == pytest.approx(5.0)
    assert cam.eye[1] == pytest.approx(0.0, abs=1e-12)
    cosine = sum(a * b for a, b in zip(cam.eye, (0, 0, 5))) / 25.0
    assert cosine == pytest.approx(math.cos(100 / mode.grad))


def test_rotate_first_motion_only_starts_stroke():
    mode = RotateInteractor(200, 200)
    mode.set_camera(_cam())
    mode.handle_event(_left(10, 10, ButtonState.MOTION))
    assert mode.get_camera() == _cam()
    mode.handle_event(_left(40, 10, ButtonState.MOTION))
    assert mode.motion is True
    assert mode.get_camera().eye != _cam().eye


def test_rotate_degenerate_camera_raises():
    mode = RotateInteractor(200, 200)
    mode.set_camera(_cam(up=(0, 0, 1)))
    with pytest.raises(ValueError, match="degenerate"):
        _drag(mode, (0, 0), (10, 0))
    assert mode.get_camera() == _cam(up=(0, 0, 1))


def test_pan_orthographic_shift():
    mode = PanInteractor(100, 100)
    mode.set_camera(_cam(width=10))
    assert mode.grad == pytest.approx(10 / 100)
    _drag(mode, (50, 50), (60, 50))
    cam = mode.get_camera()
    shift = [a - b for a, b in zip(cam.eye, (0, 0, 5))]
    assert [e - t for e, t in zip(cam.eye, cam.to)] == pytest.approx([0, 0, 5])
    assert _dist(shift, (0, 0, 0)) == pytest.approx(10 * 10 / 100)
    assert shift[1] == pytest.approx(0.0)


def test_pan_perspective_scale():
    mode = PanInteractor(100, 100)
    mode.set_camera(_cam(perspective=True, fov=0.5))
    assert mode.grad == pytest.approx(0.5 * 5 / 100)
    _drag(mode, (50, 50), (50, 70))
    cam = mode.get_camera()
    assert _dist(cam.to, (0, 0, 0)) == pytest.approx(20 * 0.5 * 5 / 100)
    assert cam.to[0] == pytest.approx(0.0)


def test_pan_without_movement_keeps_camera():
    mode = PanInteractor(100, 100)
    mode.set_camera(_cam())
    _drag(mode, (5, 5), (5, 5))
    assert mode.get_camera() == _cam()


def test_zoom_horizontal_stroke_adds_initial_width():
    mode = ZoomInteractor(100, 100)
    mode.set_camera(_cam(width=2))
    _drag(mode, (10, 10), (30, 10))
    assert mode.get_camera().width == pytest.approx(2 + 2)


def test_zoom_full_height_stroke_leaves_width():
    mode = ZoomInteractor(100, 100)
    mode.set_camera(_cam(width=2))
    _drag(mode, (10, 0), (10, 100))
    assert mode.get_camera().width == pytest.approx(2)


def test_zoom_perspective_changes_fov_only():
    mode = ZoomInteractor(100, 100)
    mode.set_camera(_cam(perspective=True, fov=0.5, width=3))
    _drag(mode, (10, 10), (20, 10))
    cam = mode.get_camera()
    assert cam.fov == pytest.approx(0.5 + 0.5)
    assert cam.width == 3.0


def test_zoom_without_movement_keeps_camera():
    mode = ZoomInteractor(100, 100)
    mode.set_camera(_cam())
    _drag(mode, (10, 10), (10, 10))
    assert mode.get_camera() == _cam()