"""Rotate, pan and zoom interaction modes driven by mouse strokes."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any

from .events import Button, ButtonState, Camera, EventKind, MouseEvent, Vector


def _sub(a: Vector, b: Vector) -> Vector:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _add(a: Vector, b: Vector) -> Vector:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _scale(a: Vector, s: float) -> Vector:
    return (a[0] * s, a[1] * s, a[2] * s)


def _dot(a: Vector, b: Vector) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vector, b: Vector) -> Vector:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(a: Vector) -> float:
    return math.sqrt(_dot(a, a))


def _normalize(a: Vector) -> Vector:
    length = _length(a)
    if length == 0:
        raise ValueError("camera vectors are degenerate (zero length or parallel)")
    return _scale(a, 1.0 / length)


def _rotate(v: Vector, axis: Vector, angle: float) -> Vector:
    """Rotate ``v`` about the unit vector ``axis`` by ``angle`` radians."""
    s, c = math.sin(angle), math.cos(angle)
    term1 = _scale(v, c)
    term2 = _scale(_cross(axis, v), s)
    term3 = _scale(axis, _dot(axis, v) * (1.0 - c))
    return _add(_add(term1, term2), term3)


class _StrokeInteractor(ABC):
    """Common state and event dispatch for the stroke-driven modes."""

    def __init__(self, width: int, height: int, args: Any = None) -> None:
        self.args = args
        self.window_width = width
        self.window_height = height
        self.event_mask = EventKind.LEFT
        self.motion = False
        self._camera = Camera(to=(0, 0, 0), eye=(0, 0, 0), up=(0, 0, 0))
        self._renderable: Any = None
        self._positions = {button: (0, 0) for button in Button}
        self._states = {button: ButtonState.UP for button in Button}

    def _store_camera(self, camera: Camera) -> None:
        self._camera = camera.copy()

    def _current_camera(self) -> Camera:
        return self._camera.copy()

    def _store_renderable(self, obj: Any) -> None:
        self._renderable = obj

    def _current_renderable(self) -> Any:
        return self._renderable

    def _dispatch(self, event: Any) -> None:
        if not isinstance(event, MouseEvent):
            return
        button = event.button
        if event.state is ButtonState.DOWN:
            self._start_stroke(event)
            self._states[button] = ButtonState.DOWN
        elif event.state is ButtonState.MOTION:
            if self._states[button] is ButtonState.UP:
                self._start_stroke(event)
            else:
                self._end_stroke(event)
            self._states[button] = ButtonState.DOWN
        elif event.state is ButtonState.UP:
            self._end_stroke(event)
            self._states[button] = ButtonState.UP

    def _start_stroke(self, event: MouseEvent) -> None:
        self._positions[event.button] = (event.x, event.y)

    @abstractmethod
    def _end_stroke(self, event: MouseEvent) -> None:
        """Apply the stroke from the last recorded position to ``event``."""


class RotateInteractor(_StrokeInteractor):
    """Orbit the eye around the look-at point by dragging."""

    def __init__(self, width: int, height: int, args: Any = None) -> None:
        super().__init__(width, height, args)
        self.grad = min(width, height) / 2.0

    def set_camera(self, camera: Camera) -> None:
        """Take the current camera."""
        self._store_camera(camera)

    def get_camera(self) -> Camera:
        """Return the camera as changed by the interaction."""
        return self._current_camera()

    def set_renderable(self, obj: Any) -> None:
        """Take the object being viewed."""
        self._store_renderable(obj)

    def get_renderable(self) -> Any:
        """Return the object being viewed, or None if there is none."""
        return self._current_renderable()

    def handle_event(self, event: Any) -> None:
        """Feed one input event to the mode; non-mouse events are ignored."""
        self._dispatch(event)

    def _end_stroke(self, event: MouseEvent) -> None:
        button = event.button
        px, py = self._positions[button]
        dx = -(event.x - px)
        dy = -(event.y - py)
        self._positions[button] = (event.x, event.y)
        self.motion = event.state is ButtonState.MOTION

        if dx == 0 and dy == 0:
            return

        cam = self._camera
        ov = _sub(cam.eye, cam.to)
        right = _normalize(_cross(ov, cam.up))
        up = _normalize(_cross(right, ov))
        cam.up = up

        sx = dx / self.grad
        sy = dy / self.grad
        stroke = _add(_scale(right, sx), _scale(up, sy))
        axis = _normalize(_cross(ov, stroke))
        angle = math.hypot(sx, sy)
        cam.eye = _add(cam.to, _rotate(ov, axis, angle))


class PanInteractor(_StrokeInteractor):
    """Slide the camera sideways and vertically by dragging."""

    def __init__(self, width: int, height: int, args: Any = None) -> None:
        super().__init__(width, height, args)
        self.grad = min(width, height) / 2.0

    def set_camera(self, camera: Camera) -> None:
        """Take the camera and scale pixel motion to world units from it."""
        self._store_camera(camera)
        if camera.perspective:
            distance = _length(_sub(camera.to, camera.eye))
            self.grad = camera.fov * distance / self.window_width
        else:
            self.grad = camera.width / self.window_width

    def get_camera(self) -> Camera:
        """Return the camera as changed by the interaction."""
        return self._current_camera()

    def set_renderable(self, obj: Any) -> None:
        """Take the object being viewed."""
        self._store_renderable(obj)

    def get_renderable(self) -> Any:
        """Return the object being viewed, or None if there is none."""
        return self._current_renderable()

    def handle_event(self, event: Any) -> None:
        """Feed one input event to the mode; non-mouse events are ignored."""
        self._dispatch(event)

    def _end_stroke(self, event: MouseEvent) -> None:
        button = event.button
        px, py = self._positions[button]
        self.motion = event.state is ButtonState.MOTION

        if (event.x, event.y) != (px, py):
            dx = -(event.x - px)
            dy = -(event.y - py)
            cam = self._camera
            u = _normalize(cam.up)
            view = _sub(cam.eye, cam.to)
            right = _normalize(_cross(cam.up, view))
            shift = _scale(_add(_scale(right, -dx), _scale(u, dy)), self.grad)
            cam.to = _add(cam.to, shift)
            cam.eye = _add(cam.eye, shift)

        self._positions[button] = (event.x, event.y)


class ZoomInteractor(_StrokeInteractor):
    """Widen or narrow the view by dragging."""

    def __init__(self, width: int, height: int, args: Any = None) -> None:
        super().__init__(width, height, args)
        self.initial_fov = 0.0
        self.initial_width = 0.0

    def set_camera(self, camera: Camera) -> None:
        """Take the camera; its view size is the unit of each zoom step."""
        self._store_camera(camera)
        self.initial_fov = camera.fov
        self.initial_width = camera.width

    def get_camera(self) -> Camera:
        """Return the camera as changed by the interaction."""
        return self._current_camera()

    def set_renderable(self, obj: Any) -> None:
        """Take the object being viewed."""
        self._store_renderable(obj)

    def get_renderable(self) -> Any:
        """Return the object being viewed, or None if there is none."""
        return self._current_renderable()

    def handle_event(self, event: Any) -> None:
        """Feed one input event to the mode; non-mouse events are ignored."""
        self._dispatch(event)

    def _end_stroke(self, event: MouseEvent) -> None:
        button = event.button
        px, py = self._positions[button]
        self.motion = event.state is ButtonState.MOTION

        step = 1 - (event.y - py) / float(self.window_height)
        if (event.x, event.y) != (px, py):
            cam = self._camera
            if cam.perspective:
                cam.fov += step * self.initial_fov
            else:
                cam.width += step * self.initial_width

        self._positions[button] = (event.x, event.y)


def default_interactors() -> tuple[type, ...]:
    """The interaction modes offered by default, in table order."""
    return (RotateInteractor, PanInteractor, ZoomInteractor)