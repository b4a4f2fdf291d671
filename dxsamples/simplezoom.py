"""A minimal zoom mode: horizontal left-button drags zoom in, vertical ones zoom out.

Only the camera is changed; the viewed object is left alone. The mode is
meant for orthographic views, where the camera width sets the zoom.
"""

from __future__ import annotations

from typing import Any

from .events import ButtonState, Camera, EventKind, MouseEvent

_ZOOM_RATE = 10


class SimpleZoomInteractor:
    """Zoom an orthographic camera by dragging with the left mouse button."""

    def __init__(self, width: int, height: int, args: Any = None) -> None:
        self.args = args
        self.window_width = width
        self.window_height = height
        self.event_mask = EventKind.LEFT
        self.button_up = True
        self._position = (0, 0)
        self._camera = Camera(to=(0, 0, 0), eye=(0, 0, 0), up=(0, 0, 0))

    def set_camera(self, camera: Camera) -> None:
        """Take the current camera."""
        self._camera = camera.copy()

    def get_camera(self) -> Camera:
        """Return the camera as changed by the zooming."""
        return self._camera.copy()

    def handle_event(self, event: Any) -> None:
        """Feed one input event; anything but a left-button event is ignored."""
        if not isinstance(event, MouseEvent) or event.kind is not EventKind.LEFT:
            return
        if event.state is ButtonState.DOWN:
            self._start_stroke(event)
        elif event.state is ButtonState.MOTION:
            if self.button_up:
                self._start_stroke(event)
            else:
                self._end_stroke(event)
        elif event.state is ButtonState.UP:
            self._end_stroke(event)

    def _start_stroke(self, event: MouseEvent) -> None:
        self.button_up = False
        self._position = (event.x, event.y)

    def _end_stroke(self, event: MouseEvent) -> None:
        self.button_up = True
        px, py = self._position
        dx = abs(px - event.x)
        dy = abs(py - event.y)
        self._position = (event.x, event.y)

        cam = self._camera
        if dx > dy:
            cam.width /= 1 + _ZOOM_RATE * (dx / self.window_width)
        else:
            cam.width *= 1 + _ZOOM_RATE * (dy / self.window_height)