"""Input events and camera state shared by the interactive viewing modes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, Flag, IntEnum, auto

Vector = tuple[float, float, float]


class Button(IntEnum):
    """A mouse button, numbered the way per-button state is indexed."""

    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


class ButtonState(Enum):
    """What a mouse button is doing in an event."""

    DOWN = auto()
    UP = auto()
    MOTION = auto()


class EventKind(Flag):
    """Kinds of input event; combined with ``|`` to form an event mask."""

    LEFT = auto()
    MIDDLE = auto()
    RIGHT = auto()
    KEYPRESS = auto()


_BUTTON_FOR_KIND = {
    EventKind.LEFT: Button.LEFT,
    EventKind.MIDDLE: Button.MIDDLE,
    EventKind.RIGHT: Button.RIGHT,
}


@dataclass(frozen=True)
class MouseEvent:
    """A mouse button press, release or drag at a window position."""

    kind: EventKind
    x: int
    y: int
    state: ButtonState

    def __post_init__(self) -> None:
        if self.kind not in _BUTTON_FOR_KIND:
            raise ValueError(f"not a mouse button event kind: {self.kind!r}")

    @property
    def button(self) -> Button:
        """The button this event concerns."""
        return _BUTTON_FOR_KIND[self.kind]


@dataclass(frozen=True)
class KeyPressEvent:
    """A key typed while the pointer is at a window position."""

    x: int
    y: int
    key: str

    @property
    def kind(self) -> EventKind:
        return EventKind.KEYPRESS


def _vector(values) -> Vector:
    result = tuple(float(v) for v in values)
    if len(result) != 3:
        raise ValueError(f"expected three coordinates, got {len(result)}")
    return result  # type: ignore[return-value]


@dataclass
class Camera:
    """A camera: look-at point, eye point, up vector and projection."""

    to: Vector
    eye: Vector
    up: Vector
    perspective: bool = False
    fov: float = 0.0
    width: float = 1.0

    def __post_init__(self) -> None:
        self.to = _vector(self.to)
        self.eye = _vector(self.eye)
        self.up = _vector(self.up)
        self.perspective = bool(self.perspective)
        self.fov = float(self.fov)
        self.width = float(self.width)

    def copy(self) -> Camera:
        """Return an independent camera with the same settings."""
        return replace(self)