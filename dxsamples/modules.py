"""Sample compute modules: add a constant, mark points with an X, greet."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Any

_DEPENDENCY_ATTRIBUTES = ("dep", "ref", "der")


class ModuleError(ValueError):
    """A module was given inputs it cannot work with."""


@dataclass
class Field:
    """A set of named components, each a list of items with its own attributes."""

    components: dict[str, list] = field(default_factory=dict)
    attributes: dict[str, dict[str, Any]] = field(default_factory=dict)

    def component_attributes(self, name: str) -> dict[str, Any]:
        """The attributes of component ``name`` (empty if it has none)."""
        return self.attributes.setdefault(name, {})


@dataclass
class Group:
    """An ordered collection of members, each with an optional name."""

    members: list[tuple[str | None, Any]] = field(default_factory=list)

    def add(self, member: Any, name: str | None = None) -> None:
        """Append a member."""
        self.members.append((name, member))


def _copy_structure(obj: Any) -> Any:
    """Copy fields and groups; component data is shared, not copied."""
    if isinstance(obj, Field):
        return Field(
            components=dict(obj.components),
            attributes={k: dict(v) for k, v in obj.attributes.items()},
        )
    if isinstance(obj, Group):
        return Group(members=[(name, _copy_structure(m)) for name, m in obj.members])
    return obj


def _is_scalar(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _extract_float(value: Any, message: str) -> float:
    if not _is_scalar(value):
        raise ModuleError(message)
    return float(value)


def add(obj: Any, addend: Any = None) -> Any:
    """Return a copy of ``obj`` with ``addend`` (default 0) added to all data."""
    if obj is None:
        raise ModuleError("missing data parameter")
    x = 0.0 if addend is None else _extract_float(addend, "addend must be a scalar value")
    result = _copy_structure(obj)
    _do_add(result, x)
    return result


def _do_add(obj: Any, x: float) -> None:
    if isinstance(obj, Field):
        data = obj.components.get("data")
        if data is None:
            raise ModuleError("field has no data")
        if not all(_is_scalar(v) for v in data):
            raise ModuleError("data is not scalar floating point")
        obj.components["data"] = [float(v) + x for v in data]
    elif isinstance(obj, Group):
        for _, member in obj.members:
            _do_add(member, x)


def make_x(obj: Any, size: Any = None) -> Any:
    """Return a copy of ``obj`` with each position replaced by an X of lines.

    Each point becomes four points, offset by ``size`` (default 1) along
    the x and y axes, joined by two line connections.
    """
    if obj is None:
        raise ModuleError("missing object")
    s = 1.0 if size is None else _extract_float(size, "size must be a scalar value")
    result = _copy_structure(obj)
    _do_make_x(result, s)
    return result


def _is_point3(item: Any) -> bool:
    try:
        coords = tuple(item)
    except TypeError:
        return False
    return len(coords) == 3 and all(_is_scalar(c) for c in coords)


def _drop_dependents(f: Field, changed: set[str]) -> None:
    for name in list(f.components):
        if name in changed:
            continue
        attrs = f.attributes.get(name, {})
        if any(attrs.get(key) in changed for key in _DEPENDENCY_ATTRIBUTES):
            del f.components[name]
            f.attributes.pop(name, None)


def _do_make_x(obj: Any, size: float) -> None:
    if isinstance(obj, Field):
        positions = obj.components.get("positions")
        if positions is None:
            raise ModuleError("input has no positions")
        if not all(_is_point3(p) for p in positions):
            raise ModuleError("positions are not 3D floating point")

        _drop_dependents(obj, {"positions", "connections"})

        new_positions: list[tuple[float, float, float]] = []
        new_connections: list[tuple[int, int]] = []
        for i, point in enumerate(positions):
            x, y, z = (float(c) for c in point)
            new_positions.extend(
                [(x - size, y, z), (x + size, y, z), (x, y + size, z), (x, y - size, z)]
            )
            new_connections.extend([(4 * i, 4 * i + 1), (4 * i + 2, 4 * i + 3)])

        obj.components["positions"] = new_positions
        obj.components["connections"] = new_connections
        obj.attributes["connections"] = {"ref": "positions", "element type": "lines"}
    elif isinstance(obj, Group):
        for _, member in obj.members:
            _do_make_x(member, size)
    else:
        raise ModuleError("object must be a group or field")


def hello(greeting: str | None = None) -> str:
    """Return "hello world", or "hello" followed by ``greeting``."""
    if greeting is None:
        return "hello world"
    if not isinstance(greeting, str):
        raise ModuleError("greeting must be a string")
    return f"hello {greeting}"