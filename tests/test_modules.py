import pytest

from dxsamples.modules import Field, Group, ModuleError, add, hello, make_x


def _data_field(values):
    return Field(components={"data": list(values)})


def test_add_to_field():
    src = _data_field([1.0, 2.0, 3.5])
    out = add(src, 2)
    assert out.components["data"] == [3.0, 4.0, 5.5]
    assert src.components["data"] == [1.0, 2.0, 3.5]


def test_add_default_is_zero():
    out = add(_data_field([1.5, -2.0]))
    assert out.components["data"] == [1.5, -2.0]


def test_add_recurses_into_groups():
    g = Group()
    g.add(_data_field([1.0]), "a")
    inner = Group()
    inner.add(_data_field([2.0]))
    g.add(inner)
    out = add(g, 1.0)
    assert out.members[0][0] == "a"
    assert out.members[0][1].components["data"] == [2.0]
    assert out.members[1][1].members[0][1].components["data"] == [3.0]
    assert g.members[0][1].components["data"] == [1.0]


def test_add_errors():
    with pytest.raises(ModuleError, match="missing data parameter"):
        add(None, 1)
    with pytest.raises(ModuleError, match="addend must be a scalar value"):
        add(_data_field([1.0]), [1, 2])
    with pytest.raises(ModuleError, match="field has no data"):
        add(Field(), 1)
    with pytest.raises(ModuleError, match="data is not scalar floating point"):
        add(_data_field([(1.0, 2.0)]), 1)


def test_make_x_single_point():
    f = Field(components={"positions": [(1.0, 2.0, 3.0)]})
    out = make_x(f, 0.5)
    pos = out.components["positions"]
    assert len(pos) == 4
    assert pos[0] == (0.5, 2.0, 3.0)
    assert out.components["connections"] == [(0, 1), (2, 3)]
    assert out.attributes["connections"]["ref"] == "positions"
    assert out.attributes["connections"]["element type"] == "lines"


def test_make_x_invariants():
    points = [(0.0, 0.0, 0.0), (4.0, -1.0, 2.0), (1.0, 1.0, 1.0)]
    out = make_x(Field(components={"positions": points}), 2.0)
    pos = out.components["positions"]
    conns = out.components["connections"]
    assert len(pos) == 4 * len(points)
    assert len(conns) == 2 * len(points)
    for i, (x, y, z) in enumerate(points):
        a, b, c, d = pos[4 * i : 4 * i + 4]
        assert (a[0] + b[0]) / 2 == pytest.approx(x)
        assert b[0] - a[0] == pytest.approx(4.0)
        assert c[1] - d[1] == pytest.approx(4.0)
        assert all(p[2] == z for p in (a, b, c, d))
        assert conns[2 * i] == (4 * i, 4 * i + 1)


def test_make_x_default_size_is_one():
    out = make_x(Field(components={"positions": [(0.0, 0.0, 0.0)]}))
    pos = out.components["positions"]
    assert pos[1][0] - pos[0][0] == pytest.approx(2.0)


def test_make_x_drops_dependent_components():
    f = Field(
        components={"positions": [(0.0, 0.0, 0.0)], "data": [1.0], "colors": [5]},
        attributes={"data": {"dep": "positions"}},
    )
    out = make_x(f)
    assert "data" not in out.components
    assert out.components["colors"] == [5]
    assert f.components["data"] == [1.0]


def test_make_x_errors():
    with pytest.raises(ModuleError, match="missing object"):
        make_x(None)
    with pytest.raises(ModuleError, match="size must be a scalar value"):
        make_x(Field(components={"positions": []}), "big")
    with pytest.raises(ModuleError, match="input has no positions"):
        make_x(Field())
    with pytest.raises(ModuleError, match="positions are not 3D floating point"):
        make_x(Field(components={"positions": [(1.0, 2.0)]}))
    with pytest.raises(ModuleError, match="object must be a group or field"):
        make_x("text")


def test_make_x_in_group():
    g = Group()
    g.add(Field(components={"positions": [(0.0, 0.0, 0.0)]}))
    out = make_x(g)
    assert len(out.members[0][1].components["positions"]) == 4
    assert "connections" not in g.members[0][1].components


def test_hello():
    assert hello() == "hello world"
    assert hello("there") == "hello there"
    with pytest.raises(ModuleError):
        hello(5)