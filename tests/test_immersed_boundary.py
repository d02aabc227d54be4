import math

import pytest

from isolated.immersed_boundary import (
    BoundaryPoint,
    ImmersedBoundary,
    delta_3d,
    discrete_delta,
)

D2Q9_3D = [
    (0, 0, 0), (1, 0, 0), (0, 1, 0), (-1, 0, 0), (0, -1, 0),
    (1, 1, 0), (-1, 1, 0), (-1, -1, 0), (1, -1, 0),
]
OPPOSITE = [0, 3, 4, 1, 2, 7, 8, 5, 6]


def _grid(n_cells):
    return [[float(d * 10 + c + 1) for c in range(n_cells)] for d in range(9)]


def _point(q, normal=(1.0, 0.0, 0.0), node=0):
    return BoundaryPoint(0.0, 0.0, 0.0, *normal, q=q, fluid_node=node)


def test_add_and_clear_points():
    ib = ImmersedBoundary()
    ib.add_boundary_point(_point(0.3))
    ib.add_boundary_point(_point(0.7))
    assert [p.q for p in ib.points] == [0.3, 0.7]
    ib.clear()
    assert ib.points == []


def test_apply_simple_bounce_back_for_small_q():
    ib = ImmersedBoundary()
    ib.add_boundary_point(_point(0.25, node=1))
    f = _grid(3)
    before = [row[:] for row in f]
    ib.apply(f, D2Q9_3D, OPPOSITE)
    assert f[3][1] == before[1][1]
    assert f[7][1] == before[5][1]
    assert f[6][1] == before[8][1]
    # directions not facing the wall and other cells stay put
    assert f[2][1] == before[2][1]
    assert f[0] == before[0]
    assert [row[0] for row in f] == [row[0] for row in before]


def test_apply_half_q_copies_incoming():
    ib = ImmersedBoundary()
    ib.add_boundary_point(_point(0.5))
    f = _grid(1)
    before = [row[:] for row in f]
    ib.apply(f, D2Q9_3D, OPPOSITE)
    assert f[3][0] == pytest.approx(before[1][0])


def test_apply_full_q_averages():
    ib = ImmersedBoundary()
    ib.add_boundary_point(_point(1.0, normal=(0.0, 1.0, 0.0)))
    f = [[0.0] for _ in range(9)]
    f[2][0] = 4.0
    f[4][0] = 2.0
    ib.apply(f, D2Q9_3D, OPPOSITE)
    assert f[4][0] == pytest.approx(3.0)


def test_apply_without_points_leaves_f():
    f = _grid(2)
    before = [row[:] for row in f]
    ImmersedBoundary().apply(f, D2Q9_3D, OPPOSITE)
    assert f == before


def test_add_sphere_points_lie_on_sphere():
    ib = ImmersedBoundary()
    cx, cy, cz, radius = 5.0, 5.0, 5.0, 3.0
    ib.add_sphere(cx, cy, cz, radius, 10, 10, 10)
    points = ib.points
    assert points
    for p in points:
        assert math.dist((p.x, p.y, p.z), (cx, cy, cz)) == pytest.approx(radius)
        assert math.hypot(p.nx, p.ny, p.nz) == pytest.approx(1.0)
        assert 0.0 <= p.q < 1.0
        assert 0 <= p.fluid_node < 1000


def test_add_sphere_node_index_matches_position():
    ib = ImmersedBoundary()
    ib.add_sphere(4.0, 4.0, 4.0, 2.0, 8, 8, 8, dx=1.0)
    for p in ib.points:
        i = p.fluid_node % 8
        j = (p.fluid_node // 8) % 8
        k = p.fluid_node // 64
        cell = ((i + 0.5), (j + 0.5), (k + 0.5))
        assert math.dist(cell, (4.0, 4.0, 4.0)) >= 2.0


def test_discrete_delta_peak_and_support():
    assert discrete_delta(0.0, 1.0) == pytest.approx(2.0 / 3.0)
    assert discrete_delta(2.0, 1.0) == 0.0
    assert discrete_delta(5.0, 1.0) == 0.0


def test_discrete_delta_symmetry_and_scaling():
    for r in (0.2, 0.7, 1.1, 1.4):
        assert discrete_delta(-r, 1.0) == pytest.approx(discrete_delta(r, 1.0))
        assert discrete_delta(r * 2.0, 2.0) == pytest.approx(discrete_delta(r, 1.0) / 2.0)


def test_discrete_delta_outer_gap_is_nan():
    value = discrete_delta(1.9, 1.0)
    assert str(float(value)) == "nan"


def test_delta_3d_is_product():
    value = delta_3d(0.3, 0.5, 1.2, 1.0)
    expected = discrete_delta(0.3, 1.0) * discrete_delta(0.5, 1.0) * discrete_delta(1.2, 1.0)
    assert value == pytest.approx(expected)
    assert delta_3d(0.1, 3.0, 0.1, 1.0) == 0.0