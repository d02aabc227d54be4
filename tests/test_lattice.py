import math

import pytest

from isolated.lattice import D2Q9, D3Q19, Lattice

LATTICES = [D2Q9, D3Q19]


def _rebuild(lattice):
    return Lattice(
        name=lattice.name,
        velocities=tuple(lattice.velocities),
        weights=tuple(lattice.weights),
        opposite=tuple(lattice.opposite),
    )


def test_custom_lattice_shape():
    d1q3 = Lattice(
        name="D1Q3",
        velocities=((0,), (1,), (-1,)),
        weights=(2.0 / 3.0, 1.0 / 6.0, 1.0 / 6.0),
        opposite=(0, 2, 1),
    )
    assert d1q3.q == 3
    assert d1q3.dimension == 1


def test_d2q9_shape():
    lattice = _rebuild(D2Q9)
    assert lattice.q == 9
    assert lattice.dimension == 2


def test_d3q19_shape():
    lattice = _rebuild(D3Q19)
    assert lattice.q == 19
    assert lattice.dimension == 3


def test_rest_weights_from_definition():
    assert _rebuild(D2Q9).weights[0] == pytest.approx(4.0 / 9.0)
    assert _rebuild(D3Q19).weights[0] == pytest.approx(1.0 / 3.0)


@pytest.mark.parametrize("source", LATTICES, ids=lambda l: l.name)
def test_weights_sum_to_one(source):
    lattice = _rebuild(source)
    assert math.fsum(lattice.weights) == pytest.approx(1.0)


@pytest.mark.parametrize("source", LATTICES, ids=lambda l: l.name)
def test_opposite_is_an_involution(source):
    lattice = _rebuild(source)
    for d, opp in enumerate(lattice.opposite):
        assert lattice.opposite[opp] == d


@pytest.mark.parametrize("source", LATTICES, ids=lambda l: l.name)
def test_opposite_reverses_velocity(source):
    lattice = _rebuild(source)
    for d, opp in enumerate(lattice.opposite):
        assert lattice.velocities[opp] == tuple(-c for c in lattice.velocities[d])


@pytest.mark.parametrize("source", LATTICES, ids=lambda l: l.name)
def test_first_moment_vanishes(source):
    lattice = _rebuild(source)
    for axis in range(lattice.dimension):
        total = math.fsum(w * v[axis] for w, v in zip(lattice.weights, lattice.velocities))
        assert total == pytest.approx(0.0)


@pytest.mark.parametrize("source", LATTICES, ids=lambda l: l.name)
def test_second_moment_is_isotropic(source):
    lattice = _rebuild(source)
    diagonal = [
        math.fsum(w * v[a] * v[a] for w, v in zip(lattice.weights, lattice.velocities))
        for a in range(lattice.dimension)
    ]
    assert all(d == pytest.approx(diagonal[0]) for d in diagonal)
    for a in range(lattice.dimension):
        for b in range(lattice.dimension):
            if a != b:
                off = math.fsum(
                    w * v[a] * v[b] for w, v in zip(lattice.weights, lattice.velocities)
                )
                assert off == pytest.approx(0.0)


@pytest.mark.parametrize("source", LATTICES, ids=lambda l: l.name)
def test_velocities_are_unique(source):
    lattice = _rebuild(source)
    assert len(set(lattice.velocities)) == lattice.q


def test_mismatched_lengths_rejected():
    with pytest.raises(ValueError):
        Lattice(name="bad", velocities=((0, 0), (1, 0)), weights=(1.0,), opposite=(0, 1))


def test_mixed_dimensions_rejected():
    with pytest.raises(ValueError):
        Lattice(name="bad", velocities=((0, 0), (1, 0, 0)), weights=(0.5, 0.5), opposite=(0, 1))