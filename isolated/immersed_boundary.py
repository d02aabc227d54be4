"""Immersed boundary helpers for curved walls in lattice Boltzmann grids."""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import MutableSequence, Sequence


@dataclass
class BoundaryPoint:
    """A wall point with its normal and the lattice cells beside it."""

    x: float
    y: float
    z: float
    nx: float
    ny: float
    nz: float
    q: float
    fluid_node: int
    solid_node: int = 0


class ImmersedBoundary:
    """Interpolated (Bouzidi-style) bounce-back for curved boundaries."""

    def __init__(self) -> None:
        self._points: list[BoundaryPoint] = []

    def add_boundary_point(self, point: BoundaryPoint) -> None:
        self._points.append(point)

    def clear(self) -> None:
        self._points.clear()

    @property
    def points(self) -> list[BoundaryPoint]:
        """The boundary points in insertion order."""
        return list(self._points)

    def apply(self, f: MutableSequence, velocities: Sequence[Sequence[int]],
              opposite: Sequence[int]) -> None:
        """Apply bounce-back corrections to ``f`` in place.

        ``f`` is indexed ``f[direction][cell]``; ``velocities`` holds the
        ``(cx, cy, cz)`` lattice vectors and ``opposite`` the reverse index
        of each direction. Direction 0 (rest) is never touched.
        """
        for pt in self._points:
            cell = pt.fluid_node
            q = pt.q
            for d, (cx, cy, cz) in enumerate(velocities[1:], start=1):
                if cx * pt.nx + cy * pt.ny + cz * pt.nz <= 0:
                    continue
                d_opp = opposite[d]
                f_d = f[d][cell]
                if q < 0.5:
                    f[d_opp][cell] = f_d
                else:
                    f_d_opp = f[d_opp][cell]
                    f[d_opp][cell] = f_d / (2.0 * q) + (2.0 * q - 1.0) / (2.0 * q) * f_d_opp

    def add_sphere(self, cx: float, cy: float, cz: float, radius: float,
                   nx: int, ny: int, nz: int, dx: float = 1.0) -> None:
        """Add wall points for the fluid cells hugging a sphere."""
        for i, j, k in itertools.product(range(nx), range(ny), range(nz)):
            x = (i + 0.5) * dx
            y = (j + 0.5) * dx
            z = (k + 0.5) * dx
            dist = math.sqrt((x - cx) ** 2 + (y - cy) ** 2 + (z - cz) ** 2)
            if abs(dist - radius) >= dx or dist < radius:
                continue
            self._points.append(BoundaryPoint(
                x=cx + (x - cx) * radius / dist,
                y=cy + (y - cy) * radius / dist,
                z=cz + (z - cz) * radius / dist,
                nx=(x - cx) / dist,
                ny=(y - cy) / dist,
                nz=(z - cz) / dist,
                q=abs(dist - radius) / dx,
                fluid_node=i + nx * (j + ny * k),
            ))


def _sqrt_or_nan(value: float) -> float:
    return math.sqrt(value) if value >= 0 else math.nan


def discrete_delta(r: float, h: float) -> float:
    """Discrete delta kernel used to spread forces onto the grid."""
    s = abs(r) / h
    if s >= 2.0:
        return 0.0
    if s >= 1.0:
        return (5.0 - 3.0 * s - _sqrt_or_nan(-3.0 * (1.0 - s) * (1.0 - s) + 1.0)) / (6.0 * h)
    return (3.0 - 2.0 * s + _sqrt_or_nan(1.0 + 4.0 * s - 4.0 * s * s)) / (6.0 * h)


def delta_3d(rx: float, ry: float, rz: float, h: float) -> float:
    """Tensor product of the discrete delta in three dimensions."""
    return discrete_delta(rx, h) * discrete_delta(ry, h) * discrete_delta(rz, h)