"""Discrete velocity sets for lattice Boltzmann simulations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Lattice:
    """A DdQq velocity set: lattice vectors, weights and reverse directions."""

    name: str
    velocities: tuple[tuple[int, ...], ...]
    weights: tuple[float, ...]
    opposite: tuple[int, ...]

    def __post_init__(self) -> None:
        count = len(self.velocities)
        if len(self.weights) != count or len(self.opposite) != count:
            raise ValueError("velocities, weights and opposite must have equal length")
        if len({len(v) for v in self.velocities}) > 1:
            raise ValueError("all lattice vectors must have the same dimension")

    @property
    def q(self) -> int:
        """Number of discrete velocities."""
        return len(self.velocities)

    @property
    def dimension(self) -> int:
        """Number of spatial dimensions."""
        return len(self.velocities[0]) if self.velocities else 0


D2Q9 = Lattice(
    name="D2Q9",
    velocities=(
        (0, 0),
        (1, 0),
        (0, 1),
        (-1, 0),
        (0, -1),
        (1, 1),
        (-1, 1),
        (-1, -1),
        (1, -1),
    ),
    weights=(
        4.0 / 9.0,
        1.0 / 9.0, 1.0 / 9.0, 1.0 / 9.0, 1.0 / 9.0,
        1.0 / 36.0, 1.0 / 36.0, 1.0 / 36.0, 1.0 / 36.0,
    ),
    opposite=(0, 3, 4, 1, 2, 7, 8, 5, 6),
)

D3Q19 = Lattice(
    name="D3Q19",
    velocities=(
        (0, 0, 0),
        (1, 0, 0),
        (-1, 0, 0),
        (0, 1, 0),
        (0, -1, 0),
        (0, 0, 1),
        (0, 0, -1),
        (1, 1, 0),
        (-1, 1, 0),
        (1, -1, 0),
        (-1, -1, 0),
        (1, 0, 1),
        (-1, 0, 1),
        (1, 0, -1),
        (-1, 0, -1),
        (0, 1, 1),
        (0, -1, 1),
        (0, 1, -1),
        (0, -1, -1),
    ),
    weights=(
        1.0 / 3.0,
        1.0 / 18.0, 1.0 / 18.0, 1.0 / 18.0, 1.0 / 18.0, 1.0 / 18.0, 1.0 / 18.0,
        1.0 / 36.0, 1.0 / 36.0, 1.0 / 36.0, 1.0 / 36.0,
        1.0 / 36.0, 1.0 / 36.0, 1.0 / 36.0, 1.0 / 36.0,
        1.0 / 36.0, 1.0 / 36.0, 1.0 / 36.0, 1.0 / 36.0,
    ),
    opposite=(
        0, 2, 1, 4, 3, 6, 5,
        10, 9, 8, 7,
        14, 13, 12, 11,
        18, 17, 16, 15,
    ),
)