"""Grid kernels for heat diffusion and D2Q9 lattice Boltzmann flow."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .lattice import D2Q9

GRANITE_DIFFUSIVITY = 2.5 / (790.0 * 2700.0)

_EX = np.array([v[0] for v in D2Q9.velocities], dtype=np.float32)
_EY = np.array([v[1] for v in D2Q9.velocities], dtype=np.float32)
_W = np.array(D2Q9.weights, dtype=np.float32)


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"grid size must be positive, got {width}x{height}")


def _as_grid(values, width: int, height: int, name: str,
             dtype=np.float32) -> np.ndarray:
    arr = np.asarray(values, dtype=dtype)
    if arr.size != width * height:
        raise ValueError(f"{name} needs {width * height} values, got {arr.size}")
    return arr.reshape(height, width).copy()


class ThermalKernel:
    """Explicit five-point heat diffusion on a width x height grid.

    Values are held in single precision; the outermost ring of cells is
    held fixed. Flat sequences are laid out row by row, ``x + y * width``.
    """

    def __init__(self, width: int, height: int, alpha=GRANITE_DIFFUSIVITY) -> None:
        _check_size(width, height)
        self.width = width
        self.height = height
        self._temperature = np.zeros((height, width), dtype=np.float32)
        if np.ndim(alpha) == 0:
            self._alpha = np.full((height, width), alpha, dtype=np.float32)
        else:
            self._alpha = _as_grid(alpha, width, height, "alpha")

    @property
    def alpha(self) -> np.ndarray:
        """Thermal diffusivity per cell, flattened."""
        return self._alpha.astype(np.float64).reshape(-1)

    def step(self, dt: float) -> None:
        """Advance the temperature field by ``dt``."""
        t = self._temperature
        out = t.copy()
        laplacian = (t[1:-1, 2:] + t[1:-1, :-2] + t[2:, 1:-1] + t[:-2, 1:-1]
                     - np.float32(4.0) * t[1:-1, 1:-1])
        out[1:-1, 1:-1] = (t[1:-1, 1:-1]
                           + self._alpha[1:-1, 1:-1] * laplacian * np.float32(dt))
        self._temperature = out

    def upload_temperature(self, temperature: Iterable[float]) -> None:
        """Replace the temperature field with ``width * height`` values."""
        self._temperature = _as_grid(list(temperature), self.width, self.height,
                                     "temperature")

    def download_temperature(self) -> np.ndarray:
        """Current temperature field as a flat float64 array."""
        return self._temperature.astype(np.float64).reshape(-1)


class LBMKernel:
    """D2Q9 BGK lattice Boltzmann solver with periodic edges and bounce-back solids.

    Each step collides (updating density and velocity from the incoming
    distributions of fluid cells) and then streams. Solid cells keep their
    distributions through collision and reflect what would enter them.
    """

    def __init__(self, width: int, height: int, solid=None, distributions=None) -> None:
        _check_size(width, height)
        self.width = width
        self.height = height
        if distributions is None:
            self._f = np.broadcast_to(_W, (height, width, D2Q9.q)).copy()
        else:
            arr = np.asarray(distributions, dtype=np.float32)
            if arr.size != width * height * D2Q9.q:
                raise ValueError(
                    f"distributions need {width * height * D2Q9.q} values, got {arr.size}")
            self._f = arr.reshape(height, width, D2Q9.q).copy()
        if solid is None:
            self._solid = np.zeros((height, width), dtype=bool)
        else:
            self._solid = _as_grid(solid, width, height, "solid", dtype=bool)
        self._rho = np.ones((height, width), dtype=np.float32)
        self._ux = np.zeros((height, width), dtype=np.float32)
        self._uy = np.zeros((height, width), dtype=np.float32)

    @property
    def solid(self) -> np.ndarray:
        """Solid mask, flattened."""
        return self._solid.reshape(-1).copy()

    @property
    def distributions(self) -> np.ndarray:
        """Distributions as a ``(width * height, 9)`` float64 array."""
        return self._f.astype(np.float64).reshape(-1, D2Q9.q)

    def step(self, dt: float, omega: float) -> None:
        """One collide-and-stream update with relaxation rate ``omega``.

        ``dt`` is accepted for interface symmetry; the lattice step is fixed.
        """
        post = self._collide(np.float32(omega))
        self._f = self._stream(post)

    def _collide(self, omega: np.float32) -> np.ndarray:
        f = self._f
        fluid = ~self._solid
        r = f.sum(axis=2)
        vx = f @ _EX
        vy = f @ _EY
        positive = r > 0
        safe_r = np.where(positive, r, np.float32(1.0))
        vx = np.where(positive, vx / safe_r, vx)
        vy = np.where(positive, vy / safe_r, vy)

        self._rho[fluid] = r[fluid]
        self._ux[fluid] = vx[fluid]
        self._uy[fluid] = vy[fluid]

        usqr = np.float32(1.5) * (vx * vx + vy * vy)
        eu = vx[..., None] * _EX + vy[..., None] * _EY
        feq = _W * r[..., None] * (np.float32(1.0) + np.float32(3.0) * eu
                                   + np.float32(4.5) * eu * eu - usqr[..., None])
        relaxed = f - omega * (f - feq)
        return np.where(fluid[..., None], relaxed, f).astype(np.float32)

    def _stream(self, post: np.ndarray) -> np.ndarray:
        streamed = np.empty_like(post)
        for i, (cx, cy) in enumerate(D2Q9.velocities):
            pulled = np.roll(post[..., i], (cy, cx), axis=(0, 1))
            blocked = np.roll(self._solid, (cy, cx), axis=(0, 1))
            streamed[..., i] = np.where(blocked, post[..., D2Q9.opposite[i]], pulled)
        return streamed

    def upload_state(self, rho, vx, vy) -> None:
        """Overwrite the density and velocity fields."""
        self._rho = _as_grid(rho, self.width, self.height, "rho")
        self._ux = _as_grid(vx, self.width, self.height, "vx")
        self._uy = _as_grid(vy, self.width, self.height, "vy")

    def download_state(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Density and velocity components as flat float64 arrays."""
        return (
            self._rho.astype(np.float64).reshape(-1),
            self._ux.astype(np.float64).reshape(-1),
            self._uy.astype(np.float64).reshape(-1),
        )