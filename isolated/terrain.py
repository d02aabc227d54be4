"""Procedural voxel terrain: value noise, fBm and chunk material generation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

CHUNK_SIZE = 64
SEA_LEVEL = 50.0
WATER_LEVEL = 48  # water fills basins to just below sea level

_HASH_SCALE = 43758.5453123


class Material(IntEnum):
    """Voxel material identifiers produced by the terrain generator."""

    AIR = 0
    WATER = 10
    ICE = 20
    GRANITE = 30
    BASALT = 31
    LIMESTONE = 32
    REGOLITH = 36
    SOIL = 37
    IRON_ORE = 100
    COPPER_ORE = 101


@dataclass
class TerrainChunk:
    """A generated 64x64x64 chunk.

    The flat arrays are indexed ``lx + 64 * (ly + 64 * lz)``.
    """

    origin: tuple[int, int, int]
    seed: float
    material: np.ndarray
    temperature: np.ndarray
    density: np.ndarray


def _scalar_or_array(value: np.ndarray):
    return float(value) if np.ndim(value) == 0 else value


def _fract(x: np.ndarray) -> np.ndarray:
    return x - np.floor(x)


def _hash(n: np.ndarray) -> np.ndarray:
    return _fract(np.sin(n) * _HASH_SCALE)


def _mix(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a * (1.0 - t) + b * t


def _noise(x, y, z) -> np.ndarray:
    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    px, py, pz = np.floor(x), np.floor(y), np.floor(z)
    fx, fy, fz = x - px, y - py, z - pz
    fx = fx * fx * (3.0 - 2.0 * fx)
    fy = fy * fy * (3.0 - 2.0 * fy)
    fz = fz * fz * (3.0 - 2.0 * fz)
    n = px + py * 57.0 + 113.0 * pz
    lower = _mix(_mix(_hash(n), _hash(n + 1.0), fx),
                 _mix(_hash(n + 57.0), _hash(n + 58.0), fx), fy)
    upper = _mix(_mix(_hash(n + 113.0), _hash(n + 114.0), fx),
                 _mix(_hash(n + 170.0), _hash(n + 171.0), fx), fy)
    return _mix(lower, upper, fz)


def _fbm(x, y, z) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)
    total = 0.0
    for amplitude, scale in ((0.5, 2.02), (0.25, 2.03), (0.125, 2.01), (0.0625, None)):
        total = total + amplitude * _noise(x, y, z)
        if scale is not None:
            x, y, z = x * scale, y * scale, z * scale
    return np.asarray(total)


def hash11(n):
    """Pseudo-random value in [0, 1) from ``fract(sin(n) * 43758.5453123)``."""
    return _scalar_or_array(_hash(np.asarray(n, dtype=np.float64)))


def noise3(x, y, z):
    """Smooth 3-D value noise in [0, 1]; accepts scalars or arrays."""
    return _scalar_or_array(_noise(x, y, z))


def fbm3(x, y, z):
    """Four-octave fractal Brownian motion built from :func:`noise3`."""
    return _scalar_or_array(_fbm(x, y, z))


def generate_chunk(world_x: int, world_y: int, world_z: int, seed: float) -> TerrainChunk:
    """Generate materials, temperatures and densities for one chunk."""
    size = CHUNK_SIZE
    shape = (size, size, size)
    seed = float(seed)
    axis = np.arange(size, dtype=np.float64)

    wx2, wy2 = np.meshgrid(world_x + axis, world_y + axis)  # shape (y, x)
    wz = (world_z + axis)[:, None, None]

    # Column quantities
    base_height = _fbm(wx2 * 0.02, wy2 * 0.02, seed) * 30.0
    base_height = base_height + _noise(wx2 * 0.08, wy2 * 0.08, seed * 2.0) * 8.0
    surface = np.trunc(SEA_LEVEL + base_height)
    basin = _noise(wx2 * 0.008, wy2 * 0.008, seed * 5.0) < 0.35
    river_path = np.sin(wy2 * 0.02 + _noise(wx2 * 0.01, wy2 * 0.01, seed) * 3.0)
    river_width = 2.0 + _noise(wx2 * 0.05, wy2 * 0.05, seed * 7.0) * 2.0
    river_column = np.abs(river_path * 50.0 - (wx2 - 100.0)) < river_width

    wx = np.broadcast_to(wx2, shape)
    wy = np.broadcast_to(wy2, shape)
    wz3 = np.broadcast_to(wz, shape)
    surface3 = np.broadcast_to(surface, shape)
    basin3 = np.broadcast_to(basin, shape)

    is_river = river_column & (wz3 >= surface3 - 2.0) & (wz3 < surface3)

    altitude_temp = np.maximum(233.0, 288.0 - (wz3 - SEA_LEVEL) * 0.5)
    air_density = 1.225 * np.exp(-np.maximum(0.0, wz3 - SEA_LEVEL) * 0.01)

    above = wz3 >= surface3
    below = ~above
    depth = surface3 - wz3

    # Above the surface
    lake = above & (wz3 < WATER_LEVEL) & basin3
    river = above & ~lake & is_river

    # Below the surface
    rock_var = _noise(wx * 0.1, wy * 0.1, wz3 * 0.1)
    ore = _noise(wx * 0.12, wy * 0.12, wz3 * 0.12 + seed * 3.0)

    top = depth < 3.0
    shallow = ~top & (depth < 15.0)
    mid = ~top & ~shallow & (depth < 30.0)
    deep = ~top & ~shallow & ~mid

    below_conditions = [
        top & (wz3 > SEA_LEVEL + 25.0),
        top & (wz3 > SEA_LEVEL + 15.0),
        top & basin3 & (wz3 >= int(SEA_LEVEL) - 10),
        top,
        shallow,
        mid & (rock_var > 0.5),
        mid,
        deep & (ore > 0.75),
        deep & (ore > 0.65),
    ]
    below_materials = [
        Material.ICE, Material.GRANITE, Material.REGOLITH, Material.SOIL,
        Material.LIMESTONE, Material.BASALT, Material.LIMESTONE,
        Material.IRON_ORE, Material.COPPER_ORE,
    ]
    below_densities = [917.0, 2700.0, 1600.0, 1500.0, 2500.0, 2600.0, 2600.0, 5000.0, 4500.0]

    ground_material = np.select(below_conditions, [int(m) for m in below_materials],
                                default=int(Material.GRANITE))
    ground_density = np.select(below_conditions, below_densities, default=2700.0)
    ground_temp = altitude_temp + depth * 0.025

    cave_noise = _fbm(wx * 0.04, wy * 0.04, wz3 * 0.05)
    cave = below & (depth > 3.0) & (depth < 60.0) & (cave_noise > 0.52)

    material = np.select(
        [lake | river, above, cave, below],
        [int(Material.WATER), int(Material.AIR), int(Material.AIR), ground_material],
    )
    density = np.select(
        [lake | river, above, cave, below],
        [1000.0, air_density, 1.225, ground_density],
    )
    temperature = np.select(
        [lake, river, above, cave, below],
        [np.maximum(277.0, altitude_temp), np.maximum(273.5, altitude_temp),
         altitude_temp, 290.0 + depth * 0.01, ground_temp],
    )

    return TerrainChunk(
        origin=(world_x, world_y, world_z),
        seed=seed,
        material=material.astype(np.uint8).reshape(-1),
        temperature=temperature.astype(np.float64).reshape(-1),
        density=density.astype(np.float64).reshape(-1),
    )