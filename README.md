# isolated

Simulation models for a colony-survival game set in hostile environments.
The package has fluid and atmosphere physics, lattice Boltzmann kernels
built on numpy, procedural voxel terrain, and models of human physiology
under environmental stress. It is a library: every model is a plain Python
object that you create, step forward in time and read back.

## Installation

```
pip install .
```

To run the test suite, install with the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Contents |
| --- | --- |
| `isolated.instabilities` | `richardson_number`, `kh_growth_rate`, `kh_critical_wavenumber`, `rt_growth_rate`; `KHInstabilityModel` with `KHConfig`, `RTInstabilityModel` with `RTConfig` |
| `isolated.immersed_boundary` | `BoundaryPoint`, `ImmersedBoundary` (interpolated bounce-back via `apply`, sphere wall points via `add_sphere`), `discrete_delta`, `delta_3d` |
| `isolated.breach` | `Compartment`, `BreachType`, `Breach`, `calculate_mass_flow` (choked below a pressure ratio of 0.528), `calculate_velocity`, `sonic_velocity`, `BreachPropagationSystem` |
| `isolated.gas_transport` | `GasTransportSystem` for CO poisoning, nitrogen narcosis, oxygen toxicity and decompression sickness; `GasTransportState`, `BubbleLocation` |
| `isolated.metabolism` | `MetabolismSystem` with `MetabolismConfig` and `MetabolismState`; `Substrate` |
| `isolated.nervous` | `AutonomicNervousSystem` reflexes, `NervousState`, `AutonomicResponse` |
| `isolated.sensory` | `VisionSystem`, `HearingSystem`, `VestibularSystem`, `ProprioceptionSystem` and their state classes, combined in `SensorySystem` |
| `isolated.lattice` | `Lattice` and the `D2Q9` and `D3Q19` velocity sets |
| `isolated.kernels` | `ThermalKernel` (five-point heat diffusion, outer ring held fixed) and `LBMKernel` (D2Q9 BGK flow, periodic edges, bounce-back solids) |
| `isolated.terrain` | `hash11`, `noise3`, `fbm3`, `Material`, `TerrainChunk` and `generate_chunk` for 64×64×64 voxel chunks |

## Examples

Depressurising a compartment through a hull breach:

```python
from isolated.breach import BreachPropagationSystem, Compartment

system = BreachPropagationSystem()
system.add_compartment(Compartment(id="lab", volume=50.0))
system.create_hull_breach("lab", area=0.005)

for _ in range(10):
    system.step(1.0)

lab = system.get_compartment("lab")
print(f"pressure {lab.pressure:.0f} Pa, leaking {system.total_leak_rate():.3f} kg/s")
print(f"seconds to 50 kPa: {system.time_to_critical_pressure('lab', 50000.0):.1f}")
```

A diver breathing air at 40 m (5 atmospheres):

```python
from isolated.gas_transport import GasTransportSystem

diver = GasTransportSystem()
for _ in range(60):
    state = diver.step(60.0, ambient_pressure_ata=5.0, fio2=0.21, fico=0.0)

print(state.narcosis_severity, state.tissue_n2_loading)
print("needs stop at 3 m:", diver.needs_decompression_stop(3.0))
```

Heat diffusion on a grid:

```python
import numpy as np
from isolated.kernels import ThermalKernel

kernel = ThermalKernel(32, 32)
temperature = np.full(32 * 32, 290.0)
temperature[16 + 16 * 32] = 1000.0
kernel.upload_temperature(temperature)
for _ in range(100):
    kernel.step(1000.0)
result = kernel.download_temperature()
```

Fluid flow around a solid block:

```python
import numpy as np
from isolated.kernels import LBMKernel

solid = np.zeros(16 * 16, dtype=bool)
solid[8 + 8 * 16] = True
lbm = LBMKernel(16, 16, solid=solid)
for _ in range(50):
    lbm.step(1.0, omega=1.0)
rho, ux, uy = lbm.download_state()
```

Generating a terrain chunk:

```python
from isolated.terrain import generate_chunk

chunk = generate_chunk(0, 0, 0, seed=1.0)
print(chunk.material.shape, chunk.temperature.mean())
```

Flat arrays in `isolated.kernels` are laid out row by row (`x + y * width`);
chunk arrays in `isolated.terrain` are indexed `lx + 64 * (ly + 64 * lz)`.

## Units

SI units throughout unless a name says otherwise: pressures in pascals in
`isolated.breach` and in atmospheres (`_ata`) in `isolated.gas_transport`,
temperatures in kelvin except where a parameter ends in `_c`, time steps in
seconds.

## What this package does not do

There is no game, window, renderer or on-screen interface here, no input
handling, and no command-line program. The grid kernels and terrain
generator run on the CPU with numpy; nothing is run on a graphics card.
Chunks are generated one at a time and are not stored or managed as a world.