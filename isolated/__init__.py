"""Physics and physiology models for a survival simulation."""

__version__ = "0.1.0"

__all__ = [
    "breach",
    "gas_transport",
    "immersed_boundary",
    "instabilities",
    "kernels",
    "lattice",
    "metabolism",
    "nervous",
    "sensory",
    "terrain",
]