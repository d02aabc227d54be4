[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "isolated"
version = "0.1.0"
description = "Physics and physiology models for a survival simulation: fluid instabilities, hull breaches, lattice Boltzmann kernels, terrain generation and human body systems."
requires-python = ">=3.10"
keywords = [
    "simulation",
    "physics",
    "lattice-boltzmann",
    "physiology",
    "fluid-dynamics",
    "procedural-terrain",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["isolated"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
