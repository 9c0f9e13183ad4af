[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lumpedflow"
version = "0.1.0"
description = "Lumped-parameter (0D) hemodynamics elements, sparse system assembly and a generalized-alpha time integrator"
requires-python = ">=3.10"
keywords = [
    "hemodynamics",
    "0D",
    "lumped parameter",
    "blood flow",
    "generalized-alpha",
    "differential-algebraic equations",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lumpedflow"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
