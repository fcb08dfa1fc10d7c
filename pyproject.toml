[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "liftsim"
version = "0.1.0"
description = "Discrete-time simulation of a building's elevators carrying passengers between floors"
requires-python = ">=3.10"
dependencies = []
keywords = ["elevator", "lift", "simulation", "discrete-time", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
liftsim = "liftsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["liftsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
