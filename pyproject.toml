[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "optsolvers"
version = "0.1.0"
description = "Line-search based solvers for smooth unconstrained and box-constrained optimization"
requires-python = ">=3.10"
keywords = [
    "optimization",
    "line search",
    "newton",
    "more-thuente",
    "backtracking",
    "projected newton",
    "barzilai-borwein",
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
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["optsolvers"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
