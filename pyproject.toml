[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lobrl"
version = "0.1.0"
description = "Limit order book simulation and reinforcement learning tools for market making research"
requires-python = ">=3.10"
keywords = ["limit order book", "market making", "reinforcement learning", "trading", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Financial and Insurance Industry",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "numpy",
    "sortedcontainers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lobrl"]

[tool.pytest.ini_options]
addopts = "-ra"
