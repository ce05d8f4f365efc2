[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "frontierexplore"
version = "0.1.0"
description = "Frontier detection and ranking over occupancy-grid costmaps"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "exploration", "frontier", "costmap", "occupancy grid"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["frontierexplore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
