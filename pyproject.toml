[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stellarsim"
version = "0.1.0"
description = "Game state model, starting scenarios, content validation and JSON save files for a turn-based space strategy game"
requires-python = ">=3.10"
dependencies = []
keywords = ["4x", "strategy", "space", "simulation", "game", "save-files"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stellarsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
