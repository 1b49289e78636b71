[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mazecaster"
version = "0.1.0"
description = "A textured raycasting maze game with enemy sprites, rain and a minimap"
requires-python = ">=3.10"
keywords = ["raycasting", "maze", "game", "pygame", "first-person"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mazecaster = "mazecaster.game:main"

[tool.hatch.build.targets.wheel]
packages = ["mazecaster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
