[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smoothlife"
version = "0.1.0"
description = "SmoothLife continuous cellular automaton seeded from Perlin noise, with a pygame viewer"
requires-python = ">=3.10"
keywords = ["smoothlife", "cellular automaton", "artificial life", "perlin noise", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Life",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "numpy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
smoothlife = "smoothlife.app:main"
smoothlife-noise = "smoothlife.noise_demo:main"

[tool.hatch.build.targets.wheel]
packages = ["smoothlife"]

[tool.pytest.ini_options]
addopts = "-ra"
