[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "louder"
version = "0.1.0"
description = "Loudspeaker response tools: octave-band tables, biquad filter responses, crossover and equalizer models"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["audio", "biquad", "equalizer", "crossover", "frequency response", "octave bands"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["louder"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
