[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gritdsp"
version = "0.1.0"
description = "Sample-by-sample audio processors: amp simulations, dither, delay lines, dynamics and envelopes"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "dsp", "compressor", "envelope", "adsr", "delay", "distortion", "dither"]
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gritdsp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
