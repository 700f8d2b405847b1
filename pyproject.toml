[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mixkit"
version = "0.1.0"
description = "Composable audio processing segments over ring buffers of float samples"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "mixing", "dsp", "ring-buffer", "noise", "gate", "quantize", "oscillator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mixkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
