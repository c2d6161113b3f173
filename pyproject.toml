[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rededr-ppl"
version = "0.2.0"
description = "Event filtering, process observation cache, control commands and a small JSON library for an EDR telemetry service"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["edr", "etw", "telemetry", "json", "security"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rededr_ppl"]

[tool.pytest.ini_options]
addopts = "-ra"
