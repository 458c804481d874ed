[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "commonitor"
version = "1.20.0"
description = "Building blocks of a serial port monitor: text and hex display of received bytes, a send queue, counters, a clock and an ASCII table"
requires-python = ">=3.10"
dependencies = []
keywords = ["serial", "com port", "uart", "terminal", "hex", "ansi", "gb2312"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["commonitor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
