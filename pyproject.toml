[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iotprobe"
version = "0.1.0"
description = "Connection tester for industrial PLCs speaking MELSEC SLMP or LS XGT over TCP"
requires-python = ">=3.10"
dependencies = []
keywords = ["plc", "melsec", "slmp", "xgt", "ls", "industrial", "iot", "connection-test"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Manufacturing",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
iotprobe = "iotprobe.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["iotprobe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
