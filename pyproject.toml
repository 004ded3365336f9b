[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apple2emu"
version = "0.1.0"
description = "An Apple II Plus emulator: 6502 CPU core, memory-mapped I/O, and text, low-res and high-res video"
requires-python = ">=3.10"
keywords = ["apple ii", "6502", "emulator", "retro", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
apple2emu = "apple2emu.app:main"

[tool.hatch.build.targets.wheel]
packages = ["apple2emu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
