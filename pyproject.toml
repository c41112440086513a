[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "synchive-monitor"
version = "0.10.0"
description = "Watch directories and keep a CRC32 listing of their files up to date for mirroring."
requires-python = ">=3.10"
dependencies = [
    "watchdog",
]
keywords = ["crc32", "mirroring", "synchronisation", "file-monitor", "checksum", "backup"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Mirroring",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
synchive-monitor = "synchive_monitor.controller:main"

[tool.hatch.build.targets.wheel]
packages = ["synchive_monitor"]

[tool.hatch.build.targets.sdist]
include = [
    "synchive_monitor",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
