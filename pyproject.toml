[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecumapkit"
version = "1.0.0"
description = "Tools for inspecting and editing ECU binary images: typed reads and writes, checksums, hex search, bookmarks, settings and caches."
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["ecu", "binary", "hex", "checksum", "crc", "tuning", "flash"]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ecumapkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
