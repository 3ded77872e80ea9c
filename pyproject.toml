[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fswalker"
version = "0.1.0"
description = "Directory and recursive directory iteration with cached file status and fine-grained error handling options"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "directory", "iterator", "walk", "symlink", "recursive"]
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
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fswalker"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
