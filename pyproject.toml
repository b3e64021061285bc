[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fzcore"
version = "0.60.0"
description = "Fuzzy matching algorithms, ANSI colour extraction and result merging for interactive finders"
requires-python = ">=3.10"
dependencies = []
keywords = ["fuzzy", "finder", "matching", "ansi", "filter", "search"]
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
    "Topic :: Text Processing :: Filters",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fzcore"]

[tool.hatch.build.targets.sdist]
include = ["fzcore", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
