[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "riffcli"
version = "0.1.0"
description = "Building blocks for Kubernetes-style command line tools: commands and argument binding, namespace flags, field validation errors, coloured output, configuration and aligned tab-separated columns"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "cli",
    "kubernetes",
    "tabwriter",
    "elastic-tabstops",
    "validation",
    "command-line",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["riffcli"]

[tool.hatch.build.targets.sdist]
include = [
    "riffcli",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
