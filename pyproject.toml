[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zumic"
version = "0.1.0"
description = "An in-memory key-value store with a Redis-like wire protocol and an asyncio TCP server"
requires-python = ">=3.10"
keywords = ["key-value", "in-memory", "database", "protocol", "server", "skip-list"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Framework :: AsyncIO",
    "Topic :: Database :: Database Engines/Servers",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
zumic = "zumic.server:main"

[tool.hatch.build.targets.wheel]
packages = ["zumic"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
