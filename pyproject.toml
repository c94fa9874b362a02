[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wordmesh"
version = "0.1.0"
description = "A small distributed word counter: a client, a coordinating server, and counting nodes over TCP"
requires-python = ">=3.10"
dependencies = []
keywords = ["word count", "distributed", "tcp", "xor", "sockets", "arduino"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wordmesh-client = "wordmesh.client:main"
wordmesh-node = "wordmesh.node:main"
wordmesh-server = "wordmesh.server:main"
wordmesh-arduino = "wordmesh.arduino:main"

[tool.hatch.build.targets.wheel]
packages = ["wordmesh"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
