[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coproc-app"
version = "0.2.0"
description = "Build, deploy and query programs on a co-processor service."
requires-python = ">=3.10"
keywords = ["coprocessor", "zk", "proof", "wasm", "deploy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
coproc-app = "coproc_app.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["coproc_app"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
