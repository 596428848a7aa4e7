[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "typereflect"
version = "0.1.1"
description = "Type-level naturals, booleans and heterogeneous lists that reflect to runtime values, scoped reification, derived type schemas and object-graph flattening"
requires-python = ">=3.10"
dependencies = []
keywords = ["reflection", "reify", "type-level", "peano", "hlist", "graph"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["typereflect"]

[tool.pytest.ini_options]
addopts = "-ra"
