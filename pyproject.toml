[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nixf"
version = "0.1.0"
description = "Error-tolerant lexer and parser for the Nix expression language, with diagnostics and fix-it hints"
requires-python = ">=3.10"
dependencies = []
keywords = ["nix", "parser", "lexer", "diagnostics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nixf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
