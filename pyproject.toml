[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asmcore"
version = "0.1.0"
description = "Building blocks of a customizable assembler: sized big integers, bit vectors, output formats, token recognition and expression evaluation"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "assembler",
    "bigint",
    "bitvec",
    "intel-hex",
    "mif",
    "hexdump",
    "expression",
    "tokenizer",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Typing :: Typed",
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["asmcore"]

[tool.pytest.ini_options]
addopts = "-ra"
