[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "twopassasm"
version = "0.1.0"
description = "A two-pass assembler with a macro pre-assembler for a 24-bit teaching machine"
requires-python = ">=3.10"
dependencies = []
keywords = ["assembler", "two-pass", "macro", "machine code", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
twopassasm = "twopassasm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["twopassasm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
