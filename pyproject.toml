[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cryoparse"
version = "0.1.0"
description = "Command-line argument parsing and validation for blockchain data extraction jobs"
requires-python = ">=3.10"
dependencies = []
keywords = ["ethereum", "blockchain", "cli", "argument-parsing", "block-ranges"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cryoparse = "cryoparse.run:main"

[tool.hatch.build.targets.wheel]
packages = ["cryoparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
