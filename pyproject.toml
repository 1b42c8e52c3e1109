[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coinkit"
version = "0.1.0"
description = "Build, serialize, hash and prepare for signing Bitcoin legacy and witness transactions"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = [
    "bitcoin",
    "transaction",
    "segwit",
    "bech32",
    "base58check",
    "sighash",
    "bip143",
]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["coinkit"]

[tool.hatch.build.targets.sdist]
include = [
    "coinkit",
    "tests",
]

[tool.pytest.ini_options]
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
