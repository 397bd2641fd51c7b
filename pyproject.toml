[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockutils"
version = "0.1.0"
description = "Helpers for block-oriented cryptographic code: block buffers, padding, GF(2^n) doubling, hex literals and a compact blob storage format."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cryptography",
    "block-buffer",
    "padding",
    "pkcs7",
    "vlq",
    "hex",
    "gf2n",
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
blobby-convert = "blockutils.convert:main"

[tool.hatch.build.targets.wheel]
packages = ["blockutils"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
