[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yulgen"
version = "0.1.0"
description = "Generate Yul code for contract constructors, runtime helpers and ABI dispatchers"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["yul", "evm", "abi", "code generation", "smart contracts"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["yulgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
