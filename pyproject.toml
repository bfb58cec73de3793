[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "resolvkit"
version = "0.1.0"
description = "Helpers for a stub DNS resolver: answer TTLs, name checks, host errors, dispatch and log formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["dns", "resolver", "ttl", "nsswitch", "hostname", "logging"]
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
    "Topic :: Internet :: Name Service (DNS)",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["resolvkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
