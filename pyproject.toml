[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apclient"
version = "0.1.0"
description = "Client core for a music streaming access point: credentials, key agreement, packet dispatch, channels, audio keys and metadata helpers"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["streaming", "audio", "access-point", "diffie-hellman", "client"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["apclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
