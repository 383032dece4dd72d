[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atdigest"
version = "0.1.0"
description = "Incremental parser for AT command modem traffic: responses, URCs, prompts and error codes"
requires-python = ">=3.10"
dependencies = []
keywords = ["at-commands", "modem", "gsm", "serial", "parser", "urc"]
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
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["atdigest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
