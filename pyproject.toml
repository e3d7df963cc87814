[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "monsterinc"
version = "0.1.0"
description = "Web probe result models and a service that monitors files over HTTP for content changes"
requires-python = ">=3.10"
dependencies = []
keywords = ["monitoring", "http", "probing", "diff", "change-detection", "web"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Site Management",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["monsterinc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
